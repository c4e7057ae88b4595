from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class MealRecord(BaseModel):
    """A raw TheMealDB record.

    Only the named columns are declared; the numbered ``strIngredientN`` and
    ``strMeasureN`` slots are kept as extra attributes. Every field may be
    missing, null or blank.
    """

    model_config = ConfigDict(extra="allow")

    idMeal: Optional[str] = None
    strMeal: Optional[str] = None
    strMealThumb: Optional[str] = None
    strCategory: Optional[str] = None
    strArea: Optional[str] = None
    strInstructions: Optional[str] = None

    def slot(self, name: str, index: int) -> Optional[str]:
        value = getattr(self, f"str{name}{index}", None)
        return value if isinstance(value, str) else None


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class RecipeSummary(BaseModel):
    id: str = Field(..., json_schema_extra={"example": "52772"})
    title: str = Field(..., json_schema_extra={"example": "Teriyaki Chicken"})
    image: Optional[str] = None
    category: Optional[str] = None
    area: Optional[str] = None


class Recipe(RecipeSummary):
    ingredients: List[str] = Field(
        default_factory=list,
        json_schema_extra={"example": ["3/4 cup soy sauce", "1/2 cup water"]},
    )
    instructions: List[str] = Field(
        default_factory=list,
        json_schema_extra={"example": ["Preheat oven to 350", "Bake 40 min"]},
    )
    time: Optional[str] = None


class IngredientSearch(BaseModel):
    ingredients: Optional[List[str]] = None
    exclude: Optional[List[str]] = None

    @field_validator("ingredients", "exclude", mode="before")
    @classmethod
    def _only_strings(cls, value: Any):
        # anything but a list counts as no terms
        if not isinstance(value, list):
            return None
        return [v for v in value if isinstance(v, str)]


class Credentials(BaseModel):
    # both optional here so a missing field is reported as a 400, not a 422
    email: Optional[str] = None
    password: Optional[str] = None


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str


class LoginResponse(BaseModel):
    token: str
    user: UserOut


class FavoriteCreate(BaseModel):
    id: Optional[str] = None
    title: Optional[str] = None
    image: Optional[str] = None
    category: Optional[str] = None
    area: Optional[str] = None


class Favorite(CamelModel):
    # `id` is the recipe id; the row key goes out as `favoriteId`
    id: str
    favorite_id: int
    title: str
    image: Optional[str] = None
    category: Optional[str] = None
    area: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_row(cls, row) -> "Favorite":
        return cls(
            id=row.recipe_id,
            favorite_id=row.id,
            title=row.title,
            image=row.image,
            category=row.category,
            area=row.area,
            created_at=row.created_at,
        )


class FavoriteAdded(CamelModel):
    message: str
    favorite_id: int


class FavoriteRemoved(BaseModel):
    message: str
    deleted: int
