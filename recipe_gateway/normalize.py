# Turns flat TheMealDB records into the application's recipe shape.

from typing import List, Optional, Union

from .schemas import MealRecord, Recipe, RecipeSummary

# upstream exposes exactly twenty numbered ingredient/measure columns
INGREDIENT_SLOTS = 20
STEP_SEPARATOR = ". "
# TheMealDB has no cooking time; the UI shows this instead
DEFAULT_TIME = "30 min"

RawRecord = Union[MealRecord, dict]


def _as_record(raw: RawRecord) -> MealRecord:
    if isinstance(raw, MealRecord):
        return raw
    return MealRecord.model_validate(raw)


def _clean(value: Optional[str]) -> Optional[str]:
    if not value or not value.strip():
        return None
    return value.strip()


def extract_ingredients(raw: RawRecord) -> List[str]:
    record = _as_record(raw)
    ingredients = []
    for i in range(1, INGREDIENT_SLOTS + 1):
        ingredient = _clean(record.slot("Ingredient", i))
        measure = _clean(record.slot("Measure", i))
        if ingredient and measure:
            ingredients.append(f"{measure} {ingredient}")
    return ingredients


def split_instructions(text: Optional[str]) -> List[str]:
    """Split an instructions paragraph into steps.

    This is a plain split on ". ", not a sentence parser: fragments are kept
    as split and only the blank ones are dropped.
    """
    if not text:
        return []
    return [s for s in text.split(STEP_SEPARATOR) if s.strip()]


def summarize(raw: RawRecord, category: Optional[str] = None,
              area: Optional[str] = None) -> RecipeSummary:
    # category/area are fallbacks for filter results, which omit them
    record = _as_record(raw)
    return RecipeSummary(
        id=record.idMeal or "",
        title=record.strMeal or "",
        image=_clean(record.strMealThumb),
        category=_clean(record.strCategory) or _clean(category),
        area=_clean(record.strArea) or _clean(area),
    )


def normalize_recipe(raw: RawRecord) -> Recipe:
    record = _as_record(raw)
    summary = summarize(record)
    return Recipe(
        **summary.model_dump(),
        ingredients=extract_ingredients(record),
        instructions=split_instructions(record.strInstructions),
        time=DEFAULT_TIME,
    )
