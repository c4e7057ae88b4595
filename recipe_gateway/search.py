"""Decides which TheMealDB query answers a caller's search."""

from typing import Iterable, List, Optional

from .errors import NotFoundError, ValidationError
from .log import get_logger
from .normalize import normalize_recipe, summarize
from .schemas import Recipe, RecipeSummary
from .upstream import MealDBClient

logger = get_logger(__name__)


def _present(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value.strip()


def _terms(values: Optional[Iterable[str]]) -> List[str]:
    return [v.strip() for v in values or [] if v and v.strip()]


class RecipeSearch:
    def __init__(self, client: MealDBClient):
        self.client = client

    async def search(self, query: Optional[str] = None,
                     category: Optional[str] = None,
                     area: Optional[str] = None) -> List[RecipeSummary]:
        """Search by category, area or free text, in that priority.

        With a category, the area is applied locally to the category results
        and never sent upstream. With nothing to search for, no request is
        made and the result is empty.
        """
        query, category, area = _present(query), _present(category), \
            _present(area)

        if category:
            records = await self.client.filter_by_category(category)
            if area:
                records = [r for r in records if r.strArea == area]
            return [summarize(r, category=category) for r in records]
        if area:
            records = await self.client.filter_by_area(area)
            return [summarize(r, area=area) for r in records]
        if query:
            records = await self.client.search(query)
            return [summarize(r) for r in records]
        return []

    async def search_by_ingredients(
        self,
        ingredients: Optional[Iterable[str]],
        exclude: Optional[Iterable[str]] = None,
    ) -> List[RecipeSummary]:
        """Find recipes by main ingredient, dropping excluded titles.

        TheMealDB filters on a single ingredient per call, so only the first
        one is used; the rest are ignored.
        """
        wanted = _terms(ingredients)
        if not wanted:
            return []
        if len(wanted) > 1:
            logger.debug("ignoring extra ingredients {}", wanted[1:])

        banned = [t.lower() for t in _terms(exclude)]
        records = await self.client.filter_by_ingredient(wanted[0])
        results = []
        for r in records:
            title = (r.strMeal or "").lower()
            if any(term in title for term in banned):
                continue
            results.append(summarize(r))
        return results

    async def random_recipe(self) -> Recipe:
        record = await self.client.random()
        if record is None:
            raise NotFoundError("No random recipe available")
        return normalize_recipe(record)

    async def get_recipe(self, recipe_id: Optional[str]) -> Recipe:
        recipe_id = _present(recipe_id)
        if not recipe_id:
            raise ValidationError("Recipe ID is required", field="id")
        record = await self.client.lookup(recipe_id)
        if record is None:
            raise NotFoundError("Recipe not found")
        return normalize_recipe(record)

    async def categories(self) -> List[str]:
        return await self.client.list_categories()

    async def areas(self) -> List[str]:
        return await self.client.list_areas()
