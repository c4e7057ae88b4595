"""Async client for TheMealDB.

Every endpoint answers with ``{"meals": [...]}``; ``"meals": null`` means no
match and is returned as an empty list, not an error.
"""

from typing import Any, Dict, List, Optional

import httpx

from .errors import UpstreamError
from .log import get_logger
from .schemas import MealRecord

logger = get_logger(__name__)


class MealDBClient:
    def __init__(
        self,
        base_url: str,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self._http.aclose()

    async def _get(self, endpoint: str,
                   params: Optional[Dict[str, str]] = None) -> List[Any]:
        url = f"{self.base_url}/{endpoint}"
        try:
            response = await self._http.get(url, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            logger.error("TheMealDB request failed: {} {} ({})",
                         endpoint, params, e)
            raise UpstreamError(f"{endpoint}: {e}") from e
        except ValueError as e:
            logger.error("TheMealDB returned non-JSON for {} {}",
                         endpoint, params)
            raise UpstreamError(f"{endpoint}: invalid JSON") from e

        if not isinstance(data, dict):
            logger.error("Unexpected TheMealDB envelope for {}: {!r}",
                         endpoint, type(data))
            raise UpstreamError(f"{endpoint}: unexpected response shape")
        meals = data.get("meals") or []
        if not isinstance(meals, list):
            raise UpstreamError(f"{endpoint}: unexpected response shape")
        return meals

    async def _records(self, endpoint: str,
                       params: Optional[Dict[str, str]] = None
                       ) -> List[MealRecord]:
        meals = await self._get(endpoint, params)
        return [MealRecord.model_validate(m) for m in meals
                if isinstance(m, dict)]

    async def _first(self, endpoint: str,
                     params: Optional[Dict[str, str]] = None
                     ) -> Optional[MealRecord]:
        records = await self._records(endpoint, params)
        return records[0] if records else None

    async def search(self, query: str) -> List[MealRecord]:
        return await self._records("search.php", {"s": query})

    async def lookup(self, meal_id: str) -> Optional[MealRecord]:
        return await self._first("lookup.php", {"i": meal_id})

    async def random(self) -> Optional[MealRecord]:
        return await self._first("random.php")

    async def filter_by_category(self, category: str) -> List[MealRecord]:
        return await self._records("filter.php", {"c": category})

    async def filter_by_area(self, area: str) -> List[MealRecord]:
        return await self._records("filter.php", {"a": area})

    async def filter_by_ingredient(self, ingredient: str) -> List[MealRecord]:
        return await self._records("filter.php", {"i": ingredient})

    async def list_categories(self) -> List[str]:
        meals = await self._get("list.php", {"c": "list"})
        return [m["strCategory"] for m in meals
                if isinstance(m, dict) and m.get("strCategory")]

    async def list_areas(self) -> List[str]:
        meals = await self._get("list.php", {"a": "list"})
        return [m["strArea"] for m in meals
                if isinstance(m, dict) and m.get("strArea")]
