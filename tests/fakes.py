# Canned TheMealDB responses served through httpx.MockTransport.
import json

import httpx

BASE_URL = "https://mealdb.test/api/json/v1/1"


def meal(id, title, **fields):
    record = {"idMeal": id, "strMeal": title,
              "strMealThumb": f"https://img.test/{id}.jpg"}
    record.update(fields)
    return record


TERIYAKI = meal(
    "52772",
    "Teriyaki Chicken Casserole",
    strCategory="Chicken",
    strArea="Japanese",
    strInstructions=(
        "Preheat oven to 350. Combine soy sauce and water. "
        "Bake for 40 minutes. "
    ),
    strIngredient1="soy sauce", strMeasure1="3/4 cup",
    strIngredient2="water", strMeasure2="1/2 cup",
    strIngredient3="brown sugar", strMeasure3="1/4 cup",
    strIngredient4="chicken thighs", strMeasure4=" ",
    strIngredient5="", strMeasure5="",
)

SEAFOOD = [
    meal("52959", "Baked salmon with fennel", strArea="Italian"),
    meal("52819", "Cajun spiced fish tacos", strArea="Mexican"),
    meal("52802", "Fish pie"),
]

TOMATO = [
    meal("52771", "Spicy Arrabiata Penne"),
    meal("52835", "Fettucine Alfredo"),
    meal("52846", "Chicken & mushroom Hotpot"),
    meal("52888", "Garlic SHRIMP pasta"),
]


class FakeMealDB:
    """Routes ``(endpoint, params)`` to canned payloads and records calls."""

    def __init__(self):
        self.calls = []
        self.routes = {}

    def add(self, endpoint, params=None, payload=None, status_code=200,
            text=None):
        key = (endpoint, tuple(sorted((params or {}).items())))
        self.routes[key] = (payload, status_code, text)

    def handler(self, request):
        endpoint = request.url.path.rsplit("/", 1)[-1]
        params = dict(request.url.params)
        self.calls.append((endpoint, params))
        key = (endpoint, tuple(sorted(params.items())))
        payload, status_code, text = self.routes.get(
            key, ({"meals": None}, 200, None))
        if text is not None:
            return httpx.Response(status_code, text=text)
        return httpx.Response(status_code, content=json.dumps(payload),
                              headers={"content-type": "application/json"})

    def client(self):
        from recipe_gateway.upstream import MealDBClient

        transport = httpx.MockTransport(self.handler)
        return MealDBClient(BASE_URL,
                            http_client=httpx.AsyncClient(transport=transport))


def default_mealdb():
    fake = FakeMealDB()
    fake.add("search.php", {"s": "teriyaki"}, {"meals": [TERIYAKI]})
    fake.add("lookup.php", {"i": "52772"}, {"meals": [TERIYAKI]})
    fake.add("random.php", None, {"meals": [TERIYAKI]})
    fake.add("filter.php", {"c": "Seafood"}, {"meals": SEAFOOD})
    fake.add("filter.php", {"a": "Italian"}, {"meals": SEAFOOD[:1]})
    fake.add("filter.php", {"i": "tomato"}, {"meals": TOMATO})
    fake.add("list.php", {"c": "list"},
             {"meals": [{"strCategory": "Beef"}, {"strCategory": "Seafood"}]})
    fake.add("list.php", {"a": "list"},
             {"meals": [{"strArea": "Italian"}, {"strArea": "Mexican"}]})
    return fake
