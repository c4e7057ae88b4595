# flake8: noqa
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))  # noqa: E402

from recipe_gateway.normalize import (DEFAULT_TIME, extract_ingredients,
                                      normalize_recipe, split_instructions,
                                      summarize)
from recipe_gateway.schemas import MealRecord

from fakes import TERIYAKI


def test_ingredients_keep_slot_order_and_skip_blank_pairs():
    assert extract_ingredients(TERIYAKI) == [
        "3/4 cup soy sauce",
        "1/2 cup water",
        "1/4 cup brown sugar",
    ]


def test_ingredient_needs_both_name_and_measure():
    raw = {
        "strIngredient1": "salt", "strMeasure1": None,
        "strIngredient2": "  ", "strMeasure2": "1 tsp",
        "strIngredient3": " pepper ", "strMeasure3": " pinch ",
    }
    assert extract_ingredients(raw) == ["pinch pepper"]


def test_only_twenty_slots_are_read():
    raw = {}
    for i in range(1, 23):
        raw[f"strIngredient{i}"] = f"item{i}"
        raw[f"strMeasure{i}"] = f"{i}g"
    ingredients = extract_ingredients(raw)
    assert len(ingredients) == 20
    assert ingredients[0] == "1g item1"
    assert ingredients[-1] == "20g item20"


def test_split_instructions_drops_trailing_blank_fragment():
    assert split_instructions("Step one. Step two. ") == ["Step one", "Step two"]


def test_split_instructions_is_a_plain_split():
    # no sentence parsing: "approx." followed by a space still splits
    assert split_instructions("Cook approx. 5 min.\r\n Serve") == [
        "Cook approx",
        "5 min.\r\n Serve",
    ]
    assert split_instructions(None) == []
    assert split_instructions("") == []


def test_missing_optional_fields_become_none():
    recipe = normalize_recipe({"idMeal": "1", "strMeal": "Toast",
                               "strCategory": "", "strArea": None})
    assert recipe.id == "1"
    assert recipe.title == "Toast"
    assert recipe.category is None
    assert recipe.area is None
    assert recipe.image is None
    assert recipe.ingredients == []
    assert recipe.instructions == []


def test_normalize_full_recipe():
    recipe = normalize_recipe(MealRecord.model_validate(TERIYAKI))
    assert recipe.id == "52772"
    assert recipe.category == "Chicken"
    assert recipe.area == "Japanese"
    assert recipe.image == "https://img.test/52772.jpg"
    assert len(recipe.ingredients) == 3
    assert recipe.instructions == [
        "Preheat oven to 350",
        "Combine soy sauce and water",
        "Bake for 40 minutes",
    ]
    assert recipe.time == DEFAULT_TIME


def test_summary_falls_back_to_filter_values():
    s = summarize({"idMeal": "2", "strMeal": "Pie"}, category="Seafood")
    assert s.category == "Seafood"
    assert s.area is None
    assert "ingredients" not in s.model_dump()

    s = summarize({"idMeal": "2", "strMeal": "Pie", "strCategory": "Dessert"},
                  category="Seafood")
    assert s.category == "Dessert"
