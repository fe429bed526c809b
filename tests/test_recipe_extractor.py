"""Tests for HTML recipe extraction."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from recipe_relay.models.recipe import IngredientLine, Nutrition, RecipeDocument
from recipe_relay.services.recipe_extractor import RecipeSelectors, extract_recipe
from recipe_relay.utils.exceptions import ParseError


def test_extracts_every_field(recipe_html):
    recipe = extract_recipe(recipe_html)

    assert recipe.name == "Lemon Cake"
    assert recipe.featuredIn == "Desserts"
    assert recipe.description == "A bright, tangy loaf cake."
    assert recipe.prepTime == "15 mins"
    assert recipe.cookTime == "45 mins"
    assert recipe.servings == "8"
    assert recipe.nutrition == Nutrition(calories="320 kcal", protein="5 g", fat="14 g", carbs="44 g")


def test_list_lengths_match_element_counts(recipe_html):
    recipe = extract_recipe(recipe_html)

    assert len(recipe.ingredients) == recipe_html.count('class="ingredient"')
    assert len(recipe.instructions) == recipe_html.count('class="instruction-step"')


def test_ingredient_order_is_preserved(recipe_html):
    recipe = extract_recipe(recipe_html)

    assert recipe.ingredients == (
        IngredientLine(amount="2", item="eggs"),
        IngredientLine(amount="1 cup", item="sugar"),
        IngredientLine(amount="1", item="lemon, zested"),
    )


def test_lemon_cake_example():
    html = """
    <h1>Lemon Cake</h1>
    <ul><li class="ingredient"><b class="ingredient-amount">2</b><i class="ingredient-item">eggs</i></li></ul>
    <ol><li class="instruction-step">Mix</li><li class="instruction-step">Bake</li></ol>
    """
    recipe = extract_recipe(html)

    assert recipe.model_dump() == {
        "name": "Lemon Cake",
        "featuredIn": "",
        "description": "",
        "prepTime": "",
        "cookTime": "",
        "ingredients": ({"amount": "2", "item": "eggs"},),
        "instructions": ("Mix", "Bake"),
        "nutrition": {"calories": "", "protein": "", "fat": "", "carbs": ""},
        "servings": "",
    }


def test_missing_nutrition_yields_empty_strings():
    recipe = extract_recipe("<html><body><h1>Toast</h1></body></html>")

    assert recipe.nutrition == Nutrition(calories="", protein="", fat="", carbs="")


def test_missing_everything_is_not_an_error():
    recipe = extract_recipe("")

    assert recipe == RecipeDocument()
    assert recipe.ingredients == ()
    assert recipe.instructions == ()


def test_ingredient_without_sub_elements_keeps_row():
    html = """
    <li class="ingredient"><span class="ingredient-item">salt</span></li>
    <li class="ingredient"><span class="ingredient-amount">a pinch</span></li>
    <li class="ingredient">plain text only</li>
    """
    recipe = extract_recipe(html)

    assert recipe.ingredients == (
        IngredientLine(amount="", item="salt"),
        IngredientLine(amount="a pinch", item=""),
        IngredientLine(amount="", item=""),
    )


def test_text_is_not_whitespace_trimmed():
    recipe = extract_recipe("<h1>\n  Soup  \n</h1><li class='instruction-step'> Stir <b>well</b> </li>")

    assert recipe.name == "\n  Soup  \n"
    assert recipe.instructions == (" Stir well ",)


def test_only_first_heading_is_used():
    recipe = extract_recipe("<h1>First</h1><h1>Second</h1>")

    assert recipe.name == "First"


def test_selectors_require_matching_tag():
    # The time selectors are span-specific.
    recipe = extract_recipe('<div class="prep-time">10 mins</div>')

    assert recipe.prepTime == ""


def test_extraction_is_idempotent(recipe_html):
    assert extract_recipe(recipe_html) == extract_recipe(recipe_html)


def test_accepts_utf8_bytes():
    recipe = extract_recipe("<h1>Crème brûlée</h1>".encode("utf-8"))

    assert recipe.name == "Crème brûlée"


def test_invalid_bytes_raise_parse_error():
    with pytest.raises(ParseError):
        extract_recipe(b"\xff\xfe<h1>\x80</h1>")


def test_non_text_input_raises_parse_error():
    with pytest.raises(ParseError):
        extract_recipe(None)


def test_custom_selectors():
    selectors = RecipeSelectors(name="h2.title", servings="p.yield")
    recipe = extract_recipe('<h1>Ignored</h1><h2 class="title">Pie</h2><p class="yield">6</p>', selectors)

    assert recipe.name == "Pie"
    assert recipe.servings == "6"


def test_document_is_immutable(recipe_html):
    recipe = extract_recipe(recipe_html)

    with pytest.raises(PydanticValidationError):
        recipe.name = "Changed"


def test_json_serialization_shape(recipe_html):
    data = extract_recipe(recipe_html).model_dump(mode="json")

    assert list(data) == [
        "name",
        "featuredIn",
        "description",
        "prepTime",
        "cookTime",
        "ingredients",
        "instructions",
        "nutrition",
        "servings",
    ]
    assert data["ingredients"][0] == {"amount": "2", "item": "eggs"}
    assert data["instructions"] == ["Mix", "Bake"]
