"""HTML to RecipeDocument extraction."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from bs4 import BeautifulSoup, ParserRejectedMarkup
from bs4.element import Tag

from recipe_relay.models.recipe import IngredientLine, Nutrition, RecipeDocument
from recipe_relay.utils.exceptions import ParseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecipeSelectors:
    """CSS selectors for each labeled location on a recipe page."""

    name: str = "h1"
    featured_in: str = "a.featured-category"
    description: str = "div.recipe-description"
    prep_time: str = "span.prep-time"
    cook_time: str = "span.cook-time"
    ingredient: str = "li.ingredient"
    ingredient_amount: str = ".ingredient-amount"
    ingredient_item: str = ".ingredient-item"
    instruction: str = "li.instruction-step"
    calories: str = "span.nutrition-calories"
    protein: str = "span.nutrition-protein"
    fat: str = "span.nutrition-fat"
    carbs: str = "span.nutrition-carbs"
    servings: str = "span.servings"


DEFAULT_SELECTORS = RecipeSelectors()


def _text(scope: Tag, selector: str) -> str:
    # Raw text of the first match; whitespace is kept as authored.
    element: Optional[Tag] = scope.select_one(selector)
    if element is None:
        return ""
    return element.get_text()


def parse_html(html: Union[str, bytes]) -> BeautifulSoup:
    """
    Parse markup into a soup.

    Raises:
        ParseError: If the input is not text, is not valid UTF-8, or the
            parser rejects it.
    """
    if isinstance(html, bytes):
        try:
            html = html.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(f"HTML is not valid UTF-8: {e}") from e

    if not isinstance(html, str):
        raise ParseError(f"HTML must be str or bytes, got {type(html).__name__}")

    try:
        return BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup as e:
        raise ParseError(f"Failed to parse HTML: {e}") from e


def extract_recipe(
    html: Union[str, bytes],
    selectors: RecipeSelectors = DEFAULT_SELECTORS,
) -> RecipeDocument:
    """
    Extract a RecipeDocument from a complete HTML page.

    Missing elements map to empty values; only unparseable input raises.

    Args:
        html: Page markup
        selectors: Selector table to apply

    Returns:
        RecipeDocument with the raw text of each labeled location

    Raises:
        ParseError: If the input cannot be parsed as HTML
    """
    soup = parse_html(html)

    ingredients = tuple(
        IngredientLine(
            amount=_text(row, selectors.ingredient_amount),
            item=_text(row, selectors.ingredient_item),
        )
        for row in soup.select(selectors.ingredient)
    )
    instructions = tuple(step.get_text() for step in soup.select(selectors.instruction))

    recipe = RecipeDocument(
        name=_text(soup, selectors.name),
        featuredIn=_text(soup, selectors.featured_in),
        description=_text(soup, selectors.description),
        prepTime=_text(soup, selectors.prep_time),
        cookTime=_text(soup, selectors.cook_time),
        ingredients=ingredients,
        instructions=instructions,
        nutrition=Nutrition(
            calories=_text(soup, selectors.calories),
            protein=_text(soup, selectors.protein),
            fat=_text(soup, selectors.fat),
            carbs=_text(soup, selectors.carbs),
        ),
        servings=_text(soup, selectors.servings),
    )

    logger.debug(
        "Extracted recipe",
        extra={
            "recipe_name": recipe.name[:100],
            "ingredient_count": len(ingredients),
            "instruction_count": len(instructions),
        },
    )
    return recipe
