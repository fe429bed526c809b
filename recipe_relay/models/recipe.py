"""Recipe Pydantic models."""

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field


class IngredientLine(BaseModel):
    """Single ingredient row as printed on the page."""

    model_config = ConfigDict(frozen=True)

    amount: str = Field("", description="Amount text (e.g., '2', '1 cup')")
    item: str = Field("", description="Ingredient text (e.g., 'eggs')")


class Nutrition(BaseModel):
    """Nutritional facts, verbatim from the page."""

    model_config = ConfigDict(frozen=True)

    calories: str = Field("", description="Calories text")
    protein: str = Field("", description="Protein text")
    fat: str = Field("", description="Fat text")
    carbs: str = Field("", description="Carbohydrates text")


class RecipeDocument(BaseModel):
    """Recipe fields scraped from a recipe page.

    Every field is the raw text found at its labeled location; a missing
    element yields an empty string or an empty sequence.
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "name": "Lemon Cake",
                "featuredIn": "Desserts",
                "description": "A bright, tangy loaf cake.",
                "prepTime": "15 mins",
                "cookTime": "45 mins",
                "ingredients": [
                    {"amount": "2", "item": "eggs"},
                    {"amount": "1 cup", "item": "sugar"},
                ],
                "instructions": ["Mix", "Bake"],
                "nutrition": {
                    "calories": "320 kcal",
                    "protein": "5 g",
                    "fat": "14 g",
                    "carbs": "44 g",
                },
                "servings": "8",
            }
        },
    )

    name: str = Field("", description="Top-level heading text")
    featuredIn: str = Field("", description="Featured category link text")
    description: str = Field("", description="Recipe description text")
    prepTime: str = Field("", description="Preparation time as authored")
    cookTime: str = Field("", description="Cooking time as authored")
    ingredients: Tuple[IngredientLine, ...] = Field(
        default_factory=tuple, description="Ingredient rows in document order"
    )
    instructions: Tuple[str, ...] = Field(
        default_factory=tuple, description="Instruction steps in document order"
    )
    nutrition: Nutrition = Field(default_factory=Nutrition, description="Nutrition facts")
    servings: str = Field("", description="Serving count as authored")
