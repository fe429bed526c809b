"""Pydantic models."""

from recipe_relay.models.auth import (
    AuthActionResponse,
    EmailConfirmationRequest,
    PasswordChangeRequest,
    PasswordResetRequest,
    TokenRecord,
)
from recipe_relay.models.notification import DeliveryResult, NotificationAccepted, NotificationRequest
from recipe_relay.models.recipe import IngredientLine, Nutrition, RecipeDocument

__all__ = [
    "AuthActionResponse",
    "DeliveryResult",
    "EmailConfirmationRequest",
    "IngredientLine",
    "NotificationAccepted",
    "NotificationRequest",
    "Nutrition",
    "PasswordChangeRequest",
    "PasswordResetRequest",
    "RecipeDocument",
    "TokenRecord",
]
