"""Password reset, email confirmation and password change flows."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Awaitable, Optional

from recipe_relay.models.auth import TokenRecord
from recipe_relay.services.auth_providers import AuthProvider
from recipe_relay.services.token_registry import TokenRegistry
from recipe_relay.utils.exceptions import AuthProviderError, TokenNotFoundError, ValidationError
from recipe_relay.utils.validators import validate_password

logger = logging.getLogger(__name__)


def _is_expired(expires_at: Optional[datetime], now: datetime) -> bool:
    if expires_at is None:
        return False
    if not isinstance(expires_at, datetime):
        raise ValidationError("Token has an invalid expiry")
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=timezone.utc)
    return expires_at <= now


class AuthService:
    """Relays credential changes to the identity provider."""

    def __init__(
        self,
        provider: AuthProvider,
        reset_tokens: TokenRegistry,
        confirmation_tokens: TokenRegistry,
    ):
        self.provider = provider
        self.reset_tokens = reset_tokens
        self.confirmation_tokens = confirmation_tokens

    async def _redeem(self, registry: TokenRegistry, token: str) -> TokenRecord:
        if not token or not token.strip():
            raise ValidationError("Token must be a non-empty string")

        # The token is gone from the registry from here on, even if a check below fails.
        record = await registry.consume(token.strip())
        if record is None:
            raise TokenNotFoundError("Token is invalid or has already been used")

        if _is_expired(record.expires_at, datetime.now(timezone.utc)):
            raise ValidationError("Token has expired")

        if not record.uid:
            raise ValidationError("Token is not linked to a user")

        return record

    async def _apply(self, registry: TokenRegistry, record: TokenRecord, change: Awaitable[None]) -> None:
        """Run a provider call for a redeemed token, returning the token if the provider fails."""
        try:
            await change
        except AuthProviderError:
            logger.warning(f"Provider call failed, restoring {record.purpose} token for user {record.uid}")
            await registry.restore(record)
            raise

    async def reset_password(self, token: str, new_password: str) -> str:
        """
        Set a new password for the user a reset token was issued to.

        Returns:
            The user ID
        """
        validate_password(new_password)
        record = await self._redeem(self.reset_tokens, token)
        await self._apply(self.reset_tokens, record, self.provider.update_password(record.uid, new_password))
        logger.info(f"Password reset completed for user {record.uid}", extra={"provider": self.provider.provider_name})
        return record.uid

    async def confirm_email(self, token: str) -> str:
        """Mark the email of the token's user as verified and return the user ID."""
        record = await self._redeem(self.confirmation_tokens, token)
        await self._apply(self.confirmation_tokens, record, self.provider.mark_email_verified(record.uid))
        logger.info(f"Email confirmed for user {record.uid}", extra={"provider": self.provider.provider_name})
        return record.uid

    async def change_password(self, id_token: str, new_password: str) -> str:
        """Change the password of the user identified by a verified ID token."""
        validate_password(new_password)
        uid = await self.provider.verify_token(id_token)
        await self.provider.update_password(uid, new_password)
        return uid
