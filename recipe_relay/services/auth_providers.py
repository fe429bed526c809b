"""Identity provider abstraction and the Firebase Authentication implementation."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Protocol, runtime_checkable

from firebase_admin import auth as firebase_auth
from firebase_admin import exceptions as firebase_exceptions

from recipe_relay.services.firebase_admin_init import init_firebase
from recipe_relay.utils.exceptions import AuthenticationError, AuthProviderError, ConfigurationError

logger = logging.getLogger(__name__)


@runtime_checkable
class AuthProvider(Protocol):
    """Operations the auth relay needs from an identity provider."""

    @property
    def provider_name(self) -> str:
        """Short name used in logs."""
        ...

    async def verify_token(self, id_token: str) -> str:
        """Verify an ID token and return the user ID.

        Raises:
            AuthenticationError: If the token is invalid, expired or revoked.
            AuthProviderError: If the provider cannot be reached.
        """
        ...

    async def update_password(self, uid: str, new_password: str) -> None:
        ...

    async def mark_email_verified(self, uid: str) -> None:
        ...


class FirebaseAuthProvider:
    """AuthProvider backed by firebase_admin.auth."""

    @property
    def provider_name(self) -> str:
        return "firebase"

    async def _call(self, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        # The Admin SDK is blocking; keep it off the event loop.
        app = init_firebase()
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, lambda: func(*args, app=app, **kwargs))

    async def verify_token(self, id_token: str) -> str:
        try:
            decoded = await self._call(firebase_auth.verify_id_token, id_token, check_revoked=True)
        except (
            firebase_auth.InvalidIdTokenError,
            firebase_auth.RevokedIdTokenError,
            firebase_auth.UserDisabledError,
            ValueError,
        ) as e:
            raise AuthenticationError(f"Invalid ID token: {e}") from e
        except firebase_exceptions.FirebaseError as e:
            raise AuthProviderError(f"Token verification failed: {e}") from e
        return decoded["uid"]

    async def _update_user(self, uid: str, **fields: Any) -> None:
        try:
            await self._call(firebase_auth.update_user, uid, **fields)
        except firebase_auth.UserNotFoundError as e:
            raise AuthProviderError(f"User {uid} not found") from e
        except (firebase_exceptions.FirebaseError, ValueError) as e:
            raise AuthProviderError(f"Failed to update user {uid}: {e}") from e

    async def update_password(self, uid: str, new_password: str) -> None:
        await self._update_user(uid, password=new_password)
        logger.info(f"Password updated for user {uid}")

    async def mark_email_verified(self, uid: str) -> None:
        await self._update_user(uid, email_verified=True)
        logger.info(f"Email verified for user {uid}")


_PROVIDERS = {
    "firebase": FirebaseAuthProvider,
}


def create_auth_provider(name: str) -> AuthProvider:
    """Build the provider named in settings."""
    try:
        provider_cls = _PROVIDERS[name.strip().lower()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown auth provider '{name}'. Expected one of: {', '.join(sorted(_PROVIDERS))}"
        ) from None
    return provider_cls()
