"""Password reset and email confirmation relay endpoints."""

import logging

from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from recipe_relay.api.dependencies import get_auth_service
from recipe_relay.middleware.rate_limit import rate_limit_dependency
from recipe_relay.models.auth import (
    AuthActionResponse,
    EmailConfirmationRequest,
    PasswordChangeRequest,
    PasswordResetRequest,
)
from recipe_relay.services.auth_service import AuthService
from recipe_relay.utils.exceptions import AuthenticationError

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])

security = HTTPBearer(auto_error=False)


@router.post("/reset-password", response_model=AuthActionResponse)
async def reset_password(
    req: PasswordResetRequest,
    _: None = Depends(rate_limit_dependency),
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthActionResponse:
    """Redeem a password reset token and set the new password."""
    await auth_service.reset_password(req.token, req.newPassword)
    return AuthActionResponse(message="Password has been reset")


@router.post("/confirm-email", response_model=AuthActionResponse)
async def confirm_email(
    req: EmailConfirmationRequest,
    _: None = Depends(rate_limit_dependency),
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthActionResponse:
    """Redeem an email confirmation token."""
    await auth_service.confirm_email(req.token)
    return AuthActionResponse(message="Email has been confirmed")


@router.post("/change-password", response_model=AuthActionResponse)
async def change_password(
    req: PasswordChangeRequest,
    authorization: HTTPAuthorizationCredentials = Depends(security),
    _: None = Depends(rate_limit_dependency),
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthActionResponse:
    """Change the password of the signed-in user (Authorization: Bearer <ID token>)."""
    if authorization is None or not authorization.credentials:
        raise AuthenticationError("Missing ID token. Provide an Authorization Bearer token.")

    await auth_service.change_password(authorization.credentials, req.newPassword)
    return AuthActionResponse(message="Password has been changed")
