"""Auth relay models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

PASSWORD_RESET = "password_reset"
EMAIL_CONFIRMATION = "email_confirmation"


class PasswordResetRequest(BaseModel):
    token: str = Field(..., description="Password reset token from the emailed link")
    newPassword: str = Field(..., description="New password")


class EmailConfirmationRequest(BaseModel):
    token: str = Field(..., description="Email confirmation token from the emailed link")


class PasswordChangeRequest(BaseModel):
    newPassword: str = Field(..., description="New password")


class AuthActionResponse(BaseModel):
    message: str


@dataclass(frozen=True)
class TokenRecord:
    """A pending confirmation token as stored in the registry."""

    token: str
    uid: str
    purpose: str
    expires_at: Optional[datetime] = None
    # Stored document, written back by `restore`.
    data: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)
