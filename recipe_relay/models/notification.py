"""Notification relay models."""

from dataclasses import dataclass
from typing import Dict, Optional

from pydantic import BaseModel, Field

DEFAULT_NOTIFICATION_DATA = {"customDataKey": "customDataValue"}


class NotificationRequest(BaseModel):
    """Push notification request body.

    Required fields are optional here so that a missing one is reported
    as a 400 with the field names rather than a schema error.
    """

    fcmToken: Optional[str] = Field(None, description="FCM registration token of the target device")
    title: Optional[str] = Field(None, description="Notification title")
    body: Optional[str] = Field(None, description="Notification body")
    imageUrl: Optional[str] = Field(None, description="Optional image shown with the notification")
    data: Dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_NOTIFICATION_DATA),
        description="Custom data payload delivered with the message",
    )


class NotificationAccepted(BaseModel):
    message: str = "Notification sent successfully"


@dataclass(frozen=True)
class DeliveryResult:
    """Outcome of one delayed delivery attempt."""

    status: str  # "sent" or "failed"
    message_id: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "sent"
