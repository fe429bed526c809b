"""Push notification relay endpoint."""

import logging

from fastapi import APIRouter, Depends, Request

from recipe_relay.api.dependencies import get_notification_service
from recipe_relay.middleware.rate_limit import rate_limit_dependency
from recipe_relay.models.notification import NotificationAccepted, NotificationRequest
from recipe_relay.services.notification_service import NotificationService
from recipe_relay.utils.validators import require_fields

logger = logging.getLogger(__name__)
router = APIRouter(tags=["notifications"])


@router.post("/send-notification", response_model=NotificationAccepted)
async def send_notification(
    request: Request,
    payload: NotificationRequest,
    _: None = Depends(rate_limit_dependency),
    notification_service: NotificationService = Depends(get_notification_service),
) -> NotificationAccepted:
    """
    Relay a push notification to a device.

    Responds as soon as delivery is scheduled; the delivery itself runs
    after a fixed delay and its outcome is only logged.
    """
    require_fields(payload.model_dump(), ("fcmToken", "title", "body"))

    logger.info(
        "Route /send-notification called",
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "route": "/send-notification",
            "params": {"title": payload.title[:200], "has_image": bool(payload.imageUrl)},
        },
    )

    notification_service.dispatch(payload)
    return NotificationAccepted()
