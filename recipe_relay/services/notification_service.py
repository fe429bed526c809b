"""Push notification relay to Firebase Cloud Messaging."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional, Set

from firebase_admin import exceptions as firebase_exceptions
from firebase_admin import messaging

from recipe_relay.config import settings
from recipe_relay.models.notification import DeliveryResult, NotificationRequest
from recipe_relay.services.firebase_admin_init import init_firebase
from recipe_relay.utils.exceptions import ConfigurationError, DeliveryError

logger = logging.getLogger(__name__)

Sender = Callable[[messaging.Message], str]


def _fcm_send(message: messaging.Message) -> str:
    return messaging.send(message, app=init_firebase())


class NotificationService:
    """Builds FCM messages and delivers them now or after a fixed delay.

    Delayed deliveries run as tracked asyncio tasks. Each task resolves to a
    DeliveryResult and never raises, so the caller that scheduled it is never
    told about a failure; failures are logged.
    """

    def __init__(self, delay_seconds: Optional[float] = None, sender: Optional[Sender] = None):
        self.delay_seconds = (
            delay_seconds if delay_seconds is not None else settings.notification_delay_seconds
        )
        self._sender: Sender = sender or _fcm_send
        self._pending: Set[asyncio.Task] = set()

    @property
    def pending(self) -> Set[asyncio.Task]:
        return set(self._pending)

    @staticmethod
    def build_message(request: NotificationRequest) -> messaging.Message:
        """Translate a relay request into an FCM message."""
        return messaging.Message(
            token=request.fcmToken,
            notification=messaging.Notification(
                title=request.title,
                body=request.body,
                image=request.imageUrl or None,
            ),
            data=dict(request.data),
        )

    async def send(self, request: NotificationRequest) -> str:
        """
        Deliver a notification immediately.

        Returns:
            Provider message ID

        Raises:
            DeliveryError: If the provider rejects the message
        """
        message = self.build_message(request)
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, self._sender, message)
        except (firebase_exceptions.FirebaseError, ValueError) as e:
            raise DeliveryError(f"Failed to send notification: {e}") from e

    def dispatch(self, request: NotificationRequest) -> asyncio.Task:
        """
        Schedule delivery after the configured delay and return at once.

        Returns:
            Task resolving to the DeliveryResult
        """
        task = asyncio.create_task(self._deliver_later(request, self.delay_seconds))
        self._pending.add(task)
        task.add_done_callback(self._on_done)
        logger.info(
            "Notification scheduled",
            extra={"delay_seconds": self.delay_seconds, "title": (request.title or "")[:100]},
        )
        return task

    async def _deliver_later(self, request: NotificationRequest, delay: float) -> DeliveryResult:
        if delay > 0:
            await asyncio.sleep(delay)

        try:
            message_id = await self.send(request)
        except (DeliveryError, ConfigurationError) as e:
            logger.error(f"Error sending notification: {e}", exc_info=True)
            return DeliveryResult(status="failed", error=str(e))

        logger.info(f"Successfully sent message: {message_id}", extra={"message_id": message_id})
        return DeliveryResult(status="sent", message_id=message_id)

    def _on_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            logger.warning("Scheduled notification was cancelled before delivery")
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                f"Unexpected error in scheduled notification: {exc}",
                exc_info=(type(exc), exc, exc.__traceback__),
            )

    async def drain(self, timeout: float) -> int:
        """
        Wait for scheduled deliveries, cancelling those still pending at the deadline.

        Returns:
            Number of deliveries cancelled
        """
        if not self._pending:
            return 0

        _, still_pending = await asyncio.wait(set(self._pending), timeout=timeout)
        for task in still_pending:
            task.cancel()
        if still_pending:
            await asyncio.gather(*still_pending, return_exceptions=True)
            logger.warning(f"Cancelled {len(still_pending)} undelivered notifications on shutdown")
        return len(still_pending)
