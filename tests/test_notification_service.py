"""Tests for the push notification relay service."""

import asyncio
import logging

import pytest
from firebase_admin import exceptions as firebase_exceptions

from recipe_relay.models.notification import DEFAULT_NOTIFICATION_DATA, NotificationRequest
from recipe_relay.services.notification_service import NotificationService
from recipe_relay.utils.exceptions import DeliveryError
from tests.fakes import RecordingSender


@pytest.fixture
def notification() -> NotificationRequest:
    return NotificationRequest(fcmToken="device-token", title="Dinner", body="Your recipe is ready")


def test_build_message_without_image(notification):
    message = NotificationService.build_message(notification)

    assert message.token == "device-token"
    assert message.notification.title == "Dinner"
    assert message.notification.body == "Your recipe is ready"
    assert message.notification.image is None
    assert message.data == DEFAULT_NOTIFICATION_DATA


def test_build_message_with_image_and_data():
    request = NotificationRequest(
        fcmToken="t",
        title="t",
        body="b",
        imageUrl="https://example.com/cake.jpg",
        data={"recipeId": "42"},
    )
    message = NotificationService.build_message(request)

    assert message.notification.image == "https://example.com/cake.jpg"
    assert message.data == {"recipeId": "42"}


@pytest.mark.asyncio
async def test_send_returns_message_id(notification):
    sender = RecordingSender()
    service = NotificationService(delay_seconds=0, sender=sender)

    assert await service.send(notification) == "projects/demo/messages/1"
    assert len(sender.messages) == 1


@pytest.mark.asyncio
async def test_send_wraps_provider_errors(notification):
    sender = RecordingSender(error=firebase_exceptions.UnavailableError("FCM unavailable"))
    service = NotificationService(delay_seconds=0, sender=sender)

    with pytest.raises(DeliveryError, match="FCM unavailable"):
        await service.send(notification)


@pytest.mark.asyncio
async def test_dispatch_returns_before_delivery(notification):
    sender = RecordingSender()
    service = NotificationService(delay_seconds=0.05, sender=sender)

    task = service.dispatch(notification)

    assert not task.done()
    assert sender.messages == []
    assert task in service.pending

    result = await task

    assert result.ok
    assert result.message_id == "projects/demo/messages/1"
    assert len(sender.messages) == 1
    assert service.pending == set()


@pytest.mark.asyncio
async def test_dispatch_failure_is_logged_not_raised(notification, caplog):
    sender = RecordingSender(error=ValueError("invalid registration token"))
    service = NotificationService(delay_seconds=0, sender=sender)

    with caplog.at_level(logging.ERROR, logger="recipe_relay.services.notification_service"):
        result = await service.dispatch(notification)

    assert result.status == "failed"
    assert "invalid registration token" in result.error
    assert any("Error sending notification" in record.getMessage() for record in caplog.records)


@pytest.mark.asyncio
async def test_drain_waits_for_short_deliveries(notification):
    sender = RecordingSender()
    service = NotificationService(delay_seconds=0.01, sender=sender)
    service.dispatch(notification)
    service.dispatch(notification)

    cancelled = await service.drain(timeout=2)

    assert cancelled == 0
    assert len(sender.messages) == 2


@pytest.mark.asyncio
async def test_drain_cancels_overdue_deliveries(notification):
    sender = RecordingSender()
    service = NotificationService(delay_seconds=10, sender=sender)
    task = service.dispatch(notification)

    cancelled = await service.drain(timeout=0.01)
    await asyncio.sleep(0)

    assert cancelled == 1
    assert task.cancelled()
    assert sender.messages == []
    assert service.pending == set()
