"""Shared API dependencies.

Services are built once per application in ``create_app`` and kept on
``app.state``; tests replace them through ``app.dependency_overrides``.
"""

from fastapi import Request

from recipe_relay.services.auth_service import AuthService
from recipe_relay.services.notification_service import NotificationService
from recipe_relay.services.scraper_service import ScraperService


def get_scraper_service(request: Request) -> ScraperService:
    """Get recipe scraper service instance."""
    return request.app.state.scraper_service


def get_notification_service(request: Request) -> NotificationService:
    """Get notification relay service instance."""
    return request.app.state.notification_service


def get_auth_service(request: Request) -> AuthService:
    """Get auth relay service instance."""
    return request.app.state.auth_service
