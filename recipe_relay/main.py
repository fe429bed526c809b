"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import APIRouter, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from recipe_relay import __version__
from recipe_relay.api.routes import auth, health, notifications, recipes
from recipe_relay.config import ROUTE_GROUPS, Settings, settings as default_settings
from recipe_relay.core.request_id import get_request_id
from recipe_relay.middleware.logging import RequestLoggingMiddleware
from recipe_relay.middleware.rate_limit import create_limiter, get_rate_limit_exceeded_handler
from recipe_relay.middleware.security import SecurityHeadersMiddleware, setup_compression, setup_cors
from recipe_relay.models.auth import EMAIL_CONFIRMATION, PASSWORD_RESET
from recipe_relay.services.auth_providers import create_auth_provider
from recipe_relay.services.auth_service import AuthService
from recipe_relay.services.notification_service import NotificationService
from recipe_relay.services.scraper_service import ScraperService
from recipe_relay.services.token_registry import FirestoreTokenRegistry, InMemoryTokenRegistry
from recipe_relay.utils.exceptions import (
    AuthenticationError,
    AuthProviderError,
    ConfigurationError,
    DeliveryError,
    FetchError,
    ParseError,
    RecipeRelayError,
    TokenNotFoundError,
    ValidationError,
)
from recipe_relay.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)

ROUTERS = {
    "notifications": notifications.router,
    "recipes": recipes.router,
    "auth": auth.router,
}

# Most specific first: the first isinstance match wins.
ERROR_STATUS = (
    (ValidationError, status.HTTP_400_BAD_REQUEST, "Validation error"),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED, "Authentication failed"),
    (TokenNotFoundError, status.HTTP_404_NOT_FOUND, "Token not found"),
    (ParseError, status.HTTP_422_UNPROCESSABLE_ENTITY, "Failed to parse HTML"),
    (FetchError, status.HTTP_502_BAD_GATEWAY, "Failed to fetch recipe page"),
    (DeliveryError, status.HTTP_502_BAD_GATEWAY, "Failed to send notification"),
    (AuthProviderError, status.HTTP_502_BAD_GATEWAY, "Auth provider error"),
    (ConfigurationError, status.HTTP_500_INTERNAL_SERVER_ERROR, "Service misconfigured"),
)


def resolve_enabled_routes(config: Settings) -> list:
    """
    Validate the configured route groups.

    Raises:
        ConfigurationError: If a group name is unknown
    """
    enabled = config.enabled_routes_list
    unknown = [name for name in enabled if name not in ROUTE_GROUPS]
    if unknown:
        raise ConfigurationError(
            f"Unknown route groups: {', '.join(unknown)}. Expected any of: {', '.join(ROUTE_GROUPS)}"
        )
    return [name for name in ROUTE_GROUPS if name in enabled]


def build_auth_service(config: Settings) -> AuthService:
    """Wire the auth provider and token registries named in settings."""
    provider = create_auth_provider(config.auth_provider)

    backend = config.token_registry.strip().lower()
    if backend == "firestore":
        reset_tokens = FirestoreTokenRegistry(config.password_reset_collection, PASSWORD_RESET)
        confirmation_tokens = FirestoreTokenRegistry(config.email_confirmation_collection, EMAIL_CONFIRMATION)
    elif backend == "memory":
        reset_tokens = InMemoryTokenRegistry(PASSWORD_RESET)
        confirmation_tokens = InMemoryTokenRegistry(EMAIL_CONFIRMATION)
    else:
        raise ConfigurationError(f"Unknown token registry '{config.token_registry}'. Expected firestore or memory")

    return AuthService(provider, reset_tokens, confirmation_tokens)


def _error_response(request: Request, error: str, detail, status_code: int) -> JSONResponse:
    # The context variable is already reset when the outermost handler runs.
    request_id = getattr(request.state, "request_id", None) or get_request_id()
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error,
            "detail": detail,
            "request_id": request_id,
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RateLimitExceeded, get_rate_limit_exceeded_handler())

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Handle request validation errors with detailed messages."""
        logger.warning(
            f"Validation error: {str(exc)}",
            extra={"path": request.url.path, "method": request.method, "errors": exc.errors()},
        )
        return _error_response(request, "Validation error", exc.errors(), status.HTTP_422_UNPROCESSABLE_ENTITY)

    @app.exception_handler(RecipeRelayError)
    async def relay_exception_handler(request: Request, exc: RecipeRelayError) -> JSONResponse:
        """Map application exceptions to HTTP statuses."""
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        error_message = "Internal server error"
        for exc_type, code, message in ERROR_STATUS:
            if isinstance(exc, exc_type):
                status_code, error_message = code, message
                break

        if status_code >= 500:
            logger.error(f"Exception: {error_message}", extra={"exception": str(exc)}, exc_info=True)
        else:
            logger.warning(f"Exception: {error_message}", extra={"exception": str(exc)})

        return _error_response(request, error_message, str(exc), status_code)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.error(f"Unexpected exception: {str(exc)}", exc_info=True)
        return _error_response(
            request, "Internal server error", "An unexpected error occurred", status.HTTP_500_INTERNAL_SERVER_ERROR
        )


def create_app(config: Optional[Settings] = None) -> FastAPI:
    """
    Build the application for one deployment.

    Only the route groups listed in ``enabled_routes`` are mounted, and only
    their services are constructed.
    """
    config = config or default_settings
    enabled_routes = resolve_enabled_routes(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Recipe Relay starting up...")
        logger.info(f"Enabled routes: {', '.join(enabled_routes) or 'none'}")
        logger.info(f"Rate limit: {config.rate_limit_per_hour} requests/hour")
        yield
        notification_service = getattr(app.state, "notification_service", None)
        if notification_service is not None:
            await notification_service.drain(config.shutdown_drain_seconds)
        logger.info("Recipe Relay shutting down...")

    app = FastAPI(
        title="Recipe Relay API",
        description="Push notification relay, recipe page scraping and auth relay",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.limiter = create_limiter(config.rate_limit_per_hour, enabled=config.rate_limit_enabled)
    app.state.enabled_routes = tuple(enabled_routes)

    if "notifications" in enabled_routes:
        app.state.notification_service = NotificationService(config.notification_delay_seconds)
    if "recipes" in enabled_routes:
        app.state.scraper_service = ScraperService(timeout=config.http_timeout)
    if "auth" in enabled_routes:
        app.state.auth_service = build_auth_service(config)

    register_exception_handlers(app)

    # Added last runs first.
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    setup_compression(app)
    setup_cors(app, config.cors_origins_list)

    root_router = APIRouter()

    @root_router.get("/")
    async def root():
        """Root endpoint."""
        return {
            "name": "Recipe Relay API",
            "version": __version__,
            "docs": "/docs",
            "enabled_routes": list(enabled_routes),
        }

    app.include_router(root_router)
    app.include_router(health.router)
    for name in enabled_routes:
        app.include_router(ROUTERS[name])

    return app


setup_logging(default_settings.log_level)
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=default_settings.host, port=default_settings.port)
