"""Application configuration using pydantic-settings."""

from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

ROUTE_GROUPS = ("notifications", "recipes", "auth")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Server
    port: int = 8080
    host: str = "0.0.0.0"

    # Logging
    log_level: str = "INFO"

    # HTTP Settings
    http_timeout: int = 30  # seconds

    # Rate Limiting
    rate_limit_per_hour: int = 100
    rate_limit_enabled: bool = True

    # CORS
    cors_origins: str = "*"  # Comma-separated origins or "*" for all

    # Route groups wired into this deployment
    enabled_routes: str = ",".join(ROUTE_GROUPS)

    # Auth relay
    auth_provider: str = "firebase"
    token_registry: str = "firestore"  # "firestore" or "memory"
    password_reset_collection: str = "passwordResetTokens"
    email_confirmation_collection: str = "emailConfirmationTokens"

    # Notification relay
    notification_delay_seconds: float = 2.0
    shutdown_drain_seconds: float = 5.0

    # Firebase credentials (service account JSON, or a key file path)
    firebase_service_account: Optional[str] = None
    google_application_credentials: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Get list of CORS origins."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def enabled_routes_list(self) -> List[str]:
        """Get list of enabled route groups, lower-cased."""
        return [name.strip().lower() for name in self.enabled_routes.split(",") if name.strip()]


# Global settings instance
settings = Settings()
