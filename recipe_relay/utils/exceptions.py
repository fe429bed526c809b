"""Custom exception classes."""


class RecipeRelayError(Exception):
    """Base exception for the Recipe Relay application."""

    pass


class ValidationError(RecipeRelayError):
    """Raised when input validation fails."""

    pass


class AuthenticationError(RecipeRelayError):
    """Raised when an ID token cannot be verified."""

    pass


class TokenNotFoundError(RecipeRelayError):
    """Raised when a confirmation token is not in the registry."""

    pass


class ParseError(RecipeRelayError):
    """Raised when input cannot be parsed as HTML at all."""

    pass


class FetchError(RecipeRelayError):
    """Raised when an upstream page cannot be fetched."""

    pass


class DeliveryError(RecipeRelayError):
    """Raised when the messaging provider rejects a notification."""

    pass


class AuthProviderError(RecipeRelayError):
    """Raised when the identity provider call fails."""

    pass


class ConfigurationError(RecipeRelayError):
    """Raised when the service is misconfigured."""

    pass
