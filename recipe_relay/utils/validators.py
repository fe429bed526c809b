"""Input validation utilities."""

import ipaddress
from typing import Any, Dict, Iterable, Optional
from urllib.parse import urlparse

from recipe_relay.utils.exceptions import ValidationError

MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_LENGTH = 128


def validate_url(url: str) -> str:
    """
    Validate and sanitize URL to prevent SSRF attacks.

    Args:
        url: URL to validate

    Returns:
        Validated URL string

    Raises:
        ValidationError: If URL is invalid or potentially dangerous
    """
    if not url or not isinstance(url, str):
        raise ValidationError("URL must be a non-empty string")

    url = url.strip()

    try:
        parsed = urlparse(url)
    except ValueError as e:
        raise ValidationError(f"Invalid URL format: {str(e)}") from e

    if parsed.scheme not in ("http", "https"):
        raise ValidationError("URL must use http or https protocol")

    hostname = parsed.hostname
    if not hostname:
        raise ValidationError("URL must have a valid hostname")

    blocked_hosts = {
        "localhost",
        "127.0.0.1",
        "0.0.0.0",
        "::1",
    }

    if hostname.lower() in blocked_hosts:
        raise ValidationError("URL cannot point to localhost or private IPs")

    try:
        address = ipaddress.ip_address(hostname)
    except ValueError:
        # Not an IP literal; a DNS name.
        return url

    if address.is_private or address.is_loopback or address.is_link_local or address.is_reserved:
        raise ValidationError("URL cannot point to private IP ranges")

    return url


def require_fields(payload: Dict[str, Any], fields: Iterable[str]) -> None:
    """
    Check that every named field is present and non-blank.

    Raises:
        ValidationError: listing the missing fields
    """
    missing = []
    for field in fields:
        value = payload.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(field)

    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def validate_password(password: Optional[str]) -> str:
    """Validate a new password against the identity provider's length limits."""
    if not password or not isinstance(password, str):
        raise ValidationError("Password must be a non-empty string")

    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    if len(password) > MAX_PASSWORD_LENGTH:
        raise ValidationError(f"Password cannot exceed {MAX_PASSWORD_LENGTH} characters")

    return password
