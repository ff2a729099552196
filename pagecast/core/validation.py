"""
Input validators shared by the request handlers.

Each `validate_*` returns the normalised value or raises ValidationError with a
message meant for the caller.
"""

import ipaddress
import re
from typing import Optional
from urllib.parse import urlparse

from pagecast.core.exceptions import ValidationError

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)
VOICE_ID_RE = re.compile(r"^[a-zA-Z0-9_-]+$")

MAX_EMAIL_LENGTH = 254
MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_LENGTH = 128

WEAK_PASSWORDS = {
    "password",
    "123456",
    "12345678",
    "qwerty",
    "abc123",
    "password123",
}

SUPPORTED_LANGUAGES = ("en", "tr")

_LOCAL_HOSTS = {"localhost", "127.0.0.1", "0.0.0.0", "::1"}


def is_valid_email(email: object) -> bool:
    if not isinstance(email, str):
        return False
    return len(email) <= MAX_EMAIL_LENGTH and bool(EMAIL_RE.match(email))


def is_valid_uuid(value: object) -> bool:
    return isinstance(value, str) and bool(UUID_RE.match(value))


def validate_email(email: object) -> str:
    if isinstance(email, str):
        email = email.strip().lower()
    if not is_valid_email(email):
        raise ValidationError("Invalid email format")
    return email


def validate_password(password: object) -> str:
    if not isinstance(password, str):
        raise ValidationError("Password must be a string")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if len(password) > MAX_PASSWORD_LENGTH:
        raise ValidationError(f"Password is too long (max {MAX_PASSWORD_LENGTH} characters)")
    if password.lower() in WEAK_PASSWORDS:
        raise ValidationError("Password is too weak")
    return password


def validate_record_id(value: object, label: str) -> str:
    if not is_valid_uuid(value):
        raise ValidationError(f"Invalid {label} ID format")
    return value.lower()


def validate_user_id(user_id: object) -> str:
    return validate_record_id(user_id, "user")


def validate_language(language: object) -> str:
    if language not in SUPPORTED_LANGUAGES:
        raise ValidationError(f"Unsupported language. Use one of: {', '.join(SUPPORTED_LANGUAGES)}")
    return language


def validate_voice_id(voice_id: object) -> str:
    if not isinstance(voice_id, str) or not VOICE_ID_RE.match(voice_id):
        raise ValidationError("Voice ID contains invalid characters")
    return voice_id


def _is_private_host(hostname: str) -> bool:
    if hostname in _LOCAL_HOSTS:
        return True
    try:
        address = ipaddress.ip_address(hostname)
    except ValueError:
        return False
    return address.is_private or address.is_loopback or address.is_unspecified


def validate_webhook_url(url: object, production: bool = False) -> str:
    """http(s) only; in production, loopback and private addresses are rejected."""
    if not isinstance(url, str) or not url.strip():
        raise ValidationError("Webhook URL is invalid")
    url = url.strip()
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        raise ValidationError("Webhook URL is invalid")
    if production and _is_private_host(parsed.hostname.lower()):
        raise ValidationError("Webhook URL must not point to a local or private address")
    return url


def require_text(value: Optional[str], field: str, max_length: int = 200) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required")
    value = value.strip()
    if len(value) > max_length:
        raise ValidationError(f"{field} is too long (max {max_length} characters)")
    return value
