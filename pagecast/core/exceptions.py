"""
Error taxonomy for the user administration API.

Every error carries the HTTP status it maps to and a message that is safe to
show to the caller. `pagecast.main` renders them as ``{"error": message}``.
"""

from typing import Any, Dict, Optional

OWNER_RESTRICTION_MESSAGE = (
    "Owner accounts can only be created manually via SQL for security reasons"
)
OWNER_ROLE_RESTRICTION_MESSAGE = (
    "Owner role can only be set manually via SQL for security reasons"
)


class PagecastError(Exception):
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message}


class ValidationError(PagecastError):
    status_code = 400
    default_message = "Invalid request"


class AuthenticationError(PagecastError):
    status_code = 401
    default_message = "Missing or invalid session"


class AuthorizationError(PagecastError):
    status_code = 403
    default_message = "Insufficient permissions"


class OwnerRestrictionError(AuthorizationError):
    """Owner role is never granted through the API, for any caller."""

    default_message = OWNER_RESTRICTION_MESSAGE


class NotFoundError(PagecastError):
    status_code = 404
    default_message = "Not found"


class ConflictError(PagecastError):
    status_code = 409
    default_message = "A user with this email already exists"


class RateLimitedError(PagecastError):
    status_code = 429
    default_message = "Rate limit exceeded"


class NotConfiguredError(PagecastError):
    status_code = 503
    default_message = "Server is not configured for user management"


class UpstreamError(PagecastError):
    """Identity store rejected the call; its message is passed through."""

    status_code = 400
    default_message = "Identity provider request failed"


class PartialFailureError(PagecastError):
    """Account exists upstream but the local role assignment did not complete."""

    status_code = 500
    default_message = "User was created but role assignment failed"

    def __init__(self, account_id: str, message: Optional[str] = None):
        self.account_id = account_id
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message, "userId": self.account_id}
