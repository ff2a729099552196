import hashlib
import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from supabase import Client

from pagecast.config.settings import settings
from pagecast.core.exceptions import AuthenticationError, UpstreamError
from pagecast.modules.auth.schemas import LoginRequest, TokenResponse
from pagecast.modules.profiles.service import RoleLedger

logger = logging.getLogger(__name__)

# In-memory cache for get_current_user to reduce Supabase auth calls (e.g. many parallel requests with same token)
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_MAX_SIZE = 500


def clear_auth_cache() -> None:
    _AUTH_USER_CACHE.clear()


def forget_account(account_id: str) -> None:
    """Drop every cached identity for an account, e.g. after it was deleted."""
    for key, (user_data, _) in list(_AUTH_USER_CACHE.items()):
        if user_data.get("id") == account_id:
            _AUTH_USER_CACHE.pop(key, None)


def _is_invalid_credentials(message: str) -> bool:
    lowered = message.lower()
    return "invalid" in lowered or "credentials" in lowered


class AuthService:
    def __init__(self, supabase: Client, ledger: Optional[RoleLedger] = None):
        self.supabase = supabase
        self.ledger = ledger

    def login(self, login_data: LoginRequest) -> TokenResponse:
        """Authenticate with Supabase Auth and record the sign-in on the profile"""
        try:
            auth_response = self.supabase.auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })
        except Exception as e:
            if _is_invalid_credentials(str(e)):
                raise AuthenticationError("Invalid email or password")
            raise UpstreamError(f"Login failed: {e}")

        if not auth_response.user or not auth_response.session:
            raise AuthenticationError("Invalid email or password")

        user = auth_response.user
        if self.ledger is not None:
            self.ledger.touch_sign_in(user.id, datetime.now(timezone.utc))
        logger.info("User %s signed in", user.id)

        return TokenResponse(
            access_token=auth_response.session.access_token,
            token_type="bearer",
            user_id=user.id,
            email=user.email or login_data.email
        )

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Get current user details from Supabase Auth token. Uses short TTL cache to reduce auth API calls."""
        cache_key = hashlib.sha256(token.encode()).hexdigest()
        now = time.monotonic()
        if cache_key in _AUTH_USER_CACHE:
            user_data, expiry = _AUTH_USER_CACHE[cache_key]
            if now < expiry:
                return user_data
            del _AUTH_USER_CACHE[cache_key]

        try:
            user_response = self.supabase.auth.get_user(jwt=token)
        except Exception as e:
            logger.debug("Token verification failed: %s", e)
            raise AuthenticationError("Invalid or expired token")

        if not user_response or not user_response.user:
            raise AuthenticationError("Invalid or expired token")
        user = user_response.user
        user_data = {
            "id": user.id,
            "email": user.email,
            "user_metadata": getattr(user, "user_metadata", None) or {},
            "app_metadata": getattr(user, "app_metadata", None) or {},
            "last_sign_in_at": getattr(user, "last_sign_in_at", None),
        }
        if len(_AUTH_USER_CACHE) < _AUTH_CACHE_MAX_SIZE:
            _AUTH_USER_CACHE[cache_key] = (user_data, now + settings.auth_cache_ttl_seconds)
        return user_data

    def logout(self, token: str) -> bool:
        """Supabase tokens are stateless JWTs; this drops the cached identity and signs the client out."""
        _AUTH_USER_CACHE.pop(hashlib.sha256(token.encode()).hexdigest(), None)
        try:
            self.supabase.auth.sign_out()
        except Exception as e:
            logger.warning("Supabase sign out failed: %s", e)
            return False
        return True
