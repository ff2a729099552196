"""
Core dependencies for route protection and role resolution
"""

import logging
from typing import Any, Callable, Dict, Optional

from fastapi import Depends, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from supabase import Client

from pagecast.core.exceptions import AuthenticationError, AuthorizationError
from pagecast.core.policy import Role, is_admin_or_owner, parse_role
from pagecast.database.supabase_client import get_service_supabase, get_supabase
from pagecast.modules.auth.service import AuthService
from pagecast.modules.preferences.service import PreferenceService
from pagecast.modules.profiles.service import RoleLedger

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
) -> str:
    """Extract the session token; checked before any configuration so a missing session is always 401."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Missing or invalid authorization header")
    return credentials.credentials


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_user(
    token: str = Depends(get_bearer_token),
    auth_service: AuthService = Depends(get_auth_service),
) -> Dict[str, Any]:
    """Extract current user info from JWT token"""
    return auth_service.get_current_user(token)


def get_role_ledger(supabase: Client = Depends(get_service_supabase)) -> RoleLedger:
    return RoleLedger(supabase)


def get_preference_service(supabase: Client = Depends(get_service_supabase)) -> PreferenceService:
    return PreferenceService(supabase)


def resolve_role(ledger: RoleLedger, account_id: str) -> Optional[Role]:
    """Role of an account per the ledger; None when it has no profile."""
    profile = ledger.find(account_id)
    if profile is None:
        logger.warning("No profile found for account %s", account_id)
        return None
    return parse_role(profile.role)


def require_role(check: Callable[[Optional[Role]], bool], message: str = "Insufficient permissions"):
    """Factory for a dependency that lets the request through when `check(caller_role)` holds"""
    def check_role(
        user_data: Dict[str, Any] = Depends(get_current_user),
        ledger: RoleLedger = Depends(get_role_ledger),
    ) -> Dict[str, Any]:
        role = resolve_role(ledger, user_data["id"])
        if not check(role):
            logger.info("Denied %s to %s (role=%s)", check.__name__, user_data["id"], role)
            raise AuthorizationError(message)
        return {**user_data, "role": role}
    return check_role


require_admin = require_role(is_admin_or_owner, "Unauthorized: Admin access required")
