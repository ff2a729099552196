from fastapi import APIRouter, Depends
from pagecast.core.dependencies import (
    get_bearer_token, get_current_user, get_auth_service, get_role_ledger, resolve_role
)
from pagecast.core.policy import is_admin_or_owner, is_owner
from pagecast.database.supabase_client import get_supabase
from pagecast.modules.auth.schemas import LoginRequest, TokenResponse, CurrentUserResponse
from pagecast.modules.auth.service import AuthService
from pagecast.modules.profiles.service import RoleLedger
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/auth", tags=["auth"])


def get_login_service(
    supabase: Client = Depends(get_supabase),
    ledger: RoleLedger = Depends(get_role_ledger),
) -> AuthService:
    return AuthService(supabase, ledger)


@router.post("/login", response_model=TokenResponse)
def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_login_service)
):
    """Login and get access token"""
    return service.login(login_data)


@router.post("/logout", status_code=200)
def logout(
    token: str = Depends(get_bearer_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and invalidate token"""
    service.logout(token)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=CurrentUserResponse)
def get_me(
    current_user: Dict = Depends(get_current_user),
    ledger: RoleLedger = Depends(get_role_ledger),
):
    """Current identity and role, used by the frontend to gate admin controls (advisory only)."""
    role = resolve_role(ledger, current_user["id"])
    return CurrentUserResponse(
        id=current_user["id"],
        email=current_user.get("email"),
        role=role,
        is_admin=is_admin_or_owner(role),
        is_owner=is_owner(role),
    )
