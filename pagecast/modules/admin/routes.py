import logging
from typing import Dict, Optional, Tuple

from fastapi import APIRouter, Depends
from supabase import Client

from pagecast.core.dependencies import (
    get_current_user, get_preference_service, get_role_ledger, require_admin, resolve_role
)
from pagecast.core.exceptions import (
    OWNER_ROLE_RESTRICTION_MESSAGE, AuthorizationError, OwnerRestrictionError, ValidationError
)
from pagecast.core.policy import (
    Role, can_assign_role, can_create, can_delete, can_modify_profile, is_admin_or_owner, parse_role
)
from pagecast.core.rate_limit import admin_rate_limit
from pagecast.core.validation import validate_email, validate_password, validate_user_id
from pagecast.database.supabase_client import get_service_supabase
from pagecast.modules.admin.schemas import (
    CreateUserRequest, CreateUserResponse, DeleteUserResponse, UpdateRoleRequest
)
from pagecast.modules.admin.service import AdminGateway
from pagecast.modules.preferences.service import PreferenceService
from pagecast.modules.profiles.schemas import Profile, ProfileListResponse, ProfileSummary
from pagecast.modules.profiles.service import RoleLedger

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])

INVALID_ROLE_MESSAGE = "Invalid role. Must be one of: owner, admin, user"


def get_admin_gateway(
    supabase: Client = Depends(get_service_supabase),
    ledger: RoleLedger = Depends(get_role_ledger),
    preferences: PreferenceService = Depends(get_preference_service),
) -> AdminGateway:
    return AdminGateway(supabase, ledger, preferences)


def _validate_create_payload(payload: CreateUserRequest) -> Tuple[str, str, Role]:
    if not payload.email or not payload.password or not payload.role:
        raise ValidationError("Email, password, and role are required")
    email = validate_email(payload.email)
    password = validate_password(payload.password)
    role = parse_role(payload.role)
    if role is None:
        raise ValidationError(INVALID_ROLE_MESSAGE)
    if role is Role.OWNER:
        raise OwnerRestrictionError()
    return email, password, role


def _require_user_manager(caller_role: Optional[Role], caller_id: str) -> None:
    # Plain users and callers without a profile stop here, before the target
    # lookup, so they get the same 403 whether or not the target exists.
    if not is_admin_or_owner(caller_role):
        logger.warning("User %s (role=%s) denied access to user management", caller_id, caller_role)
        raise AuthorizationError("Unauthorized: Admin access required")


@router.get("/users", response_model=ProfileListResponse)
def list_users(
    admin_user: Dict = Depends(require_admin),
    ledger: RoleLedger = Depends(get_role_ledger),
):
    """List all profiles, newest first (admins and owners only)"""
    users = [ProfileSummary(**p.model_dump()) for p in ledger.list_all()]
    return ProfileListResponse(users=users)


@router.post("/users", response_model=CreateUserResponse, dependencies=[Depends(admin_rate_limit)])
def create_user(
    payload: CreateUserRequest,
    current_user: Dict = Depends(get_current_user),
    gateway: AdminGateway = Depends(get_admin_gateway),
    ledger: RoleLedger = Depends(get_role_ledger),
):
    """Create an account with an initial password and role"""
    email, password, role = _validate_create_payload(payload)

    caller_role = resolve_role(ledger, current_user["id"])
    if not can_create(caller_role, role):
        logger.warning("User %s (role=%s) denied creating a %s account", current_user["id"], caller_role, role.value)
        raise AuthorizationError(f"Unauthorized: Cannot create user with role {role.value}")

    account = gateway.create_account(email, password, role)
    return CreateUserResponse(success=True, user=account)


@router.delete(
    "/users/{user_id}", response_model=DeleteUserResponse, dependencies=[Depends(admin_rate_limit)]
)
def delete_user(
    user_id: str,
    current_user: Dict = Depends(get_current_user),
    gateway: AdminGateway = Depends(get_admin_gateway),
    ledger: RoleLedger = Depends(get_role_ledger),
):
    """Delete an account entirely (profile rows go with it)"""
    user_id = validate_user_id(user_id)

    caller_role = resolve_role(ledger, current_user["id"])
    _require_user_manager(caller_role, current_user["id"])
    target = ledger.get(user_id)
    if not can_delete(caller_role, current_user["id"], target.role, target.id):
        logger.warning("User %s (role=%s) denied deleting %s", current_user["id"], caller_role, user_id)
        raise AuthorizationError("Unauthorized: Cannot delete this user")

    gateway.delete_account(user_id)
    return DeleteUserResponse(success=True)


@router.patch("/users/{user_id}/role", response_model=Profile)
def update_user_role(
    user_id: str,
    payload: UpdateRoleRequest,
    current_user: Dict = Depends(get_current_user),
    ledger: RoleLedger = Depends(get_role_ledger),
):
    """Change another account's role (never to owner)"""
    user_id = validate_user_id(user_id)
    new_role = parse_role(payload.role)
    if new_role is None:
        raise ValidationError(INVALID_ROLE_MESSAGE)
    if new_role is Role.OWNER:
        raise OwnerRestrictionError(OWNER_ROLE_RESTRICTION_MESSAGE)

    caller_role = resolve_role(ledger, current_user["id"])
    _require_user_manager(caller_role, current_user["id"])
    target = ledger.get(user_id)
    if not can_modify_profile(caller_role, current_user["id"], target.role, target.id):
        logger.warning("User %s (role=%s) denied modifying %s", current_user["id"], caller_role, user_id)
        raise AuthorizationError("Unauthorized: Cannot modify this user's role")
    if not can_assign_role(caller_role, new_role):
        logger.warning("User %s (role=%s) denied assigning %s", current_user["id"], caller_role, new_role.value)
        raise AuthorizationError(f"Unauthorized: Cannot assign role {new_role.value}")

    return ledger.set_role(user_id, new_role)
