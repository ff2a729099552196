"""
Role hierarchy and permission decisions.

Roles are ordered owner > admin > user. Every check here is a pure function of
the roles and ids involved; callers resolve roles from the role ledger first.
Unknown or missing roles never grant anything.

Owner is never assignable through these functions: owners are promoted only by
a direct update on the profiles table.
"""

from enum import Enum
from typing import Any, Optional


class Role(str, Enum):
    OWNER = "owner"
    ADMIN = "admin"
    USER = "user"


def parse_role(value: Any) -> Optional[Role]:
    """Return the matching Role, or None for anything unrecognised."""
    if isinstance(value, Role):
        return value
    if not isinstance(value, str):
        return None
    try:
        return Role(value)
    except ValueError:
        return None


def is_admin_or_owner(role: Any) -> bool:
    return parse_role(role) in (Role.ADMIN, Role.OWNER)


def is_owner(role: Any) -> bool:
    return parse_role(role) is Role.OWNER


def can_assign_role(actor_role: Any, target_role: Any) -> bool:
    """Can `actor_role` hand out `target_role` (on create or role change)?"""
    actor = parse_role(actor_role)
    target = parse_role(target_role)
    if actor is None or target is None:
        return False
    if target is Role.OWNER:
        return False
    if actor is Role.OWNER:
        return True
    if actor is Role.ADMIN:
        return target is Role.USER
    return False


def can_create(actor_role: Any, requested_role: Any) -> bool:
    return can_assign_role(actor_role, requested_role)


def _is_self(actor_id: Optional[str], target_id: Optional[str]) -> bool:
    # A missing id on either side is treated as self so the check fails closed.
    if not actor_id or not target_id:
        return True
    return actor_id == target_id


def can_modify_profile(
    actor_role: Any,
    actor_id: Optional[str],
    target_role: Any,
    target_id: Optional[str],
) -> bool:
    """Can the actor change the role of the target profile?"""
    actor = parse_role(actor_role)
    target = parse_role(target_role)
    if actor is None or target is None:
        return False
    if _is_self(actor_id, target_id):
        return False
    if actor is Role.OWNER:
        return True
    if actor is Role.ADMIN:
        return target is Role.USER
    return False


def can_delete(
    actor_role: Any,
    actor_id: Optional[str],
    target_role: Any,
    target_id: Optional[str],
) -> bool:
    """Can the actor delete the target account? Owners are never deletable via the API."""
    actor = parse_role(actor_role)
    target = parse_role(target_role)
    if actor is None or target is None:
        return False
    if _is_self(actor_id, target_id):
        return False
    if actor is Role.OWNER:
        return target is not Role.OWNER
    if actor is Role.ADMIN:
        return target is Role.USER
    return False


# Settings entities (webhooks, voices, preferences)

def can_manage_settings(role: Any) -> bool:
    return is_admin_or_owner(role)


def can_read_webhooks(role: Any) -> bool:
    return is_admin_or_owner(role)


def can_read_voices(role: Any) -> bool:
    return parse_role(role) is not None
