import logging
from datetime import datetime, timezone
from typing import List, Optional, Union

from supabase import Client

from pagecast.core.exceptions import NotFoundError
from pagecast.core.policy import Role
from pagecast.modules.profiles.schemas import Profile

logger = logging.getLogger(__name__)

PROFILES_TABLE = "profiles"
PREFERENCES_TABLE = "user_preferences"


def _utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _as_iso(value: Union[datetime, str, None]) -> Optional[str]:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


class RoleLedger:
    """One profile row per account, mapping account id -> role.

    No permission checks happen here; callers consult pagecast.core.policy first.
    Concurrent writes are last-write-wins.
    """

    def __init__(self, supabase: Client):
        self.supabase = supabase

    def find(self, account_id: str) -> Optional[Profile]:
        result = self.supabase.table(PROFILES_TABLE)\
            .select("*")\
            .eq("id", account_id)\
            .limit(1)\
            .execute()
        if not result.data:
            return None
        return Profile(**result.data[0])

    def get(self, account_id: str) -> Profile:
        profile = self.find(account_id)
        if profile is None:
            raise NotFoundError("User not found")
        return profile

    def create(
        self,
        account_id: str,
        email: str,
        last_sign_in_at: Union[datetime, str, None] = None,
    ) -> Profile:
        """Create the default `user` profile; an existing row is left untouched."""
        now = _utcnow_iso()
        self.supabase.table(PROFILES_TABLE).upsert(
            {
                "id": account_id,
                "email": email,
                "role": Role.USER.value,
                "created_at": now,
                "updated_at": now,
                "last_sign_in_at": _as_iso(last_sign_in_at),
            },
            on_conflict="id",
            ignore_duplicates=True,
        ).execute()
        return self.get(account_id)

    def set_role(self, account_id: str, role: Role) -> Profile:
        result = self.supabase.table(PROFILES_TABLE)\
            .update({"role": Role(role).value, "updated_at": _utcnow_iso()})\
            .eq("id", account_id)\
            .execute()
        if not result.data:
            raise NotFoundError("User not found")
        logger.info("Role for %s set to %s", account_id, Role(role).value)
        return Profile(**result.data[0])

    def touch_sign_in(self, account_id: str, timestamp: Union[datetime, str, None] = None) -> None:
        self.supabase.table(PROFILES_TABLE)\
            .update({"last_sign_in_at": _as_iso(timestamp) or _utcnow_iso()})\
            .eq("id", account_id)\
            .execute()

    def delete(self, account_id: str) -> bool:
        """Delete the profile and the per-account rows hanging off it."""
        self.supabase.table(PREFERENCES_TABLE)\
            .delete()\
            .eq("user_id", account_id)\
            .execute()
        result = self.supabase.table(PROFILES_TABLE)\
            .delete()\
            .eq("id", account_id)\
            .execute()
        return bool(result.data)

    def list_all(self) -> List[Profile]:
        result = self.supabase.table(PROFILES_TABLE)\
            .select("*")\
            .order("created_at", desc=True)\
            .execute()
        return [Profile(**row) for row in result.data or []]
