from datetime import datetime, timezone

from supabase import Client

from pagecast.core.validation import validate_language
from pagecast.modules.preferences.schemas import PreferencesResponse

DEFAULT_LANGUAGE = "en"


class PreferenceService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def ensure_defaults(self, user_id: str) -> None:
        """Insert the default row unless one already exists."""
        self.supabase.table("user_preferences").upsert(
            {"user_id": user_id, "language": DEFAULT_LANGUAGE},
            on_conflict="user_id",
            ignore_duplicates=True,
        ).execute()

    def get(self, user_id: str) -> PreferencesResponse:
        """Get preferences, provisioning defaults on first read"""
        result = self.supabase.table("user_preferences")\
            .select("*")\
            .eq("user_id", user_id)\
            .limit(1)\
            .execute()
        if not result.data:
            self.ensure_defaults(user_id)
            result = self.supabase.table("user_preferences")\
                .select("*")\
                .eq("user_id", user_id)\
                .limit(1)\
                .execute()
        return PreferencesResponse(**result.data[0])

    def set_language(self, user_id: str, language: str) -> PreferencesResponse:
        language = validate_language(language)
        self.ensure_defaults(user_id)
        result = self.supabase.table("user_preferences")\
            .update({"language": language, "updated_at": datetime.now(timezone.utc).isoformat()})\
            .eq("user_id", user_id)\
            .execute()
        return PreferencesResponse(**result.data[0])
