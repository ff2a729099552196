from datetime import datetime, timezone
from typing import List, Optional

from supabase import Client

from pagecast.core.exceptions import ConflictError, NotFoundError, UpstreamError
from pagecast.core.validation import require_text, validate_voice_id
from pagecast.modules.voices.schemas import VoiceCreate, VoiceUpdate, VoiceResponse


def _is_unique_violation(error: Exception) -> bool:
    message = str(error).lower()
    return "duplicate key" in message or "23505" in message


class VoiceService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_voices(self) -> List[VoiceResponse]:
        result = self.supabase.table("voices")\
            .select("*")\
            .order("name")\
            .execute()
        return [VoiceResponse(**row) for row in result.data or []]

    def create_voice(self, data: VoiceCreate, created_by: Optional[str] = None) -> VoiceResponse:
        row = {
            "voice_id": validate_voice_id(data.voice_id),
            "name": require_text(data.name, "Name"),
            "created_by": created_by,
        }
        try:
            result = self.supabase.table("voices").insert(row).execute()
        except Exception as e:
            if _is_unique_violation(e):
                raise ConflictError("A voice with this ID already exists")
            raise
        if not result.data:
            raise UpstreamError("Failed to create voice")
        return VoiceResponse(**result.data[0])

    def update_voice(self, voice_pk: str, data: VoiceUpdate) -> VoiceResponse:
        update_data = {"updated_at": datetime.now(timezone.utc).isoformat()}
        if data.voice_id is not None:
            update_data["voice_id"] = validate_voice_id(data.voice_id)
        if data.name is not None:
            update_data["name"] = require_text(data.name, "Name")
        try:
            result = self.supabase.table("voices")\
                .update(update_data)\
                .eq("id", voice_pk)\
                .execute()
        except Exception as e:
            if _is_unique_violation(e):
                raise ConflictError("A voice with this ID already exists")
            raise
        if not result.data:
            raise NotFoundError("Voice not found")
        return VoiceResponse(**result.data[0])

    def delete_voice(self, voice_pk: str) -> bool:
        result = self.supabase.table("voices")\
            .delete()\
            .eq("id", voice_pk)\
            .execute()
        if not result.data:
            raise NotFoundError("Voice not found")
        return True
