from fastapi import APIRouter, Depends
from pagecast.core.dependencies import require_role
from pagecast.core.policy import can_manage_settings, can_read_voices
from pagecast.core.rate_limit import settings_rate_limit
from pagecast.core.validation import validate_record_id
from pagecast.database.supabase_client import get_service_supabase
from pagecast.modules.voices.schemas import VoiceCreate, VoiceUpdate, VoiceResponse
from pagecast.modules.voices.service import VoiceService
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/voices", tags=["voices"])

require_voice_reader = require_role(can_read_voices)
require_voice_manager = require_role(can_manage_settings, "Unauthorized: Admin access required")


def get_voice_service(supabase: Client = Depends(get_service_supabase)) -> VoiceService:
    return VoiceService(supabase)


@router.get("", response_model=List[VoiceResponse])
def list_voices(
    user_data: Dict = Depends(require_voice_reader),
    service: VoiceService = Depends(get_voice_service)
):
    """List narration voices"""
    return service.list_voices()


@router.post("", response_model=VoiceResponse, status_code=201, dependencies=[Depends(settings_rate_limit)])
def create_voice(
    voice_data: VoiceCreate,
    user_data: Dict = Depends(require_voice_manager),
    service: VoiceService = Depends(get_voice_service)
):
    return service.create_voice(voice_data, created_by=user_data["id"])


@router.put("/{voice_pk}", response_model=VoiceResponse, dependencies=[Depends(settings_rate_limit)])
def update_voice(
    voice_pk: str,
    voice_data: VoiceUpdate,
    user_data: Dict = Depends(require_voice_manager),
    service: VoiceService = Depends(get_voice_service)
):
    return service.update_voice(validate_record_id(voice_pk, "voice"), voice_data)


@router.delete("/{voice_pk}", status_code=204, dependencies=[Depends(settings_rate_limit)])
def delete_voice(
    voice_pk: str,
    user_data: Dict = Depends(require_voice_manager),
    service: VoiceService = Depends(get_voice_service)
):
    service.delete_voice(validate_record_id(voice_pk, "voice"))
    return None
