from fastapi import APIRouter, Depends
from pagecast.core.dependencies import get_current_user, get_preference_service
from pagecast.modules.preferences.schemas import PreferencesUpdate, PreferencesResponse
from pagecast.modules.preferences.service import PreferenceService
from typing import Dict

router = APIRouter(prefix="/preferences", tags=["preferences"])


@router.get("/me", response_model=PreferencesResponse)
def get_my_preferences(
    current_user: Dict = Depends(get_current_user),
    service: PreferenceService = Depends(get_preference_service)
):
    """Preferences are only ever read for the caller's own account"""
    return service.get(current_user["id"])


@router.put("/me", response_model=PreferencesResponse)
def update_my_preferences(
    data: PreferencesUpdate,
    current_user: Dict = Depends(get_current_user),
    service: PreferenceService = Depends(get_preference_service)
):
    return service.set_language(current_user["id"], data.language)
