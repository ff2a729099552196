from fastapi import APIRouter, Depends
from pagecast.core.dependencies import get_current_user, get_role_ledger
from pagecast.modules.profiles.schemas import Profile
from pagecast.modules.profiles.service import RoleLedger
from typing import Dict

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get("/me", response_model=Profile)
def get_my_profile(
    current_user: Dict = Depends(get_current_user),
    ledger: RoleLedger = Depends(get_role_ledger),
):
    """Get the caller's own profile"""
    return ledger.get(current_user["id"])
