from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class PreferencesUpdate(BaseModel):
    language: Optional[str] = None


class PreferencesResponse(BaseModel):
    user_id: str
    language: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
