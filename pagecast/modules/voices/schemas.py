from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class VoiceCreate(BaseModel):
    voice_id: str
    name: str


class VoiceUpdate(BaseModel):
    voice_id: Optional[str] = None
    name: Optional[str] = None


class VoiceResponse(BaseModel):
    id: str
    voice_id: str
    name: str
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
