from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class WebhookCreate(BaseModel):
    name: str
    url: str
    active: bool = False


class WebhookUpdate(BaseModel):
    name: Optional[str] = None
    url: Optional[str] = None
    active: Optional[bool] = None


class WebhookResponse(BaseModel):
    id: str
    name: str
    url: str
    active: bool = False
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
