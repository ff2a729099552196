from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime

from pagecast.core.policy import Role


class Profile(BaseModel):
    id: str
    email: str
    role: Role = Role.USER
    created_at: Optional[datetime] = None
    last_sign_in_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProfileSummary(BaseModel):
    """Projection returned by the user list; never carries anything secret."""
    id: str
    email: str
    role: Role
    created_at: Optional[datetime] = None
    last_sign_in_at: Optional[datetime] = None


class ProfileListResponse(BaseModel):
    users: List[ProfileSummary]
