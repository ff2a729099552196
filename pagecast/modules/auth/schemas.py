from pydantic import BaseModel, EmailStr
from typing import Optional

from pagecast.core.policy import Role


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    email: str


class CurrentUserResponse(BaseModel):
    id: str
    email: Optional[str] = None
    role: Optional[Role] = None
    is_admin: bool = False
    is_owner: bool = False
