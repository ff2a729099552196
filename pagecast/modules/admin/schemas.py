from pydantic import BaseModel
from typing import Optional

from pagecast.core.policy import Role


class CreateUserRequest(BaseModel):
    # Left unvalidated on purpose: the handler checks fields in a fixed order
    # and reports each failure with its own message.
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None


class UpdateRoleRequest(BaseModel):
    role: Optional[str] = None


class CreatedAccount(BaseModel):
    id: str
    email: str
    role: Role


class CreateUserResponse(BaseModel):
    success: bool = True
    user: CreatedAccount


class DeleteUserResponse(BaseModel):
    success: bool = True
