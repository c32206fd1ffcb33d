"""
Identity models: profiles, user roles and the signed-in user
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

ROLE_PATTERN = "^(owner|staff)$"


class Profile(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    full_name: str
    phone: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserRole(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    role: str = Field(..., pattern=ROLE_PATTERN)
    created_at: Optional[datetime] = None


class CurrentUser(BaseModel):
    """The acting user, as resolved from the access token"""
    id: str
    email: Optional[str] = None
    role: str = Field(default="staff", pattern=ROLE_PATTERN)

    @property
    def is_owner(self) -> bool:
        return self.role == "owner"


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    access_token: str
    refresh_token: str
    user: CurrentUser


class MeResponse(BaseModel):
    user: CurrentUser
    profile: Optional[Profile] = None
