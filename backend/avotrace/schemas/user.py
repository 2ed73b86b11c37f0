"""
User schemas. Passwords are write-only.
"""
from typing import Optional

from pydantic import Field

from avotrace.models.user import UserRole
from avotrace.schemas.common import CamelModel, UtcDateTime


class UserCreate(CamelModel):
    username: str = Field(..., min_length=3, max_length=100)
    password: str = Field(..., min_length=6, max_length=72)
    full_name: str = Field(..., min_length=1, max_length=200)
    role: UserRole = UserRole.OPERATOR


class UserResponse(CamelModel):
    id: int
    username: str
    full_name: str
    role: UserRole
    created_at: Optional[UtcDateTime] = None


class LoginRequest(CamelModel):
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1, max_length=72)
