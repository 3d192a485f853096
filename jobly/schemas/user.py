"""
Pydantic schemas for users and authentication.
"""

from typing import List, Optional

from pydantic import EmailStr, Field

from jobly.schemas.base import CamelModel, RequestModel


class UserRegisterRequest(RequestModel):
    """Request schema for self-registration (never creates an admin)."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=5, max_length=20)
    first_name: str = Field(..., min_length=1, max_length=30)
    last_name: str = Field(..., min_length=1, max_length=30)
    email: EmailStr


class UserCreateRequest(UserRegisterRequest):
    """Request schema for admins creating users."""
    is_admin: bool = False


class UserAuthRequest(RequestModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserUpdateRequest(RequestModel):
    """Partial profile update; the username cannot change."""
    password: Optional[str] = Field(None, min_length=5, max_length=20)
    first_name: Optional[str] = Field(None, min_length=1, max_length=30)
    last_name: Optional[str] = Field(None, min_length=1, max_length=30)
    email: Optional[EmailStr] = None


class UserData(CamelModel):
    """User profile (no password hash)."""
    username: str
    first_name: str
    last_name: str
    email: str
    is_admin: bool


class UserDetail(UserData):
    """Profile plus the ids of jobs applied to."""
    jobs: List[int] = []


class TokenResponse(CamelModel):
    token: str


class UserCreateResponse(CamelModel):
    user: UserData
    token: str


class UserResponse(CamelModel):
    user: UserData


class UserDetailResponse(CamelModel):
    user: UserDetail


class UserListResponse(CamelModel):
    users: List[UserData]


class ApplicationResponse(CamelModel):
    applied: int
