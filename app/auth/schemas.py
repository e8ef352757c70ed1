from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenPair(BaseModel):
    access_token: str = Field(..., alias="accessToken")
    refresh_token: Optional[str] = Field(None, alias="refreshToken")

    class Config:
        populate_by_name = True


class LoginResponse(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "bearer"
    role: str
    redirect_to: str


class CurrentUser(BaseModel):
    """Session as resolved by the school backend's /auth/me."""

    role: str
    school_id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None


class SchoolContext(BaseModel):
    """Which school a request works on and whether it may write."""

    school_id: str
    role: str
    can_edit: bool
