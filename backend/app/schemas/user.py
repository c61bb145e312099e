"""
Pydantic schemas for User entity and authentication payloads.
"""
import re
from pydantic import EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime
from app.schemas.base import CamelModel


def _check_password_strength(value: str) -> str:
    if len(value) < 8:
        raise ValueError("Password must be at least 8 characters")
    if not re.search(r"[A-Za-z]", value):
        raise ValueError("Password must contain at least one letter")
    if not re.search(r"[0-9]", value):
        raise ValueError("Password must contain at least one number")
    return value


class UserBase(CamelModel):
    """Base user schema."""
    name: str
    email: EmailStr


class UserCreate(UserBase):
    """Schema for registration."""
    password: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Name must be at least 2 characters")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return _check_password_strength(v)


class UserUpdate(CamelModel):
    """Schema for profile update."""
    name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    profile_image_url: Optional[str] = Field(default=None, max_length=500)


class UserResponse(UserBase):
    """Schema for user response."""
    id: int
    profile_image_url: Optional[str] = None
    created_at: datetime


class UserLogin(CamelModel):
    """Schema for user login."""
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class AuthResponse(CamelModel):
    """Authenticated user plus the session token (also set as a cookie)."""
    user: UserResponse
    token: str
    token_type: str = "bearer"


class ResetPasswordRequest(CamelModel):
    """Schema for requesting a password reset."""
    email: EmailStr

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class ResetPassword(CamelModel):
    """Schema for completing a password reset."""
    token: str = Field(min_length=1)
    password: str

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return _check_password_strength(v)
