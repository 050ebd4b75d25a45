"""
Pydantic schemas for User entity.
"""
from pydantic import EmailStr, Field
from typing import Optional
from tripplanner.schemas.base import CamelModel


class UserCreate(CamelModel):
    """Schema for registration."""
    email: EmailStr
    password: str = Field(min_length=1)
    name: Optional[str] = None


class UserLogin(CamelModel):
    """Schema for user login."""
    email: EmailStr
    password: str


class UserUpdate(CamelModel):
    """Schema for profile update."""
    name: Optional[str] = None


class UserResponse(CamelModel):
    """Schema for user response."""
    id: str
    email: str
    name: Optional[str] = None


class AuthResponse(CamelModel):
    """User plus bearer token returned by login and register."""
    user: UserResponse
    token: str
