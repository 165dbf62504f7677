"""
User-related Pydantic schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class UserBase(BaseModel):
    """Base user schema with common fields."""

    email: EmailStr
    username: str = Field(..., min_length=3, max_length=50)


class UserCreate(UserBase):
    """Schema for user registration."""

    password: str = Field(..., min_length=6, max_length=128)


class User(BaseModel):
    """Stored user record (internal use, carries the password hash)."""

    id: int
    username: str
    email: str
    password_hash: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True, "frozen": True}


class UserResponse(BaseModel):
    """Schema for user responses (public-safe)."""

    id: int
    username: str
    email: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
