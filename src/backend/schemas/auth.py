"""
Authentication schemas.
"""

from pydantic import BaseModel, Field

from schemas.user import UserResponse


class LoginRequest(BaseModel):
    """Username/password login."""

    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1, max_length=128)


class TokenResponse(BaseModel):
    """Bearer token issued after registration or login."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserResponse
