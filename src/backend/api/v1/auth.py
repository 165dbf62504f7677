"""
Authentication endpoints: registration, login and the current user.

Tokens are stateless HS256 JWTs whose subject is the integer user id.
"""

from fastapi import APIRouter, Depends, status

from api.deps import CurrentUserId, get_user_service
from core.config import settings
from core.security import create_access_token
from schemas.auth import LoginRequest, TokenResponse
from schemas.user import User, UserCreate, UserResponse
from services.user_service import UserService

router = APIRouter()


def _token_response(user: User) -> TokenResponse:
    return TokenResponse(
        access_token=create_access_token(user.id),
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        user=UserResponse.model_validate(user),
    )


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    users: UserService = Depends(get_user_service),
) -> TokenResponse:
    """
    Register a new user account and log it in.

    Username and email must be unique ignoring case.
    """
    user = await users.register(user_data.username, user_data.email, user_data.password)
    return _token_response(user)


@router.post("/login", response_model=TokenResponse)
async def login(
    credentials: LoginRequest,
    users: UserService = Depends(get_user_service),
) -> TokenResponse:
    """Exchange a username and password for a bearer token."""
    user = await users.authenticate(credentials.username, credentials.password)
    return _token_response(user)


@router.get("/me", response_model=UserResponse)
async def me(
    user_id: CurrentUserId,
    users: UserService = Depends(get_user_service),
) -> UserResponse:
    """Profile of the authenticated caller."""
    return UserResponse.model_validate(await users.get_user(user_id))
