"""
Shared dependencies for API endpoints.

Includes:
- Bearer token authentication (required and optional)
- Service construction on top of the active storage backend
"""

from typing import Annotated, Optional

import structlog
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.exceptions import UnauthorizedError
from core.security import user_id_from_token
from repositories.base import Storage
from repositories.provider import get_storage
from services.category_service import CategoryService
from services.suggestion_service import SuggestionService
from services.topic_service import TopicService
from services.user_service import UserService
from services.vote_ledger import VoteLedger

logger = structlog.get_logger(__name__)

# auto_error is off so a missing header surfaces as our 401, not FastAPI's 403
security_optional = HTTPBearer(auto_error=False)


# =============================================================================
# Authentication
# =============================================================================


async def get_current_user_id_optional(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security_optional)],
) -> Optional[int]:
    """
    Resolve the caller's user id if a valid bearer token was sent.

    A missing or invalid token yields None; anonymous reads are allowed.
    """
    if credentials is None:
        return None
    return user_id_from_token(credentials.credentials)


async def get_current_user_id(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security_optional)],
) -> int:
    """
    Resolve the caller's user id from a required bearer token.

    Raises:
        UnauthorizedError: header missing or token invalid/expired.
    """
    if credentials is None:
        raise UnauthorizedError("Not authenticated")

    user_id = user_id_from_token(credentials.credentials)
    if user_id is None:
        logger.info("invalid_token")
        raise UnauthorizedError("Invalid or expired token")
    return user_id


CurrentUserId = Annotated[int, Depends(get_current_user_id)]
OptionalUserId = Annotated[Optional[int], Depends(get_current_user_id_optional)]


# =============================================================================
# Services
# =============================================================================


def get_topic_service(storage: Storage = Depends(get_storage)) -> TopicService:
    return TopicService(storage)


def get_category_service(storage: Storage = Depends(get_storage)) -> CategoryService:
    return CategoryService(storage)


def get_vote_ledger(storage: Storage = Depends(get_storage)) -> VoteLedger:
    return VoteLedger(storage)


def get_user_service(storage: Storage = Depends(get_storage)) -> UserService:
    return UserService(storage)


def get_suggestion_service() -> SuggestionService:
    return SuggestionService()
