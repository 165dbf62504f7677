"""
API v1 router aggregating all endpoints.
"""

from fastapi import APIRouter

from api.v1.auth import router as auth_router
from api.v1.categories import router as categories_router
from api.v1.search import router as search_router
from api.v1.suggestions import router as suggestions_router
from api.v1.topics import router as topics_router
from api.v1.votes import router as votes_router

router = APIRouter()

router.include_router(auth_router, prefix="/auth", tags=["Authentication"])
router.include_router(categories_router, prefix="/categories", tags=["Categories"])
router.include_router(topics_router, prefix="/topics", tags=["Topics"])
router.include_router(votes_router, prefix="/votes", tags=["Votes"])
router.include_router(search_router, prefix="/search", tags=["Search"])
router.include_router(suggestions_router, prefix="/suggestions", tags=["Suggestions"])
