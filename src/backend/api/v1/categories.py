"""
Category endpoints.
"""

from fastapi import APIRouter, Depends

from api.deps import get_category_service, get_topic_service
from schemas.topic import Category, TopicWithOptions
from services.category_service import CategoryService
from services.topic_service import TopicService

router = APIRouter()


@router.get("", response_model=list[Category])
async def list_categories(
    categories: CategoryService = Depends(get_category_service),
) -> list[Category]:
    """All categories in id order."""
    return await categories.list_categories()


@router.get("/{category_id}", response_model=Category)
async def get_category(
    category_id: int,
    categories: CategoryService = Depends(get_category_service),
) -> Category:
    """A single category."""
    return await categories.get_category(category_id)


@router.get("/{category_id}/topics", response_model=list[TopicWithOptions])
async def topics_by_category(
    category_id: int,
    topics: TopicService = Depends(get_topic_service),
) -> list[TopicWithOptions]:
    """Topics filed under one category, with options and vote counts."""
    return await topics.topics_by_category(category_id)
