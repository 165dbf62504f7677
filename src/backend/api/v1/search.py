"""
Topic search endpoint.
"""

from fastapi import APIRouter, Depends, Query

from api.deps import get_topic_service
from schemas.topic import TopicWithOptions
from services.topic_service import TopicService

router = APIRouter()


@router.get("", response_model=list[TopicWithOptions])
async def search_topics(
    q: str = Query("", description="Case-insensitive text matched against titles and descriptions"),
    topics: TopicService = Depends(get_topic_service),
) -> list[TopicWithOptions]:
    """Topics whose title or description contains ``q``. Rejects queries under 2 characters."""
    return await topics.search(q)
