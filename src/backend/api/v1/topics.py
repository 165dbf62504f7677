"""
Topic endpoints: listing, detail and creation.
"""

from fastapi import APIRouter, Depends, status

from api.deps import CurrentUserId, OptionalUserId, get_topic_service
from schemas.topic import TopicCreate, TopicDetail, TopicWithOptions
from services.topic_service import TopicService

router = APIRouter()


@router.get("", response_model=list[TopicWithOptions])
async def list_topics(
    topics: TopicService = Depends(get_topic_service),
) -> list[TopicWithOptions]:
    """All topics in creation order."""
    return await topics.list_topics()


@router.get("/{topic_id}", response_model=TopicDetail)
async def get_topic(
    topic_id: int,
    user_id: OptionalUserId,
    topics: TopicService = Depends(get_topic_service),
) -> TopicDetail:
    """
    A topic with its options and per-option stats.

    When the request carries a valid bearer token, the caller's current
    vote on this topic is included as ``user_vote``.
    """
    return await topics.get_topic(topic_id, user_id=user_id)


@router.post("", response_model=TopicWithOptions, status_code=status.HTTP_201_CREATED)
async def create_topic(
    topic_data: TopicCreate,
    user_id: CurrentUserId,
    topics: TopicService = Depends(get_topic_service),
) -> TopicWithOptions:
    """Create a topic with 2 to 10 options, authored by the caller."""
    return await topics.create_topic(
        author_id=user_id,
        title=topic_data.title,
        description=topic_data.description,
        category_id=topic_data.category_id,
        option_texts=topic_data.options,
    )
