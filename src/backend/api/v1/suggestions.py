"""
Topic suggestion endpoint.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.deps import get_suggestion_service
from schemas.topic import SuggestionsResponse
from services.suggestion_service import SuggestionService

router = APIRouter()


@router.get("", response_model=SuggestionsResponse)
async def get_suggestions(
    context: Optional[str] = Query(None, max_length=200),
    suggestions: SuggestionService = Depends(get_suggestion_service),
) -> SuggestionsResponse:
    """Suggested topic titles, generated when configured, otherwise a fixed list."""
    return SuggestionsResponse(suggestions=await suggestions.suggestions(context))
