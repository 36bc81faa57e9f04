"""Trending tags endpoint."""

from fastapi import APIRouter, Depends, Query

from ..models import TrendingTag, TrendingTagsResponse
from ..state import AppState, get_state
from .errors import service_errors

router = APIRouter()


@router.get("/trending-tags", response_model=TrendingTagsResponse)
async def trending_tags(
    limit: int = Query(default=8, ge=1, le=50),
    sample_size: int = Query(default=250, ge=1, le=1000),
    state: AppState = Depends(get_state),
):
    with service_errors():
        pairs = await state.service.trending_tags(sample_size, limit)
    return TrendingTagsResponse(tags=[TrendingTag(tag=t, count=c) for t, c in pairs])
