"""Feed session endpoints: first page, continuation, refresh, seen, teardown."""

import logging

from fastapi import APIRouter, Depends, Response

from ..models import (
    CreateFeedRequest,
    FeedResponse,
    LoadMoreRequest,
    MarkSeenRequest,
    MarkSeenResponse,
    RefreshRequest,
    to_feed_response,
)
from ..state import AppState, get_state
from .errors import service_errors

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=FeedResponse)
async def create_feed(request: CreateFeedRequest, state: AppState = Depends(get_state)):
    """Open a feed session and return its first page."""
    with service_errors():
        page = await state.service.start_session(request.user_id, request.limit, request.shuffle)
    return to_feed_response(page)


@router.post("/{session_id}/more", response_model=FeedResponse)
async def load_more(
    session_id: str,
    request: LoadMoreRequest = LoadMoreRequest(),
    state: AppState = Depends(get_state),
):
    with service_errors():
        page = await state.service.get_more(session_id, request.offset, request.page_size)
    return to_feed_response(page)


@router.post("/{session_id}/refresh", response_model=FeedResponse)
async def refresh_feed(
    session_id: str,
    request: RefreshRequest = RefreshRequest(),
    state: AppState = Depends(get_state),
):
    """Recompute from offset 0, e.g. after new posts arrive."""
    with service_errors():
        page = await state.service.refresh(session_id, request.limit, request.shuffle)
    return to_feed_response(page)


@router.post("/{session_id}/seen", response_model=MarkSeenResponse)
async def mark_seen(session_id: str, request: MarkSeenRequest, state: AppState = Depends(get_state)):
    with service_errors():
        newly_seen = await state.service.mark_seen_in_session(session_id, request.post_id)
    return MarkSeenResponse(post_id=request.post_id, newly_seen=newly_seen)


@router.delete("/{session_id}", status_code=204)
def close_feed(session_id: str, state: AppState = Depends(get_state)):
    with service_errors():
        state.service.close_session(session_id)
    return Response(status_code=204)
