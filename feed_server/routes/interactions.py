"""Interaction recording endpoint."""

from fastapi import APIRouter, BackgroundTasks, Depends

from ..models import InteractionAccepted, InteractionRequest
from ..state import AppState, get_state

router = APIRouter()


@router.post("", status_code=202, response_model=InteractionAccepted)
async def record_interaction(
    request: InteractionRequest,
    background_tasks: BackgroundTasks,
    state: AppState = Depends(get_state),
):
    """
    Accept an interaction and update preferences after responding.
    Recording failures are logged by the recorder and never reach the caller.
    """
    background_tasks.add_task(
        state.recorder.record,
        request.user_id,
        request.post_id,
        request.creator_id,
        request.tags,
        request.interaction_type,
    )
    return InteractionAccepted(post_id=request.post_id, interaction_type=request.interaction_type)
