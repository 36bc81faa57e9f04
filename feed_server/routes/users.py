"""User interest endpoints."""

from fastapi import APIRouter, Depends

from ..models import AvailableInterestsResponse, InterestsRequest, InterestsResponse
from ..services import AVAILABLE_INTERESTS
from ..state import AppState, get_state

router = APIRouter()


@router.get("/interests", response_model=AvailableInterestsResponse)
def available_interests():
    return AvailableInterestsResponse(interests=list(AVAILABLE_INTERESTS))


@router.get("/users/{user_id}/interests", response_model=InterestsResponse)
async def get_user_interests(user_id: str, state: AppState = Depends(get_state)):
    interests = await state.service.get_interests(user_id)
    return InterestsResponse(user_id=user_id, interests=interests)


@router.put("/users/{user_id}/interests", response_model=InterestsResponse)
async def save_user_interests(
    user_id: str,
    request: InterestsRequest,
    state: AppState = Depends(get_state),
):
    """Replace the user's interests and seed their tag preferences."""
    rows = await state.service.save_interests(user_id, request.interests)
    return InterestsResponse(user_id=user_id, interests=[r.interest for r in rows])
