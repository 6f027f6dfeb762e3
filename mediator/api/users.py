# User API Endpoints
# Translates HTTP calls into mediator requests

from fastapi import APIRouter, Depends

from mediator.api.dependencies import get_mediator
from mediator.api.models import ErrorResponse, UserDto
from mediator.api.requests import GetUserByIdRequest
from mediator.core import Mediator

router = APIRouter(prefix="/users", tags=["Users"])


@router.get(
    "/{user_id}",
    response_model=UserDto,
    responses={500: {"model": ErrorResponse, "description": "Handler failure"}},
)
async def get_user(user_id: int, mediator: Mediator = Depends(get_mediator)):
    """
    Get a user by id.

    Sends a GetUserByIdRequest through the mediator and returns the
    handler's result unchanged. The handler gets the shared default
    cancellation token.
    """
    return await mediator.send(GetUserByIdRequest(user_id=user_id))
