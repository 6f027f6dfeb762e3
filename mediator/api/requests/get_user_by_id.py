# GetUserById request and its handler

from dataclasses import dataclass

from mediator.api.models import UserDto
from mediator.core import CancellationToken, Request, RequestHandler


@dataclass(frozen=True)
class GetUserByIdRequest(Request[UserDto]):
    user_id: int


class GetUserByIdHandler(RequestHandler[GetUserByIdRequest, UserDto]):
    """Looks up a user. Simulated: every id resolves to the same name."""

    async def handle(
        self, request: GetUserByIdRequest, cancellation_token: CancellationToken
    ) -> UserDto:
        cancellation_token.raise_if_cancelled()
        return UserDto(id=request.user_id, name="Majid")
