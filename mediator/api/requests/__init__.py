# Request handlers served by the HTTP host
# Scanned at startup by mediator.api.dependencies.build_mediator

from .get_user_by_id import GetUserByIdHandler, GetUserByIdRequest

__all__ = [
    "GetUserByIdRequest",
    "GetUserByIdHandler",
]
