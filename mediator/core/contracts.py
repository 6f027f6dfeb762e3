# Message Contracts
# Request / notification shapes and the handler base classes

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Generic, Optional, Tuple, TypeVar, Union, get_args, get_origin

from .cancellation import CancellationToken

TResponse = TypeVar("TResponse")
TRequest = TypeVar("TRequest", bound="Request")
TNotification = TypeVar("TNotification", bound="Notification")


class Request(Generic[TResponse]):
    """Base class for messages that expect exactly one result.

    The result type is the generic parameter. Concrete requests are
    usually frozen dataclasses:

        @dataclass(frozen=True)
        class GetUserByIdRequest(Request[UserDto]):
            user_id: int
    """


class Notification:
    """Base class for messages delivered to zero or more handlers."""


class RequestHandler(ABC, Generic[TRequest, TResponse]):
    """Produces the result for one concrete request type.

    ``handle`` may be a coroutine function or a plain function.
    """

    @abstractmethod
    def handle(
        self, request: TRequest, cancellation_token: CancellationToken
    ) -> Union[TResponse, Awaitable[TResponse]]:
        ...


class NotificationHandler(ABC, Generic[TNotification]):
    """Reacts to one concrete notification type.

    Handlers registered for the same notification run concurrently and
    must not depend on each other.
    """

    @abstractmethod
    def handle(
        self, notification: TNotification, cancellation_token: CancellationToken
    ) -> Optional[Awaitable[None]]:
        ...


def _declared_binding(handler_class: type) -> Optional[Tuple[type, type]]:
    """Find (handler base, message type) from the class's generic bases."""
    for klass in handler_class.__mro__:
        for base in klass.__dict__.get("__orig_bases__", ()):
            origin = get_origin(base)
            if not isinstance(origin, type):
                continue
            args = get_args(base)
            if not args or not isinstance(args[0], type):
                # still generic, e.g. an intermediate base class
                continue
            if issubclass(origin, RequestHandler):
                return RequestHandler, args[0]
            if issubclass(origin, NotificationHandler):
                return NotificationHandler, args[0]
    return None


def message_type_of(handler_class: type) -> Optional[type]:
    """Return the message type a handler class declares, or None."""
    binding = _declared_binding(handler_class)
    return binding[1] if binding else None


def handler_kind(handler_class: type) -> Optional[type]:
    """Return RequestHandler or NotificationHandler for a declared handler class."""
    binding = _declared_binding(handler_class)
    return binding[0] if binding else None


def is_handler(obj: Any) -> bool:
    """Check whether an object exposes a callable ``handle``."""
    return callable(getattr(obj, "handle", None))
