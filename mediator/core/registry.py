# Handler Registry for the Mediator
# Write-once builder and the read-only registry the dispatcher resolves from

import logging
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Tuple

from .contracts import (
    Notification,
    NotificationHandler,
    Request,
    RequestHandler,
    handler_kind,
    is_handler,
    message_type_of,
)
from .errors import AmbiguousRegistrationError, HandlerNotFoundError

logger = logging.getLogger(__name__)


class HandlerRegistry:
    """
    Read-only mapping from message type to handler instance(s).

    Request types map to exactly one handler, notification types to an
    ordered tuple of handlers. A registry is produced by
    ``RegistryBuilder.build()`` and exposes no insertion API, so a binding
    can never be reseated under an in-flight dispatch.

    Lookups use exact type identity: a subclass of a registered message
    type is a different message type.
    """

    def __init__(
        self,
        request_handlers: Mapping[type, Any],
        notification_handlers: Mapping[type, Tuple[Any, ...]],
    ):
        self._request_handlers = MappingProxyType(dict(request_handlers))
        self._notification_handlers = MappingProxyType(
            {t: tuple(hs) for t, hs in notification_handlers.items()}
        )

    def resolve_one(self, request_type: type) -> Any:
        """
        Get the single handler bound to a request type.

        Raises:
            HandlerNotFoundError: If no handler is bound to the type
        """
        handler = self._request_handlers.get(request_type)
        if handler is None:
            raise HandlerNotFoundError(request_type)
        return handler

    def resolve_many(self, notification_type: type) -> Tuple[Any, ...]:
        """Get the handlers bound to a notification type (possibly empty)."""
        return self._notification_handlers.get(notification_type, ())

    def request_types(self) -> List[type]:
        return list(self._request_handlers)

    def notification_types(self) -> List[type]:
        return list(self._notification_handlers)

    def describe(self) -> Dict[str, Dict[str, Any]]:
        """
        Summarize bindings by type name, without the handler objects.

        Returns:
            {"requests": {name: handler class}, "notifications": {name: [handler classes]}}
        """
        return {
            "requests": {
                t.__name__: type(h).__name__ for t, h in self._request_handlers.items()
            },
            "notifications": {
                t.__name__: [type(h).__name__ for h in hs]
                for t, hs in self._notification_handlers.items()
            },
        }

    def __len__(self) -> int:
        return len(self._request_handlers) + sum(
            len(hs) for hs in self._notification_handlers.values()
        )

    def __repr__(self) -> str:
        return (
            f"<HandlerRegistry requests={len(self._request_handlers)} "
            f"notifications={len(self._notification_handlers)}>"
        )


class RegistryBuilder:
    """
    Collects handler bindings once, before any dispatch.

    Example usage:

        builder = RegistryBuilder()
        builder.add_handler(GetUserByIdHandler())
        builder.add_notification_handler(UserViewed, AuditHandler())
        registry = builder.build()
    """

    def __init__(self):
        self._request_handlers: Dict[type, Any] = {}
        self._notification_handlers: Dict[type, List[Any]] = {}

    def add_request_handler(self, request_type: type, handler: Any) -> "RegistryBuilder":
        """
        Bind the single handler for a request type.

        Raises:
            TypeError: If the type is not a Request or the handler has no handle()
            AmbiguousRegistrationError: If the type already has a handler
        """
        if not (isinstance(request_type, type) and issubclass(request_type, Request)):
            raise TypeError(f"{request_type!r} is not a Request type")
        _check_handler(handler)

        existing = self._request_handlers.get(request_type)
        if existing is not None:
            raise AmbiguousRegistrationError(request_type, existing, handler)

        self._request_handlers[request_type] = handler
        logger.info(
            f"Registered {type(handler).__name__} for request {request_type.__name__}"
        )
        return self

    def add_notification_handler(
        self, notification_type: type, handler: Any
    ) -> "RegistryBuilder":
        """
        Add one handler for a notification type.

        Raises:
            TypeError: If the type is not a Notification or the handler has no handle()
        """
        if not (
            isinstance(notification_type, type)
            and issubclass(notification_type, Notification)
        ):
            raise TypeError(f"{notification_type!r} is not a Notification type")
        _check_handler(handler)

        self._notification_handlers.setdefault(notification_type, []).append(handler)
        logger.info(
            f"Registered {type(handler).__name__} for notification {notification_type.__name__}"
        )
        return self

    def add_handler(self, handler: Any) -> "RegistryBuilder":
        """
        Register a handler under the message type its class declares.

        The type comes from the generic base, e.g.
        ``class H(RequestHandler[GetUserByIdRequest, UserDto])``.
        """
        handler_class = type(handler)
        message_type = message_type_of(handler_class)
        kind = handler_kind(handler_class)

        if kind is RequestHandler:
            return self.add_request_handler(message_type, handler)
        if kind is NotificationHandler:
            return self.add_notification_handler(message_type, handler)
        raise TypeError(
            f"Cannot infer the message type handled by {handler_class.__name__}"
        )

    def add_handlers(self, handlers: Iterable[Any]) -> "RegistryBuilder":
        for handler in handlers:
            self.add_handler(handler)
        return self

    def build(self) -> HandlerRegistry:
        """Freeze the current bindings into a HandlerRegistry."""
        registry = HandlerRegistry(self._request_handlers, self._notification_handlers)
        logger.info(
            f"Built handler registry: {len(self._request_handlers)} request types, "
            f"{len(self._notification_handlers)} notification types"
        )
        return registry


def _check_handler(handler: Any) -> None:
    if handler is None or not is_handler(handler):
        raise TypeError(f"{type(handler).__name__} does not implement handle()")
