# Mediator Core
# Message contracts, handler registry and the dispatcher

from .cancellation import CancellationToken
from .contracts import (
    Notification,
    NotificationHandler,
    Request,
    RequestHandler,
    message_type_of,
)
from .dispatcher import Mediator
from .errors import (
    AmbiguousRegistrationError,
    HandlerFailure,
    HandlerInvocationError,
    HandlerNotFoundError,
    InvalidArgumentError,
    MediatorError,
    OperationCancelledError,
)
from .registry import HandlerRegistry, RegistryBuilder
from .scanning import find_handler_classes, scan

__all__ = [
    # Contracts
    "Request",
    "Notification",
    "RequestHandler",
    "NotificationHandler",
    "message_type_of",
    # Cancellation
    "CancellationToken",
    # Registry
    "HandlerRegistry",
    "RegistryBuilder",
    "find_handler_classes",
    "scan",
    # Dispatcher
    "Mediator",
    # Errors
    "MediatorError",
    "InvalidArgumentError",
    "HandlerNotFoundError",
    "AmbiguousRegistrationError",
    "HandlerInvocationError",
    "HandlerFailure",
    "OperationCancelledError",
]
