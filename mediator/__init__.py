# Mediator - in-process request/notification dispatch
# Package initialization

from .core import (
    AmbiguousRegistrationError,
    CancellationToken,
    HandlerInvocationError,
    HandlerNotFoundError,
    HandlerRegistry,
    InvalidArgumentError,
    Mediator,
    MediatorError,
    Notification,
    NotificationHandler,
    Request,
    RequestHandler,
    RegistryBuilder,
    scan,
)

__all__ = [
    'Mediator',
    'Request',
    'Notification',
    'RequestHandler',
    'NotificationHandler',
    'HandlerRegistry',
    'RegistryBuilder',
    'scan',
    'CancellationToken',
    'MediatorError',
    'InvalidArgumentError',
    'HandlerNotFoundError',
    'AmbiguousRegistrationError',
    'HandlerInvocationError',
]

__version__ = "1.0.0"
