# Mediator Errors
# Exception taxonomy raised by the registry and the dispatcher

from dataclasses import dataclass
from typing import Any, List, Optional


class MediatorError(Exception):
    """Base class for every error raised by the mediator core."""


class InvalidArgumentError(MediatorError, ValueError):
    """Raised when ``None`` is passed where a message is required."""


class HandlerNotFoundError(MediatorError, LookupError):
    """Raised when a request type has no registered handler.

    This is a configuration defect. It is detected lazily, on every
    dispatch of the unbound type.
    """

    def __init__(self, message_type: type):
        self.message_type = message_type
        super().__init__(f"No handler registered for {message_type.__name__}")


class AmbiguousRegistrationError(MediatorError):
    """Raised when a second handler is registered for the same request type."""

    def __init__(self, message_type: type, existing: Any, rejected: Any):
        self.message_type = message_type
        self.existing = existing
        self.rejected = rejected
        super().__init__(
            f"{message_type.__name__} already has a handler "
            f"({type(existing).__name__}); refusing {type(rejected).__name__}"
        )


class OperationCancelledError(MediatorError):
    """Raised by a handler that observed its cancellation token."""


@dataclass
class HandlerFailure:
    """One notification handler and the exception it raised."""

    handler: Any
    error: BaseException

    def describe(self) -> str:
        return f"{type(self.handler).__name__}: {self.error}"


class HandlerInvocationError(MediatorError):
    """Raised by ``publish`` when one or more notification handlers failed.

    Every failure is kept; none is dropped in favour of the first or last.
    """

    def __init__(self, message_type: type, failures: List[HandlerFailure], total: Optional[int] = None):
        self.message_type = message_type
        self.failures = list(failures)
        self.total = total if total is not None else len(self.failures)
        details = "; ".join(f.describe() for f in self.failures)
        super().__init__(
            f"{len(self.failures)} of {self.total} handlers failed "
            f"for {message_type.__name__}: {details}"
        )

    @property
    def exceptions(self) -> List[BaseException]:
        """The raw exceptions, in handler registration order."""
        return [f.error for f in self.failures]
