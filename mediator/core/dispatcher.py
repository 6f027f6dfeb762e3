# Mediator Dispatcher
# Routes requests to one handler and fans notifications out to many

import asyncio
import inspect
from typing import Any, Optional, TypeVar

from .cancellation import CancellationToken
from .contracts import Notification, Request
from .errors import HandlerFailure, HandlerInvocationError, InvalidArgumentError
from .registry import HandlerRegistry

TResponse = TypeVar("TResponse")


class Mediator:
    """
    Dispatches messages to the handlers bound in a HandlerRegistry.

    Handlers are resolved by the runtime type of the message, never by
    the static type the caller used. The mediator holds nothing but the
    registry reference, performs no writes, and can be shared by any
    number of concurrent callers.

    It is a transparent relay: it does not retry, cache, log or wrap a
    request handler's exception.

    Example usage:

        mediator = Mediator(registry)
        user = await mediator.send(GetUserByIdRequest(user_id=7))
        await mediator.publish(UserViewed(user_id=7))
    """

    def __init__(self, registry: HandlerRegistry):
        if registry is None:
            raise InvalidArgumentError("registry is required")
        self._registry = registry

    @property
    def registry(self) -> HandlerRegistry:
        return self._registry

    async def send(
        self,
        request: Request[TResponse],
        cancellation_token: Optional[CancellationToken] = None,
    ) -> TResponse:
        """
        Send a request to its single handler and return the result.

        Args:
            request: The request to dispatch
            cancellation_token: Passed unchanged to the handler

        Returns:
            Whatever the handler produced

        Raises:
            InvalidArgumentError: If request is None
            HandlerNotFoundError: If no handler is bound to type(request)
        """
        if request is None:
            raise InvalidArgumentError("request must not be None")

        handler = self._registry.resolve_one(type(request))
        return await _invoke(handler, request, _token(cancellation_token))

    async def publish(
        self,
        notification: Notification,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> None:
        """
        Deliver a notification to every bound handler concurrently.

        All handlers run to completion before the outcome is decided; a
        failing handler never stops the others.

        Raises:
            InvalidArgumentError: If notification is None
            HandlerInvocationError: If one or more handlers failed
        """
        if notification is None:
            raise InvalidArgumentError("notification must not be None")

        notification_type = type(notification)
        handlers = self._registry.resolve_many(notification_type)
        if not handlers:
            return

        token = _token(cancellation_token)
        results = await asyncio.gather(
            *(_invoke(h, notification, token) for h in handlers),
            return_exceptions=True,
        )

        failures = [
            HandlerFailure(handler, result)
            for handler, result in zip(handlers, results)
            if isinstance(result, BaseException)
        ]
        if failures:
            raise HandlerInvocationError(
                notification_type, failures, total=len(handlers)
            ) from failures[0].error


async def _invoke(handler: Any, message: Any, token: CancellationToken) -> Any:
    # blocking handle() runs in a worker thread so it never stalls the loop
    if inspect.iscoroutinefunction(handler.handle):
        result = handler.handle(message, token)
    else:
        result = await asyncio.to_thread(handler.handle, message, token)
    if inspect.isawaitable(result):
        result = await result
    return result


def _token(cancellation_token: Optional[CancellationToken]) -> CancellationToken:
    if cancellation_token is None:
        return CancellationToken.none()
    return cancellation_token
