# Cancellation Token
# Caller-supplied cancellation signal passed through to every handler

import logging
import threading
from typing import Callable, List

from .errors import OperationCancelledError

logger = logging.getLogger(__name__)


class CancellationToken:
    """
    A one-shot, thread-safe cancellation flag.

    The mediator never inspects the token. It hands the exact same
    object to every handler it invokes, and handlers decide how to stop
    their own work when they observe it.

    Example usage:

        token = CancellationToken()
        result = await mediator.send(GetUserByIdRequest(user_id=7), token)

        # elsewhere, e.g. on client disconnect
        token.cancel()
    """

    def __init__(self):
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._callbacks: List[Callable[[], None]] = []

    @classmethod
    def none(cls) -> "CancellationToken":
        """Get the shared token that is never cancelled."""
        return _NONE_TOKEN

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        """Cancel the token and run registered callbacks once."""
        with self._lock:
            if self._event.is_set():
                return
            self._event.set()
            callbacks, self._callbacks = self._callbacks, []

        for callback in callbacks:
            _run_callback(callback)

    def register(self, callback: Callable[[], None]) -> None:
        """Run ``callback`` when the token is cancelled.

        If the token is already cancelled the callback runs immediately.
        """
        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(callback)
                return
        _run_callback(callback)

    def raise_if_cancelled(self) -> None:
        """Raise OperationCancelledError if the token has been cancelled."""
        if self._event.is_set():
            raise OperationCancelledError("Operation was cancelled")

    def __repr__(self) -> str:
        return f"<CancellationToken cancelled={self.is_cancelled}>"


class _NeverCancelledToken(CancellationToken):
    """Default token for callers that do not supply one."""

    def cancel(self) -> None:
        raise RuntimeError("The shared default token cannot be cancelled")

    def register(self, callback: Callable[[], None]) -> None:
        # never fires
        return None


_NONE_TOKEN = _NeverCancelledToken()


def _run_callback(callback: Callable[[], None]) -> None:
    try:
        callback()
    except Exception as e:
        logger.error(f"Cancellation callback {callback!r} failed: {e}")
