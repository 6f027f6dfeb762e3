# Process-wide mediator for the HTTP host
# Built once from a handler scan, then shared read-only by every request

import logging
import threading
from typing import Optional

from mediator.api.config import get_handler_package
from mediator.core import Mediator, RegistryBuilder, scan

logger = logging.getLogger(__name__)

_mediator_lock = threading.Lock()
_mediator_instance: Optional[Mediator] = None


def build_mediator(package: Optional[str] = None) -> Mediator:
    """
    Build a new mediator from the handlers found in a package.

    Args:
        package: Dotted package name; defaults to MEDIATOR_HANDLER_PACKAGE

    Returns:
        A Mediator over a frozen registry
    """
    package = package or get_handler_package()
    builder = RegistryBuilder()
    scan(builder, package)
    registry = builder.build()
    logger.info(f"Mediator ready with {len(registry)} handler bindings from {package}")
    return Mediator(registry)


def get_mediator() -> Mediator:
    """
    Get the shared mediator instance, building it on first use.

    Used as a FastAPI dependency.
    """
    global _mediator_instance
    if _mediator_instance is None:
        with _mediator_lock:
            if _mediator_instance is None:
                _mediator_instance = build_mediator()
    return _mediator_instance


def reset_mediator() -> None:
    """Drop the shared mediator so the next get_mediator() rebuilds it (tests)."""
    global _mediator_instance
    with _mediator_lock:
        _mediator_instance = None
