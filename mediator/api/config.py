"""Environment configuration and logging setup for the HTTP host."""

import logging
import os
import sys
from typing import List, Optional

logger = logging.getLogger(__name__)

DEFAULT_HANDLER_PACKAGE = "mediator.api.requests"

_logging_configured = False


def _as_bool(value: Optional[str], default: bool = False) -> bool:
    """Parse a boolean-like environment variable value."""
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _as_positive_int(value: Optional[str], default: int) -> int:
    """Parse a positive integer environment variable."""
    if value is None:
        return default
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    return parsed if parsed > 0 else default


def is_debug() -> bool:
    """Return whether error details are exposed in HTTP responses."""
    return _as_bool(os.getenv("MEDIATOR_DEBUG"), default=False)


def get_log_level() -> str:
    """Return the log level name from MEDIATOR_LOG_LEVEL (default INFO)."""
    name = os.getenv("MEDIATOR_LOG_LEVEL", "INFO").strip().upper()
    if isinstance(logging.getLevelName(name), int):
        return name
    return "INFO"


def get_handler_package() -> str:
    """Return the package scanned for handlers at startup."""
    return os.getenv("MEDIATOR_HANDLER_PACKAGE", "").strip() or DEFAULT_HANDLER_PACKAGE


def get_allowed_origins() -> List[str]:
    """Return CORS origins from ALLOWED_ORIGINS."""
    raw = os.getenv(
        "ALLOWED_ORIGINS",
        "http://localhost,http://127.0.0.1,http://localhost:3000,http://127.0.0.1:3000",
    )
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    if not origins:
        return ["http://localhost", "http://127.0.0.1"]
    return origins


def get_host() -> str:
    return os.getenv("HOST", "0.0.0.0")


def get_port() -> int:
    return _as_positive_int(os.getenv("PORT"), default=8000)


def configure_logging(force: bool = False) -> None:
    """
    Configure the root logger once.

    Uses MEDIATOR_LOG_LEVEL for the level. Calling again is a no-op
    unless ``force`` is set.
    """
    global _logging_configured
    if _logging_configured and not force:
        return

    level = get_log_level()
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(
        logging.Formatter("[%(asctime)s] %(levelname)s %(name)s | %(message)s")
    )
    root.addHandler(handler)

    _logging_configured = True
    logger.debug(f"Logging configured at {level}")
