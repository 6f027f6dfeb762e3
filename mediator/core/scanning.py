# Handler Scanning
# Discovers handler classes in a package and registers them on a builder

import importlib
import inspect
import logging
import pkgutil
from types import ModuleType
from typing import Any, Callable, Iterator, List, Optional, Union

from .contracts import message_type_of
from .registry import RegistryBuilder

logger = logging.getLogger(__name__)

HandlerFactory = Callable[[type], Any]


def _iter_modules(package: Union[str, ModuleType]) -> Iterator[ModuleType]:
    """Yield the package module and, for packages, every submodule."""
    module = importlib.import_module(package) if isinstance(package, str) else package
    yield module

    search_path = getattr(module, "__path__", None)
    if search_path is None:
        return

    for info in pkgutil.walk_packages(search_path, prefix=module.__name__ + "."):
        yield importlib.import_module(info.name)


def find_handler_classes(package: Union[str, ModuleType]) -> List[type]:
    """
    Find concrete handler classes defined under a package or module.

    A class qualifies when it is defined in the scanned module itself
    (not imported into it), is not abstract, and declares a concrete
    message type through RequestHandler[...] or NotificationHandler[...].

    Args:
        package: Dotted module name or an imported module

    Returns:
        Handler classes in module order, then definition order
    """
    found: List[type] = []
    seen = set()

    for module in _iter_modules(package):
        members = [
            obj
            for _, obj in inspect.getmembers(module, inspect.isclass)
            if obj.__module__ == module.__name__
        ]
        members.sort(key=_definition_line)

        for cls in members:
            if cls in seen or inspect.isabstract(cls):
                continue
            if message_type_of(cls) is None:
                continue
            seen.add(cls)
            found.append(cls)
            logger.debug(f"Found handler {cls.__qualname__} in {module.__name__}")

    return found


def scan(
    builder: RegistryBuilder,
    package: Union[str, ModuleType],
    factory: Optional[HandlerFactory] = None,
) -> List[Any]:
    """
    Instantiate every handler class found in a package and register it.

    Args:
        builder: The registry builder to populate
        package: Dotted module name or an imported module
        factory: Creates an instance from a handler class; defaults to
            calling the class with no arguments

    Returns:
        The registered handler instances

    Raises:
        AmbiguousRegistrationError: If two scanned handlers serve one request type
    """
    make = factory or (lambda cls: cls())
    handlers = []

    for cls in find_handler_classes(package):
        handler = make(cls)
        builder.add_handler(handler)
        handlers.append(handler)

    name = package if isinstance(package, str) else package.__name__
    logger.info(f"Scanned {name}: registered {len(handlers)} handlers")
    return handlers


def _definition_line(cls: type) -> int:
    try:
        return inspect.getsourcelines(cls)[1]
    except (OSError, TypeError):
        return 0
