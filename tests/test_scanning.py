# Tests for Handler Scanning
# Verifies discovery and registration of handler classes in a package

import types

import pytest

import handler_samples
from handler_samples.audit import AuditOrderPlaced
from handler_samples.orders import (
    EmailOnOrderPlaced,
    GetOrderTotal,
    GetOrderTotalHandler,
    OrderPlaced,
)
from mediator.core import (
    AmbiguousRegistrationError,
    RegistryBuilder,
    RequestHandler,
    find_handler_classes,
    scan,
)


class TestFindHandlerClasses:
    """Tests for find_handler_classes."""

    def test_finds_concrete_handlers_in_package(self):
        """Test that every concrete declared handler in the package is found."""
        found = find_handler_classes("handler_samples")

        assert set(found) == {AuditOrderPlaced, GetOrderTotalHandler, EmailOnOrderPlaced}

    def test_skips_abstract_and_undeclared_classes(self):
        """Test that abstract bases and plain classes are ignored."""
        names = [cls.__name__ for cls in find_handler_classes(handler_samples)]

        assert "BaseAuditHandler" not in names
        assert "NotAHandler" not in names

    def test_imported_classes_are_not_counted_twice(self):
        """Test that classes are attributed only to their defining module."""
        found = find_handler_classes("handler_samples")
        assert len(found) == len(set(found))

    def test_single_module(self):
        """Test that a plain module can be scanned."""
        found = find_handler_classes("handler_samples.orders")
        assert found == [GetOrderTotalHandler, EmailOnOrderPlaced]


class TestScan:
    """Tests for scan()."""

    def test_scan_registers_instances(self):
        """Test that scan instantiates and registers each handler."""
        builder = RegistryBuilder()
        handlers = scan(builder, "handler_samples")
        registry = builder.build()

        assert len(handlers) == 3
        assert isinstance(registry.resolve_one(GetOrderTotal), GetOrderTotalHandler)
        kinds = {type(h) for h in registry.resolve_many(OrderPlaced)}
        assert kinds == {AuditOrderPlaced, EmailOnOrderPlaced}

    def test_scan_uses_factory(self):
        """Test that a custom factory builds the instances."""
        built = []

        def factory(cls):
            built.append(cls)
            return cls()

        scan(RegistryBuilder(), "handler_samples.orders", factory=factory)

        assert built == [GetOrderTotalHandler, EmailOnOrderPlaced]

    def test_scan_rejects_duplicate_request_handlers(self):
        """Test that two scanned handlers for one request type are ambiguous."""
        module = types.ModuleType("duplicate_handlers")

        class FirstTotal(RequestHandler[GetOrderTotal, float]):
            async def handle(self, request, cancellation_token):
                return 1.0

        class SecondTotal(RequestHandler[GetOrderTotal, float]):
            async def handle(self, request, cancellation_token):
                return 2.0

        for cls in (FirstTotal, SecondTotal):
            cls.__module__ = module.__name__
            setattr(module, cls.__name__, cls)

        with pytest.raises(AmbiguousRegistrationError):
            scan(RegistryBuilder(), module)
