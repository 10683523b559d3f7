"""Tests for the constructor registry."""

import asyncio
import threading

import pytest

from errorwire.errors import DuplicateConstructorError, IncompatibleConstructorError
from errorwire.registry import (
    ConstructorRegistry,
    builtin_error_kinds,
    get_constructor_registry,
    host_error_kinds,
    import_dotted,
    register_error_constructor,
)

pytestmark = pytest.mark.registry


class ShippingDelayedError(Exception):
    """Registered on the shared default registry by one test."""


class TestSeeding:
    """Tests for the initial contents of a registry."""

    @pytest.mark.parametrize(
        "name",
        ["Exception", "BaseException", "ValueError", "KeyError", "OSError", "ExceptionGroup", "BaseExceptionGroup"],
    )
    def test_builtin_kinds_present(self, registry, name):
        """Test built-in exception classes are seeded."""
        assert name in registry

    def test_host_kinds_present(self, registry):
        """Test host kinds from the standard library are seeded."""
        assert registry.lookup("CancelledError") is asyncio.CancelledError
        assert registry.lookup("SubprocessError") is not None

    def test_kinds_needing_arguments_are_skipped(self, registry):
        """Test kinds that cannot be built without arguments are left out."""
        assert "UnicodeDecodeError" not in registry
        assert "JSONDecodeError" not in registry
        assert "CalledProcessError" not in registry

    def test_empty_registry(self, empty_registry):
        """Test seeding can be disabled."""
        assert len(empty_registry) == 0
        assert empty_registry.lookup("ValueError") is None

    def test_builtin_kinds_are_sorted_exception_classes(self):
        """Test the builtin scan only yields exception classes."""
        kinds = list(builtin_error_kinds())
        names = [kind.__name__ for kind in kinds]
        assert names == sorted(names)
        assert all(issubclass(kind, BaseException) for kind in kinds)

    def test_builtin_aliases_are_skipped(self):
        """Test alias names bound to another class are not yielded again."""
        names = [kind.__name__ for kind in builtin_error_kinds()]
        assert "IOError" not in names
        assert "EnvironmentError" not in names
        assert names.count("OSError") == 1

    def test_host_kinds_skip_missing_modules(self):
        """Test unknown modules and attributes are skipped."""
        kinds = list(host_error_kinds(("not_a_module.Error", "asyncio.NoSuchError", "asyncio.CancelledError")))
        assert kinds == [asyncio.CancelledError]

    def test_import_dotted(self):
        """Test dotted paths resolve to attributes."""
        assert import_dotted("asyncio.CancelledError") is asyncio.CancelledError
        with pytest.raises(ImportError):
            import_dotted("CancelledError")


class TestRegister:
    """Tests for registering constructors."""

    def test_register_custom_kind(self, registry):
        """Test a zero-argument exception class can be registered."""

        class PaymentDeclinedError(Exception):
            pass

        registry.register(PaymentDeclinedError)
        assert registry.lookup("PaymentDeclinedError") is PaymentDeclinedError
        assert "PaymentDeclinedError" in registry.names()

    def test_register_group_kind(self, registry):
        """Test exception group subclasses pass the compatibility check."""

        class BatchError(ExceptionGroup):
            pass

        registry.register(BatchError)
        assert registry.is_aggregate("BatchError")

    def test_duplicate_name(self, registry):
        """Test registering a known name fails and changes nothing."""
        before = registry.items()

        with pytest.raises(DuplicateConstructorError) as exc_info:
            registry.register(ValueError)

        assert str(exc_info.value) == 'The error constructor "ValueError" is already known.'
        assert exc_info.value.code == "CONSTRUCTOR_DUPLICATE"
        assert registry.items() == before

    def test_duplicate_name_different_class(self, registry):
        """Test a different class with a taken name is rejected."""
        shadow = type("ValueError", (Exception,), {})

        with pytest.raises(DuplicateConstructorError):
            registry.register(shadow)
        assert registry.lookup("ValueError") is ValueError

    def test_constructor_that_raises(self, registry):
        """Test a failing constructor is rejected with its error as cause."""

        class BadError(Exception):
            def __init__(self):
                raise RuntimeError("broken")

        count = len(registry)
        with pytest.raises(IncompatibleConstructorError, match='The error constructor "BadError" is not compatible') as exc_info:
            registry.register(BadError)

        assert isinstance(exc_info.value.cause, RuntimeError)
        assert exc_info.value.__cause__ is exc_info.value.cause
        assert "BadError" not in registry
        assert len(registry) == count

    def test_constructor_needing_arguments(self, registry):
        """Test classes that require arguments are incompatible."""

        class NeedsArgs(Exception):
            def __init__(self, status):
                super().__init__(status)

        with pytest.raises(IncompatibleConstructorError) as exc_info:
            registry.register(NeedsArgs)
        assert isinstance(exc_info.value.cause, TypeError)

    def test_non_exception_class(self, registry):
        """Test classes that do not build exceptions are incompatible."""

        class NotAnError:
            pass

        with pytest.raises(IncompatibleConstructorError) as exc_info:
            registry.register(NotAnError)

        assert exc_info.value.cause is None
        assert "NotAnError" not in registry

    def test_non_class_callable(self, registry):
        """Test factory functions are rejected."""

        def make_error():
            return ValueError()

        with pytest.raises(IncompatibleConstructorError):
            registry.register(make_error)

    def test_concurrent_registration(self, empty_registry):
        """Test concurrent registrations of distinct kinds all land."""
        kinds = [type(f"ConcurrentError{i}", (Exception,), {}) for i in range(20)]
        threads = [threading.Thread(target=empty_registry.register, args=(kind,)) for kind in kinds]

        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(empty_registry.names()) == sorted(kind.__name__ for kind in kinds)


class TestCreate:
    """Tests for building instances."""

    def test_known_kind_with_message(self, registry):
        """Test a registered kind is built with its message."""
        error = registry.create("KeyError", "missing")
        assert type(error) is KeyError
        assert error.args == ("missing",)

    def test_unknown_kind(self, registry):
        """Test unknown and missing names build Exception."""
        assert type(registry.create("NoSuchError", "x")) is Exception
        assert type(registry.create(None)) is Exception
        assert registry.create(None).args == ()

    def test_group_with_members(self, registry):
        """Test groups are built from their members."""
        members = [ValueError("a")]
        error = registry.create("ExceptionGroup", "many", members)
        assert isinstance(error, ExceptionGroup)
        assert list(error.exceptions) == members

    def test_group_without_members(self, registry):
        """Test groups without members degrade to Exception."""
        error = registry.create("ExceptionGroup", "many", [])
        assert type(error) is Exception
        assert error.args == ("many",)

    def test_kind_rejecting_message(self, registry):
        """Test kinds that take no arguments are built without the message."""

        class NoArgsError(Exception):
            def __init__(self):
                super().__init__()

        registry.register(NoArgsError)
        error = registry.create("NoArgsError", "hello")
        assert type(error) is NoArgsError
        assert error.args == ()

    def test_is_aggregate(self, registry):
        """Test aggregate detection by name."""
        assert registry.is_aggregate("ExceptionGroup")
        assert registry.is_aggregate("BaseExceptionGroup")
        assert not registry.is_aggregate("ValueError")
        assert not registry.is_aggregate("NoSuchError")
        assert not registry.is_aggregate(None)


class TestDefaultRegistry:
    """Tests for the shared registry."""

    def test_singleton(self):
        """Test the default registry is created once."""
        assert get_constructor_registry() is get_constructor_registry()

    def test_register_error_constructor(self):
        """Test the module-level helper registers on the default registry."""
        register_error_constructor(ShippingDelayedError)
        assert get_constructor_registry().lookup("ShippingDelayedError") is ShippingDelayedError

        with pytest.raises(DuplicateConstructorError):
            register_error_constructor(ShippingDelayedError)
