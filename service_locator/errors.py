"""Error types raised by the service locator."""
from __future__ import annotations

from typing import Any


class LocatorError(Exception):
    """Base class for service locator errors."""
    pass


class ServiceNotFoundError(LocatorError, KeyError):
    """Raised when a key has no registered service."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Service with key '{key}' not found.")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class ServiceTypeError(LocatorError, TypeError):
    """Raised when a service does not satisfy the type its key declares."""

    def __init__(self, key: str, expected: Any, actual: Any) -> None:
        self.key = key
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Service with key '{key}' must be {_type_label(expected)}, "
            f"got {type(actual).__name__}."
        )


class InvalidServiceKeyError(LocatorError, ValueError):
    """Raised when a key name is not acceptable."""
    pass


class LocatorAlreadyInitializedError(LocatorError, RuntimeError):
    """Raised when replacing an already created process-wide locator."""
    pass


def _type_label(tp: Any) -> str:
    return getattr(tp, "__name__", None) or repr(tp)
