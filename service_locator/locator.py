"""In-process service locator.

`ServiceLocator` maps string keys to service instances so components can look
up shared dependencies by name instead of importing concrete implementations.
Keys are plain strings or typed `ServiceKey` tokens; a typed key validates the
instance on the way in and on the way out.

The process-wide locator is created lazily by `get_instance()`. Applications
that want a configured locator install one with `set_instance()` at startup;
code that prefers explicit wiring can construct and pass `ServiceLocator`
objects directly.
"""
from __future__ import annotations

import logging
import threading
from typing import Any, Optional, TypeVar, overload

from .config import LocatorConfig
from .errors import (
    InvalidServiceKeyError,
    LocatorAlreadyInitializedError,
    ServiceNotFoundError,
)
from .events import OverwriteCallback, OverwriteEvent, logging_sink
from .keys import ServiceKey

logger = logging.getLogger(__name__)

T = TypeVar("T")

KeyLike = str | ServiceKey[Any]


def _key_name(key: KeyLike) -> str:
    if isinstance(key, ServiceKey):
        return key.name
    return key


def _require_str(name: Any) -> None:
    if not isinstance(name, str):
        raise InvalidServiceKeyError(
            f"Service key must be a string or ServiceKey, got {type(name).__name__}."
        )


class ServiceLocator:
    """Keyed store of shared service instances."""

    def __init__(
        self,
        config: Optional[LocatorConfig] = None,
        *,
        on_overwrite: Optional[OverwriteCallback] = None,
    ) -> None:
        self.config = config or LocatorConfig()
        self._on_overwrite = on_overwrite or logging_sink(self.config.log_level)
        self._entries: dict[str, Any] = {}
        self._lock = threading.RLock()

    def _validate_name(self, name: Any) -> str:
        _require_str(name)
        if not name.strip() and not self.config.allow_empty_keys:
            raise InvalidServiceKeyError("Service key must be a non-empty string.")
        return name

    def register(self, key: KeyLike, instance: Any) -> None:
        """Store `instance` under `key`, replacing any previous service.

        Replacing an existing service is not an error: the overwrite callback
        is notified and the new instance wins.

        Raises:
            InvalidServiceKeyError: If the key name is rejected
            ServiceTypeError: If `key` is a ServiceKey and `instance` does not fit
        """
        name = self._validate_name(_key_name(key))
        if isinstance(key, ServiceKey):
            key.check(instance)

        with self._lock:
            replaced = name in self._entries
            previous = self._entries.get(name)
            self._entries[name] = instance

        if replaced:
            self._notify_overwrite(OverwriteEvent(key=name, previous=previous, replacement=instance))

    def _notify_overwrite(self, event: OverwriteEvent) -> None:
        try:
            self._on_overwrite(event)
        except Exception:
            logger.exception("Overwrite callback failed for service key '%s'", event.key)

    @overload
    def get(self, key: ServiceKey[T]) -> T: ...

    @overload
    def get(self, key: str) -> Any: ...

    def get(self, key: KeyLike) -> Any:
        """Return the service registered under `key`.

        Raises:
            InvalidServiceKeyError: If `key` is neither a string nor a ServiceKey
            ServiceNotFoundError: If nothing is registered under the key
            ServiceTypeError: If `key` is a ServiceKey and the stored service does not fit
        """
        name = _key_name(key)
        _require_str(name)
        with self._lock:
            if name not in self._entries:
                raise ServiceNotFoundError(name)
            instance = self._entries[name]
        if isinstance(key, ServiceKey):
            return key.check(instance)
        return instance

    def has(self, key: KeyLike) -> bool:
        """Return True if a service is registered under `key`."""
        name = _key_name(key)
        if not isinstance(name, str):
            return False
        with self._lock:
            return name in self._entries

    def names(self) -> list[str]:
        """Return the sorted names of all registered services."""
        with self._lock:
            return sorted(self._entries.keys())

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, (str, ServiceKey)):
            return False
        return self.has(key)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


_instance: Optional[ServiceLocator] = None
_instance_lock = threading.Lock()


def get_instance() -> ServiceLocator:
    """Return the process-wide locator, creating it on first use."""
    global _instance
    if _instance is None:
        with _instance_lock:
            if _instance is None:
                _instance = ServiceLocator()
    return _instance


def set_instance(locator: ServiceLocator) -> None:
    """Install `locator` as the process-wide locator.

    Must run before anything calls get_instance(); installing the instance
    that is already in place is a no-op.

    Raises:
        LocatorAlreadyInitializedError: If a different locator already exists
    """
    global _instance
    with _instance_lock:
        if _instance is not None and _instance is not locator:
            raise LocatorAlreadyInitializedError(
                "The process-wide service locator has already been created."
            )
        _instance = locator
