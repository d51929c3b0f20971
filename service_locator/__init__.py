"""service-locator: keyed registry of shared service instances.

Main entry points:
- get_instance(): the process-wide ServiceLocator
- ServiceLocator: register / get / has services by name
- ServiceKey: typed key that validates services on the way in and out
"""
from __future__ import annotations

from .config import LocatorConfig, load_config
from .errors import (
    InvalidServiceKeyError,
    LocatorAlreadyInitializedError,
    LocatorError,
    ServiceNotFoundError,
    ServiceTypeError,
)
from .events import OverwriteCallback, OverwriteEvent, logging_sink
from .keys import ServiceKey
from .locator import ServiceLocator, get_instance, set_instance

__all__ = [
    # Registry
    "ServiceLocator",
    "ServiceKey",
    "get_instance",
    "set_instance",
    # Overwrite notifications
    "OverwriteCallback",
    "OverwriteEvent",
    "logging_sink",
    # Configuration
    "LocatorConfig",
    "load_config",
    # Errors
    "LocatorError",
    "ServiceNotFoundError",
    "ServiceTypeError",
    "InvalidServiceKeyError",
    "LocatorAlreadyInitializedError",
    # Version
    "__version__",
]

__version__ = "0.1.0"
