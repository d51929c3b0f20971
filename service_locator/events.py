"""Overwrite notifications emitted by the locator."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, TypeAlias

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OverwriteEvent:
    """A registration replaced an existing service."""

    key: str
    previous: Any
    replacement: Any


OverwriteCallback: TypeAlias = Callable[[OverwriteEvent], None]


def logging_sink(level: int = logging.WARNING) -> OverwriteCallback:
    """Build an overwrite callback that logs each event at `level`."""

    def _log_overwrite(event: OverwriteEvent) -> None:
        logger.log(
            level,
            "Service with key '%s' is already registered. Overwriting.",
            event.key,
        )

    return _log_overwrite
