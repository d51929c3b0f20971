"""Configuration loading for service-locator.

Reads an optional TOML file from a base directory. Settings live under a
`[locator]` table:

    [locator]
    allow_empty_keys = false
    overwrite_log_level = "warning"
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:  # pragma: no cover - fallback for <3.11
    import tomli as tomllib


CONFIG_FILENAMES = ("service-locator.toml",)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LocatorConfig(BaseModel):
    """Settings for a ServiceLocator."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    allow_empty_keys: bool = False
    overwrite_log_level: str = "WARNING"
    path: Optional[Path] = None

    @field_validator("overwrite_log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"overwrite_log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @property
    def log_level(self) -> int:
        return getattr(logging, self.overwrite_log_level)


def load_config(base_dir: Path) -> LocatorConfig:
    """Load config from the first matching file in `base_dir`."""

    for filename in CONFIG_FILENAMES:
        candidate = base_dir / filename
        if not candidate.exists():
            continue
        with candidate.open("rb") as f:
            data = tomllib.load(f)
        raw = data.get("locator", {})
        if not isinstance(raw, dict):
            raise ValueError(f"Invalid config at {candidate}: [locator] must be a table")
        if "path" in raw:
            raise ValueError(f"Invalid config at {candidate}: 'path' is set by the loader, not the file")
        try:
            return LocatorConfig.model_validate({**raw, "path": candidate})
        except ValidationError as exc:
            raise ValueError(f"Invalid config at {candidate}: {exc}") from exc

    return LocatorConfig()
