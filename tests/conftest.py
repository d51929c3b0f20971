"""Shared test fixtures for the service-locator test suite."""
import pytest

from service_locator import OverwriteEvent, ServiceLocator
from service_locator import locator as locator_module


@pytest.fixture
def overwrites():
    """Collected overwrite events for the `locator` fixture."""
    return []


@pytest.fixture
def locator(overwrites):
    """A fresh locator that records overwrites instead of logging them."""

    def record(event: OverwriteEvent) -> None:
        overwrites.append(event)

    return ServiceLocator(on_overwrite=record)


@pytest.fixture
def no_global_locator(monkeypatch):
    """Pretend the process-wide locator has not been created yet."""
    monkeypatch.setattr(locator_module, "_instance", None)
