import logging

import pytest

from service_locator import (
    InvalidServiceKeyError,
    LocatorConfig,
    ServiceLocator,
    ServiceNotFoundError,
)


class ConsoleLogger:
    def __init__(self, prefix: str = "INFO") -> None:
        self.prefix = prefix


def test_unregistered_key_is_absent(locator):
    assert not locator.has("Logger")
    with pytest.raises(ServiceNotFoundError) as excinfo:
        locator.get("Logger")
    assert excinfo.value.key == "Logger"


def test_register_then_get_returns_same_instance(locator):
    logger_a = ConsoleLogger()

    locator.register("Logger", logger_a)

    assert locator.has("Logger")
    assert locator.get("Logger") is logger_a


def test_overwrite_replaces_and_notifies(locator, overwrites):
    logger_a = ConsoleLogger("a")
    logger_b = ConsoleLogger("b")

    locator.register("Logger", logger_a)
    assert overwrites == []

    locator.register("Logger", logger_b)

    assert locator.get("Logger") is logger_b
    assert len(overwrites) == 1
    event = overwrites[0]
    assert event.key == "Logger"
    assert event.previous is logger_a
    assert event.replacement is logger_b


def test_missing_key_message_names_the_key(locator):
    locator.register("Logger", ConsoleLogger())

    with pytest.raises(ServiceNotFoundError, match="Missing"):
        locator.get("Missing")


def test_not_found_error_is_a_key_error_with_readable_message(locator):
    with pytest.raises(KeyError) as excinfo:
        locator.get("ApiService")
    assert str(excinfo.value) == "Service with key 'ApiService' not found."


def test_has_is_idempotent(locator):
    locator.register("ApiService", object())

    results = [locator.has("ApiService") for _ in range(3)]
    misses = [locator.has("Other") for _ in range(3)]

    assert results == [True, True, True]
    assert misses == [False, False, False]
    assert locator.names() == ["ApiService"]


def test_none_is_a_valid_service(locator):
    locator.register("Nothing", None)

    assert locator.has("Nothing")
    assert locator.get("Nothing") is None


def test_default_sink_logs_warning(caplog):
    locator = ServiceLocator()
    locator.register("Logger", ConsoleLogger())

    with caplog.at_level(logging.WARNING, logger="service_locator"):
        locator.register("Logger", ConsoleLogger())

    assert "Service with key 'Logger' is already registered. Overwriting." in caplog.text
    assert caplog.records[-1].levelno == logging.WARNING


def test_configured_log_level_is_used(caplog):
    locator = ServiceLocator(LocatorConfig(overwrite_log_level="info"))
    locator.register("Logger", 1)

    with caplog.at_level(logging.DEBUG, logger="service_locator"):
        locator.register("Logger", 2)

    assert caplog.records[-1].levelno == logging.INFO


def test_failing_sink_does_not_interrupt_register(caplog):
    def explode(event):
        raise RuntimeError("sink is down")

    locator = ServiceLocator(on_overwrite=explode)
    locator.register("Logger", "first")

    with caplog.at_level(logging.ERROR, logger="service_locator"):
        locator.register("Logger", "second")

    assert locator.get("Logger") == "second"
    assert "Overwrite callback failed for service key 'Logger'" in caplog.text


@pytest.mark.parametrize("key", ["", "   "])
def test_blank_keys_are_rejected(locator, key):
    with pytest.raises(InvalidServiceKeyError, match="non-empty"):
        locator.register(key, object())
    assert not locator.has(key)


def test_blank_keys_allowed_by_config():
    locator = ServiceLocator(LocatorConfig(allow_empty_keys=True))
    service = object()

    locator.register("", service)

    assert locator.get("") is service


def test_non_string_key_is_rejected(locator):
    with pytest.raises(InvalidServiceKeyError, match="must be a string"):
        locator.register(42, object())  # type: ignore[arg-type]
    assert not locator.has(42)  # type: ignore[arg-type]


def test_contains_and_len(locator):
    locator.register("Logger", ConsoleLogger())
    locator.register("ApiService", object())
    locator.register("Logger", ConsoleLogger())

    assert "Logger" in locator
    assert "Missing" not in locator
    assert 3 not in locator
    assert len(locator) == 2
    assert locator.names() == ["ApiService", "Logger"]


def test_keys_are_case_sensitive(locator):
    locator.register("Logger", ConsoleLogger())

    assert not locator.has("logger")


def test_get_with_unhashable_key_raises_invalid_key(locator):
    with pytest.raises(InvalidServiceKeyError, match="must be a string"):
        locator.get(["Logger"])  # type: ignore[arg-type]
