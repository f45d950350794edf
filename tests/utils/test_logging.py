"""Tests for structured logging helpers."""

import pytest
import structlog
from structlog.testing import capture_logs

from paykit import __version__
from paykit.utils.logging import (
    LogPerformance,
    add_app_context,
    add_correlation_id,
    clear_correlation_id,
    configure_logging,
    filter_sensitive_data,
    get_correlation_id,
    get_logger,
    set_correlation_id,
)


@pytest.fixture
def reset_structlog():
    yield
    structlog.reset_defaults()


def test_filter_sensitive_data_redacts_cookies():
    event = filter_sensitive_data(None, "info", {"event": "x", "session_cookie": "abc", "a": 1})

    assert event["session_cookie"] == "***REDACTED***"
    assert event["a"] == 1


def test_app_context():
    event = add_app_context(None, "info", {"event": "x"})

    assert event["app"] == "paykit"
    assert event["version"] == __version__


def test_correlation_id_round_trip():
    correlation_id = set_correlation_id()
    try:
        assert get_correlation_id() == correlation_id
        assert add_correlation_id(None, "info", {})["correlation_id"] == correlation_id
        assert add_correlation_id(None, "info", {"correlation_id": "kept"}) == {
            "correlation_id": "kept"
        }
    finally:
        clear_correlation_id()

    assert get_correlation_id() is None


def test_log_performance_success_and_failure():
    logger = get_logger("tests.performance")

    with capture_logs() as logs:
        with LogPerformance("get_payment_list", logger, payee="pk"):
            pass
        with pytest.raises(RuntimeError):
            with LogPerformance("get_payment_list", logger, payee="pk"):
                raise RuntimeError("boom")

    completed, failed = logs
    assert completed["event"] == "get_payment_list_completed"
    assert completed["log_level"] == "debug"
    assert completed["payee"] == "pk"
    assert failed["event"] == "get_payment_list_failed"
    assert failed["log_level"] == "warning"
    assert failed["error_type"] == "RuntimeError"


@pytest.mark.parametrize(
    ("json_logs", "dev_mode", "renderer"),
    [
        (False, True, structlog.dev.ConsoleRenderer),
        (True, False, structlog.processors.JSONRenderer),
        (False, False, structlog.processors.KeyValueRenderer),
    ],
)
def test_configure_logging_selects_renderer(reset_structlog, json_logs, dev_mode, renderer):
    configure_logging(log_level="DEBUG", json_logs=json_logs, dev_mode=dev_mode)

    processors = structlog.get_config()["processors"]
    assert isinstance(processors[-1], renderer)
    assert filter_sensitive_data in processors
