"""Testes para config.logging.

Cobre: configure_logging, get_logger, log_fallback,
DeliveryContextFilter, create_json_formatter.
"""

from __future__ import annotations

import json
import logging
from unittest.mock import MagicMock

import pytest

from config.logging import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    DeliveryContextFilter,
    configure_logging,
    create_json_formatter,
    get_logger,
    log_fallback,
)
from config.logging.config import DEFAULT_SERVICE_NAME, VALID_LOG_LEVELS


def _record(msg: str = "message") -> logging.LogRecord:
    return logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )


class TestConfigureLogging:
    """Testes para configure_logging."""

    def test_configure_logging_default_level(self) -> None:
        configure_logging()
        assert logging.getLogger().level == logging.INFO

    def test_configure_logging_is_case_insensitive(self) -> None:
        configure_logging(level="warning")
        assert logging.getLogger().level == logging.WARNING

    def test_configure_logging_invalid_level_raises(self) -> None:
        with pytest.raises(ValueError, match="Nível de log inválido"):
            configure_logging(level="INVALID")

    def test_configure_logging_replaces_handlers(self) -> None:
        root = logging.getLogger()
        root.handlers = [logging.NullHandler(), logging.NullHandler()]
        configure_logging()
        assert len(root.handlers) == 1

    def test_configure_logging_installs_delivery_filter(self) -> None:
        configure_logging(delivery_id_getter=lambda: "d-1")
        handler = logging.getLogger().handlers[0]
        assert any(isinstance(f, DeliveryContextFilter) for f in handler.filters)

    def test_http_libraries_are_quieted_outside_debug(self) -> None:
        configure_logging(level="INFO")
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_constants(self) -> None:
        assert {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} == VALID_LOG_LEVELS
        assert DEFAULT_SERVICE_NAME == "farcaster_notifier"


class TestGetLogger:
    def test_get_logger_same_name_returns_same_instance(self) -> None:
        assert get_logger("same.module") is get_logger("same.module")


class TestLogFallback:
    """Testes para log_fallback."""

    def test_log_fallback_basic(self) -> None:
        logger = MagicMock(spec=logging.Logger)
        log_fallback(logger, "profile_cache")
        call_args = logger.warning.call_args
        assert call_args[0] == ("Fallback applied for %s", "profile_cache")
        extra = call_args[1]["extra"]
        assert extra == {"fallback_used": True, "component": "profile_cache"}

    def test_log_fallback_with_all_params(self) -> None:
        logger = MagicMock(spec=logging.Logger)
        log_fallback(logger, "profile_cache", reason="lookup_failed:HttpError", elapsed_ms=12.3456)
        extra = logger.warning.call_args[1]["extra"]
        assert extra["reason"] == "lookup_failed:HttpError"
        assert extra["elapsed_ms"] == 12.35


class TestDeliveryContextFilter:
    def test_filter_adds_delivery_id_and_service(self) -> None:
        record = _record()
        assert DeliveryContextFilter("svc", lambda: "d-123").filter(record) is True
        assert record.delivery_id == "d-123"
        assert record.service == "svc"

    def test_filter_preserves_explicit_delivery_id(self) -> None:
        record = _record()
        record.delivery_id = "explicit"
        DeliveryContextFilter("svc", lambda: "from-getter").filter(record)
        assert record.delivery_id == "explicit"

    def test_filter_without_getter_uses_empty_string(self) -> None:
        record = _record()
        DeliveryContextFilter("svc").filter(record)
        assert record.delivery_id == ""


class TestJsonFormatter:
    def test_output_has_required_fields_renamed(self) -> None:
        record = _record("webhook_received")
        DeliveryContextFilter("svc", lambda: "d-9").filter(record)
        record.event_type = "follow.created"

        output = json.loads(create_json_formatter().format(record))

        assert output["message"] == "webhook_received"
        assert output["level"] == "INFO"
        assert output["logger"] == "test"
        assert output["delivery_id"] == "d-9"
        assert output["service"] == "svc"
        assert output["event_type"] == "follow.created"

    def test_required_fields_constant(self) -> None:
        assert "delivery_id" in REQUIRED_LOG_FIELDS
        assert FIELD_RENAME_MAP["levelname"] == "level"
