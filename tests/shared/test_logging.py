"""Tests for structured logging helpers."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from rich.logging import RichHandler

from boundedflow.shared.errors import ErrorCode, ErrorContext, InfrastructureError
from boundedflow.shared.logging import (
    StructuredFormatter,
    log_operation_error,
    log_operation_start,
    log_operation_success,
    setup_structured_logger,
)


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord("boundedflow.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:
    def test_basic_fields(self) -> None:
        entry = json.loads(StructuredFormatter().format(_record()))

        assert entry["message"] == "hello world"
        assert entry["level"] == "INFO"
        assert entry["logger"] == "boundedflow.test"
        assert "thread" in entry
        assert "timestamp" in entry

    def test_extra_fields(self) -> None:
        entry = json.loads(
            StructuredFormatter().format(
                _record(operation="run_pipeline", duration_ms=12.5, error_code="X", context={"a": 1})
            )
        )

        assert entry["operation"] == "run_pipeline"
        assert entry["duration_ms"] == 12.5
        assert entry["error_code"] == "X"
        assert entry["context"] == {"a": 1}


class TestSetupStructuredLogger:
    def test_rich_console_handler(self) -> None:
        logger = setup_structured_logger(level="debug")

        assert logger.name == "boundedflow"
        assert logger.level == logging.DEBUG
        assert logger.propagate is False
        assert [type(h) for h in logger.handlers] == [RichHandler]

    def test_json_handlers_and_reconfiguration(self, tmp_path: Path) -> None:
        log_file = tmp_path / "boundedflow.log"
        setup_structured_logger(level="INFO")

        logger = setup_structured_logger(level="WARNING", log_file=str(log_file), use_rich_console=False)
        logger.warning("queue %s", "full")
        for handler in logger.handlers:
            handler.flush()

        assert len(logger.handlers) == 2
        assert all(isinstance(h.formatter, StructuredFormatter) for h in logger.handlers)
        entry = json.loads(log_file.read_text(encoding="utf-8").strip())
        assert entry["message"] == "queue full"


class TestOperationHelpers:
    def test_log_operation_error(self, caplog) -> None:
        logger = logging.getLogger("boundedflow.test.errors")
        error = InfrastructureError(
            ErrorCode.CONSUMER_ERROR,
            "Consumer-1 failed",
            ErrorContext(operation="run", actor_id="Consumer-1"),
        )

        with caplog.at_level(logging.ERROR):
            log_operation_error(logger, error, context={"attempt": 1})

        record = caplog.records[-1]
        assert record.getMessage() == "Consumer-1 failed"
        assert record.error_code == "CONSUMER_ERROR"
        assert record.operation == "run"
        assert record.context == {"operation": "run", "actor_id": "Consumer-1", "additional_data": {}, "attempt": 1}
        assert record.exc_info is None

    def test_log_operation_error_with_cause_has_traceback(self, caplog) -> None:
        logger = logging.getLogger("boundedflow.test.errors")
        try:
            raise OSError("disk")
        except OSError as e:
            error = InfrastructureError(ErrorCode.PRODUCER_ERROR, "failed", original_error=e)

        with caplog.at_level(logging.ERROR):
            log_operation_error(logger, error)

        assert caplog.records[-1].exc_info is not None

    def test_success_and_start_are_debug(self, caplog) -> None:
        logger = logging.getLogger("boundedflow.test.ops")

        with caplog.at_level(logging.DEBUG):
            log_operation_start(logger, "run_pipeline", context={"producers": 1})
            log_operation_success(
                logger,
                "run_pipeline",
                duration_ms=3.0,
                result_info={"items_consumed": 2},
                context=ErrorContext(operation="run_pipeline"),
            )

        start, success = caplog.records[-2:]
        assert start.levelno == success.levelno == logging.DEBUG
        assert start.context == {"producers": 1}
        assert success.duration_ms == 3.0
        assert success.result_info == {"items_consumed": 2}
        assert success.context == {"operation": "run_pipeline", "additional_data": {}}
