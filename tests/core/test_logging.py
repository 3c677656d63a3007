"""
Tests for core/logging module
"""

import json
import logging
import sys

import pytest

from walkthrough.core.logging import (
    DevelopmentFormatter,
    LoggerAdapter,
    LogTimer,
    StructuredFormatter,
    clear_context,
    get_logger,
    run_id_var,
    set_run_id,
    set_workflow_id,
    setup_logging,
    workflow_id_var,
)


def _record(msg="Test message", **attrs):
    record = logging.LogRecord(
        name="test.module",
        level=logging.INFO,
        pathname="/path/to/file.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in attrs.items():
        setattr(record, key, value)
    return record


@pytest.fixture(autouse=True)
def reset_context():
    clear_context()
    yield
    clear_context()


class TestStructuredFormatter:
    """Test suite for StructuredFormatter"""

    def test_format_basic_log(self):
        """Records render as JSON with the standard fields"""
        parsed = json.loads(StructuredFormatter().format(_record()))

        assert parsed["level"] == "INFO"
        assert parsed["message"] == "Test message"
        assert parsed["logger"] == "test.module"
        assert "timestamp" in parsed

    def test_includes_correlation_ids(self):
        set_run_id("run-123")
        set_workflow_id("wf-1")

        parsed = json.loads(StructuredFormatter().format(_record()))

        assert parsed["run_id"] == "run-123"
        assert parsed["workflow_id"] == "wf-1"

    def test_redacts_sensitive_extra_fields(self):
        record = _record(api_key="sk-live", segment=3)

        parsed = json.loads(StructuredFormatter().format(record))

        assert parsed["extra"]["api_key"] == "***REDACTED***"
        assert parsed["extra"]["segment"] == 3

    def test_format_with_exception(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = _record()
            record.exc_info = sys.exc_info()

        parsed = json.loads(StructuredFormatter().format(record))

        assert parsed["exception"]["type"] == "ValueError"
        assert parsed["exception"]["message"] == "boom"


class TestDevelopmentFormatter:
    def test_shows_context(self):
        set_workflow_id("test-workflow-1")
        line = DevelopmentFormatter().format(_record())

        assert "wf:test-workflo" in line
        assert "Test message" in line


class TestLoggerAdapter:
    def test_get_logger_binds_extra(self):
        logger = get_logger("walkthrough.test", component="voiceover")

        assert isinstance(logger, LoggerAdapter)
        _, kwargs = logger.process("msg", {})
        assert kwargs["extra"]["component"] == "voiceover"

    def test_call_extra_wins_over_bound_extra(self):
        logger = get_logger("walkthrough.test", component="voiceover")

        _, kwargs = logger.process("msg", {"extra": {"component": "override"}})

        assert kwargs["extra"]["component"] == "override"

    def test_adds_run_id(self):
        set_run_id("abc")
        _, kwargs = get_logger("x").process("msg", {})

        assert kwargs["extra"]["run_id"] == "abc"


class TestSetupLogging:
    def test_json_console_and_file(self, tmp_path):
        log_file = tmp_path / "logs" / "pipeline.log"
        setup_logging(level="DEBUG", log_file=log_file, use_json=True)

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2
        assert isinstance(root.handlers[0].formatter, StructuredFormatter)
        assert log_file.parent.exists()

        setup_logging()


class TestContext:
    def test_clear_context(self):
        set_run_id("r")
        set_workflow_id("w")
        clear_context()

        assert run_id_var.get() is None
        assert workflow_id_var.get() is None


class TestLogTimer:
    def test_logs_start_and_completion(self):
        logger = get_logger("walkthrough.timer")
        with pytest.MonkeyPatch.context() as mp:
            calls = []
            mp.setattr(logger, "log", lambda level, msg, **kw: calls.append(msg))
            with LogTimer(logger, "stage") as timer:
                pass

        assert calls == ["Starting: stage", "Completed: stage"]
        assert timer.duration is not None and timer.duration >= 0

    def test_logs_failure_and_reraises(self):
        logger = get_logger("walkthrough.timer")
        errors = []
        with pytest.MonkeyPatch.context() as mp:
            mp.setattr(logger, "log", lambda *a, **kw: None)
            mp.setattr(logger, "error", lambda msg, **kw: errors.append((msg, kw["extra"]["error"])))
            with pytest.raises(RuntimeError):
                with LogTimer(logger, "stage"):
                    raise RuntimeError("bad")

        assert errors == [("Failed: stage", "bad")]
