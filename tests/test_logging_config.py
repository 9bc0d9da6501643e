"""Tests for logging configuration."""

import json
import logging

import pytest

from sysview.logging_config import (
    ENGINE_LOGGER,
    JSONFormatter,
    build_logging_config,
    get_logger,
    setup_logging,
)


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_format_fields(self):
        """Test that records become JSON objects."""
        record = logging.LogRecord(
            "sysview.view", logging.INFO, __file__, 10, "Group promoted: %s", ("ag0",), None
        )
        data = json.loads(JSONFormatter().format(record))
        assert data["level"] == "INFO"
        assert data["logger"] == "sysview.view"
        assert data["message"] == "Group promoted: ag0"

    def test_format_context(self):
        """Test that extra context is kept."""
        record = logging.LogRecord(
            "sysview", logging.DEBUG, __file__, 10, "Trace data applied", (), None
        )
        record.context = {"activities": 3}
        data = json.loads(JSONFormatter().format(record))
        assert data["context"] == {"activities": 3}


class TestBuildLoggingConfig:
    """Tests for build_logging_config()."""

    def test_text_console(self, tmp_path):
        """Test that the console can log plain text while the file stays JSON."""
        config = build_logging_config(log_file=tmp_path / "app.log", console_format="text")
        assert config["handlers"]["console"]["formatter"] == "text"
        assert config["handlers"]["file"]["formatter"] == "json"

    def test_engine_level(self, tmp_path):
        """Test that the engine logger gets its own level."""
        config = build_logging_config(
            log_level="warning", log_file=tmp_path / "app.log", engine_log_level="debug"
        )
        assert config["root"]["level"] == "WARNING"
        assert config["loggers"] == {ENGINE_LOGGER: {"level": "DEBUG"}}

    def test_engine_level_default(self, tmp_path):
        """Test that the engine logger follows the root level by default."""
        config = build_logging_config(log_file=tmp_path / "app.log")
        assert config["loggers"] == {}

    def test_unknown_console_format(self, tmp_path):
        """Test that an unknown console format is rejected."""
        with pytest.raises(ValueError):
            build_logging_config(log_file=tmp_path / "app.log", console_format="xml")


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_writes_log_file(self, tmp_path):
        """Test that setup creates the log file handler."""
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        log_file = tmp_path / "logs" / "app.log"

        try:
            setup_logging(log_level="debug", log_file=str(log_file))

            get_logger("sysview.test").info("hello")
            for handler in root.handlers:
                handler.flush()

            assert log_file.exists()
            assert "hello" in log_file.read_text(encoding="utf-8")
            assert root.level == logging.DEBUG
        finally:
            for handler in root.handlers[:]:
                root.removeHandler(handler)
                handler.close()
            for handler in saved_handlers:
                root.addHandler(handler)
            root.setLevel(saved_level)

    def test_engine_debug_under_quiet_root(self, tmp_path):
        """Test that engine debug records reach the file while the root is quiet."""
        root = logging.getLogger()
        engine = logging.getLogger(ENGINE_LOGGER)
        saved_handlers, saved_level = root.handlers[:], root.level
        saved_engine_level = engine.level
        log_file = tmp_path / "app.log"

        try:
            setup_logging(
                log_level="warning",
                log_file=log_file,
                console_format="text",
                engine_log_level="debug",
            )

            get_logger("sysview.view.system_view").debug("Trace data applied")
            get_logger("sysview.app").info("not written")
            for handler in root.handlers:
                handler.flush()

            lines = log_file.read_text(encoding="utf-8").splitlines()
            assert [json.loads(line)["message"] for line in lines] == ["Trace data applied"]
        finally:
            for handler in root.handlers[:]:
                root.removeHandler(handler)
                handler.close()
            for handler in saved_handlers:
                root.addHandler(handler)
            root.setLevel(saved_level)
            engine.setLevel(saved_engine_level)
