"""Tests for logging configuration and performance timing."""

import logging

import pytest

from logging_config import DetailedErrorFormatter, configure_logging, get_log_level
from performance_timing import PerformanceTimer, timed_function, timed_operation


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestGetLogLevel:
    def test_cli_beats_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        assert get_log_level("debug") == logging.DEBUG

    def test_env_then_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "warning")
        assert get_log_level() == logging.WARNING
        monkeypatch.delenv("LOG_LEVEL")
        assert get_log_level() == logging.INFO

    def test_invalid_level(self) -> None:
        with pytest.raises(ValueError, match="Invalid log level"):
            get_log_level("LOUD")


class TestConfigureLogging:
    def test_creates_log_file_directory(self, tmp_path, restore_root_logger) -> None:
        log_file = tmp_path / "logs" / "report.log"
        root = configure_logging(log_file=str(log_file), log_level="INFO")
        logging.getLogger("report_builder").info("built")
        for handler in root.handlers:
            handler.flush()
        assert "built" in log_file.read_text()

    def test_library_loggers_stay_at_warning(self, restore_root_logger) -> None:
        configure_logging(log_level="DEBUG")
        assert logging.getLogger("reportlab").level == logging.WARNING
        configure_logging(log_level="ERROR")
        assert logging.getLogger("reportlab").level == logging.ERROR

    def test_error_records_use_detailed_format(self) -> None:
        formatter = DetailedErrorFormatter()
        record = logging.LogRecord("x", logging.ERROR, __file__, 10, "boom", None, None, func="render")
        assert "render:10" in formatter.format(record)
        record = logging.LogRecord("x", logging.INFO, __file__, 10, "fine", None, None, func="render")
        assert "render:10" not in formatter.format(record)


class TestTiming:
    def test_timed_operation_logs_completion(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="performance_timing"):
            with timed_operation("layout.summary", client="Acme") as timer:
                timer.checkpoint("kpis")
        assert "PERF: [layout.summary] completed in" in caplog.text
        assert "client=Acme" in caplog.text

    def test_timed_function(self, caplog: pytest.LogCaptureFixture) -> None:
        @timed_function("report_write")
        def work() -> int:
            return 3

        with caplog.at_level(logging.INFO, logger="performance_timing"):
            assert work() == 3
        assert "PERF: [report_write] completed" in caplog.text

    def test_checkpoint_requires_start(self) -> None:
        with pytest.raises(RuntimeError):
            PerformanceTimer("never").checkpoint("x")

    def test_stop_returns_result(self) -> None:
        timer = PerformanceTimer("op").start()
        timer.checkpoint("half")
        result = timer.stop()
        assert result.operation == "op"
        assert "half" in result.checkpoints
        assert result.duration_ms >= 0
