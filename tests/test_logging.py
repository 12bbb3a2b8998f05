"""
Tests for logging utilities and configuration.
"""

import json
import logging
import threading
import time
from pathlib import Path
from typing import List

import pytest

from projcore.core.cache import CRSCache
from projcore.core.datum.ntv2 import load_ntv2
from projcore.core.logging_config import (
    ContextFilter,
    JSONFormatter,
    LogContext,
    current_log_context,
    get_log_level,
    setup_logging,
)
from projcore.utils.logging import PerformanceTimer, log_performance


@pytest.fixture
def restore_root_logger():
    """Restore the root logger's handlers and level after a test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(logging.DEBUG)
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture
def projcore_records():
    """Collect projcore records through a handler carrying the context filter."""
    handler = _ListHandler()
    handler.addFilter(ContextFilter())
    logger = logging.getLogger("projcore")
    level = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    yield handler.records
    logger.removeHandler(handler)
    logger.setLevel(level)


def _record(msg: str = "Test message") -> logging.LogRecord:
    return logging.LogRecord(
        name="projcore.core.transform",
        level=logging.INFO,
        pathname="/path/to/basic.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=None,
    )


class TestLoggingConfig:
    """Tests for logging configuration."""

    def test_get_log_level(self):
        """Test log level name conversion."""
        assert get_log_level("DEBUG") == logging.DEBUG
        assert get_log_level("INFO") == logging.INFO
        assert get_log_level("WARNING") == logging.WARNING
        assert get_log_level("ERROR") == logging.ERROR
        assert get_log_level("CRITICAL") == logging.CRITICAL
        assert get_log_level("invalid") == logging.INFO  # Default

    def test_get_log_level_case_insensitive(self):
        """Test log level is case insensitive."""
        assert get_log_level("debug") == logging.DEBUG
        assert get_log_level("DeBuG") == logging.DEBUG

    def test_setup_logging_console_only(self, restore_root_logger):
        """Test logging setup with console handler only."""
        setup_logging(log_level="DEBUG", enable_console=True)

        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 1
        assert any(isinstance(f, ContextFilter) for f in restore_root_logger.handlers[0].filters)

    def test_setup_logging_json_file(self, restore_root_logger, tmp_path: Path):
        """Test file logging writes JSON lines carrying context fields."""
        log_file = tmp_path / "logs" / "projcore.log"
        setup_logging(log_level="INFO", log_file=log_file, json_logs=True, enable_console=False)

        with LogContext(grid="ntv2.gsb"):
            logging.getLogger("projcore.test").info("grid loaded")
        for handler in restore_root_logger.handlers:
            handler.flush()

        lines = log_file.read_text(encoding="utf-8").strip().splitlines()
        records = [json.loads(line) for line in lines]
        loaded = [record for record in records if record["message"] == "grid loaded"]
        assert loaded[0]["grid"] == "ntv2.gsb"


class TestLogContext:
    """Tests for context fields on log records."""

    def test_fields_active_inside_block(self):
        """Test fields are visible only inside the block."""
        assert current_log_context() == {}
        with LogContext(transform="EPSG:4326->EPSG:2227", grid="ntv2.gsb"):
            assert current_log_context() == {
                "transform": "EPSG:4326->EPSG:2227",
                "grid": "ntv2.gsb",
            }
        assert current_log_context() == {}

    def test_nesting(self):
        """Test inner contexts add to and override outer ones."""
        with LogContext(grid="outer.gsb", crs_key="+proj=utm"):
            with LogContext(grid="inner.gsb"):
                assert current_log_context() == {"grid": "inner.gsb", "crs_key": "+proj=utm"}
            assert current_log_context()["grid"] == "outer.gsb"

    def test_restored_after_exception(self):
        """Test an exception leaving the block still removes the fields."""
        with pytest.raises(ValueError):
            with LogContext(grid="broken.gsb"):
                raise ValueError("bad grid")
        assert current_log_context() == {}

    def test_thread_local(self):
        """Test another thread does not see this thread's fields."""
        seen = []
        with LogContext(grid="main.gsb"):
            worker = threading.Thread(target=lambda: seen.append(current_log_context()))
            worker.start()
            worker.join()
        assert seen == [{}]

    def test_filter_keeps_explicit_extra(self):
        """Test the filter adds fields without overwriting extra= values."""
        record = _record()
        record.grid = "explicit.gsb"
        with LogContext(grid="context.gsb", crs_key="+proj=merc"):
            assert ContextFilter().filter(record)
        assert record.grid == "explicit.gsb"
        assert record.crs_key == "+proj=merc"

    def test_grid_loading_tagged(self, projcore_records, tmp_path: Path, ntv2_bytes):
        """Test records emitted while loading a grid file carry its name."""
        path = tmp_path / "tagged.gsb"
        path.write_bytes(ntv2_bytes)

        load_ntv2(path)

        decoded = [r for r in projcore_records if "Decoded NTv2 grid" in r.getMessage()]
        assert decoded and decoded[0].grid == "tagged.gsb"

    def test_cache_miss_tagged(self, projcore_records):
        """Test records emitted while building a cached CRS carry its key."""
        CRSCache(max_entries=2).get_or_create("+zone=36 +proj=utm", lambda: None)

        timed = [r for r in projcore_records if "crs_cache_miss completed" in r.getMessage()]
        assert timed and timed[0].crs_key == "+proj=utm +zone=36"


class TestFormatters:
    """Tests for the JSON formatter."""

    def test_json_formatter_basic(self):
        """Test JSON formatter with basic record."""
        data = json.loads(JSONFormatter().format(_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "projcore.core.transform"
        assert data["message"] == "Test message"
        assert data["line"] == 42
        assert "msg" not in data and "args" not in data

    def test_json_formatter_with_extra_fields(self):
        """Test JSON formatter with extra fields."""
        record = _record()
        record.grid = "ntv2.gsb"
        record.duration_ms = 45.67

        data = json.loads(JSONFormatter().format(record))

        assert data["grid"] == "ntv2.gsb"
        assert data["duration_ms"] == 45.67


class TestLogPerformance:
    """Tests for performance logging helpers."""

    def test_log_performance_basic(self, caplog):
        """Test basic performance logging."""

        @log_performance(log_level=logging.INFO)
        def decode():
            return "done"

        with caplog.at_level(logging.INFO):
            result = decode()

        assert result == "done"
        assert "executed in" in caplog.text

    def test_log_performance_with_threshold(self, caplog):
        """Test performance logging with threshold."""

        @log_performance(log_level=logging.INFO, threshold_ms=1000)
        def fast_func():
            return "done"

        with caplog.at_level(logging.INFO):
            fast_func()

        assert "executed in" not in caplog.text

    def test_log_performance_logs_on_exception(self, caplog):
        """Test the timing is logged even when the function raises."""

        @log_performance(log_level=logging.INFO)
        def broken():
            raise ValueError("boom")

        with caplog.at_level(logging.INFO):
            with pytest.raises(ValueError):
                broken()

        assert "executed in" in caplog.text

    def test_performance_timer_basic(self, caplog):
        """Test basic performance timer."""
        with caplog.at_level(logging.INFO):
            with PerformanceTimer("grid_decode", log_level=logging.INFO):
                time.sleep(0.01)

        assert "grid_decode completed" in caplog.text

    def test_performance_timer_duration(self):
        """Test performance timer duration calculation."""
        with PerformanceTimer("test") as timer:
            time.sleep(0.05)

        assert timer.duration_ms is not None
        assert timer.duration_ms >= 45
