# =============================================================================
# tests/unit/test_logging.py
# Unit Tests for logging setup and LogContext
# =============================================================================

import logging
import pytest
from datetime import date

from petcare_core.logging import LogContext, get_logger, log_file_name, setup_logging
from petcare_core.logging.config import NOISY_LOGGERS


@pytest.fixture
def restore_logging():
    """Put the root and library loggers back after setup_logging"""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    library_levels = {name: logging.getLogger(name).level for name in NOISY_LOGGERS}
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    for name, lib_level in library_levels.items():
        logging.getLogger(name).setLevel(lib_level)


class TestSetupLogging:
    """Test root logger configuration"""

    def test_console_and_file_handlers(self, tmp_path, restore_logging):
        handlers = setup_logging(log_dir=tmp_path / "logs", log_filename="run.log")

        assert len(handlers) == 2
        assert isinstance(handlers[0], logging.StreamHandler)
        assert isinstance(handlers[1], logging.FileHandler)
        assert logging.getLogger().handlers == handlers

        handlers[1].flush()
        assert "Logging initialized" in (tmp_path / "logs" / "run.log").read_text()

    def test_console_only(self, tmp_path, restore_logging):
        handlers = setup_logging(level=logging.DEBUG, log_to_file=False, log_dir=tmp_path / "unused")

        assert len(handlers) == 1
        assert logging.getLogger().level == logging.DEBUG
        assert not (tmp_path / "unused").exists()

    def test_library_loggers_quietened(self, restore_logging):
        setup_logging(log_to_file=False)

        for name in ("httpx", "postgrest", "gotrue"):
            assert logging.getLogger(name).level == logging.WARNING

    def test_library_level_configurable(self, restore_logging):
        setup_logging(log_to_file=False, library_level=logging.ERROR)
        assert logging.getLogger("supabase").level == logging.ERROR

    def test_daily_file_name(self):
        assert log_file_name(date(2025, 3, 15)) == "petcare_2025-03-15.log"


class TestLogContext:
    """Test operation timing messages"""

    def test_logs_completion_with_context(self, caplog):
        logger = get_logger("petcare_test")
        caplog.set_level(logging.DEBUG, logger="petcare_test")

        with LogContext(logger, "Loading expenses", pet_id="p1") as ctx:
            pass

        messages = [r.getMessage() for r in caplog.records]
        assert messages[0] == "Loading expenses [pet_id=p1]... started"
        assert messages[1].startswith("Loading expenses [pet_id=p1]... completed")
        assert ctx.elapsed >= 0

    def test_logs_failure_and_reraises(self, caplog):
        logger = get_logger("petcare_test")
        caplog.set_level(logging.INFO, logger="petcare_test")

        with pytest.raises(RuntimeError):
            with LogContext(logger, "Loading pets"):
                raise RuntimeError("offline")

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert "Loading pets... failed" in record.getMessage()
        assert record.getMessage().endswith("offline")
