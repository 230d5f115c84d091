# =============================================================================
# petcare_core/logging/config.py
# Logging Configuration for the pet-care data layer
# =============================================================================

import logging
import sys
import time
from datetime import date
from pathlib import Path
from typing import Any, List, Optional, Union


LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_DIR = Path("logs")
PACKAGE_LOGGER = "petcare_core"

# Transport libraries underneath supabase-py log every request at INFO
NOISY_LOGGERS = ("urllib3", "httpx", "httpcore", "hpack", "supabase", "postgrest", "gotrue", "storage3")


def log_file_name(day: Optional[date] = None) -> str:
    """Daily log file name, e.g. petcare_2025-03-15.log"""
    return f"petcare_{(day or date.today()).isoformat()}.log"


def setup_logging(
    level: int = logging.INFO,
    log_to_file: bool = True,
    log_dir: Union[str, Path] = LOG_DIR,
    log_filename: Optional[str] = None,
    library_level: int = logging.WARNING,
) -> List[logging.Handler]:
    """
    Configure logging for an app embedding the pet-care stores.

    Replaces any handlers already on the root logger.

    Args:
        level: Level of the root logger (default: INFO)
        log_to_file: Also write to a daily file in log_dir
        log_dir: Directory for log files, created on demand
        log_filename: Custom file name (default: petcare_YYYY-MM-DD.log)
        library_level: Level for the HTTP and Supabase client loggers

    Returns:
        The handlers installed on the root logger
    """
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_to_file:
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(directory / (log_filename or log_file_name())))

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=handlers,
        force=True,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)

    logging.getLogger(PACKAGE_LOGGER).info("Logging initialized")
    return handlers


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the given name.

    Usage:
        from petcare_core.logging import get_logger
        logger = get_logger(__name__)
        logger.info("Loading pets")
    """
    return logging.getLogger(name)


class LogContext:
    """
    Context manager logging the duration and outcome of one store call.

    Keyword context is appended to every message, so a failed call says
    which table or pet it was about.

    Usage:
        with LogContext(logger, "Loading expenses", pet_id="p1"):
            gateway.query("expenses", {"pet_id": "p1"})
        # Logs: "Loading expenses [pet_id=p1]... started"
        # Logs: "Loading expenses [pet_id=p1]... completed (0.21s)"
    """

    def __init__(self, logger: logging.Logger, operation: str, **context: Any):
        self.logger = logger
        self.operation = operation
        if context:
            fields = " ".join(f"{key}={value}" for key, value in context.items())
            self.operation = f"{operation} [{fields}]"
        self.start_time = None
        self.elapsed: Optional[float] = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        self.logger.debug(f"{self.operation}... started")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.elapsed = time.perf_counter() - self.start_time

        if exc_type is None:
            self.logger.info(f"{self.operation}... completed ({self.elapsed:.2f}s)")
        else:
            self.logger.warning(f"{self.operation}... failed ({self.elapsed:.2f}s): {exc_val}")

        return False
