# =============================================================================
# petcare_core/errors/handlers.py
# Error Handling Utilities for the pet-care data layer
# =============================================================================

from __future__ import annotations
import functools
from typing import Optional, Callable, TypeVar, Any

from petcare_core.logging import get_logger
from .exceptions import PetCareError

logger = get_logger(__name__)

T = TypeVar("T")


def handle_error(
    error: Exception,
    log_error: bool = True,
    user_message: Optional[str] = None,
) -> str:
    """
    Centralized error handling function.

    Expected failures (PetCareError) are logged as warnings without a
    traceback; anything else is logged with one.

    Args:
        error: The exception to handle
        log_error: Whether to log the error
        user_message: Custom message to return (uses error message if None)

    Returns:
        The message a screen should present to the user
    """
    if isinstance(error, PetCareError):
        message = user_message or error.message
        if log_error:
            logger.warning(
                f"[{error.code}] {error.message}",
                extra={"details": error.details},
            )
        if not error.recoverable:
            return f"{message}. Please contact support."
        return message

    message = user_message or str(error)
    if log_error:
        logger.error(f"[UNKNOWN] {error}", exc_info=error)
    return message


class ErrorContext:
    """
    Context manager that logs an operation and swallows recoverable
    PetCareErrors raised inside it.

    Usage:
        with ErrorContext("Refreshing pets") as ctx:
            store.load(scope)
        if ctx.error:
            show(ctx.error)
    """

    def __init__(self, operation: str):
        self.operation = operation
        self.error: Optional[str] = None

    def __enter__(self) -> ErrorContext:
        logger.debug(f"Starting: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_type is None:
            logger.debug(f"Completed: {self.operation}")
            return False

        if isinstance(exc_val, PetCareError) and exc_val.recoverable:
            self.error = handle_error(exc_val)
            return True

        logger.error(f"Error during: {self.operation}: {exc_val}")
        return False


def error_boundary(
    default_return: Any = None,
    log: bool = True,
):
    """
    Decorator returning a default value instead of raising a PetCareError.

    Usage:
        @error_boundary(default_return=None)
        def photo_url(self, pet):
            ...
    """
    def decorator(func: Callable[..., T]) -> Callable[..., Optional[T]]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Optional[T]:
            try:
                return func(*args, **kwargs)
            except PetCareError as e:
                if log:
                    handle_error(e)
                return default_return

        return wrapper

    return decorator
