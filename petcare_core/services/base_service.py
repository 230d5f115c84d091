# =============================================================================
# petcare_core/services/base_service.py
# Base Service Class with Common Functionality
# =============================================================================

from __future__ import annotations
from abc import ABC
from typing import Optional, Dict, Any, Callable
from dataclasses import dataclass

from petcare_core.logging import get_logger, LogContext
from petcare_core.errors import PetCareError


@dataclass
class ServiceResult:
    """
    Standard result container for service operations.

    Every write operation returns one of these: either success carrying
    the server-confirmed record in ``data``, or failure carrying a
    human-readable ``error`` and a machine-readable ``error_code``
    (UNAUTHENTICATED, VALIDATION_FAILED, GATEWAY_ERROR, NOT_FOUND,
    STORE_BUSY). There is no partial success.
    """
    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def ok(cls, data: Any = None, metadata: Dict[str, Any] = None) -> ServiceResult:
        """Create a successful result"""
        return cls(success=True, data=data, metadata=metadata)

    @classmethod
    def fail(
        cls,
        error: str,
        error_code: str = "UNKNOWN",
        metadata: Dict[str, Any] = None
    ) -> ServiceResult:
        """Create a failed result"""
        return cls(
            success=False,
            error=error,
            error_code=error_code,
            metadata=metadata,
        )

    @classmethod
    def from_exception(cls, e: Exception) -> ServiceResult:
        """Create a failed result from an exception"""
        if isinstance(e, PetCareError):
            return cls(
                success=False,
                error=e.message,
                error_code=e.code,
                metadata=e.details,
            )
        return cls(
            success=False,
            error=str(e),
            error_code="EXCEPTION",
        )


class BaseService(ABC):
    """
    Abstract base class for all services and stores.

    Provides common functionality:
    - Logging
    - Error handling
    - Result standardization

    Usage:
        class MyStore(BaseService):
            def refresh(self) -> ServiceResult:
                return self.safe_execute("Refreshing", self._refresh)
    """

    def __init__(self):
        self.logger = get_logger(self.__class__.__name__)

    def log_operation(self, operation: str, **context: Any) -> LogContext:
        """
        Create a logging context for an operation.

        Usage:
            with self.log_operation("Loading pets", user_id=user.id):
                rows = gateway.query("pets", ...)
        """
        return LogContext(self.logger, operation, **context)

    def safe_execute(
        self,
        operation: str,
        func: Callable[..., Any],
        *args,
        **kwargs
    ) -> ServiceResult:
        """
        Execute a function, turning expected failures into a failed result.

        PetCareErrors become failed ServiceResults. Any other exception is a
        programming error and propagates.
        """
        try:
            with self.log_operation(operation):
                result = func(*args, **kwargs)
        except PetCareError as e:
            return ServiceResult.from_exception(e)
        return ServiceResult.ok(result)
