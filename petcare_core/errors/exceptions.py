# =============================================================================
# petcare_core/errors/exceptions.py
# Custom Exception Hierarchy for the pet-care data layer
# =============================================================================

from typing import Optional, Dict, Any


class PetCareError(Exception):
    """
    Base exception for all pet-care data layer errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code (e.g., "GATEWAY_ERROR")
        details: Additional context as a dictionary
        recoverable: Whether the error can be recovered from
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        recoverable: bool = True,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or "PETCARE_ERROR"
        self.details = details or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        base = f"[{self.code}] {self.message}"
        if self.details:
            base += f" | Details: {self.details}"
        return base

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization"""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
            "recoverable": self.recoverable,
        }


# =============================================================================
# SESSION / INPUT EXCEPTIONS
# =============================================================================

class UnauthenticatedError(PetCareError):
    """Raised when an operation needs a signed-in user and there is none"""

    def __init__(self, message: str = "Not authenticated", **kwargs):
        super().__init__(message=message, code="UNAUTHENTICATED", **kwargs)


class ValidationFailedError(PetCareError):
    """Raised when a required field is missing or malformed, before any network call"""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if field:
            details["field"] = field
        self.field = field

        super().__init__(
            message=message,
            code="VALIDATION_FAILED",
            details=details,
            **kwargs,
        )


# =============================================================================
# REMOTE EXCEPTIONS
# =============================================================================

class GatewayError(PetCareError):
    """Raised when a remote call fails (network, permission, constraint violation)"""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        table: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if operation:
            details["operation"] = operation
        if table:
            details["table"] = table

        super().__init__(
            message=message,
            code="GATEWAY_ERROR",
            details=details,
            **kwargs,
        )


class NotFoundError(PetCareError):
    """Raised when an operation targets a record id that is no longer present"""

    def __init__(
        self,
        message: str,
        record_id: Optional[str] = None,
        table: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if record_id:
            details["record_id"] = record_id
        if table:
            details["table"] = table

        super().__init__(
            message=message,
            code="NOT_FOUND",
            details=details,
            **kwargs,
        )


# =============================================================================
# STORE EXCEPTIONS
# =============================================================================

class StoreBusyError(PetCareError):
    """Raised when a store operation overlaps one that is still in flight"""

    def __init__(
        self,
        message: str = "Another operation is already in progress",
        operation: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if operation:
            details["operation"] = operation

        super().__init__(
            message=message,
            code="STORE_BUSY",
            details=details,
            **kwargs,
        )


# =============================================================================
# CONFIGURATION EXCEPTIONS
# =============================================================================

class ConfigurationError(PetCareError):
    """Raised when configuration is invalid or missing"""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if config_key:
            details["config_key"] = config_key

        super().__init__(
            message=message,
            code="CONFIG_ERROR",
            details=details,
            recoverable=False,
            **kwargs,
        )
