# =============================================================================
# petcare_core/errors/__init__.py
# Centralized Error Handling for the pet-care data layer
# =============================================================================

from .exceptions import (
    PetCareError,
    UnauthenticatedError,
    ValidationFailedError,
    GatewayError,
    NotFoundError,
    StoreBusyError,
    ConfigurationError,
)

from .handlers import (
    handle_error,
    ErrorContext,
    error_boundary,
)

__all__ = [
    # Exceptions
    "PetCareError",
    "UnauthenticatedError",
    "ValidationFailedError",
    "GatewayError",
    "NotFoundError",
    "StoreBusyError",
    "ConfigurationError",
    # Handlers
    "handle_error",
    "ErrorContext",
    "error_boundary",
]
