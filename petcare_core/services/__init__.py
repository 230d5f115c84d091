# =============================================================================
# petcare_core/services/__init__.py
# Service Layer for the pet-care data layer
# =============================================================================

from .base_service import BaseService, ServiceResult

# The Mutation Result every store operation returns
MutationResult = ServiceResult

__all__ = ["BaseService", "ServiceResult", "MutationResult"]
