# =============================================================================
# petcare_core/state/__init__.py
# Stores mirroring remote tables for the screens
# =============================================================================

from .base_store import ObservableStore
from .selection import SelectionState, SelectionTracker
from .entity_store import EntityStore, Scope, SERVER_FIELDS
from .auth_store import AuthStore
from .pet_store import PetStore
from .care_store import CareRecordStore

__all__ = [
    "ObservableStore",
    "SelectionState",
    "SelectionTracker",
    "EntityStore",
    "Scope",
    "SERVER_FIELDS",
    "AuthStore",
    "PetStore",
    "CareRecordStore",
]
