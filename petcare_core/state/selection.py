# =============================================================================
# petcare_core/state/selection.py
# Focused-record tracking resolved against a live Collection
# =============================================================================

from __future__ import annotations
from enum import Enum
from typing import Callable, Generic, Optional, TypeVar

from petcare_core.models import Record

T = TypeVar("T", bound=Record)


class SelectionState(Enum):
    EMPTY = "empty"
    FOCUSED = "focused"


class SelectionTracker(Generic[T]):
    """
    Holds the id of the focused record, never a copy of it.

    ``selected`` looks the id up in the owning Collection on every read, so
    an update to that record is visible immediately. The owning store calls
    ``on_removed`` after a confirmed delete.

    Transitions:
        EMPTY -> FOCUSED(id)        select(record)
        FOCUSED(id) -> EMPTY        select(None), clear(), deletion of id
        FOCUSED(id) -> FOCUSED(id)  update of id (by resolution)
    """

    def __init__(self, resolve: Callable[[str], Optional[T]]):
        self._resolve = resolve
        self._selected_id: Optional[str] = None

    @property
    def state(self) -> SelectionState:
        return SelectionState.EMPTY if self._selected_id is None else SelectionState.FOCUSED

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    @property
    def selected(self) -> Optional[T]:
        if self._selected_id is None:
            return None
        return self._resolve(self._selected_id)

    def select(self, record: Optional[T]) -> None:
        """
        Focus a record, or clear focus with None.

        Raises:
            ValueError: record is not in the tracked Collection
        """
        if record is None:
            self._selected_id = None
            return
        if self._resolve(record.id) is None:
            raise ValueError(f"Cannot select record {record.id}: not in the collection")
        self._selected_id = record.id

    def clear(self) -> None:
        self._selected_id = None

    def on_removed(self, record_id: str) -> None:
        if self._selected_id == record_id:
            self._selected_id = None
