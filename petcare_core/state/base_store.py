# =============================================================================
# petcare_core/state/base_store.py
# Busy flag, single-slot in-flight guard and change callbacks
# =============================================================================

from __future__ import annotations
import threading
from contextlib import contextmanager
from typing import Callable, Iterator, List

from petcare_core.errors import StoreBusyError
from petcare_core.services import BaseService


class ObservableStore(BaseService):
    """
    Base class for stores screens read from.

    One operation may be in flight per store instance. ``busy`` is True for
    its duration, and callbacks run whenever busy flips or state changes so
    screens can disable submit buttons and re-render.
    """

    def __init__(self):
        super().__init__()
        self._busy = False
        self._in_flight = threading.Lock()
        self._callbacks: List[Callable[..., None]] = []

    @property
    def busy(self) -> bool:
        return self._busy

    def register_callback(self, callback: Callable[..., None]) -> None:
        """Register a callback run with the store after every change."""
        if callback not in self._callbacks:
            self._callbacks.append(callback)

    def unregister_callback(self, callback: Callable[..., None]) -> None:
        """Remove a registered callback."""
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def _notify_callbacks(self) -> None:
        for callback in list(self._callbacks):
            try:
                callback(self)
            except Exception as e:
                self.logger.error(f"Error in store callback: {e}", exc_info=True)

    @contextmanager
    def _in_flight_guard(self, operation: str) -> Iterator[None]:
        """
        Mark the store busy for one operation.

        Raises:
            StoreBusyError: another operation is still in flight
        """
        if not self._in_flight.acquire(blocking=False):
            raise StoreBusyError(operation=operation)
        self._busy = True
        self._notify_callbacks()
        try:
            yield
        finally:
            self._busy = False
            self._in_flight.release()
            self._notify_callbacks()
