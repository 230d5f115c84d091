# =============================================================================
# petcare_core/state/entity_store.py
# Remote-backed collection store
# =============================================================================
"""
EntityStore keeps one Collection of records as a cache of server state.

Rules:
- A record enters the Collection only from a successful remote insert and
  carries the server's id.
- After a successful update the matching entry is replaced by the row the
  server returned; partial fields are never merged locally.
- A record leaves the Collection only after the remote delete succeeded.
- On any failure the Collection and the Selection are left as they were.

Concurrency: one operation in flight per store. A call made while another
is still running is rejected with a STORE_BUSY result; nothing is queued
and no response is ever applied out of order.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Generic, Iterator, List, Optional, Tuple, TypeVar

from petcare_core.data import AuthUser, Gateway
from petcare_core.errors import NotFoundError, UnauthenticatedError
from petcare_core.models import EntitySpec, InsertPolicy, Record, serialize_fields
from petcare_core.models.dates import utc_now
from petcare_core.services import ServiceResult
from .base_store import ObservableStore
from .selection import SelectionTracker

T = TypeVar("T", bound=Record)

# Columns only the server assigns
SERVER_FIELDS = ("id", "created_at")


@dataclass(frozen=True)
class Scope:
    """Equality filter selecting the records a Collection mirrors"""
    column: str
    value: Any

    def as_filters(self) -> Dict[str, Any]:
        return {self.column: self.value}


class EntityStore(ObservableStore, Generic[T]):
    """
    Collection of one record kind, mutated only through the gateway.

    Usage:
        pets = EntityStore(gateway, PETS, identity=auth.current_identity)
        pets.load()
        result = pets.create({"name": "Rex", "type": "dog"})
        if not result:
            show(result.error)
    """

    def __init__(
        self,
        gateway: Gateway,
        spec: EntitySpec[T],
        identity: Optional[Callable[[], Optional[AuthUser]]] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        super().__init__()
        self.gateway = gateway
        self.spec = spec
        self.clock = clock
        self._identity = identity or gateway.current_user
        self._items: List[T] = []
        self.scope: Optional[Scope] = None
        self.last_error: Optional[str] = None
        self.selection: SelectionTracker[T] = SelectionTracker(self.get)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def items(self) -> Tuple[T, ...]:
        return tuple(self._items)

    def get(self, record_id: str) -> Optional[T]:
        for item in self._items:
            if item.id == record_id:
                return item
        return None

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(tuple(self._items))

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def load(self, scope: Optional[Scope] = None) -> ServiceResult:
        """
        Replace the Collection with the server's rows for a scope.

        User-owned kinds default to the signed-in user's records; other
        kinds reuse the last scope when none is given. Failures are logged
        and kept on ``last_error``; the Collection is left untouched.
        """
        result = self.safe_execute(f"Loading {self.spec.table}", self._load, scope)
        self.last_error = None if result.success else result.error
        return result

    def _load(self, scope: Optional[Scope]) -> Tuple[T, ...]:
        with self._in_flight_guard("load"):
            scope = scope or self._default_scope()
            rows = self.gateway.query(
                self.spec.table,
                scope.as_filters(),
                order_by=self.spec.order_by,
                ascending=self.spec.ascending,
            )
            self._items = [self.spec.record_cls.from_row(row) for row in rows]
            self.scope = scope
            if self.selection.selected_id and self.get(self.selection.selected_id) is None:
                self.selection.clear()
        return self.items

    def create(self, fields: Dict[str, Any]) -> ServiceResult:
        """
        Insert a record and add the server's row to the Collection.

        Raises:
            ValueError: fields carry a server-assigned column (caller bug)
        """
        self._reject_server_fields(fields)
        return self.safe_execute(f"Creating {self.spec.table} record", self._create, dict(fields))

    def _create(self, values: Dict[str, Any]) -> T:
        if self.spec.user_owned:
            values.pop(self.spec.owner_column, None)
        self.spec.validate(values)

        with self._in_flight_guard("create"):
            if self.spec.user_owned:
                values[self.spec.owner_column] = self.require_identity().id

            row = self.gateway.insert(self.spec.table, serialize_fields(values))
            record = self.spec.record_cls.from_row(row)
            self._items = self._place(record, self._items)
        return record

    def update(self, record_id: str, fields: Dict[str, Any]) -> ServiceResult:
        """
        Send a partial update; replace the entry with the server's row.

        Raises:
            ValueError: fields carry a server-assigned column (caller bug)
        """
        self._reject_server_fields(fields)
        return self.safe_execute(
            f"Updating {self.spec.table} record {record_id}", self._update, record_id, dict(fields)
        )

    def _update(self, record_id: str, values: Dict[str, Any]) -> T:
        self.spec.validate_partial(values)

        with self._in_flight_guard("update"):
            if self.get(record_id) is None:
                raise NotFoundError(
                    f"Record {record_id} is no longer available",
                    record_id=record_id,
                    table=self.spec.table,
                )
            if self.spec.tracks_updated_at:
                values["updated_at"] = self.clock()

            row = self.gateway.update(self.spec.table, record_id, serialize_fields(values))
            record = self.spec.record_cls.from_row(row)
            replaced = [record if item.id == record_id else item for item in self._items]
            if self.spec.insert_policy is InsertPolicy.SORTED:
                replaced = self._sorted(replaced)
            self._items = replaced
        return record

    def delete(self, record_id: str) -> ServiceResult:
        """Delete a record. An id not in the Collection is a no-op success."""
        return self.safe_execute(f"Deleting {self.spec.table} record {record_id}", self._delete, record_id)

    def _delete(self, record_id: str) -> None:
        with self._in_flight_guard("delete"):
            if self.get(record_id) is None:
                self.logger.debug(f"Delete of absent {self.spec.table} record {record_id} ignored")
                return None

            self.gateway.delete(self.spec.table, record_id)
            self._items = [item for item in self._items if item.id != record_id]
            self.selection.on_removed(record_id)
        return None

    def require_identity(self) -> AuthUser:
        """The signed-in owner. Raises UnauthenticatedError when there is none."""
        user = self._identity()
        if user is None:
            raise UnauthenticatedError()
        return user

    def clear(self) -> None:
        """Forget every record, e.g. on sign-out."""
        self._items = []
        self.scope = None
        self.last_error = None
        self.selection.clear()
        self._notify_callbacks()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _default_scope(self) -> Scope:
        if self.spec.user_owned:
            return Scope(self.spec.owner_column, self.require_identity().id)
        if self.scope is None:
            raise ValueError(f"load() of {self.spec.table} needs a scope")
        return self.scope

    @staticmethod
    def _reject_server_fields(fields: Dict[str, Any]) -> None:
        assigned = [name for name in SERVER_FIELDS if name in fields]
        if assigned:
            raise ValueError(f"Server-assigned fields cannot be written: {assigned}")

    def _sorted(self, items: List[T]) -> List[T]:
        key = self.spec.order_by
        present = [i for i in items if getattr(i, key, None) is not None]
        missing = [i for i in items if getattr(i, key, None) is None]
        present.sort(key=lambda i: getattr(i, key), reverse=not self.spec.ascending)
        return present + missing

    def _place(self, record: T, items: List[T]) -> List[T]:
        if self.spec.insert_policy is InsertPolicy.SORTED:
            return self._sorted(items + [record])
        return [record] + items
