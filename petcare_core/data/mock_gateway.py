# =============================================================================
# petcare_core/data/mock_gateway.py
# In-memory gateway for tests, demos and offline development
# =============================================================================

from __future__ import annotations
import copy
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

from petcare_core.errors import GatewayError, NotFoundError
from petcare_core.models.dates import to_iso_string, utc_now
from .gateway import AuthUser, Gateway, Row


@dataclass
class _Failure:
    operation: str
    table: Optional[str]
    message: str


class MockGateway(Gateway):
    """
    Mock gateway - behaves like the hosted backend without a network.

    The server side is emulated: ids are uuid4 strings, created_at is
    stamped on insert and rows come back as copies. Failures are injected
    per operation with fail_next().

    Usage:
        gateway = MockGateway()
        gateway.add_user("u1", "ana@example.com", "secret", sign_in=True)
        gateway.fail_next("insert", "duplicate key value")
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self.clock = clock or utc_now
        self.tables: Dict[str, List[Row]] = {}
        self.blobs: Dict[Tuple[str, str], Tuple[bytes, str]] = {}
        self.calls: List[Tuple[str, Optional[str]]] = []
        self._users: Dict[str, Tuple[AuthUser, str]] = {}
        self._session: Optional[AuthUser] = None
        self._failures: List[_Failure] = []
        self._url_counter = 0

    # ------------------------------------------------------------------
    # Test helpers
    # ------------------------------------------------------------------

    def fail_next(self, operation: str, message: str, table: Optional[str] = None) -> None:
        """Make the next matching call raise GatewayError(message)."""
        self._failures.append(_Failure(operation, table, message))

    def seed(self, table: str, rows: List[Row]) -> None:
        self.tables.setdefault(table, []).extend(copy.deepcopy(rows))

    def add_user(self, user_id: str, email: str, password: str, sign_in: bool = False) -> AuthUser:
        user = AuthUser(id=user_id, email=email, created_at=self.clock())
        self._users[email] = (user, password)
        if sign_in:
            self._session = user
        return user

    def calls_to(self, operation: str) -> int:
        return sum(1 for op, _ in self.calls if op == operation)

    def _record(self, operation: str, table: Optional[str] = None) -> None:
        self.calls.append((operation, table))
        for failure in self._failures:
            if failure.operation == operation and failure.table in (None, table):
                self._failures.remove(failure)
                raise GatewayError(failure.message, operation=operation, table=table)

    def _find(self, table: str, record_id: str) -> Optional[Row]:
        for row in self.tables.get(table, []):
            if row.get("id") == record_id:
                return row
        return None

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def query(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        ascending: bool = True,
        limit: Optional[int] = None,
    ) -> List[Row]:
        self._record("query", table)
        rows = [
            row for row in self.tables.get(table, [])
            if all(row.get(k) == v for k, v in (filters or {}).items())
        ]
        if order_by:
            # nulls last in both directions, as postgres orders them by default
            present = [r for r in rows if r.get(order_by) is not None]
            missing = [r for r in rows if r.get(order_by) is None]
            present.sort(key=lambda r: r[order_by], reverse=not ascending)
            rows = present + missing
        if limit is not None:
            rows = rows[:limit]
        return copy.deepcopy(rows)

    def insert(self, table: str, fields: Row) -> Row:
        self._record("insert", table)
        row = copy.deepcopy(fields)
        row["id"] = str(uuid.uuid4())
        row["created_at"] = to_iso_string(self.clock())
        self.tables.setdefault(table, []).append(row)
        return copy.deepcopy(row)

    def update(self, table: str, record_id: str, fields: Row) -> Row:
        self._record("update", table)
        row = self._find(table, record_id)
        if row is None:
            raise NotFoundError(f"No {table} row with id {record_id}", record_id=record_id, table=table)
        row.update(copy.deepcopy(fields))
        row["id"] = record_id
        return copy.deepcopy(row)

    def delete(self, table: str, record_id: str) -> None:
        self._record("delete", table)
        self.tables[table] = [r for r in self.tables.get(table, []) if r.get("id") != record_id]

    def upsert(self, table: str, fields: Row) -> Row:
        self._record("upsert", table)
        row = self._find(table, fields.get("id")) if fields.get("id") else None
        if row is None:
            row = copy.deepcopy(fields)
            row.setdefault("id", str(uuid.uuid4()))
            row.setdefault("created_at", to_iso_string(self.clock()))
            self.tables.setdefault(table, []).append(row)
        else:
            row.update(copy.deepcopy(fields))
        return copy.deepcopy(row)

    # ------------------------------------------------------------------
    # Blob storage
    # ------------------------------------------------------------------

    def upload_blob(self, bucket: str, path: str, data: bytes, content_type: str) -> None:
        self._record("upload", bucket)
        if (bucket, path) in self.blobs:
            raise GatewayError("The resource already exists", operation="upload", table=bucket)
        self.blobs[(bucket, path)] = (bytes(data), content_type)

    def signed_url(self, bucket: str, path: str, ttl_seconds: int) -> str:
        self._record("signed_url", bucket)
        if (bucket, path) not in self.blobs:
            raise GatewayError("Object not found", operation="signed_url", table=bucket)
        self._url_counter += 1
        return f"https://mock.storage/{bucket}/{path}?token={self._url_counter}&expires_in={ttl_seconds}"

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    def current_user(self) -> Optional[AuthUser]:
        self._record("get_user")
        return self._session

    def sign_up(self, email: str, password: str, name: str) -> Optional[AuthUser]:
        self._record("sign_up")
        if email in self._users:
            raise GatewayError("User already registered", operation="sign_up")
        user = AuthUser(
            id=str(uuid.uuid4()),
            email=email,
            created_at=self.clock(),
            metadata={"name": name},
        )
        self._users[email] = (user, password)
        self._session = user
        return user

    def sign_in(self, email: str, password: str) -> AuthUser:
        self._record("sign_in")
        entry = self._users.get(email)
        if entry is None or entry[1] != password:
            raise GatewayError("Invalid login credentials", operation="sign_in")
        self._session = entry[0]
        return entry[0]

    def sign_out(self) -> None:
        self._record("sign_out")
        self._session = None
