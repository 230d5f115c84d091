# =============================================================================
# petcare_core/data/gateway.py
# Remote Data Gateway interface
# =============================================================================
"""
Abstract contract every remote backend implements.

Gateway methods return plain rows (dicts as the backend sends them) and
raise GatewayError when the remote call fails; ``update`` raises
NotFoundError when no row matched the id. The stores above turn these
exceptions into ServiceResults.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

Row = Dict[str, Any]


@dataclass(frozen=True)
class AuthUser:
    """Identity of the signed-in account"""
    id: str
    email: str
    created_at: Optional[datetime] = None
    metadata: Optional[Dict[str, Any]] = None


class Gateway(ABC):
    """Authenticated CRUD, blob storage and session access"""

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    @abstractmethod
    def query(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        ascending: bool = True,
        limit: Optional[int] = None,
    ) -> List[Row]:
        """Rows matching all equality filters, ordered by order_by."""

    @abstractmethod
    def insert(self, table: str, fields: Row) -> Row:
        """Insert one row; the server assigns id and created_at."""

    @abstractmethod
    def update(self, table: str, record_id: str, fields: Row) -> Row:
        """Update one row by id and return it as stored."""

    @abstractmethod
    def delete(self, table: str, record_id: str) -> None:
        """Delete one row by id. Deleting a missing id is not an error."""

    @abstractmethod
    def upsert(self, table: str, fields: Row) -> Row:
        """Insert or update a row keyed by its primary key."""

    # ------------------------------------------------------------------
    # Blob storage
    # ------------------------------------------------------------------

    @abstractmethod
    def upload_blob(self, bucket: str, path: str, data: bytes, content_type: str) -> None:
        """Store bytes at bucket/path."""

    @abstractmethod
    def signed_url(self, bucket: str, path: str, ttl_seconds: int) -> str:
        """
        Expiring URL for a private object.

        Callers must re-request rather than cache the result past its TTL.
        """

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    @abstractmethod
    def current_user(self) -> Optional[AuthUser]:
        """The signed-in account, or None when unauthenticated."""

    @abstractmethod
    def sign_up(self, email: str, password: str, name: str) -> Optional[AuthUser]:
        """Register an account. None when the backend awaits email confirmation."""

    @abstractmethod
    def sign_in(self, email: str, password: str) -> AuthUser:
        """Open a session with email and password."""

    @abstractmethod
    def sign_out(self) -> None:
        """Close the current session."""
