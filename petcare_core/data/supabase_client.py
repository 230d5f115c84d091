# =============================================================================
# petcare_core/data/supabase_client.py
# Supabase Client Configuration and the Supabase-backed gateway
# Handles database connections, CRUD, storage and auth calls
# =============================================================================

from __future__ import annotations
from typing import Any, Dict, List, Optional

from supabase import Client, create_client

from petcare_core.config import SupabaseSettings, load_settings
from petcare_core.errors import GatewayError, NotFoundError
from petcare_core.logging import get_logger
from petcare_core.models.dates import parse_instant
from .gateway import AuthUser, Gateway, Row

logger = get_logger(__name__)

# Supabase caps a single select at 1000 rows
BATCH_SIZE = 1000

# Global client reference for reuse and cleanup
_supabase_client: Optional[Client] = None


def get_supabase_client(settings: Optional[SupabaseSettings] = None) -> Client:
    """
    Return the shared Supabase client, creating it on first use.

    Args:
        settings: Connection settings (default: load_settings())

    Raises:
        ConfigurationError: no url/key configured
    """
    global _supabase_client
    if _supabase_client is None:
        settings = settings or load_settings()
        _supabase_client = create_client(settings.url, settings.key)
        logger.info("Supabase client created")
    return _supabase_client


def cleanup_supabase_client() -> None:
    """Drop the shared client so the next call reconnects."""
    global _supabase_client
    _supabase_client = None


def _error_message(error: Exception) -> str:
    # postgrest APIError, storage and auth errors all carry .message
    message = getattr(error, "message", None)
    return message if isinstance(message, str) and message else str(error)


def _to_auth_user(user: Any) -> Optional[AuthUser]:
    if user is None:
        return None
    return AuthUser(
        id=str(user.id),
        email=user.email or "",
        created_at=parse_instant(getattr(user, "created_at", None)),
        metadata=dict(getattr(user, "user_metadata", None) or {}),
    )


class SupabaseGateway(Gateway):
    """
    Gateway over a supabase-py client.

    Usage:
        gateway = SupabaseGateway(get_supabase_client())
        rows = gateway.query("pets", {"user_id": uid}, order_by="created_at", ascending=False)
    """

    def __init__(self, client: Client):
        self.client = client

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
        """
        Fetch rows, paging past the 1000 row limit unless limit is set.
        """
        try:
            all_data: List[Row] = []
            offset = 0

            while True:
                query = self.client.table(table).select("*")
                for column, value in (filters or {}).items():
                    query = query.eq(column, value)
                if order_by:
                    query = query.order(order_by, desc=not ascending)

                if limit is not None:
                    response = query.limit(limit).execute()
                    return list(response.data or [])

                response = query.range(offset, offset + BATCH_SIZE - 1).execute()
                batch = response.data or []
                all_data.extend(batch)
                if len(batch) < BATCH_SIZE:
                    break
                offset += BATCH_SIZE

            return all_data

        except Exception as e:
            raise GatewayError(_error_message(e), operation="query", table=table) from e

    def insert(self, table: str, fields: Row) -> Row:
        try:
            response = self.client.table(table).insert(fields).execute()
        except Exception as e:
            raise GatewayError(_error_message(e), operation="insert", table=table) from e

        if not response.data:
            raise GatewayError(f"Insert into {table} returned no row", operation="insert", table=table)
        return response.data[0]

    def update(self, table: str, record_id: str, fields: Row) -> Row:
        try:
            response = self.client.table(table).update(fields).eq("id", record_id).execute()
        except Exception as e:
            raise GatewayError(_error_message(e), operation="update", table=table) from e

        if not response.data:
            raise NotFoundError(f"No {table} row with id {record_id}", record_id=record_id, table=table)
        return response.data[0]

    def delete(self, table: str, record_id: str) -> None:
        try:
            self.client.table(table).delete().eq("id", record_id).execute()
        except Exception as e:
            raise GatewayError(_error_message(e), operation="delete", table=table) from e

    def upsert(self, table: str, fields: Row) -> Row:
        try:
            response = self.client.table(table).upsert(fields).execute()
        except Exception as e:
            raise GatewayError(_error_message(e), operation="upsert", table=table) from e
        return response.data[0] if response.data else dict(fields)

    # ------------------------------------------------------------------
    # Blob storage
    # ------------------------------------------------------------------

    def upload_blob(self, bucket: str, path: str, data: bytes, content_type: str) -> None:
        try:
            self.client.storage.from_(bucket).upload(path, data, {"content-type": content_type})
        except Exception as e:
            raise GatewayError(_error_message(e), operation="upload", table=bucket) from e
        logger.info(f"Uploaded {len(data)} bytes to {bucket}/{path}")

    def signed_url(self, bucket: str, path: str, ttl_seconds: int) -> str:
        try:
            response = self.client.storage.from_(bucket).create_signed_url(path, ttl_seconds)
        except Exception as e:
            raise GatewayError(_error_message(e), operation="signed_url", table=bucket) from e

        url = response.get("signedURL") or response.get("signedUrl")
        if not url:
            raise GatewayError(f"No signed URL returned for {bucket}/{path}", operation="signed_url", table=bucket)
        return url

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    def current_user(self) -> Optional[AuthUser]:
        try:
            response = self.client.auth.get_user()
        except Exception as e:
            raise GatewayError(_error_message(e), operation="get_user") from e
        return _to_auth_user(response.user) if response else None

    def sign_up(self, email: str, password: str, name: str) -> Optional[AuthUser]:
        try:
            response = self.client.auth.sign_up({
                "email": email,
                "password": password,
                "options": {"data": {"name": name}},
            })
        except Exception as e:
            raise GatewayError(_error_message(e), operation="sign_up") from e
        return _to_auth_user(response.user)

    def sign_in(self, email: str, password: str) -> AuthUser:
        try:
            response = self.client.auth.sign_in_with_password({"email": email, "password": password})
        except Exception as e:
            raise GatewayError(_error_message(e), operation="sign_in") from e

        user = _to_auth_user(response.user)
        if user is None:
            raise GatewayError("Sign in returned no user", operation="sign_in")
        return user

    def sign_out(self) -> None:
        try:
            self.client.auth.sign_out()
        except Exception as e:
            raise GatewayError(_error_message(e), operation="sign_out") from e
