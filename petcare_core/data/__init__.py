# =============================================================================
# petcare_core/data/__init__.py
# Remote Data Gateway implementations
# =============================================================================

from .gateway import AuthUser, Gateway, Row
from .mock_gateway import MockGateway
from .storage import document_path, media_url, photo_path
from .supabase_client import (
    SupabaseGateway,
    get_supabase_client,
    cleanup_supabase_client,
)

__all__ = [
    "AuthUser",
    "Gateway",
    "Row",
    "MockGateway",
    "SupabaseGateway",
    "get_supabase_client",
    "cleanup_supabase_client",
    "document_path",
    "media_url",
    "photo_path",
]
