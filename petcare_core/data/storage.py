# =============================================================================
# petcare_core/data/storage.py
# Blob paths and expiring media URLs
# =============================================================================

from __future__ import annotations
import re
from datetime import datetime
from typing import Optional

from .gateway import Gateway

PHOTO_PREFIX = "pet-photos"
DOCUMENT_PREFIX = "documents"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def _millis(now: datetime) -> int:
    return int(now.timestamp() * 1000)


def photo_path(now: datetime) -> str:
    """pet-photos/<epoch millis>.jpg"""
    return f"{PHOTO_PREFIX}/{_millis(now)}.jpg"


def document_path(pet_id: str, filename: str, now: datetime) -> str:
    """documents/<pet id>/<epoch millis>-<filename>"""
    safe_name = _UNSAFE_CHARS.sub("_", filename).strip("_") or "file"
    return f"{DOCUMENT_PREFIX}/{pet_id}/{_millis(now)}-{safe_name}"


def is_external_url(value: str) -> bool:
    # rows written before private storage hold full public URLs
    return value.startswith("http://") or value.startswith("https://")


def media_url(gateway: Gateway, bucket: str, path: Optional[str], ttl_seconds: int) -> Optional[str]:
    """
    URL a screen can load a stored object from.

    Storage paths get a fresh signed URL on every call; full URLs are
    returned unchanged and an empty path gives None.

    Raises:
        GatewayError: the signed URL could not be created
    """
    if not path:
        return None
    if is_external_url(path):
        return path
    return gateway.signed_url(bucket, path, ttl_seconds)
