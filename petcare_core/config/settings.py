# =============================================================================
# petcare_core/config/settings.py
# Supabase connection settings from secrets.toml or the environment
# =============================================================================

from __future__ import annotations
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from petcare_core.errors import ConfigurationError
from petcare_core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_SECRETS_PATH = Path(".petcare") / "secrets.toml"
DEFAULT_BUCKET = "pets"
DEFAULT_SIGNED_URL_TTL = 3600  # 1 hour


@dataclass(frozen=True)
class SupabaseSettings:
    """Connection settings for the hosted backend"""
    url: str
    key: str
    bucket: str = DEFAULT_BUCKET
    signed_url_ttl: int = DEFAULT_SIGNED_URL_TTL

    def masked_url(self) -> str:
        return f"{self.url[:40]}..." if len(self.url) > 40 else self.url


def _load_secrets_toml(secrets_path: Path) -> Dict[str, Any]:
    """Return the [supabase] table of a secrets file, or {} when absent."""
    if not secrets_path.exists():
        return {}

    try:
        with open(secrets_path, "rb") as f:
            secrets = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(
            f"Invalid secrets file {secrets_path}: {e}",
            config_key="supabase",
        ) from e

    return dict(secrets.get("supabase", {}))


def load_settings(secrets_path: Optional[Union[str, Path]] = None) -> SupabaseSettings:
    """
    Load Supabase settings.

    Expects secrets in .petcare/secrets.toml:
        [supabase]
        url = "https://your-project.supabase.co"
        key = "your-anon-key"
        bucket = "pets"            # optional
        signed_url_ttl = 3600      # optional

    Missing values fall back to the SUPABASE_URL, SUPABASE_KEY,
    SUPABASE_BUCKET and SUPABASE_SIGNED_URL_TTL environment variables.

    Raises:
        ConfigurationError: url or key missing, or TTL not an integer
    """
    path = Path(secrets_path) if secrets_path is not None else DEFAULT_SECRETS_PATH
    secrets = _load_secrets_toml(path)

    url = secrets.get("url") or os.getenv("SUPABASE_URL")
    key = secrets.get("key") or os.getenv("SUPABASE_KEY")
    bucket = secrets.get("bucket") or os.getenv("SUPABASE_BUCKET") or DEFAULT_BUCKET
    ttl = secrets.get("signed_url_ttl") or os.getenv("SUPABASE_SIGNED_URL_TTL") or DEFAULT_SIGNED_URL_TTL

    if not url:
        raise ConfigurationError(
            f"Supabase url not found in {path} or SUPABASE_URL",
            config_key="url",
        )
    if not key:
        raise ConfigurationError(
            f"Supabase key not found in {path} or SUPABASE_KEY",
            config_key="key",
        )

    try:
        ttl = int(ttl)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            f"signed_url_ttl must be an integer, got {ttl!r}",
            config_key="signed_url_ttl",
        ) from e

    settings = SupabaseSettings(url=url, key=key, bucket=bucket, signed_url_ttl=ttl)
    logger.info(f"Using Supabase URL: {settings.masked_url()}")
    return settings
