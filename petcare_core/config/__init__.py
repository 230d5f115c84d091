from .settings import SupabaseSettings, load_settings, DEFAULT_BUCKET, DEFAULT_SIGNED_URL_TTL

__all__ = ["SupabaseSettings", "load_settings", "DEFAULT_BUCKET", "DEFAULT_SIGNED_URL_TTL"]
