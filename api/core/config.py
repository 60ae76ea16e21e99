"""
Configuration helpers for the portfolio CMS backend.

Routers/services receive a Settings instance instead of reading os.environ
directly; create_app() accepts one explicitly so tests can inject their own.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

DEV_JWT_SECRET = "dev-only-secret-change-me"
DEFAULT_MAX_UPLOAD_BYTES = 5 * 1024 * 1024


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    jwt_secret: str
    token_ttl_seconds: int
    database_url: str
    storage_backend: str
    data_dir: str
    uploads_dir: str
    asset_mode: str
    max_upload_bytes: int
    admin_username: str
    admin_password: str
    admin_password_hash: str
    cors_origins: tuple[str, ...]
    log_level: str

    @property
    def is_prod(self) -> bool:
        return self.app_env == "prod"


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _csv(value: str | None) -> tuple[str, ...]:
        return tuple(item.strip() for item in (value or "").split(",") if item.strip())

    app_env = (os.getenv("APP_ENV") or "dev").lower()
    cors = _csv(os.getenv("CORS_ORIGINS"))
    if not cors and app_env != "prod":
        cors = ("*",)

    return Settings(
        app_env=app_env,
        jwt_secret=os.getenv("JWT_SECRET", ""),
        token_ttl_seconds=_int(os.getenv("TOKEN_TTL_SECONDS", "86400"), 86400),
        database_url=(os.getenv("DATABASE_URL") or "").strip(),
        storage_backend=(os.getenv("STORAGE_BACKEND") or "auto").strip().lower(),
        data_dir=os.getenv("DATA_DIR", os.path.join(os.getcwd(), "data")),
        uploads_dir=os.getenv("UPLOADS_DIR", os.path.join(os.getcwd(), "uploads")),
        asset_mode=(os.getenv("ASSET_MODE") or "file").strip().lower(),
        max_upload_bytes=_int(os.getenv("MAX_UPLOAD_BYTES", ""), DEFAULT_MAX_UPLOAD_BYTES),
        admin_username=(os.getenv("ADMIN_USERNAME") or "admin").strip(),
        admin_password=os.getenv("ADMIN_PASSWORD", ""),
        admin_password_hash=os.getenv("ADMIN_PASSWORD_HASH", ""),
        cors_origins=cors,
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
