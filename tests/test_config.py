from __future__ import annotations

from api.core import config as core_config


def test_settings_read_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("APP_ENV", "PROD")
    monkeypatch.setenv("JWT_SECRET", "s3cret")
    monkeypatch.setenv("DATABASE_URL", " sqlite:///x.db ")
    monkeypatch.setenv("STORAGE_BACKEND", "JSON")
    monkeypatch.setenv("DATA_DIR", str(tmp_path))
    monkeypatch.setenv("ASSET_MODE", "inline")
    monkeypatch.setenv("MAX_UPLOAD_BYTES", "not-a-number")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.dev, https://b.dev,")
    core_config.get_settings.cache_clear()
    try:
        settings = core_config.get_settings()
    finally:
        core_config.get_settings.cache_clear()

    assert settings.is_prod
    assert settings.jwt_secret == "s3cret"
    assert settings.database_url == "sqlite:///x.db"
    assert settings.storage_backend == "json"
    assert settings.data_dir == str(tmp_path)
    assert settings.asset_mode == "inline"
    assert settings.max_upload_bytes == 5 * 1024 * 1024
    assert settings.cors_origins == ("https://a.dev", "https://b.dev")


def test_defaults_outside_prod(monkeypatch):
    for name in ("APP_ENV", "JWT_SECRET", "DATABASE_URL", "STORAGE_BACKEND", "CORS_ORIGINS", "ADMIN_USERNAME"):
        monkeypatch.delenv(name, raising=False)
    core_config.get_settings.cache_clear()
    try:
        settings = core_config.get_settings()
    finally:
        core_config.get_settings.cache_clear()

    assert settings.app_env == "dev"
    assert settings.storage_backend == "auto"
    assert settings.token_ttl_seconds == 86400
    assert settings.admin_username == "admin"
    assert settings.cors_origins == ("*",)
