from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the api package importable during local test runs
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from api.core.config import Settings  # noqa: E402

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture()
def make_settings(tmp_path):
    """Build a Settings object rooted in tmp_path; keyword overrides win."""

    def _make(**overrides) -> Settings:
        values = dict(
            app_env="test",
            jwt_secret="test-secret",
            token_ttl_seconds=86400,
            database_url="",
            storage_backend="memory",
            data_dir=str(tmp_path / "data"),
            uploads_dir=str(tmp_path / "uploads"),
            asset_mode="file",
            max_upload_bytes=5 * 1024 * 1024,
            admin_username="admin",
            admin_password="correct horse battery",
            admin_password_hash="",
            cors_origins=("*",),
            log_level="INFO",
        )
        values.update(overrides)
        return Settings(**values)

    return _make
