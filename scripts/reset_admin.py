#!/usr/bin/env python3
"""
Reseed the admin account in the configured storage backend (new password).

Usage:
  python scripts/reset_admin.py [--username admin] [--password s3cret]

Without --password a random one is generated and printed once.
"""
from __future__ import annotations

import argparse
import secrets
import sys
from pathlib import Path

# Make the api package importable when run directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from api.core.config import get_settings
from api.core.security import hash_password
from api.repositories import build_document_store
from api.repositories.admin_repository import AdminRepository


def main() -> None:
    settings = get_settings()
    ap = argparse.ArgumentParser(description="Reseed the admin account")
    ap.add_argument("--username", default=settings.admin_username, help="Admin username (default: ADMIN_USERNAME)")
    ap.add_argument("--password", help="New password (default: random)")
    args = ap.parse_args()

    username = (args.username or "").strip()
    if not username:
        raise SystemExit("Invalid username")
    password = args.password or secrets.token_urlsafe(12)
    if len(password) < 8:
        raise SystemExit("Password must have at least 8 characters")

    store = build_document_store(settings)
    if store.backend == "memory":
        raise SystemExit("No durable storage configured (set STORAGE_BACKEND=json or DATABASE_URL)")
    AdminRepository(store).reset_admin(username, hash_password(password))

    print("OK: admin account reseeded")
    print(f"  Backend: {store.backend}")
    print(f"  Username: {username}")
    if not args.password:
        print(f"  Password: {password}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
