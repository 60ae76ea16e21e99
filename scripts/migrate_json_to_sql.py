"""One-off copy: JSON collection files (blogs/projects/admins) -> SQL documents table."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Make the api package importable when run directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from api.core.config import get_settings
from api.repositories.admin_repository import ADMINS
from api.repositories.json_storage import JsonFileDocumentStore
from api.repositories.sql_repository import SQLDocumentStore
from api.services.blog_service import BLOGS
from api.services.project_service import PROJECTS


def copy_collection(source: JsonFileDocumentStore, target: SQLDocumentStore, collection: str) -> tuple[int, int]:
    copied = skipped = 0
    for record in source.list_all(collection):
        record_id = record.get("id")
        if not record_id:
            skipped += 1
            continue
        if target.find_by_id(collection, record_id) is not None:
            target.replace(collection, record_id, record)
        else:
            target.insert(collection, record)
        copied += 1
    return copied, skipped


def main() -> None:
    settings = get_settings()
    ap = argparse.ArgumentParser(description="Copy JSON collections into the SQL backend")
    ap.add_argument("--data-dir", default=settings.data_dir, help="Directory with <collection>.json files")
    ap.add_argument("--database-url", default=settings.database_url, help="Target database (default: DATABASE_URL)")
    args = ap.parse_args()

    if not args.database_url:
        raise SystemExit("DATABASE_URL not configured")
    if not Path(args.data_dir).is_dir():
        raise SystemExit(f"Directory not found: {args.data_dir}")

    source = JsonFileDocumentStore(args.data_dir)
    target = SQLDocumentStore(args.database_url)
    target.ensure_schema()
    collections = (ADMINS, BLOGS, PROJECTS)
    if target.list_all(ADMINS):
        print(f"{ADMINS}: target already has an admin, not copied")
        collections = (BLOGS, PROJECTS)
    for collection in collections:
        copied, skipped = copy_collection(source, target, collection)
        print(f"{collection}: {copied} copied, {skipped} skipped (no id)")


if __name__ == "__main__":
    main()
