"""
Utility helpers shared across routers/services.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
import uuid


def new_id() -> str:
    return str(uuid.uuid4())


def format_timestamp(value: datetime) -> str:
    """ISO-8601 in UTC with a trailing Z (microsecond precision)."""
    value = value.astimezone(timezone.utc) if value.tzinfo else value.replace(tzinfo=timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def parse_timestamp(value: str | None) -> datetime:
    """
    Parse timestamps written by format_timestamp (or any ISO-8601 value).
    Unparseable values sort as the oldest possible instant.
    """
    if not value:
        return datetime.min.replace(tzinfo=timezone.utc)
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return datetime.min.replace(tzinfo=timezone.utc)
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def next_timestamp(previous: str | None) -> str:
    """Current time, bumped so it is strictly after ``previous``."""
    now = utc_now()
    if previous:
        floor = parse_timestamp(previous) + timedelta(microseconds=1)
        if now < floor:
            now = floor
    return format_timestamp(now)
