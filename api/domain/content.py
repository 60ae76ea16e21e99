"""Domain rules for blog posts and projects (derived field values)."""
from __future__ import annotations

from typing import Iterable

EXCERPT_LENGTH = 150
DEFAULT_AUTHOR = "Admin"


def make_excerpt(content: str | None) -> str:
    """First 150 characters of the content followed by an ellipsis."""
    return (content or "")[:EXCERPT_LENGTH] + "..."


def parse_technologies(value: str | Iterable[str] | None) -> list[str]:
    """
    Split a comma separated list ("Go, Rust , C++") into trimmed entries.
    Lists (JSON bodies) are trimmed the same way; blank entries are dropped.
    """
    if value is None:
        return []
    items = value.split(",") if isinstance(value, str) else value
    return [str(item).strip() for item in items if str(item).strip()]
