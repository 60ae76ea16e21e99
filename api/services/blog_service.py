"""Blog post use cases."""

from __future__ import annotations

from api.domain.content import DEFAULT_AUTHOR, make_excerpt
from api.services.resource_service import ResourceService

BLOGS = "blogs"


class BlogService(ResourceService):
    collection = BLOGS
    label = "Blog"
    required_fields = ("title", "content")
    editable_fields = ("title", "content", "excerpt", "author")

    def build(self, fields: dict) -> dict:
        content = fields["content"]
        return {
            "title": fields["title"],
            "content": content,
            "excerpt": fields.get("excerpt") or make_excerpt(content),
            "author": fields.get("author") or DEFAULT_AUTHOR,
        }

    def merge(self, existing: dict, fields: dict) -> dict:
        changes = {}
        for name in ("title", "content"):
            if name in fields:
                changes[name] = fields[name]
        if "excerpt" in fields:
            # blank excerpt falls back to the derived one
            content = changes.get("content", existing.get("content"))
            changes["excerpt"] = fields["excerpt"] or make_excerpt(content)
        if "author" in fields:
            changes["author"] = fields["author"] or DEFAULT_AUTHOR
        return changes
