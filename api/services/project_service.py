"""Portfolio project use cases."""

from __future__ import annotations

from api.domain.content import parse_technologies
from api.services.resource_service import ResourceService

PROJECTS = "projects"
LINK_FIELDS = ("githubLink", "liveLink")


class ProjectService(ResourceService):
    collection = PROJECTS
    label = "Project"
    required_fields = ("title", "description")
    editable_fields = ("title", "description", "technologies", "githubLink", "liveLink")
    list_fields = ("technologies",)

    def build(self, fields: dict) -> dict:
        record = {
            "title": fields["title"],
            "description": fields["description"],
            "technologies": parse_technologies(fields.get("technologies")),
        }
        for name in LINK_FIELDS:
            record[name] = fields.get(name) or ""
        return record

    def merge(self, existing: dict, fields: dict) -> dict:
        changes = {}
        for name in ("title", "description") + LINK_FIELDS:
            if name in fields:
                changes[name] = fields[name]
        if "technologies" in fields:
            changes["technologies"] = parse_technologies(fields["technologies"])
        return changes
