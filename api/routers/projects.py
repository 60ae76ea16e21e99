from __future__ import annotations

from api.domain.schemas import Project
from api.routers.resources import build_resource_router

router = build_resource_router(prefix="/api/projects", tag="projects", service_name="project_service", model=Project)
