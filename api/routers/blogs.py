from __future__ import annotations

from api.domain.schemas import BlogPost
from api.routers.resources import build_resource_router

router = build_resource_router(prefix="/api/blogs", tag="blogs", service_name="blog_service", model=BlogPost)
