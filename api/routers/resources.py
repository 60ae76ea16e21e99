"""Router factory for the blog/project CRUD endpoints (identical shapes)."""
from __future__ import annotations

from typing import List, Type

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from api.domain.schemas import MessageResponse
from api.routers.deps import app_state, read_payload, require_admin
from api.services.resource_service import ResourceService


def build_resource_router(*, prefix: str, tag: str, service_name: str, model: Type[BaseModel]) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=[tag])

    def _service(request: Request) -> ResourceService:
        return app_state(request, service_name)

    @router.get("", response_model=List[model])
    def list_records(svc: ResourceService = Depends(_service)):
        return svc.list()

    @router.get("/{record_id}", response_model=model)
    def get_record(record_id: str, svc: ResourceService = Depends(_service)):
        return svc.get(record_id)

    @router.post("", response_model=model, status_code=201, dependencies=[Depends(require_admin)])
    async def create_record(request: Request, svc: ResourceService = Depends(_service)):
        fields, image = await read_payload(request)
        return svc.create(fields, image)

    @router.put("/{record_id}", response_model=model, dependencies=[Depends(require_admin)])
    async def update_record(record_id: str, request: Request, svc: ResourceService = Depends(_service)):
        fields, image = await read_payload(request)
        return svc.update(record_id, fields, image)

    @router.delete("/{record_id}", response_model=MessageResponse, dependencies=[Depends(require_admin)])
    def delete_record(record_id: str, svc: ResourceService = Depends(_service)):
        return svc.delete(record_id)

    return router
