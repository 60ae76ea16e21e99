"""Health probe and uploaded-file serving."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import FileResponse

from api.core.errors import NotFound
from api.core.utils import format_timestamp, utc_now
from api.domain.schemas import HealthStatus
from api.routers.deps import app_state, get_asset_storage
from api.services.asset_service import AssetStorage

router = APIRouter(tags=["system"])


@router.get("/api/health", response_model=HealthStatus)
def health(request: Request):
    store = app_state(request, "store")
    assets = get_asset_storage(request)
    return {
        "status": "OK",
        "timestamp": format_timestamp(utc_now()),
        "storage": store.backend,
        "assets": assets.mode,
    }


@router.get("/uploads/{filename}")
def uploaded_file(filename: str, assets: AssetStorage = Depends(get_asset_storage)):
    path = assets.resolve(filename)
    if path is None:
        raise NotFound("File not found")
    return FileResponse(path)
