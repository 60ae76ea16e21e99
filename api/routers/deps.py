"""Shared request helpers: service lookup, bearer auth and body parsing."""
from __future__ import annotations

from typing import Optional

from fastapi import Header, Request
from starlette.datastructures import UploadFile as StarletteUploadFile

from api.core.errors import Forbidden, ValidationError
from api.services.asset_service import AssetStorage, ImageUpload, too_large
from api.services.auth_service import AuthService
from api.services.token_service import Principal

IMAGE_FIELD = "image"


def app_state(request: Request, name: str):
    svc = getattr(getattr(request.app, "state", None), name, None)
    if svc is None:
        raise RuntimeError(f"{name} is not configured on app.state")
    return svc


def get_auth_service(request: Request) -> AuthService:
    return app_state(request, "auth_service")


def get_asset_storage(request: Request) -> AssetStorage:
    return app_state(request, "asset_storage")


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    scheme, _, token = (authorization or "").strip().partition(" ")
    if not scheme:
        return None
    if scheme.lower() != "bearer":
        # a credential was sent, just not one this API accepts
        raise Forbidden("Invalid token")
    return token.strip() or None


def require_admin(request: Request, authorization: Optional[str] = Header(None)) -> Principal:
    """401 when no token is sent, 403 for another scheme or a token that does not verify."""
    return get_auth_service(request).verify(_bearer_token(authorization))


async def read_payload(request: Request) -> tuple[dict, Optional[ImageUpload]]:
    """
    Return (fields, image) from a JSON or form body.

    The form is read directly instead of through Form() parameters so an
    explicitly empty field stays distinguishable from a missing one.
    """
    content_type = (request.headers.get("content-type") or "").lower()
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError as exc:
            raise ValidationError("Malformed JSON body") from exc
        if not isinstance(body, dict):
            raise ValidationError("Expected a JSON object")
        return body, None
    if not (content_type.startswith("multipart/form-data") or content_type.startswith("application/x-www-form-urlencoded")):
        return {}, None

    max_bytes = get_asset_storage(request).max_bytes
    form = await request.form()
    fields: dict = {}
    image = None
    for key, value in form.multi_items():
        if isinstance(value, StarletteUploadFile):
            if key == IMAGE_FIELD and value.filename:
                data = await value.read(max_bytes + 1)
                if len(data) > max_bytes:
                    raise too_large(max_bytes)
                image = ImageUpload(filename=value.filename, content_type=value.content_type or "", data=data)
            continue
        fields.setdefault(key, value)
    return fields, image
