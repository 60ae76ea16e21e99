from __future__ import annotations

from fastapi import APIRouter, Depends

from api.domain.schemas import LoginRequest, LoginResponse
from api.routers.deps import get_auth_service
from api.services.auth_service import AuthService

router = APIRouter(prefix="/api/admin", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, auth_service: AuthService = Depends(get_auth_service)):
    result = auth_service.login(payload.username, payload.password)
    return {"token": result.token, "username": result.username}
