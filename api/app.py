from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from api.core.config import Settings, get_settings
from api.core.errors import ApiError
from api.core.logger import configure_logging
from api.repositories import build_document_store
from api.repositories.admin_repository import AdminRepository
from api.routers import auth as auth_router
from api.routers import blogs as blogs_router
from api.routers import projects as projects_router
from api.routers import system as system_router
from api.services.asset_service import build_asset_storage
from api.services.auth_service import AuthService, resolve_jwt_secret
from api.services.blog_service import BlogService
from api.services.project_service import ProjectService
from api.services.token_service import TokenService

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Baseline headers for JSON responses and served uploads."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("Referrer-Policy", "no-referrer-when-downgrade")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        problems = []
        for err in exc.errors():
            loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
            problems.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
        return _error(400, "; ".join(problems) or "Invalid request")

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(500, "Internal server error")


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the API with its collaborators wired once: storage backend, asset
    storage, token signing and the seeded admin account.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    store = build_document_store(settings)
    assets = build_asset_storage(settings)
    tokens = TokenService(resolve_jwt_secret(settings), settings.token_ttl_seconds)
    auth_service = AuthService(AdminRepository(store), tokens)
    auth_service.ensure_admin(settings)

    app = FastAPI(title="Portfolio CMS API")
    app.state.settings = settings
    app.state.store = store
    app.state.asset_storage = assets
    app.state.auth_service = auth_service
    app.state.blog_service = BlogService(store, assets)
    app.state.project_service = ProjectService(store, assets)

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.cors_origins),
            allow_credentials="*" not in settings.cors_origins,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.is_prod)
    _install_error_handlers(app)

    app.include_router(auth_router.router)
    app.include_router(blogs_router.router)
    app.include_router(projects_router.router)
    app.include_router(system_router.router)

    logger.info("API ready (env=%s, storage=%s, assets=%s)", settings.app_env, store.backend, assets.mode)
    return app
