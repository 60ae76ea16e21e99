"""
Admin authentication use cases: first-boot seeding, login and token checks.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import secrets

from api.core.config import DEV_JWT_SECRET, Settings
from api.core.errors import ConfigurationError, Forbidden, Unauthorized
from api.core.security import hash_password, needs_rehash, verify_password
from api.repositories.admin_repository import AdminRepository
from api.services.token_service import Principal, TokenService

logger = logging.getLogger(__name__)


@dataclass
class LoginResult:
    token: str
    username: str


def resolve_jwt_secret(settings: Settings) -> str:
    """The configured secret, or the development default outside prod."""
    if settings.jwt_secret:
        return settings.jwt_secret
    if settings.is_prod:
        raise ConfigurationError("JWT_SECRET must be set when APP_ENV=prod")
    logger.warning("JWT_SECRET not set; using the insecure development secret")
    return DEV_JWT_SECRET


class AuthService:
    """Handles the single admin identity and its session tokens."""

    def __init__(self, admins: AdminRepository, tokens: TokenService) -> None:
        self.admins = admins
        self.tokens = tokens

    def ensure_admin(self, settings: Settings) -> dict:
        """Seed the admin record once; an existing record is never touched."""
        existing = self.admins.get_admin()
        if existing:
            return existing
        username = settings.admin_username or "admin"
        if settings.admin_password_hash:
            password_hash = settings.admin_password_hash
        elif settings.admin_password:
            password_hash = hash_password(settings.admin_password)
        elif settings.is_prod:
            raise ConfigurationError("ADMIN_PASSWORD or ADMIN_PASSWORD_HASH must be set to seed the admin account")
        else:
            generated = secrets.token_urlsafe(12)
            password_hash = hash_password(generated)
            logger.warning("No admin credentials configured; generated one-time password for '%s': %s", username, generated)
        record = self.admins.create_admin(username, password_hash)
        logger.info("Admin account '%s' created", username)
        return record

    def login(self, username: str, password: str) -> LoginResult:
        admin = self.admins.get_admin()
        if not admin:
            raise Unauthorized("Invalid credentials")
        stored_hash = admin.get("passwordHash") or ""
        name_ok = secrets.compare_digest((username or "").encode(), (admin.get("username") or "").encode())
        password_ok = verify_password(password or "", stored_hash)
        if not (name_ok and password_ok):
            logger.info("Rejected admin login for '%s'", username)
            raise Unauthorized("Invalid credentials")
        if needs_rehash(stored_hash):
            self.admins.update_password_hash(admin["username"], hash_password(password))
        return LoginResult(token=self.tokens.issue(admin["username"]), username=admin["username"])

    def verify(self, token: str | None) -> Principal:
        principal = self.tokens.verify(token)
        admin = self.admins.get_admin()
        if not admin or principal.username != admin.get("username"):
            # signed for an account that is no longer the admin
            raise Forbidden("Invalid token")
        return principal
