"""Session tokens: signed, time-limited JWTs bound to the admin username."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from jose import JWTError, jwt

from api.core.errors import Forbidden, Unauthorized
from api.core.utils import utc_now

ALGORITHM = "HS256"
DEFAULT_TTL_SECONDS = 24 * 60 * 60


@dataclass
class Principal:
    username: str


class TokenService:
    def __init__(self, secret: str, ttl_seconds: int = DEFAULT_TTL_SECONDS) -> None:
        self._secret = secret
        self.ttl_seconds = ttl_seconds if ttl_seconds > 0 else DEFAULT_TTL_SECONDS

    def issue(self, username: str) -> str:
        now = utc_now()
        claims = {
            "username": username,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(seconds=self.ttl_seconds)).timestamp()),
        }
        return jwt.encode(claims, self._secret, algorithm=ALGORITHM)

    def verify(self, token: Optional[str]) -> Principal:
        """Missing token -> Unauthorized; bad/expired token -> Forbidden."""
        if not token:
            raise Unauthorized("Access denied")
        try:
            payload = jwt.decode(token, self._secret, algorithms=[ALGORITHM])
        except JWTError as exc:
            raise Forbidden("Invalid token") from exc
        username = payload.get("username")
        if not username or not isinstance(username, str):
            raise Forbidden("Invalid token")
        return Principal(username=username)
