"""Admin login and bearer-token verification."""

from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from service_request.core.config import DEFAULT_JWT_SECRET, Settings
from service_request.errors import InvalidCredentials, Unauthenticated

logger = logging.getLogger(__name__)

TOKEN_TTL = timedelta(hours=1)


@dataclass(frozen=True)
class AdminIdentity:
    username: str


def parse_bearer(header: str | None) -> str | None:
    """Return the token from an ``Authorization: Bearer <token>`` header, if any."""

    if not header:
        return None
    scheme, _, token = header.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        return None
    return token


class AdminAuth:
    """Issue and verify stateless admin tokens (no revocation, no refresh)."""

    def __init__(self, settings: Settings) -> None:
        self.username = settings.admin_username
        self.password = settings.admin_password
        self.secret = settings.jwt_secret
        self.algorithm = settings.jwt_algorithm

    @property
    def uses_default_secret(self) -> bool:
        return self.secret == DEFAULT_JWT_SECRET

    def login(self, username: str | None, password: str | None) -> str:
        user_ok = hmac.compare_digest((username or "").encode(), self.username.encode())
        pass_ok = hmac.compare_digest((password or "").encode(), self.password.encode())
        if not (user_ok and pass_ok):
            logger.warning("Rejected admin login attempt")
            raise InvalidCredentials()
        logger.info("Admin %s logged in", self.username)
        return self.issue_token(self.username)

    def issue_token(self, username: str, issued_at: datetime | None = None) -> str:
        issued_at = issued_at or datetime.now(timezone.utc)
        claims = {
            "sub": username,
            "username": username,
            "iat": issued_at,
            "exp": issued_at + TOKEN_TTL,
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def authenticate(self, token: str | None) -> AdminIdentity:
        if not token:
            raise Unauthenticated(status_code=401)
        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.PyJWTError as exc:
            logger.info("Rejected admin token: %s", exc)
            raise Unauthenticated("Invalid or expired token", status_code=403) from exc
        return AdminIdentity(username=claims["sub"])


__all__ = ["AdminAuth", "AdminIdentity", "TOKEN_TTL", "parse_bearer"]
