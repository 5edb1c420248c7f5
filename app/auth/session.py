"""Session resolution from request headers."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from http.cookies import CookieError, SimpleCookie
from typing import Any

from app.auth.jwt import ACCESS_TOKEN_USE, decode_jwt
from app.core.exceptions import AuthenticationError
from app.models.enums import UserRole

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    id: str
    email: str
    role: UserRole


@dataclass(frozen=True)
class Session:
    user: SessionUser


def parse_role(value: Any) -> UserRole:
    """Map a role claim onto ``UserRole``; unknown or missing roles are rejected."""
    try:
        return UserRole(str(value).upper())
    except ValueError as exc:
        raise AuthenticationError(f"Unknown role: {value!r}") from exc


def session_from_claims(claims: Mapping[str, Any]) -> Session:
    if claims.get("token_use") != ACCESS_TOKEN_USE:
        raise AuthenticationError("Token is not an access token.")
    try:
        user_id = str(claims["sub"])
        email = str(claims["email"]).lower()
    except KeyError as exc:
        raise AuthenticationError("Token claims are missing identity.") from exc
    return Session(user=SessionUser(id=user_id, email=email, role=parse_role(claims.get("role"))))


def extract_bearer_token(authorization: str | None) -> str | None:
    if authorization is None or not authorization.strip():
        return None
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1].strip() or None


def extract_cookie(cookie_header: str | None, name: str) -> str | None:
    if not cookie_header:
        return None
    cookie = SimpleCookie()
    try:
        cookie.load(cookie_header)
    except CookieError:
        return None
    morsel = cookie.get(name)
    return morsel.value if morsel is not None and morsel.value else None


class SessionResolver:
    """Resolve a ``Session`` from request headers.

    The session token is read from the session cookie first, then from an
    ``Authorization: Bearer`` header. Anything that does not yield a valid
    access token resolves to ``None``.
    """

    def __init__(self, secret: str, cookie_name: str) -> None:
        self.secret = secret
        self.cookie_name = cookie_name

    def token_from_headers(self, headers: Mapping[str, str]) -> str | None:
        lowered = {key.lower(): value for key, value in headers.items()}
        return extract_cookie(lowered.get("cookie"), self.cookie_name) or extract_bearer_token(
            lowered.get("authorization")
        )

    def resolve_token(self, token: str) -> Session:
        """Decode a token into a session or raise ``AuthenticationError``."""
        return session_from_claims(decode_jwt(token, secret=self.secret))

    def __call__(self, headers: Mapping[str, str]) -> Session | None:
        token = self.token_from_headers(headers)
        if token is None:
            return None
        try:
            return self.resolve_token(token)
        except AuthenticationError as exc:
            logger.info("session.rejected", extra={"event": "session.rejected", "reason": str(exc)})
            return None
