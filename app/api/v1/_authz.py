"""Shared authorization helpers for API v1 route modules."""

from __future__ import annotations

from collections.abc import Callable

from fastapi import Request

from app.auth.rbac import require_scopes
from app.auth.session import SessionResolver
from app.core.config import get_config
from app.core.dependencies import CurrentUser, get_current_user
from app.core.exceptions import AuthenticationError


def authorize(request: Request, scopes: list[str]) -> CurrentUser:
    """Resolve the caller from the session cookie or bearer header and check scopes."""
    cfg = get_config()
    token = SessionResolver(secret=cfg.JWT_SECRET, cookie_name=cfg.SESSION_COOKIE_NAME).token_from_headers(
        request.headers
    )
    if token is None:
        raise AuthenticationError("Authentication is required.")
    user = get_current_user(token=token, settings=cfg)
    require_scopes(user.role, scopes)
    return user


def requires(*scopes: str) -> Callable[[Request], CurrentUser]:
    """Build a FastAPI dependency enforcing ``scopes``."""

    def dependency(request: Request) -> CurrentUser:
        return authorize(request, list(scopes))

    return dependency
