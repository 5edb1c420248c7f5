"""Redirect decisions for browser navigation to admin and portal pages.

The guard only reads identity and a lead-existence flag. Both capabilities
are passed in, so the decision can be exercised with fake sessions.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from urllib.parse import urlencode

from app.auth.session import Session
from app.models.enums import UserRole

logger = logging.getLogger(__name__)

ADMIN_ROUTES = ("/admin",)
PORTAL_ROUTES = ("/portal",)
PUBLIC_ROUTES = ("/login", "/api/auth", "/portal-access-denied")

LOGIN_PATH = "/login"
ADMIN_HOME = "/admin"
PORTAL_HOME = "/portal"
ACCESS_DENIED_PATH = "/portal-access-denied"

SessionLookup = Callable[[Mapping[str, str]], Session | None]
LeadLookup = Callable[[str], bool]


class RouteKind(enum.Enum):
    PUBLIC = "public"
    ADMIN = "admin"
    PORTAL = "portal"


@dataclass(frozen=True)
class GuardDecision:
    redirect_to: str | None = None
    reason: str = "allowed"

    @property
    def allowed(self) -> bool:
        return self.redirect_to is None

    @classmethod
    def allow(cls) -> "GuardDecision":
        return cls()

    @classmethod
    def redirect(cls, location: str, reason: str) -> "GuardDecision":
        return cls(redirect_to=location, reason=reason)


def is_path_match(pathname: str, routes: tuple[str, ...]) -> bool:
    return any(pathname == route or pathname.startswith(f"{route}/") for route in routes)


def classify_path(pathname: str) -> RouteKind:
    if is_path_match(pathname, PUBLIC_ROUTES):
        return RouteKind.PUBLIC
    if is_path_match(pathname, ADMIN_ROUTES):
        return RouteKind.ADMIN
    if is_path_match(pathname, PORTAL_ROUTES):
        return RouteKind.PORTAL
    return RouteKind.PUBLIC


def login_redirect(pathname: str) -> str:
    return f"{LOGIN_PATH}?{urlencode({'callbackUrl': pathname}, safe='/')}"


def guard_request(
    pathname: str,
    headers: Mapping[str, str],
    resolve_session: SessionLookup,
    lead_exists: LeadLookup,
) -> tuple[GuardDecision, Session | None]:
    """Decide whether a request may reach its page.

    Returns the decision together with the resolved session so callers can
    reuse it. A failing session lookup counts as unauthenticated; a failing
    lead lookup lets the request through to the page, which has its own
    data checks.
    """
    kind = classify_path(pathname)
    if kind is RouteKind.PUBLIC:
        return GuardDecision.allow(), None

    try:
        session = resolve_session(headers)
    except Exception:
        logger.exception("route_guard.session_lookup_failed", extra={"event": "route_guard.session_lookup_failed"})
        session = None

    if session is None:
        return GuardDecision.redirect(login_redirect(pathname), "unauthenticated"), None

    role = session.user.role
    if kind is RouteKind.ADMIN and role is not UserRole.ADMIN:
        return GuardDecision.redirect(PORTAL_HOME, "admin_requires_admin_role"), session

    if kind is RouteKind.PORTAL and role is not UserRole.CUSTOMER:
        return GuardDecision.redirect(ADMIN_HOME, "portal_requires_customer_role"), session

    if kind is RouteKind.PORTAL:
        try:
            is_lead = lead_exists(session.user.email)
        except Exception:
            logger.warning(
                "route_guard.lead_lookup_failed",
                exc_info=True,
                extra={"event": "route_guard.lead_lookup_failed", "user_id": session.user.id},
            )
            return GuardDecision.allow(), session
        if not is_lead:
            return GuardDecision.redirect(ACCESS_DENIED_PATH, "portal_requires_lead"), session

    return GuardDecision.allow(), session
