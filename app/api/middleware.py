"""HTTP middleware applying the route guard to page navigation."""

from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import sessionmaker
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from app.auth.route_guard import LeadLookup, SessionLookup, guard_request
from app.core.logging import LogContext, build_log_event
from app.services.lead_service import LeadService
from app.utils.ids import new_request_id

logger = logging.getLogger(__name__)


def lead_lookup(session_factory: sessionmaker) -> LeadLookup:
    """Build a lead-existence check that opens its own short-lived session."""

    def lead_exists(email: str) -> bool:
        with session_factory() as db:
            return LeadService(db=db).exists_by_email(email)

    return lead_exists


class RouteGuardMiddleware(BaseHTTPMiddleware):
    """Redirects browser navigation that the route guard rejects."""

    def __init__(self, app: ASGIApp, resolve_session: SessionLookup, lead_exists: LeadLookup) -> None:
        super().__init__(app)
        self.resolve_session = resolve_session
        self.lead_exists = lead_exists

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        decision, session = await run_in_threadpool(
            guard_request,
            path,
            dict(request.headers),
            self.resolve_session,
            self.lead_exists,
        )
        request.state.session = session
        if decision.allowed:
            return await call_next(request)

        context = LogContext(
            user_id=session.user.id if session else None,
            role=session.user.role.value if session else None,
            path=path,
            request_id=request.headers.get("x-request-id") or new_request_id(),
        )
        logger.info(
            "route_guard.redirect",
            extra=build_log_event("route_guard.redirect", context, reason=decision.reason, location=decision.redirect_to),
        )
        return RedirectResponse(url=decision.redirect_to, status_code=307)
