"""Dependency providers for API handlers."""

from __future__ import annotations

from collections.abc import Generator
from dataclasses import dataclass
from typing import Any

from fastapi import Request
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.auth.caller_context import CallerContext
from app.auth.jwt import decode_jwt
from app.auth.session import session_from_claims
from app.core.config import Config, get_config
from app.models.customer import Customer
from app.models.enums import UserRole
from app.services.audit_service import RequestMeta
from app.services.email_sender import ContractNotifier, EmailSender
from app.services.signature_store import SignatureStore


@dataclass(frozen=True)
class CurrentUser:
    user_id: str
    email: str
    role: UserRole
    claims: dict[str, Any]


def get_settings() -> Config:
    """Return validated application configuration."""
    return get_config()


def get_db_session(request: Request) -> Generator[Session, None, None]:
    """Yield a request-scoped SQLAlchemy session from the app's factory."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_signature_store(request: Request) -> SignatureStore:
    return request.app.state.signature_store


def get_contract_notifier() -> ContractNotifier:
    cfg = get_settings()
    return ContractNotifier(sender=EmailSender(config=cfg), portal_base_url=cfg.PORTAL_BASE_URL)


def get_current_user(token: str, settings: Config | None = None) -> CurrentUser:
    """Resolve the current user from an access token."""
    cfg = settings or get_settings()
    claims = decode_jwt(token=token, secret=cfg.JWT_SECRET)
    session = session_from_claims(claims)
    return CurrentUser(
        user_id=session.user.id,
        email=session.user.email,
        role=session.user.role,
        claims=claims,
    )


def get_caller_context(user: CurrentUser, db: Session) -> CallerContext:
    """Attach the caller's customer record, if any, for ownership checks."""
    customer_id = None
    if user.role is UserRole.CUSTOMER:
        customer_id = db.scalar(select(Customer.id).where(Customer.user_id == user.user_id))
    return CallerContext(user_id=user.user_id, role=user.role, customer_id=customer_id)


def get_request_meta(request: Request, user: CurrentUser | None = None) -> RequestMeta:
    client_host = request.client.host if request.client else None
    forwarded = request.headers.get("x-forwarded-for")
    ip_address = forwarded.split(",", 1)[0].strip() if forwarded else client_host
    return RequestMeta(
        user_id=user.user_id if user else None,
        ip_address=ip_address,
        user_agent=request.headers.get("user-agent"),
    )
