"""Auth endpoints for API v1."""

from __future__ import annotations

from dataclasses import replace

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from app.api.v1._authz import authorize
from app.auth.jwt import REFRESH_TOKEN_USE, TokenPair, create_token_pair, decode_jwt
from app.core.config import Config, get_config
from app.core.dependencies import get_db_session, get_request_meta
from app.core.exceptions import AuthenticationError
from app.models.user import User
from app.schemas.auth import LoginRequest, RefreshRequest, SessionUserResponse, TokenResponse
from app.schemas.common import APIEnvelope
from app.services.audit_service import AuditService
from app.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["auth"])


def _issue_tokens(user: User, cfg: Config) -> TokenPair:
    return create_token_pair(
        user_id=user.id,
        email=user.email,
        role=user.role.value,
        secret=cfg.JWT_SECRET,
        access_ttl_minutes=cfg.JWT_ACCESS_TTL_MINUTES,
        refresh_ttl_days=cfg.JWT_REFRESH_TTL_DAYS,
    )


def _set_session_cookie(response: Response, tokens: TokenPair, cfg: Config) -> None:
    response.set_cookie(
        key=cfg.SESSION_COOKIE_NAME,
        value=tokens.access_token,
        max_age=cfg.JWT_ACCESS_TTL_MINUTES * 60,
        httponly=True,
        secure=cfg.SESSION_COOKIE_SECURE,
        samesite="lax",
    )


@router.post("/login", response_model=TokenResponse)
def login(
    payload: LoginRequest,
    request: Request,
    response: Response,
    db: Session = Depends(get_db_session),
) -> TokenResponse:
    cfg = get_config()
    user = UserService(db=db, config=cfg).authenticate(payload.email, payload.password)
    tokens = _issue_tokens(user, cfg)
    _set_session_cookie(response, tokens, cfg)

    meta = replace(get_request_meta(request), user_id=user.id)
    AuditService(db=db).log_activity("LOGIN", "User", user.id, meta=meta)
    return TokenResponse(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        token_type=tokens.token_type,
    )


@router.post("/refresh", response_model=TokenResponse)
def refresh(
    payload: RefreshRequest,
    response: Response,
    db: Session = Depends(get_db_session),
) -> TokenResponse:
    cfg = get_config()
    claims = decode_jwt(payload.refresh_token, secret=cfg.JWT_SECRET)
    if claims.get("token_use") != REFRESH_TOKEN_USE:
        raise AuthenticationError("Token is not a refresh token.")

    user = UserService(db=db, config=cfg).get_user(str(claims.get("sub")))
    if user is None or not user.is_active:
        raise AuthenticationError("Account is no longer active.")

    tokens = _issue_tokens(user, cfg)
    _set_session_cookie(response, tokens, cfg)
    return TokenResponse(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        token_type=tokens.token_type,
    )


@router.post("/logout", response_model=APIEnvelope)
def logout(response: Response) -> APIEnvelope:
    response.delete_cookie(get_config().SESSION_COOKIE_NAME)
    return APIEnvelope(message="Logged out.")


@router.get("/me", response_model=SessionUserResponse)
def me(request: Request) -> SessionUserResponse:
    user = authorize(request, scopes=[])
    return SessionUserResponse(id=user.user_id, email=user.email, role=user.role.value)
