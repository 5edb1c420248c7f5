from __future__ import annotations

from datetime import timedelta

import pytest

from app.auth.jwt import create_access_token, create_refresh_token, encode_jwt
from app.auth.session import SessionResolver, extract_bearer_token, extract_cookie, parse_role
from app.core.exceptions import AuthenticationError
from app.models.enums import UserRole

SECRET = "session-secret"
COOKIE = "portal_session"


@pytest.fixture
def resolver():
    return SessionResolver(secret=SECRET, cookie_name=COOKIE)


def _access(role: str = "CUSTOMER") -> str:
    return create_access_token(user_id="u-1", email="Casey@Example.com", role=role, secret=SECRET)


def test_resolves_session_from_cookie(resolver):
    session = resolver({"Cookie": f"theme=dark; {COOKIE}={_access()}"})
    assert session is not None
    assert session.user.id == "u-1"
    assert session.user.email == "casey@example.com"
    assert session.user.role is UserRole.CUSTOMER


def test_resolves_session_from_bearer_header(resolver):
    session = resolver({"Authorization": f"Bearer {_access('ADMIN')}"})
    assert session is not None
    assert session.user.role is UserRole.ADMIN


def test_cookie_wins_over_bearer(resolver):
    cookie_token = _access("ADMIN")
    headers = {"cookie": f"{COOKIE}={cookie_token}", "authorization": f"Bearer {_access()}"}
    assert resolver.token_from_headers(headers) == cookie_token


def test_missing_or_unusable_tokens_resolve_to_none(resolver):
    assert resolver({}) is None
    assert resolver({"Authorization": "Bearer garbage"}) is None
    assert resolver({"Authorization": "Basic abc"}) is None

    refresh = create_refresh_token(user_id="u-1", email="a@example.com", role="CUSTOMER", secret=SECRET)
    assert resolver({"Authorization": f"Bearer {refresh}"}) is None

    expired = encode_jwt(
        {"sub": "u-1", "email": "a@example.com", "role": "CUSTOMER", "token_use": "access"},
        secret=SECRET,
        ttl=timedelta(seconds=-120),
    )
    assert resolver({"Authorization": f"Bearer {expired}"}) is None

    foreign = create_access_token(user_id="u-1", email="a@example.com", role="CUSTOMER", secret="other")
    assert resolver({"Authorization": f"Bearer {foreign}"}) is None


def test_unknown_role_is_rejected(resolver):
    token = create_access_token(user_id="u-1", email="a@example.com", role="SUPERUSER", secret=SECRET)
    assert resolver({"Authorization": f"Bearer {token}"}) is None
    with pytest.raises(AuthenticationError):
        resolver.resolve_token(token)


def test_parse_role_is_case_insensitive():
    assert parse_role("admin") is UserRole.ADMIN
    with pytest.raises(AuthenticationError):
        parse_role(None)


def test_header_helpers():
    assert extract_bearer_token("Bearer abc") == "abc"
    assert extract_bearer_token("bearer   ") is None
    assert extract_bearer_token(None) is None
    assert extract_cookie("a=1; b=2", "b") == "2"
    assert extract_cookie("a=1", "b") is None
    assert extract_cookie(None, "b") is None
