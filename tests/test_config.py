from __future__ import annotations

import pytest

from app.core.config import PLACEHOLDER_JWT_SECRET, _build_config
from app.core.exceptions import ConfigurationError


def test_defaults_for_development(monkeypatch):
    monkeypatch.delenv("ADMIN_EMAILS", raising=False)
    monkeypatch.setenv("DATABASE_URL", "sqlite:///./test.db")
    config = _build_config("development")
    assert config.ENV == "development"
    assert config.is_production is False
    assert config.ADMIN_EMAILS == ()
    assert config.SESSION_COOKIE_NAME


def test_admin_emails_are_normalized(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///./test.db")
    monkeypatch.setenv("ADMIN_EMAILS", " Owner@Example.com, ,ops@example.com ")
    config = _build_config("development")
    assert config.ADMIN_EMAILS == ("owner@example.com", "ops@example.com")


def test_rejects_unsupported_database_scheme(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "mysql://user:pw@localhost/collab")
    with pytest.raises(ConfigurationError, match="DATABASE_URL"):
        _build_config("development")


def test_production_rejects_placeholder_secret(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://collab:pw@db.internal:5432/collab")
    monkeypatch.setenv("JWT_SECRET", PLACEHOLDER_JWT_SECRET)
    with pytest.raises(ConfigurationError, match="JWT_SECRET"):
        _build_config("production")


def test_production_disables_debug(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://collab:pw@db.internal:5432/collab")
    monkeypatch.setenv("JWT_SECRET", "a-real-secret")
    monkeypatch.setenv("DEBUG", "true")
    config = _build_config("production")
    assert config.DEBUG is False
    assert config.SESSION_COOKIE_SECURE is True


def test_rejects_bad_log_level(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///./test.db")
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    with pytest.raises(ConfigurationError, match="LOG_LEVEL"):
        _build_config("development")
