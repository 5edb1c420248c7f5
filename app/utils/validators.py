"""Deterministic validators and sanitizers used across services and schemas."""

from __future__ import annotations

import re

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")


def sanitize_text(value: str | None, max_len: int = 20000) -> str:
    """Sanitize free-form content before persistence/display."""
    if value is None:
        return ""
    cleaned = str(value).replace("\x00", "").strip()
    cleaned = cleaned[:max_len]
    return cleaned


def normalize_email(value: str | None) -> str:
    """Lower-case and trim an email address."""
    return sanitize_text(value, max_len=320).lower()


def is_valid_email(value: str | None) -> bool:
    return bool(EMAIL_PATTERN.match(normalize_email(value)))


def like_pattern(search: str) -> str:
    """Escape ``search`` for use in a case-insensitive LIKE filter."""
    escaped = search.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
