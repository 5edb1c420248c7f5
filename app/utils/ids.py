"""Identifier generation helpers."""

from __future__ import annotations

import uuid


def new_id() -> str:
    """Create a UUID4-based entity identifier."""
    return str(uuid.uuid4())


def new_request_id() -> str:
    """Create a short identifier for correlating request logs."""
    return uuid.uuid4().hex[:16]
