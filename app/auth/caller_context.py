"""Caller context extraction and ownership enforcement utilities."""

from __future__ import annotations

from dataclasses import dataclass

from app.core.exceptions import NotFoundError
from app.models.enums import UserRole


@dataclass(frozen=True)
class CallerContext:
    user_id: str
    role: UserRole
    customer_id: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN


def can_access(entity_customer_id: str, context: CallerContext) -> bool:
    if context.is_admin:
        return True
    return context.customer_id is not None and entity_customer_id == context.customer_id


def enforce_ownership(entity_customer_id: str, context: CallerContext, label: str = "Resource") -> None:
    """Ensure a customer-owned entity is visible to the caller.

    Raises ``NotFoundError`` rather than a permission error so callers cannot
    discover the existence of other customers' records.
    """
    if not can_access(entity_customer_id, context):
        raise NotFoundError(f"{label} not found")
