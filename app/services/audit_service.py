"""Audit trail writes and admin reads."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy import select

from app.models.audit_log import AuditLog
from app.services.base_service import BaseService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestMeta:
    """Who performed an action and from where."""

    user_id: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None


class AuditService(BaseService):
    """Records business actions.

    A failed audit write is rolled back and logged but never raised, so the
    action it describes is not undone by it. Call it only after the action
    itself has been committed.
    """

    def log_activity(
        self,
        action: str,
        entity: str,
        entity_id: str | None = None,
        details: dict[str, Any] | None = None,
        meta: RequestMeta | None = None,
    ) -> AuditLog | None:
        meta = meta or RequestMeta()
        entry = AuditLog(
            action=action,
            entity=entity,
            entity_id=entity_id,
            details=details,
            user_id=meta.user_id,
            ip_address=meta.ip_address,
            user_agent=meta.user_agent[:512] if meta.user_agent else None,
        )
        try:
            self.db.add(entry)
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.exception(
                "audit.write_failed",
                extra={"event": "audit.write_failed", "action": action, "entity": entity, "entity_id": entity_id},
            )
            return None
        return entry

    def list_logs(
        self,
        action: str | None = None,
        entity: str | None = None,
        user_id: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[AuditLog]:
        stmt = select(AuditLog)
        if action:
            stmt = stmt.where(AuditLog.action == action)
        if entity:
            stmt = stmt.where(AuditLog.entity == entity)
        if user_id:
            stmt = stmt.where(AuditLog.user_id == user_id)
        stmt = stmt.order_by(AuditLog.created_at.desc(), AuditLog.id).limit(limit).offset(offset)
        return list(self.db.scalars(stmt))
