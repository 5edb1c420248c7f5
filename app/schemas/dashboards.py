"""Dashboard and audit read models."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


class ActivityItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    type: str
    title: str
    description: str
    date: datetime


class PortalOverviewResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    active_projects: int
    pending_contracts: int
    recent_activity: list[ActivityItemResponse]


class AdminOverviewResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_leads: int
    new_leads: int
    total_customers: int
    active_projects: int
    awaiting_signature: int
    contracts_by_status: dict[str, int]


class AuditLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    action: str
    entity: str
    entity_id: str | None = None
    details: dict[str, Any] | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    user_id: str | None = None
    created_at: datetime | None = None
