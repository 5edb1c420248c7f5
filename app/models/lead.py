"""Lead model module."""

from __future__ import annotations

from typing import Any

from sqlalchemy import JSON, Enum, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import AuditMixin, Base, IdMixin
from app.models.enums import Budget, LeadStatus, ProjectType


class Lead(Base, IdMixin, AuditMixin):
    __tablename__ = "leads"
    __table_args__ = (Index("idx_leads_status", "status"),)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    details: Mapped[str | None] = mapped_column(Text)
    project_type: Mapped[ProjectType | None] = mapped_column(Enum(ProjectType, name="project_type"))
    budget: Mapped[Budget | None] = mapped_column(Enum(Budget, name="budget"))
    survey_data: Mapped[dict[str, Any] | None] = mapped_column(JSON)
    current_step: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    status: Mapped[LeadStatus] = mapped_column(Enum(LeadStatus, name="lead_status"), default=LeadStatus.NEW, nullable=False)
