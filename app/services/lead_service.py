"""Lead service backing the survey funnel and portal gating."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import func, or_, select

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.models.enums import Budget, LeadStatus, ProjectType
from app.models.lead import Lead
from app.services.base_service import BaseService
from app.utils.validators import is_valid_email, like_pattern, normalize_email, sanitize_text

logger = logging.getLogger(__name__)


class LeadService(BaseService):
    """Service for lead CRUD and status transitions."""

    def submit_survey(
        self,
        name: str,
        email: str,
        question_answers: dict[str, Any] | None = None,
        details: str | None = None,
        project_type: ProjectType | None = None,
        budget: Budget | None = None,
    ) -> Lead:
        normalized = normalize_email(email)
        if not is_valid_email(normalized):
            raise ValidationError("Invalid email address", field="email")
        display_name = sanitize_text(name, max_len=255)
        if not display_name:
            raise ValidationError("Name is required", field="name")
        if self.exists_by_email(normalized):
            raise ConflictError("A lead with this email already exists")

        lead = Lead(
            name=display_name,
            email=normalized,
            details=sanitize_text(details) or None,
            project_type=project_type,
            budget=budget,
            survey_data={
                "question_answers": question_answers or {},
                "project_type": project_type.value if project_type else None,
                "budget": budget.value if budget else None,
            },
            status=LeadStatus.NEW,
        )
        self.db.add(lead)
        self.commit()
        self.db.refresh(lead)
        logger.info("lead.created", extra={"event": "lead.created", "lead_id": lead.id})
        return lead

    def exists_by_email(self, email: str) -> bool:
        normalized = normalize_email(email)
        if not normalized:
            return False
        return self.db.scalar(select(Lead.id).where(Lead.email == normalized)) is not None

    def get_lead(self, lead_id: str) -> Lead | None:
        return self.db.get(Lead, lead_id)

    def require_lead(self, lead_id: str) -> Lead:
        lead = self.get_lead(lead_id)
        if lead is None:
            raise NotFoundError("Lead not found")
        return lead

    def list_leads(
        self,
        search: str | None = None,
        status: LeadStatus | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Lead]:
        stmt = select(Lead)
        if search:
            pattern = like_pattern(search)
            stmt = stmt.where(or_(Lead.name.ilike(pattern, escape="\\"), Lead.email.ilike(pattern, escape="\\")))
        if status is not None:
            stmt = stmt.where(Lead.status == status)
        stmt = stmt.order_by(Lead.created_at.desc(), Lead.id).limit(limit).offset(offset)
        return list(self.db.scalars(stmt))

    def update_status(self, lead_id: str, status: LeadStatus) -> Lead:
        lead = self.require_lead(lead_id)
        lead.status = LeadStatus(status)
        self.commit()
        self.db.refresh(lead)
        return lead

    def update_progress(self, lead_id: str, current_step: int, survey_data: dict[str, Any] | None = None) -> Lead:
        if current_step < 0:
            raise ValidationError("Step must be >= 0", field="current_step")
        lead = self.require_lead(lead_id)
        lead.current_step = current_step
        if survey_data is not None:
            lead.survey_data = {**(lead.survey_data or {}), **survey_data}
        self.commit()
        self.db.refresh(lead)
        return lead

    def count(self) -> int:
        return int(self.db.scalar(select(func.count()).select_from(Lead)) or 0)
