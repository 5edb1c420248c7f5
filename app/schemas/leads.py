"""Lead request/response schemas for API contracts."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import Budget, LeadStatus, ProjectType


class SurveySubmitRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=3, max_length=320)
    question_answers: dict[str, Any] = Field(default_factory=dict)
    details: str | None = Field(default=None, max_length=10000)
    project_type: ProjectType | None = None
    budget: Budget | None = None


class SurveyProgressRequest(BaseModel):
    lead_id: str = Field(min_length=1, max_length=36)
    current_step: int = Field(ge=0)
    survey_data: dict[str, Any] | None = None


class EmailCheckResponse(BaseModel):
    exists: bool


class LeadStatusUpdateRequest(BaseModel):
    status: LeadStatus


class LeadResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    details: str | None = None
    project_type: ProjectType | None = None
    budget: Budget | None = None
    survey_data: dict[str, Any] | None = None
    current_step: int = 0
    status: LeadStatus
    created_at: datetime | None = None
