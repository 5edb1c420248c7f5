"""Customer and project request/response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import ProjectStatus


class CustomerCreateRequest(BaseModel):
    email: str = Field(min_length=3, max_length=320)
    name: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=8, max_length=256)
    company_name: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=64)


class CustomerResponse(BaseModel):
    id: str
    user_id: str
    email: str
    name: str
    company_name: str | None = None
    phone: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_customer(cls, customer: Any) -> "CustomerResponse":
        return cls(
            id=customer.id,
            user_id=customer.user_id,
            email=customer.user.email,
            name=customer.user.name,
            company_name=customer.company_name,
            phone=customer.phone,
            created_at=customer.created_at,
        )


class ProjectCreateRequest(BaseModel):
    customer_id: str = Field(min_length=1, max_length=36)
    title: str = Field(min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=10000)
    start_date: datetime | None = None
    end_date: datetime | None = None


class ProjectProgressRequest(BaseModel):
    progress: int = Field(ge=0, le=100)
    status: ProjectStatus | None = None
    update_title: str | None = Field(default=None, max_length=255)
    update_content: str | None = Field(default=None, max_length=10000)


class ProjectResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    customer_id: str
    title: str
    description: str | None = None
    status: ProjectStatus
    progress: int
    start_date: datetime | None = None
    end_date: datetime | None = None
    updated_at: datetime | None = None


class ProjectUpdateResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    content: str
    progress: int
    created_at: datetime | None = None
