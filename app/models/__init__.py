"""SQLAlchemy model package for the portal schema."""

from app.models.audit_log import AuditLog
from app.models.base import Base
from app.models.contract import Contract
from app.models.customer import Customer
from app.models.enums import (
    Budget,
    ContractStatus,
    LeadStatus,
    ProjectStatus,
    ProjectType,
    UserRole,
)
from app.models.lead import Lead
from app.models.project import Project
from app.models.project_update import ProjectUpdate
from app.models.user import User

__all__ = [
    "AuditLog",
    "Base",
    "Budget",
    "Contract",
    "ContractStatus",
    "Customer",
    "Lead",
    "LeadStatus",
    "Project",
    "ProjectStatus",
    "ProjectType",
    "ProjectUpdate",
    "User",
    "UserRole",
]
