"""Pydantic schema package for API contracts."""

from app.schemas.auth import LoginRequest, RefreshRequest, SessionUserResponse, TokenResponse
from app.schemas.common import APIEnvelope, ErrorEnvelope
from app.schemas.contracts import (
    ContractCreateRequest,
    ContractResponse,
    ContractUpdateRequest,
    SignContractRequest,
)
from app.schemas.customers import (
    CustomerCreateRequest,
    CustomerResponse,
    ProjectCreateRequest,
    ProjectProgressRequest,
    ProjectResponse,
    ProjectUpdateResponse,
)
from app.schemas.dashboards import (
    ActivityItemResponse,
    AdminOverviewResponse,
    AuditLogResponse,
    PortalOverviewResponse,
)
from app.schemas.leads import (
    EmailCheckResponse,
    LeadResponse,
    LeadStatusUpdateRequest,
    SurveyProgressRequest,
    SurveySubmitRequest,
)

__all__ = [
    "APIEnvelope",
    "ActivityItemResponse",
    "AdminOverviewResponse",
    "AuditLogResponse",
    "ContractCreateRequest",
    "ContractResponse",
    "ContractUpdateRequest",
    "CustomerCreateRequest",
    "CustomerResponse",
    "EmailCheckResponse",
    "ErrorEnvelope",
    "LeadResponse",
    "LeadStatusUpdateRequest",
    "LoginRequest",
    "PortalOverviewResponse",
    "ProjectCreateRequest",
    "ProjectProgressRequest",
    "ProjectResponse",
    "ProjectUpdateResponse",
    "RefreshRequest",
    "SessionUserResponse",
    "SignContractRequest",
    "SurveyProgressRequest",
    "SurveySubmitRequest",
    "TokenResponse",
]
