"""Admin back-office endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session

from app.api.v1._authz import requires
from app.core.dependencies import (
    CurrentUser,
    get_contract_notifier,
    get_db_session,
    get_request_meta,
)
from app.models.enums import ContractStatus, LeadStatus, ProjectStatus
from app.schemas.contracts import ContractCreateRequest, ContractResponse, ContractUpdateRequest
from app.schemas.customers import (
    CustomerCreateRequest,
    CustomerResponse,
    ProjectCreateRequest,
    ProjectProgressRequest,
    ProjectResponse,
)
from app.schemas.dashboards import AdminOverviewResponse, AuditLogResponse
from app.schemas.leads import LeadResponse, LeadStatusUpdateRequest
from app.services.audit_service import AuditService
from app.services.contract_service import ContractService
from app.services.customer_service import CustomerService
from app.services.dashboard_service import DashboardService
from app.services.email_sender import ContractNotifier
from app.services.lead_service import LeadService
from app.services.project_service import ProjectService

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/overview", response_model=AdminOverviewResponse)
def overview(
    user: CurrentUser = Depends(requires("admin.read")),
    db: Session = Depends(get_db_session),
) -> AdminOverviewResponse:
    return AdminOverviewResponse.model_validate(DashboardService(db=db).admin_overview())


# Contracts


@router.get("/contracts")
def list_contracts(
    search: str | None = Query(default=None, max_length=255),
    status_filter: ContractStatus | None = Query(default=None, alias="status"),
    customer_id: str | None = Query(default=None),
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    user: CurrentUser = Depends(requires("contracts.manage")),
    db: Session = Depends(get_db_session),
) -> dict:
    contracts = ContractService(db=db).list_contracts(
        search=search,
        status=status_filter,
        customer_id=customer_id,
        limit=limit,
        offset=offset,
    )
    return {
        "items": [ContractResponse.from_contract(c, as_admin=True).model_dump(mode="json") for c in contracts],
        "limit": limit,
        "offset": offset,
    }


@router.post("/contracts", response_model=ContractResponse, status_code=status.HTTP_201_CREATED)
def create_contract(
    payload: ContractCreateRequest,
    request: Request,
    user: CurrentUser = Depends(requires("contracts.manage")),
    db: Session = Depends(get_db_session),
) -> ContractResponse:
    contract = ContractService(db=db).create_contract(
        title=payload.title,
        customer_id=payload.customer_id,
        file_url=payload.file_url,
        meta=get_request_meta(request, user),
    )
    return ContractResponse.from_contract(contract, as_admin=True)


@router.get("/contracts/{contract_id}", response_model=ContractResponse)
def get_contract(
    contract_id: str,
    user: CurrentUser = Depends(requires("contracts.manage")),
    db: Session = Depends(get_db_session),
) -> ContractResponse:
    return ContractResponse.from_contract(ContractService(db=db).require_contract(contract_id), as_admin=True)


@router.patch("/contracts/{contract_id}", response_model=ContractResponse)
def update_contract(
    contract_id: str,
    payload: ContractUpdateRequest,
    request: Request,
    user: CurrentUser = Depends(requires("contracts.manage")),
    db: Session = Depends(get_db_session),
) -> ContractResponse:
    contract = ContractService(db=db).update_contract(
        contract_id,
        title=payload.title,
        file_url=payload.file_url,
        meta=get_request_meta(request, user),
    )
    return ContractResponse.from_contract(contract, as_admin=True)


@router.delete("/contracts/{contract_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_contract(
    contract_id: str,
    request: Request,
    user: CurrentUser = Depends(requires("contracts.manage")),
    db: Session = Depends(get_db_session),
) -> Response:
    ContractService(db=db).delete_contract(contract_id, meta=get_request_meta(request, user))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/contracts/{contract_id}/send", response_model=ContractResponse)
def send_contract(
    contract_id: str,
    request: Request,
    user: CurrentUser = Depends(requires("contracts.manage")),
    db: Session = Depends(get_db_session),
    notifier: ContractNotifier = Depends(get_contract_notifier),
) -> ContractResponse:
    service = ContractService(db=db, notifier=notifier)
    contract = service.send_contract(contract_id, meta=get_request_meta(request, user))
    return ContractResponse.from_contract(contract, as_admin=True)


@router.post("/contracts/{contract_id}/expire", response_model=ContractResponse)
def expire_contract(
    contract_id: str,
    request: Request,
    user: CurrentUser = Depends(requires("contracts.manage")),
    db: Session = Depends(get_db_session),
) -> ContractResponse:
    contract = ContractService(db=db).expire_contract(contract_id, meta=get_request_meta(request, user))
    return ContractResponse.from_contract(contract, as_admin=True)


# Leads


@router.get("/leads")
def list_leads(
    search: str | None = Query(default=None, max_length=255),
    status_filter: LeadStatus | None = Query(default=None, alias="status"),
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    user: CurrentUser = Depends(requires("leads.manage")),
    db: Session = Depends(get_db_session),
) -> dict:
    service = LeadService(db=db)
    leads = service.list_leads(search=search, status=status_filter, limit=limit, offset=offset)
    return {
        "items": [LeadResponse.model_validate(lead).model_dump(mode="json") for lead in leads],
        "total": service.count(),
        "limit": limit,
        "offset": offset,
    }


@router.get("/leads/{lead_id}", response_model=LeadResponse)
def get_lead(
    lead_id: str,
    user: CurrentUser = Depends(requires("leads.manage")),
    db: Session = Depends(get_db_session),
) -> LeadResponse:
    return LeadResponse.model_validate(LeadService(db=db).require_lead(lead_id))


@router.patch("/leads/{lead_id}/status", response_model=LeadResponse)
def update_lead_status(
    lead_id: str,
    payload: LeadStatusUpdateRequest,
    request: Request,
    user: CurrentUser = Depends(requires("leads.manage")),
    db: Session = Depends(get_db_session),
) -> LeadResponse:
    lead = LeadService(db=db).update_status(lead_id, payload.status)
    AuditService(db=db).log_activity(
        "UPDATE_LEAD_STATUS",
        "Lead",
        lead.id,
        {"status": lead.status.value},
        get_request_meta(request, user),
    )
    return LeadResponse.model_validate(lead)


# Customers


@router.get("/customers")
def list_customers(
    search: str | None = Query(default=None, max_length=255),
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    user: CurrentUser = Depends(requires("customers.manage")),
    db: Session = Depends(get_db_session),
) -> dict:
    service = CustomerService(db=db)
    customers = service.list_customers(search=search, limit=limit, offset=offset)
    return {
        "items": [CustomerResponse.from_customer(c).model_dump(mode="json") for c in customers],
        "total": service.count(),
        "limit": limit,
        "offset": offset,
    }


@router.post("/customers", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
def create_customer(
    payload: CustomerCreateRequest,
    request: Request,
    user: CurrentUser = Depends(requires("customers.manage")),
    db: Session = Depends(get_db_session),
) -> CustomerResponse:
    customer = CustomerService(db=db).create_customer(
        email=payload.email,
        name=payload.name,
        password=payload.password,
        company_name=payload.company_name,
        phone=payload.phone,
    )
    AuditService(db=db).log_activity("CREATE_CUSTOMER", "Customer", customer.id, None, get_request_meta(request, user))
    return CustomerResponse.from_customer(customer)


# Projects


@router.get("/projects")
def list_projects(
    search: str | None = Query(default=None, max_length=255),
    status_filter: ProjectStatus | None = Query(default=None, alias="status"),
    customer_id: str | None = Query(default=None),
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    user: CurrentUser = Depends(requires("projects.manage")),
    db: Session = Depends(get_db_session),
) -> dict:
    projects = ProjectService(db=db).list_projects(
        search=search,
        status=status_filter,
        customer_id=customer_id,
        limit=limit,
        offset=offset,
    )
    return {
        "items": [ProjectResponse.model_validate(p).model_dump(mode="json") for p in projects],
        "limit": limit,
        "offset": offset,
    }


@router.post("/projects", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
def create_project(
    payload: ProjectCreateRequest,
    request: Request,
    user: CurrentUser = Depends(requires("projects.manage")),
    db: Session = Depends(get_db_session),
) -> ProjectResponse:
    project = ProjectService(db=db).create_project(
        customer_id=payload.customer_id,
        title=payload.title,
        description=payload.description,
        start_date=payload.start_date,
        end_date=payload.end_date,
    )
    AuditService(db=db).log_activity("CREATE_PROJECT", "Project", project.id, None, get_request_meta(request, user))
    return ProjectResponse.model_validate(project)


@router.patch("/projects/{project_id}/progress", response_model=ProjectResponse)
def update_project_progress(
    project_id: str,
    payload: ProjectProgressRequest,
    request: Request,
    user: CurrentUser = Depends(requires("projects.manage")),
    db: Session = Depends(get_db_session),
) -> ProjectResponse:
    project = ProjectService(db=db).update_progress(
        project_id,
        payload.progress,
        status=payload.status,
        update_title=payload.update_title,
        update_content=payload.update_content,
    )
    AuditService(db=db).log_activity(
        "UPDATE_PROJECT_PROGRESS",
        "Project",
        project.id,
        {"progress": project.progress, "status": project.status.value},
        get_request_meta(request, user),
    )
    return ProjectResponse.model_validate(project)


# Audit


@router.get("/audit")
def list_audit_logs(
    action: str | None = Query(default=None, max_length=64),
    entity: str | None = Query(default=None, max_length=64),
    user_id: str | None = Query(default=None),
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    user: CurrentUser = Depends(requires("audit.read")),
    db: Session = Depends(get_db_session),
) -> dict:
    logs = AuditService(db=db).list_logs(action=action, entity=entity, user_id=user_id, limit=limit, offset=offset)
    return {
        "items": [AuditLogResponse.model_validate(log).model_dump(mode="json") for log in logs],
        "limit": limit,
        "offset": offset,
    }
