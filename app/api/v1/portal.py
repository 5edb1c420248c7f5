"""Customer portal endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.api.v1._authz import requires
from app.auth.caller_context import CallerContext
from app.core.dependencies import (
    CurrentUser,
    get_caller_context,
    get_db_session,
    get_request_meta,
    get_signature_store,
)
from app.core.exceptions import NotFoundError, ValidationError
from app.schemas.contracts import ContractResponse, SignContractRequest
from app.schemas.customers import ProjectResponse, ProjectUpdateResponse
from app.schemas.dashboards import PortalOverviewResponse
from app.services.contract_service import SIGN_FIELD_MESSAGES, ContractService
from app.services.dashboard_service import DashboardService
from app.services.project_service import ProjectService
from app.services.signature_store import SignatureStore

router = APIRouter(prefix="/portal", tags=["portal"])


def _customer_id(caller: CallerContext) -> str:
    if caller.customer_id is None:
        raise NotFoundError("Customer profile not found")
    return caller.customer_id


@router.get("/overview", response_model=PortalOverviewResponse)
def overview(
    user: CurrentUser = Depends(requires("portal.read")),
    db: Session = Depends(get_db_session),
) -> PortalOverviewResponse:
    customer_id = _customer_id(get_caller_context(user, db))
    return PortalOverviewResponse.model_validate(DashboardService(db=db).portal_overview(customer_id))


@router.get("/projects", response_model=list[ProjectResponse])
def list_projects(
    user: CurrentUser = Depends(requires("portal.read")),
    db: Session = Depends(get_db_session),
) -> list[ProjectResponse]:
    customer_id = _customer_id(get_caller_context(user, db))
    return [ProjectResponse.model_validate(p) for p in ProjectService(db=db).list_for_customer(customer_id)]


@router.get("/projects/{project_id}/updates", response_model=list[ProjectUpdateResponse])
def list_project_updates(
    project_id: str,
    user: CurrentUser = Depends(requires("portal.read")),
    db: Session = Depends(get_db_session),
) -> list[ProjectUpdateResponse]:
    updates = ProjectService(db=db).list_updates(project_id, get_caller_context(user, db))
    return [ProjectUpdateResponse.model_validate(u) for u in updates]


@router.get("/contracts", response_model=list[ContractResponse])
def list_contracts(
    user: CurrentUser = Depends(requires("contracts.view")),
    db: Session = Depends(get_db_session),
) -> list[ContractResponse]:
    customer_id = _customer_id(get_caller_context(user, db))
    contracts = ContractService(db=db).list_for_customer(customer_id)
    return [ContractResponse.from_contract(contract) for contract in contracts]


@router.get("/contracts/{contract_id}", response_model=ContractResponse)
def get_contract(
    contract_id: str,
    user: CurrentUser = Depends(requires("contracts.view")),
    db: Session = Depends(get_db_session),
) -> ContractResponse:
    caller = get_caller_context(user, db)
    contract = ContractService(db=db).fetch_contract(contract_id, caller)
    return ContractResponse.from_contract(contract, as_admin=caller.is_admin)


@router.post("/contracts/{contract_id}/view", response_model=ContractResponse)
def mark_viewed(
    contract_id: str,
    request: Request,
    user: CurrentUser = Depends(requires("contracts.view")),
    db: Session = Depends(get_db_session),
) -> ContractResponse:
    caller = get_caller_context(user, db)
    contract = ContractService(db=db).mark_viewed(contract_id, caller, meta=get_request_meta(request, user))
    return ContractResponse.from_contract(contract, as_admin=caller.is_admin)


@router.post("/contracts/{contract_id}/sign", response_model=ContractResponse)
def sign_contract(
    contract_id: str,
    payload: SignContractRequest,
    request: Request,
    user: CurrentUser = Depends(requires("contracts.sign")),
    db: Session = Depends(get_db_session),
    store: SignatureStore = Depends(get_signature_store),
) -> ContractResponse:
    missing = payload.first_missing_field()
    if missing is not None:
        raise ValidationError(SIGN_FIELD_MESSAGES[missing], field=missing)

    caller = get_caller_context(user, db)
    contract = ContractService(db=db, signature_store=store).sign_contract(
        contract_id,
        caller,
        signature_data=payload.signature_data,
        signer_name=payload.signer_name,
        agreed_to_terms=payload.agreed_to_terms,
        meta=get_request_meta(request, user),
    )
    return ContractResponse.from_contract(contract, as_admin=caller.is_admin)
