"""Browser-facing pages behind the route guard.

Pages return JSON view-models. None of them change state; the contract page
in particular leaves view tracking to the explicit ``view`` API call.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from app.auth.caller_context import CallerContext
from app.core.dependencies import CurrentUser, get_caller_context, get_db_session
from app.core.exceptions import AuthenticationError, NotFoundError
from app.schemas.contracts import ContractResponse
from app.schemas.customers import ProjectResponse
from app.schemas.dashboards import AdminOverviewResponse, PortalOverviewResponse
from app.services.contract_service import ContractService
from app.services.dashboard_service import DashboardService
from app.services.project_service import ProjectService

router = APIRouter(tags=["pages"], include_in_schema=False)


def _caller(request: Request, db: Session) -> CallerContext:
    session = getattr(request.state, "session", None)
    if session is None:
        raise AuthenticationError("Authentication is required.")
    user = CurrentUser(user_id=session.user.id, email=session.user.email, role=session.user.role, claims={})
    return get_caller_context(user, db)


def _customer_id(caller: CallerContext) -> str:
    if caller.customer_id is None:
        raise NotFoundError("Customer profile not found")
    return caller.customer_id


@router.get("/login")
def login_page(callback_url: str | None = Query(default=None, alias="callbackUrl")) -> dict:
    return {"page": "login", "callback_url": callback_url}


@router.get("/portal-access-denied")
def access_denied_page() -> dict:
    return {
        "page": "portal-access-denied",
        "message": "The client portal is available once you have completed our project survey.",
        "survey_url": "/survey",
    }


@router.get("/admin")
def admin_home(request: Request, db: Session = Depends(get_db_session)) -> dict:
    _caller(request, db)
    overview = AdminOverviewResponse.model_validate(DashboardService(db=db).admin_overview())
    return {"page": "admin", "overview": overview.model_dump(mode="json")}


@router.get("/portal")
def portal_home(request: Request, db: Session = Depends(get_db_session)) -> dict:
    customer_id = _customer_id(_caller(request, db))
    overview = PortalOverviewResponse.model_validate(DashboardService(db=db).portal_overview(customer_id))
    return {"page": "portal", "overview": overview.model_dump(mode="json")}


@router.get("/portal/projects")
def portal_projects(request: Request, db: Session = Depends(get_db_session)) -> dict:
    customer_id = _customer_id(_caller(request, db))
    projects = ProjectService(db=db).list_for_customer(customer_id)
    return {
        "page": "portal-projects",
        "projects": [ProjectResponse.model_validate(p).model_dump(mode="json") for p in projects],
    }


@router.get("/portal/contracts")
def portal_contracts(request: Request, db: Session = Depends(get_db_session)) -> dict:
    customer_id = _customer_id(_caller(request, db))
    contracts = ContractService(db=db).list_for_customer(customer_id)
    return {
        "page": "portal-contracts",
        "contracts": [ContractResponse.from_contract(c).model_dump(mode="json") for c in contracts],
    }


@router.get("/portal/contracts/{contract_id}")
def portal_contract_detail(contract_id: str, request: Request, db: Session = Depends(get_db_session)) -> dict:
    caller = _caller(request, db)
    contract = ContractService(db=db).fetch_contract(contract_id, caller)
    return {
        "page": "portal-contract",
        "contract": ContractResponse.from_contract(contract, as_admin=caller.is_admin).model_dump(mode="json"),
        "view_url": f"/api/v1/portal/contracts/{contract.id}/view",
        "sign_url": f"/api/v1/portal/contracts/{contract.id}/sign",
    }
