"""Read-only overviews for the portal and admin home pages."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from sqlalchemy import func, select

from app.models.contract import Contract
from app.models.customer import Customer
from app.models.enums import ContractStatus, LeadStatus
from app.models.lead import Lead
from app.models.project import Project
from app.services.base_service import BaseService
from app.services.contract_service import PENDING_SIGNATURE_STATUSES
from app.services.project_service import ACTIVE_PROJECT_STATUSES

RECENT_PER_KIND = 5
RECENT_ACTIVITY_LIMIT = 10


@dataclass(frozen=True)
class ActivityItem:
    id: str
    type: str
    title: str
    description: str
    date: datetime


@dataclass(frozen=True)
class PortalOverview:
    active_projects: int
    pending_contracts: int
    recent_activity: list[ActivityItem] = field(default_factory=list)


@dataclass(frozen=True)
class AdminOverview:
    total_leads: int
    new_leads: int
    total_customers: int
    active_projects: int
    awaiting_signature: int
    contracts_by_status: dict[str, int] = field(default_factory=dict)


def _project_activity(project: Project) -> ActivityItem:
    status = project.status.value.replace("_", " ")
    return ActivityItem(
        id=f"project-{project.id}",
        type="project",
        title=project.title,
        description=f"Status: {status} ({project.progress}% complete)",
        date=project.updated_at,
    )


def _contract_activity(contract: Contract) -> ActivityItem:
    if contract.status in PENDING_SIGNATURE_STATUSES:
        description = "Awaiting your signature"
    else:
        description = f"Status: {contract.status.value}"
    return ActivityItem(
        id=f"contract-{contract.id}",
        type="contract",
        title=contract.title,
        description=description,
        date=contract.created_at,
    )


def _activity_sort_key(item: ActivityItem) -> datetime:
    # SQLite hands back naive timestamps; everything is stored as UTC.
    if item.date.tzinfo is None:
        return item.date.replace(tzinfo=timezone.utc)
    return item.date


class DashboardService(BaseService):
    def _count(self, stmt) -> int:
        return int(self.db.scalar(stmt) or 0)

    def portal_overview(self, customer_id: str) -> PortalOverview:
        active_projects = self._count(
            select(func.count())
            .select_from(Project)
            .where(Project.customer_id == customer_id, Project.status.in_(ACTIVE_PROJECT_STATUSES))
        )
        pending_contracts = self._count(
            select(func.count())
            .select_from(Contract)
            .where(Contract.customer_id == customer_id, Contract.status.in_(PENDING_SIGNATURE_STATUSES))
        )

        projects = self.db.scalars(
            select(Project)
            .where(Project.customer_id == customer_id)
            .order_by(Project.updated_at.desc())
            .limit(RECENT_PER_KIND)
        )
        contracts = self.db.scalars(
            select(Contract)
            .where(Contract.customer_id == customer_id)
            .order_by(Contract.created_at.desc())
            .limit(RECENT_PER_KIND)
        )
        activity = [_project_activity(p) for p in projects] + [_contract_activity(c) for c in contracts]
        activity.sort(key=_activity_sort_key, reverse=True)

        return PortalOverview(
            active_projects=active_projects,
            pending_contracts=pending_contracts,
            recent_activity=activity[:RECENT_ACTIVITY_LIMIT],
        )

    def admin_overview(self) -> AdminOverview:
        by_status = {status.value: 0 for status in ContractStatus}
        rows = self.db.execute(select(Contract.status, func.count()).group_by(Contract.status))
        for status, total in rows:
            by_status[ContractStatus(status).value] = int(total)

        return AdminOverview(
            total_leads=self._count(select(func.count()).select_from(Lead)),
            new_leads=self._count(select(func.count()).select_from(Lead).where(Lead.status == LeadStatus.NEW)),
            total_customers=self._count(select(func.count()).select_from(Customer)),
            active_projects=self._count(
                select(func.count()).select_from(Project).where(Project.status.in_(ACTIVE_PROJECT_STATUSES))
            ),
            awaiting_signature=sum(by_status[s.value] for s in PENDING_SIGNATURE_STATUSES),
            contracts_by_status=by_status,
        )
