from __future__ import annotations

from app.models.enums import ContractStatus, LeadStatus
from app.models.lead import Lead
from app.services.dashboard_service import DashboardService
from app.services.project_service import ProjectService


def test_portal_overview_counts_and_activity(db_session, make_customer, make_contract):
    customer = make_customer()
    other = make_customer(email="other@example.com", name="Other")
    projects = ProjectService(db=db_session)
    project = projects.create_project(customer.id, "Site build")
    projects.update_progress(project.id, 25)
    projects.create_project(other.id, "Not mine")
    make_contract(customer, status=ContractStatus.SENT, title="Pending agreement")
    make_contract(customer, status=ContractStatus.SIGNED, title="Done agreement")
    make_contract(other, status=ContractStatus.SENT)

    overview = DashboardService(db=db_session).portal_overview(customer.id)

    assert overview.active_projects == 1
    assert overview.pending_contracts == 1
    assert {item.title for item in overview.recent_activity} == {"Site build", "Pending agreement", "Done agreement"}
    by_title = {item.title: item for item in overview.recent_activity}
    assert by_title["Pending agreement"].description == "Awaiting your signature"
    assert by_title["Done agreement"].description == "Status: SIGNED"
    assert by_title["Site build"].description == "Status: IN PROGRESS (25% complete)"
    assert by_title["Site build"].id == f"project-{project.id}"


def test_portal_overview_caps_activity(db_session, make_customer, make_contract):
    customer = make_customer()
    projects = ProjectService(db=db_session)
    for index in range(7):
        projects.create_project(customer.id, f"Project {index}")
        make_contract(customer, status=ContractStatus.DRAFT, title=f"Contract {index}")

    overview = DashboardService(db=db_session).portal_overview(customer.id)

    assert len(overview.recent_activity) == 10
    dates = [item.date for item in overview.recent_activity]
    assert dates == sorted(dates, reverse=True)


def test_admin_overview(db_session, make_customer, make_contract):
    customer = make_customer()
    db_session.add(Lead(name="Fresh", email="fresh@example.com", status=LeadStatus.NEW, current_step=0))
    db_session.commit()
    make_contract(customer, status=ContractStatus.SENT)
    make_contract(customer, status=ContractStatus.VIEWED)
    make_contract(customer, status=ContractStatus.DRAFT)

    overview = DashboardService(db=db_session).admin_overview()

    assert overview.total_leads == 2
    assert overview.new_leads == 1
    assert overview.total_customers == 1
    assert overview.awaiting_signature == 2
    assert overview.contracts_by_status["DRAFT"] == 1
    assert overview.contracts_by_status["EXPIRED"] == 0
