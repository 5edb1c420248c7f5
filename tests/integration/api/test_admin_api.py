from __future__ import annotations

import pytest

from app.models.enums import ContractStatus, LeadStatus
from app.models.lead import Lead


@pytest.fixture
def admin_headers(make_user, auth_headers):
    return auth_headers(make_user())


def test_customer_is_forbidden_from_admin_api(client, make_customer, auth_headers):
    customer = make_customer()
    response = client.get("/api/v1/admin/contracts", headers=auth_headers(customer.user))
    assert response.status_code == 403
    assert response.json()["error_code"] == "forbidden"


def test_admin_api_requires_authentication(client):
    assert client.get("/api/v1/admin/overview").status_code == 401


def test_contract_lifecycle_through_admin_api(client, admin_headers, make_customer):
    customer = make_customer()

    created = client.post(
        "/api/v1/admin/contracts",
        json={"title": "Retainer", "customer_id": customer.id, "file_url": "https://files.example.com/r.pdf"},
        headers=admin_headers,
    )
    assert created.status_code == 201
    contract = created.json()
    assert contract["status"] == "DRAFT"
    assert contract["available_actions"] == ["dispatch"]

    renamed = client.patch(
        f"/api/v1/admin/contracts/{contract['id']}",
        json={"title": "Monthly retainer"},
        headers=admin_headers,
    )
    assert renamed.json()["title"] == "Monthly retainer"

    sent = client.post(f"/api/v1/admin/contracts/{contract['id']}/send", headers=admin_headers)
    assert sent.status_code == 200
    assert sent.json()["status"] == "SENT"

    resend = client.post(f"/api/v1/admin/contracts/{contract['id']}/send", headers=admin_headers)
    assert resend.status_code == 409

    locked = client.patch(
        f"/api/v1/admin/contracts/{contract['id']}",
        json={"title": "Too late"},
        headers=admin_headers,
    )
    assert locked.status_code == 409

    expired = client.post(f"/api/v1/admin/contracts/{contract['id']}/expire", headers=admin_headers)
    assert expired.json()["status"] == "EXPIRED"
    assert expired.json()["available_actions"] == []

    audit = client.get("/api/v1/admin/audit", params={"entity": "Contract"}, headers=admin_headers)
    actions = {item["action"] for item in audit.json()["items"]}
    assert {"CREATE_CONTRACT", "UPDATE_CONTRACT", "SEND_CONTRACT", "EXPIRE_CONTRACT"} <= actions


def test_create_contract_for_unknown_customer(client, admin_headers):
    response = client.post(
        "/api/v1/admin/contracts",
        json={"title": "Ghost", "customer_id": "missing", "file_url": "https://files.example.com/g.pdf"},
        headers=admin_headers,
    )
    assert response.status_code == 404


def test_create_contract_schema_error_names_field(client, admin_headers):
    response = client.post(
        "/api/v1/admin/contracts",
        json={"title": "", "customer_id": "c", "file_url": "https://files.example.com/g.pdf"},
        headers=admin_headers,
    )
    assert response.status_code == 422
    assert response.json()["field"] == "title"


def test_delete_contract(client, admin_headers, make_customer, make_contract):
    customer = make_customer()
    draft = make_contract(customer, status=ContractStatus.DRAFT)
    signed = make_contract(customer, status=ContractStatus.SIGNED)

    assert client.delete(f"/api/v1/admin/contracts/{draft.id}", headers=admin_headers).status_code == 204
    assert client.get(f"/api/v1/admin/contracts/{draft.id}", headers=admin_headers).status_code == 404
    assert client.delete(f"/api/v1/admin/contracts/{signed.id}", headers=admin_headers).status_code == 409


def test_list_contracts_filters(client, admin_headers, make_customer, make_contract):
    customer = make_customer()
    make_contract(customer, status=ContractStatus.SENT, title="Design sprint")
    make_contract(customer, status=ContractStatus.DRAFT, title="Maintenance")

    by_status = client.get("/api/v1/admin/contracts", params={"status": "DRAFT"}, headers=admin_headers)
    by_search = client.get("/api/v1/admin/contracts", params={"search": "sprint"}, headers=admin_headers)

    assert [item["title"] for item in by_status.json()["items"]] == ["Maintenance"]
    assert [item["title"] for item in by_search.json()["items"]] == ["Design sprint"]


def test_leads_management(client, admin_headers, db_session):
    lead = Lead(name="Morgan", email="morgan@example.com", status=LeadStatus.NEW, current_step=0)
    db_session.add(lead)
    db_session.commit()

    listing = client.get("/api/v1/admin/leads", headers=admin_headers)
    assert listing.json()["total"] == 1

    updated = client.patch(
        f"/api/v1/admin/leads/{lead.id}/status",
        json={"status": "CONTACTED"},
        headers=admin_headers,
    )
    assert updated.json()["status"] == "CONTACTED"

    audit = client.get("/api/v1/admin/audit", params={"action": "UPDATE_LEAD_STATUS"}, headers=admin_headers)
    assert audit.json()["items"][0]["entity_id"] == lead.id


def test_customers_and_projects(client, admin_headers):
    customer = client.post(
        "/api/v1/admin/customers",
        json={"email": "new@example.com", "name": "New Client", "password": "long-enough", "company_name": "NewCo"},
        headers=admin_headers,
    )
    assert customer.status_code == 201
    customer_id = customer.json()["id"]

    project = client.post(
        "/api/v1/admin/projects",
        json={"customer_id": customer_id, "title": "Launch"},
        headers=admin_headers,
    )
    assert project.status_code == 201
    assert project.json()["status"] == "PENDING"

    progressed = client.patch(
        f"/api/v1/admin/projects/{project.json()['id']}/progress",
        json={"progress": 100},
        headers=admin_headers,
    )
    assert progressed.json()["status"] == "COMPLETED"

    out_of_range = client.patch(
        f"/api/v1/admin/projects/{project.json()['id']}/progress",
        json={"progress": 120},
        headers=admin_headers,
    )
    assert out_of_range.status_code == 422
    assert out_of_range.json()["field"] == "progress"

    listing = client.get("/api/v1/admin/customers", params={"search": "newco"}, headers=admin_headers)
    assert [item["email"] for item in listing.json()["items"]] == ["new@example.com"]


def test_list_projects_and_post_update(client, admin_headers, make_customer, auth_headers):
    customer = make_customer()
    project = client.post(
        "/api/v1/admin/projects",
        json={"customer_id": customer.id, "title": "Launch"},
        headers=admin_headers,
    ).json()

    progressed = client.patch(
        f"/api/v1/admin/projects/{project['id']}/progress",
        json={"progress": 60, "status": "ON_HOLD", "update_title": "Paused", "update_content": "Waiting on copy"},
        headers=admin_headers,
    )
    assert progressed.status_code == 200
    assert progressed.json()["status"] == "ON_HOLD"

    listing = client.get("/api/v1/admin/projects", params={"status": "ON_HOLD"}, headers=admin_headers)
    assert listing.status_code == 200
    assert [item["id"] for item in listing.json()["items"]] == [project["id"]]
    assert listing.json()["limit"] == 50

    empty = client.get("/api/v1/admin/projects", params={"search": "nothing-matches"}, headers=admin_headers)
    assert empty.json()["items"] == []

    forbidden = client.get("/api/v1/admin/projects", headers=auth_headers(customer.user))
    assert forbidden.status_code == 403


def test_admin_overview(client, admin_headers, make_customer, make_contract):
    make_contract(make_customer(), status=ContractStatus.VIEWED)

    response = client.get("/api/v1/admin/overview", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["awaiting_signature"] == 1
    assert response.json()["total_customers"] == 1
