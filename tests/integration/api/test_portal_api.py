from __future__ import annotations

import pytest

from app.models.audit_log import AuditLog
from app.models.enums import ContractStatus
from app.services.project_service import ProjectService

SIGN_URL = "/api/v1/portal/contracts/{id}/sign"


@pytest.fixture
def customer(make_customer):
    return make_customer()


def _sign_payload(signature_data_uri, **overrides):
    payload = {
        "signature_data": signature_data_uri,
        "signer_name": "Casey Customer",
        "agreed_to_terms": True,
    }
    payload.update(overrides)
    return payload


def test_sign_contract(client, customer, make_contract, auth_headers, signature_data_uri, signature_store, db_session):
    contract = make_contract(customer, status=ContractStatus.VIEWED)

    response = client.post(
        SIGN_URL.format(id=contract.id),
        json=_sign_payload(signature_data_uri),
        headers=auth_headers(customer.user),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "SIGNED"
    assert body["signer_name"] == "Casey Customer"
    assert body["signed_at"] is not None
    assert body["can_sign"] is False
    assert body["available_actions"] == []

    db_session.refresh(contract)
    assert contract.signer_ip == "testclient"
    assert signature_store.exists(contract.signature_ref)
    actions = [row.action for row in db_session.query(AuditLog).filter_by(entity_id=contract.id)]
    assert "SIGN_CONTRACT" in actions


@pytest.mark.parametrize(
    ("overrides", "field", "detail"),
    [
        ({"signature_data": ""}, "signature", "Signature is required"),
        ({"signer_name": "   "}, "name", "Please enter your full name"),
        ({"agreed_to_terms": False}, "consent", "You must agree to the terms"),
        ({"agreed_to_terms": "true"}, "consent", "You must agree to the terms"),
        ({"signer_name": "x" * 101}, "name", "Name is too long"),
        ({"signature_data": "data:image/jpeg;base64,AAAA"}, "signature", "Invalid signature format"),
    ],
)
def test_sign_validation_errors(
    client, customer, make_contract, auth_headers, signature_data_uri, db_session, overrides, field, detail
):
    contract = make_contract(customer)

    response = client.post(
        SIGN_URL.format(id=contract.id),
        json=_sign_payload(signature_data_uri, **overrides),
        headers=auth_headers(customer.user),
    )

    assert response.status_code == 422
    assert response.json() == {
        "status": "error",
        "error_code": "validation_error",
        "detail": detail,
        "field": field,
    }
    db_session.refresh(contract)
    assert contract.status is ContractStatus.SENT


@pytest.mark.parametrize(
    ("status", "detail"),
    [
        (ContractStatus.SIGNED, "This contract has already been signed"),
        (ContractStatus.DRAFT, "This contract cannot be signed at this time"),
        (ContractStatus.EXPIRED, "This contract cannot be signed at this time"),
    ],
)
def test_sign_conflicts(client, customer, make_contract, auth_headers, signature_data_uri, signature_store, status, detail):
    contract = make_contract(customer, status=status)

    response = client.post(
        SIGN_URL.format(id=contract.id),
        json=_sign_payload(signature_data_uri),
        headers=auth_headers(customer.user),
    )

    assert response.status_code == 409
    assert response.json()["detail"] == detail
    assert not signature_store.root.exists() or list(signature_store.root.iterdir()) == []


def test_foreign_contract_is_not_found(client, customer, make_customer, make_contract, auth_headers, signature_data_uri):
    other = make_customer(email="other@example.com", name="Other Person")
    contract = make_contract(other)

    sign = client.post(
        SIGN_URL.format(id=contract.id),
        json=_sign_payload(signature_data_uri),
        headers=auth_headers(customer.user),
    )
    read = client.get(f"/api/v1/portal/contracts/{contract.id}", headers=auth_headers(customer.user))
    missing = client.get("/api/v1/portal/contracts/does-not-exist", headers=auth_headers(customer.user))

    assert sign.status_code == read.status_code == missing.status_code == 404
    assert read.json() == missing.json()


def test_sign_requires_authentication(client, customer, make_contract, signature_data_uri):
    contract = make_contract(customer)
    response = client.post(SIGN_URL.format(id=contract.id), json=_sign_payload(signature_data_uri))
    assert response.status_code == 401
    assert response.json()["error_code"] == "unauthenticated"


def test_mark_viewed_once(client, customer, make_contract, auth_headers, db_session):
    contract = make_contract(customer, status=ContractStatus.SENT)
    url = f"/api/v1/portal/contracts/{contract.id}/view"

    first = client.post(url, headers=auth_headers(customer.user))
    second = client.post(url, headers=auth_headers(customer.user))

    assert first.status_code == second.status_code == 200
    assert first.json()["status"] == second.json()["status"] == "VIEWED"
    assert first.json()["can_sign"] is True
    views = db_session.query(AuditLog).filter_by(entity_id=contract.id, action="VIEW_CONTRACT").count()
    assert views == 1


def test_list_contracts_only_shows_own(client, customer, make_customer, make_contract, auth_headers):
    mine = make_contract(customer, title="Mine")
    make_contract(make_customer(email="other@example.com", name="Other"), title="Theirs")

    response = client.get("/api/v1/portal/contracts", headers=auth_headers(customer.user))

    assert response.status_code == 200
    assert [item["id"] for item in response.json()] == [mine.id]
    assert response.json()[0]["available_actions"] == ["view", "sign"]


def test_overview_and_projects(client, customer, make_contract, auth_headers):
    make_contract(customer, status=ContractStatus.VIEWED)

    overview = client.get("/api/v1/portal/overview", headers=auth_headers(customer.user))
    projects = client.get("/api/v1/portal/projects", headers=auth_headers(customer.user))

    assert overview.status_code == 200
    assert overview.json()["pending_contracts"] == 1
    assert overview.json()["recent_activity"][0]["description"] == "Awaiting your signature"
    assert projects.json() == []


def test_admin_has_no_customer_profile(client, make_user, auth_headers):
    response = client.get("/api/v1/portal/overview", headers=auth_headers(make_user()))
    assert response.status_code == 404
    assert response.json()["detail"] == "Customer profile not found"


def test_project_updates_are_scoped_to_owner(client, customer, make_customer, auth_headers, db_session):
    service = ProjectService(db=db_session)
    project = service.create_project(customer.id, "Website")
    service.update_progress(project.id, 40, update_title="Wireframes", update_content="Shared for review")
    stranger = make_customer(email="other@example.com", name="Other")

    own = client.get(f"/api/v1/portal/projects/{project.id}/updates", headers=auth_headers(customer.user))
    foreign = client.get(f"/api/v1/portal/projects/{project.id}/updates", headers=auth_headers(stranger.user))

    assert own.status_code == 200
    assert [(u["title"], u["progress"]) for u in own.json()] == [("Wireframes", 40)]
    assert foreign.status_code == 404
    assert foreign.json()["detail"] == "Project not found"
