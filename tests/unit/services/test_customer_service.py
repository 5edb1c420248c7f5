from __future__ import annotations

from dataclasses import replace

import pytest

from app.core.config import get_config
from app.core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from app.models.enums import UserRole
from app.services.customer_service import CustomerService
from app.services.user_service import UserService


@pytest.fixture
def config():
    return replace(get_config(), ADMIN_EMAILS=("owner@example.com",), PASSWORD_PEPPER="pepper")


def test_create_customer_creates_customer_user(db_session, config):
    service = CustomerService(db=db_session, config=config)

    customer = service.create_customer(
        email="Client@Example.com",
        name="Client Person",
        password="long-enough",
        company_name="Client Co",
    )

    assert customer.user.role is UserRole.CUSTOMER
    assert customer.user.email == "client@example.com"
    assert customer.company_name == "Client Co"
    assert service.get_by_user(customer.user_id).id == customer.id
    assert service.count() == 1


def test_create_customer_rejects_duplicate_email(db_session, config):
    service = CustomerService(db=db_session, config=config)
    service.create_customer(email="client@example.com", name="Client", password="long-enough")
    with pytest.raises(ConflictError):
        service.create_customer(email="CLIENT@example.com", name="Again", password="long-enough")


def test_list_customers_searches_user_and_company(db_session, config):
    service = CustomerService(db=db_session, config=config)
    service.create_customer(email="one@example.com", name="First", password="long-enough", company_name="Northwind")
    service.create_customer(email="two@example.com", name="Second", password="long-enough", company_name="Contoso")

    assert [c.company_name for c in service.list_customers(search="north")] == ["Northwind"]
    assert [c.user.name for c in service.list_customers(search="second")] == ["Second"]
    with pytest.raises(NotFoundError):
        service.require_customer("missing")


def test_default_role_uses_admin_emails(db_session, config):
    users = UserService(db=db_session, config=config)
    assert users.default_role_for("Owner@Example.com") is UserRole.ADMIN
    assert users.default_role_for("someone@example.com") is UserRole.CUSTOMER

    registered = users.register_user(email="owner@example.com", name="Owner", password="long-enough")
    assert registered.role is UserRole.ADMIN


def test_register_validates_input(db_session, config):
    users = UserService(db=db_session, config=config)
    with pytest.raises(ValidationError) as excinfo:
        users.register_user(email="x@example.com", name="X", password="short")
    assert excinfo.value.field == "password"
    with pytest.raises(ValidationError):
        users.register_user(email="nope", name="X", password="long-enough")


def test_authenticate(db_session, config):
    users = UserService(db=db_session, config=config)
    user = users.register_user(email="pat@example.com", name="Pat", password="long-enough")

    assert users.authenticate("PAT@example.com", "long-enough").id == user.id
    with pytest.raises(AuthenticationError):
        users.authenticate("pat@example.com", "wrong-password")
    with pytest.raises(AuthenticationError):
        users.authenticate("ghost@example.com", "long-enough")

    user.is_active = False
    db_session.commit()
    with pytest.raises(AuthenticationError):
        users.authenticate("pat@example.com", "long-enough")
