from __future__ import annotations

import base64

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.auth.caller_context import CallerContext
from app.auth.jwt import create_access_token
from app.core.config import get_config
from app.main import create_app
from app.models import Base, Contract, Customer, Lead, User
from app.models.enums import ContractStatus, LeadStatus, UserRole
from app.services.signature_store import PNG_MAGIC, SIGNATURE_DATA_URI_PREFIX, SignatureStore

PNG_BYTES = PNG_MAGIC + b"\x00\x00\x00\rIHDR" + b"\x00" * 17
SIGNATURE_DATA_URI = SIGNATURE_DATA_URI_PREFIX + base64.b64encode(PNG_BYTES).decode("ascii")


@pytest.fixture
def signature_data_uri() -> str:
    return SIGNATURE_DATA_URI


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
    yield factory
    engine.dispose()


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def signature_store(tmp_path):
    return SignatureStore(tmp_path / "signatures")


@pytest.fixture
def make_user(db_session):
    def _make(email: str = "admin@example.com", name: str = "Avery Admin", role: UserRole = UserRole.ADMIN) -> User:
        user = User(email=email, name=name, hashed_password="unused", role=role, is_active=True)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make


@pytest.fixture
def make_customer(db_session):
    def _make(
        email: str = "casey@example.com",
        name: str = "Casey Customer",
        with_lead: bool = True,
    ) -> Customer:
        user = User(email=email, name=name, hashed_password="unused", role=UserRole.CUSTOMER, is_active=True)
        customer = Customer(user=user, company_name="Acme Studio")
        db_session.add_all([user, customer])
        if with_lead:
            db_session.add(Lead(name=name, email=email, status=LeadStatus.CONVERTED, current_step=0))
        db_session.commit()
        db_session.refresh(customer)
        return customer

    return _make


@pytest.fixture
def make_contract(db_session):
    def _make(
        customer: Customer,
        status: ContractStatus = ContractStatus.SENT,
        title: str = "Website build agreement",
    ) -> Contract:
        contract = Contract(
            title=title,
            file_url="https://files.example.com/contracts/website.pdf",
            status=status,
            customer_id=customer.id,
        )
        db_session.add(contract)
        db_session.commit()
        db_session.refresh(contract)
        return contract

    return _make


@pytest.fixture
def caller_for():
    def _caller(customer: Customer) -> CallerContext:
        return CallerContext(user_id=customer.user_id, role=UserRole.CUSTOMER, customer_id=customer.id)

    return _caller


@pytest.fixture
def auth_headers():
    def _headers(user: User) -> dict[str, str]:
        token = create_access_token(
            user_id=user.id,
            email=user.email,
            role=user.role.value,
            secret=get_config().JWT_SECRET,
        )
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def client(session_factory, signature_store):
    app = create_app(session_factory=session_factory, signature_store=signature_store)
    with TestClient(app, follow_redirects=False) as test_client:
        yield test_client
