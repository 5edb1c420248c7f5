"""Customer service for portal account management."""

from __future__ import annotations

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session, joinedload

from app.core.config import Config
from app.core.exceptions import NotFoundError
from app.models.customer import Customer
from app.models.enums import UserRole
from app.models.user import User
from app.services.base_service import BaseService
from app.services.user_service import UserService
from app.utils.validators import like_pattern, sanitize_text


class CustomerService(BaseService):
    """Service for customer records and their portal users."""

    def __init__(self, db: Session | None = None, config: Config | None = None) -> None:
        super().__init__(db)
        self.users = UserService(db=self.db, config=config)

    def create_customer(
        self,
        email: str,
        name: str,
        password: str,
        company_name: str | None = None,
        phone: str | None = None,
    ) -> Customer:
        """Create a CUSTOMER user and its customer record in one transaction."""
        user = self.users.build_user(email=email, name=name, password=password, role=UserRole.CUSTOMER)
        customer = Customer(
            user=user,
            company_name=sanitize_text(company_name, max_len=255) or None,
            phone=sanitize_text(phone, max_len=64) or None,
        )
        self.db.add_all([user, customer])
        self.commit()
        self.db.refresh(customer)
        return customer

    def get_customer(self, customer_id: str) -> Customer | None:
        return self.db.get(Customer, customer_id)

    def require_customer(self, customer_id: str) -> Customer:
        customer = self.get_customer(customer_id)
        if customer is None:
            raise NotFoundError("Customer not found")
        return customer

    def get_by_user(self, user_id: str) -> Customer | None:
        return self.db.scalar(select(Customer).where(Customer.user_id == user_id))

    def list_customers(self, search: str | None = None, limit: int = 50, offset: int = 0) -> list[Customer]:
        stmt = select(Customer).join(Customer.user).options(joinedload(Customer.user))
        if search:
            pattern = like_pattern(search)
            stmt = stmt.where(
                or_(
                    User.name.ilike(pattern, escape="\\"),
                    User.email.ilike(pattern, escape="\\"),
                    Customer.company_name.ilike(pattern, escape="\\"),
                    Customer.phone.ilike(pattern, escape="\\"),
                )
            )
        stmt = stmt.order_by(Customer.created_at.desc(), Customer.id).limit(limit).offset(offset)
        return list(self.db.scalars(stmt))

    def count(self) -> int:
        return int(self.db.scalar(select(func.count()).select_from(Customer)) or 0)
