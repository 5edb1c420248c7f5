"""User registration and credential checks."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.config import Config, get_config
from app.core.exceptions import AuthenticationError, ConflictError, ValidationError
from app.core.security import hash_password, verify_password
from app.models.enums import UserRole
from app.models.user import User
from app.services.base_service import BaseService
from app.utils.validators import is_valid_email, normalize_email, sanitize_text

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


class UserService(BaseService):
    """Service for user accounts."""

    def __init__(self, db: Session | None = None, config: Config | None = None) -> None:
        super().__init__(db)
        self.config = config or get_config()

    def default_role_for(self, email: str) -> UserRole:
        """Role given to a newly registered account.

        This is the only place a role is chosen without an explicit request:
        configured admin emails become ADMIN, everyone else CUSTOMER.
        """
        if normalize_email(email) in self.config.ADMIN_EMAILS:
            return UserRole.ADMIN
        return UserRole.CUSTOMER

    def get_user(self, user_id: str) -> User | None:
        return self.db.get(User, user_id)

    def get_by_email(self, email: str) -> User | None:
        return self.db.scalar(select(User).where(User.email == normalize_email(email)))

    def build_user(self, email: str, name: str, password: str, role: UserRole | None = None) -> User:
        """Validate and construct a user without committing it."""
        normalized = normalize_email(email)
        if not is_valid_email(normalized):
            raise ValidationError("Invalid email address", field="email")
        display_name = sanitize_text(name, max_len=255)
        if not display_name:
            raise ValidationError("Name is required", field="name")
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters", field="password")
        if self.get_by_email(normalized) is not None:
            raise ConflictError("A user with this email already exists")

        return User(
            email=normalized,
            name=display_name,
            hashed_password=hash_password(password, pepper=self.config.PASSWORD_PEPPER),
            role=role or self.default_role_for(normalized),
            is_active=True,
        )

    def register_user(self, email: str, name: str, password: str, role: UserRole | None = None) -> User:
        user = self.build_user(email=email, name=name, password=password, role=role)
        self.db.add(user)
        self.commit()
        self.db.refresh(user)
        logger.info(
            "user.registered",
            extra={"event": "user.registered", "user_id": user.id, "role": user.role.value},
        )
        return user

    def authenticate(self, email: str, password: str) -> User:
        user = self.get_by_email(email)
        if user is None or not user.is_active:
            raise AuthenticationError("Invalid credentials.")
        if not verify_password(password, user.hashed_password, pepper=self.config.PASSWORD_PEPPER):
            raise AuthenticationError("Invalid credentials.")
        return user
