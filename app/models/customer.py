"""Customer model module."""

from __future__ import annotations

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import AuditMixin, Base, IdMixin


class Customer(Base, IdMixin, AuditMixin):
    __tablename__ = "customers"

    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    company_name: Mapped[str | None] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(64))

    user = relationship("User", back_populates="customer")
    contracts = relationship("Contract", back_populates="customer")
    projects = relationship("Project", back_populates="customer")
