"""Contract model module."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import AuditMixin, Base, IdMixin
from app.models.enums import ContractStatus


class Contract(Base, IdMixin, AuditMixin):
    """A customer contract.

    ``signer_name``, ``signed_at``, ``signature_ref`` and ``signature_hash`` are
    populated together, and only when ``status`` is SIGNED.
    """

    __tablename__ = "contracts"
    __table_args__ = (Index("idx_contracts_customer_status", "customer_id", "status"),)

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    file_url: Mapped[str] = mapped_column(String(2048), nullable=False)
    status: Mapped[ContractStatus] = mapped_column(
        Enum(ContractStatus, name="contract_status"), default=ContractStatus.DRAFT, nullable=False
    )
    customer_id: Mapped[str] = mapped_column(ForeignKey("customers.id", ondelete="RESTRICT"), nullable=False)
    signer_name: Mapped[str | None] = mapped_column(String(100))
    signed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    signature_ref: Mapped[str | None] = mapped_column(String(255))
    signature_hash: Mapped[str | None] = mapped_column(String(64))
    signer_ip: Mapped[str | None] = mapped_column(String(64))

    customer = relationship("Customer", back_populates="contracts")
