"""Contract lifecycle service.

All status writes are compare-and-set ``UPDATE`` statements filtered on the
statuses the transition table allows, so two concurrent requests can never
both move the same contract.
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass

from sqlalchemy import or_, select, update
from sqlalchemy.orm import Session

from app.auth.caller_context import CallerContext, enforce_ownership
from app.core.config import get_config
from app.core.exceptions import NotFoundError, ValidationError
from app.models.contract import Contract
from app.models.customer import Customer
from app.models.enums import ContractStatus
from app.models.user import User
from app.orchestration.contract_lifecycle import (
    ContractAction,
    can_apply,
    sources_for,
    target_for,
)
from app.orchestration.state_machine import InvalidTransitionError
from app.services.audit_service import AuditService, RequestMeta
from app.services.base_service import BaseService
from app.services.email_sender import ContractNotifier
from app.services.signature_store import SignatureStore, decode_signature_data_uri
from app.utils.validators import like_pattern, sanitize_text

logger = logging.getLogger(__name__)

SIGNER_NAME_MAX_LENGTH = 100
PENDING_SIGNATURE_STATUSES = (ContractStatus.SENT, ContractStatus.VIEWED)

SIGN_FIELD_MESSAGES = {
    "signature": "Signature is required",
    "name": "Please enter your full name",
    "consent": "You must agree to the terms",
}


@dataclass(frozen=True)
class SignatureInput:
    image: bytes
    signer_name: str
    signature_hash: str


def validate_signature_input(
    signature_data: str | None,
    signer_name: str | None,
    agreed_to_terms: object,
) -> SignatureInput:
    """Check sign inputs in order: signature, name, consent.

    The first failing requirement is raised as a ``ValidationError`` whose
    ``field`` is ``signature``, ``name`` or ``consent``.
    """
    if not signature_data:
        raise ValidationError(SIGN_FIELD_MESSAGES["signature"], field="signature")
    image = decode_signature_data_uri(signature_data)

    name = (signer_name or "").strip()
    if not name:
        raise ValidationError(SIGN_FIELD_MESSAGES["name"], field="name")
    if len(name) > SIGNER_NAME_MAX_LENGTH:
        raise ValidationError("Name is too long", field="name")

    if agreed_to_terms is not True:
        raise ValidationError(SIGN_FIELD_MESSAGES["consent"], field="consent")

    return SignatureInput(
        image=image,
        signer_name=name,
        signature_hash=hashlib.sha256(signature_data.encode("utf-8")).hexdigest(),
    )


def sign_conflict_message(status: ContractStatus | None) -> str:
    if status is ContractStatus.SIGNED:
        return "This contract has already been signed"
    return "This contract cannot be signed at this time"


class ContractService(BaseService):
    """Service for contract CRUD and lifecycle transitions."""

    def __init__(
        self,
        db: Session | None = None,
        signature_store: SignatureStore | None = None,
        audit: AuditService | None = None,
        notifier: ContractNotifier | None = None,
    ) -> None:
        super().__init__(db)
        self._signature_store = signature_store
        self.audit = audit or AuditService(db=self.db)
        self.notifier = notifier

    @property
    def signatures(self) -> SignatureStore:
        if self._signature_store is None:
            self._signature_store = SignatureStore(get_config().SIGNATURE_STORE_PATH)
        return self._signature_store

    # Reads

    def get_contract(self, contract_id: str) -> Contract | None:
        return self.db.get(Contract, contract_id)

    def require_contract(self, contract_id: str) -> Contract:
        contract = self.get_contract(contract_id)
        if contract is None:
            raise NotFoundError("Contract not found")
        return contract

    def fetch_contract(self, contract_id: str, caller: CallerContext) -> Contract:
        """Return the contract if the caller owns it or is an admin.

        Missing and foreign contracts both raise the same ``NotFoundError``.
        """
        contract = self.require_contract(contract_id)
        enforce_ownership(contract.customer_id, caller, label="Contract")
        return contract

    def list_for_customer(self, customer_id: str, limit: int | None = None) -> list[Contract]:
        stmt = (
            select(Contract)
            .where(Contract.customer_id == customer_id)
            .order_by(Contract.created_at.desc(), Contract.id)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.db.scalars(stmt))

    def list_contracts(
        self,
        search: str | None = None,
        status: ContractStatus | None = None,
        customer_id: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Contract]:
        stmt = select(Contract).join(Contract.customer).join(Customer.user)
        if search:
            pattern = like_pattern(search)
            stmt = stmt.where(
                or_(
                    Contract.title.ilike(pattern, escape="\\"),
                    User.name.ilike(pattern, escape="\\"),
                    Customer.company_name.ilike(pattern, escape="\\"),
                )
            )
        if status is not None:
            stmt = stmt.where(Contract.status == status)
        if customer_id:
            stmt = stmt.where(Contract.customer_id == customer_id)
        stmt = stmt.order_by(Contract.created_at.desc(), Contract.id).limit(limit).offset(offset)
        return list(self.db.scalars(stmt))

    # Admin writes

    def create_contract(
        self,
        title: str,
        customer_id: str,
        file_url: str,
        meta: RequestMeta | None = None,
    ) -> Contract:
        clean_title = sanitize_text(title, max_len=255)
        if not clean_title:
            raise ValidationError("Title is required", field="title")
        if self.db.get(Customer, customer_id) is None:
            raise NotFoundError("Customer not found")

        contract = Contract(
            title=clean_title,
            customer_id=customer_id,
            file_url=file_url,
            status=ContractStatus.DRAFT,
        )
        self.db.add(contract)
        self.commit()
        self.db.refresh(contract)
        self.audit.log_activity("CREATE_CONTRACT", "Contract", contract.id, {"title": contract.title}, meta)
        return contract

    def update_contract(
        self,
        contract_id: str,
        title: str | None = None,
        file_url: str | None = None,
        meta: RequestMeta | None = None,
    ) -> Contract:
        """Edit the document details of a draft.

        Once dispatched, the document a customer is asked to sign is frozen.
        """
        contract = self.require_contract(contract_id)
        if contract.status is not ContractStatus.DRAFT:
            raise InvalidTransitionError("Only draft contracts can be edited")
        if title is not None:
            clean_title = sanitize_text(title, max_len=255)
            if not clean_title:
                raise ValidationError("Title is required", field="title")
            contract.title = clean_title
        if file_url is not None:
            contract.file_url = file_url
        self.commit()
        self.db.refresh(contract)
        self.audit.log_activity("UPDATE_CONTRACT", "Contract", contract.id, None, meta)
        return contract

    def delete_contract(self, contract_id: str, meta: RequestMeta | None = None) -> None:
        contract = self.require_contract(contract_id)
        if contract.status is ContractStatus.SIGNED:
            raise InvalidTransitionError("Signed contracts cannot be deleted")
        self.db.delete(contract)
        self.commit()
        self.audit.log_activity("DELETE_CONTRACT", "Contract", contract_id, None, meta)

    def send_contract(self, contract_id: str, meta: RequestMeta | None = None) -> Contract:
        contract = self.require_contract(contract_id)
        if not can_apply(contract.status, ContractAction.DISPATCH) or not self._transition(
            contract_id, ContractAction.DISPATCH
        ):
            self.rollback()
            raise InvalidTransitionError("Only draft contracts can be sent")
        self.commit()
        self.db.refresh(contract)
        logger.info("contract.sent", extra={"event": "contract.sent", "contract_id": contract.id})
        self.audit.log_activity("SEND_CONTRACT", "Contract", contract.id, None, meta)
        self._notify_sent(contract)
        return contract

    def expire_contract(self, contract_id: str, meta: RequestMeta | None = None) -> Contract:
        contract = self.require_contract(contract_id)
        if not can_apply(contract.status, ContractAction.EXPIRE) or not self._transition(
            contract_id, ContractAction.EXPIRE
        ):
            self.rollback()
            raise InvalidTransitionError("Only contracts awaiting signature can expire")
        self.commit()
        self.db.refresh(contract)
        logger.info("contract.expired", extra={"event": "contract.expired", "contract_id": contract.id})
        self.audit.log_activity("EXPIRE_CONTRACT", "Contract", contract.id, None, meta)
        return contract

    # Customer writes

    def mark_viewed(self, contract_id: str, caller: CallerContext, meta: RequestMeta | None = None) -> Contract:
        """Record the owning customer's first view (SENT -> VIEWED).

        Any other status is left as is, and admin views never count.
        """
        contract = self.fetch_contract(contract_id, caller)
        if caller.is_admin:
            return contract

        if self._transition(contract.id, ContractAction.VIEW):
            self.commit()
            self.db.refresh(contract)
            logger.info("contract.viewed", extra={"event": "contract.viewed", "contract_id": contract.id})
            self.audit.log_activity("VIEW_CONTRACT", "Contract", contract.id, None, meta)
        else:
            self.rollback()
            self.db.refresh(contract)
        return contract

    def sign_contract(
        self,
        contract_id: str,
        caller: CallerContext,
        signature_data: str | None,
        signer_name: str | None,
        agreed_to_terms: object,
        meta: RequestMeta | None = None,
    ) -> Contract:
        """Sign a SENT or VIEWED contract.

        Inputs are checked before ownership and status, so a malformed form
        gets its field error even for a contract the caller cannot sign.

        The signature image is stored first; if the status compare-and-set
        does not land, or the commit fails, the stored image is removed again
        so a signature never exists without its signed row.
        """
        signature = validate_signature_input(signature_data, signer_name, agreed_to_terms)
        contract = self.fetch_contract(contract_id, caller)
        if not can_apply(contract.status, ContractAction.SIGN):
            raise InvalidTransitionError(sign_conflict_message(contract.status))

        stored = self.signatures.put(contract.id, signature.image)
        try:
            signed = self._transition(
                contract.id,
                ContractAction.SIGN,
                signer_name=signature.signer_name,
                signed_at=self._utcnow(),
                signature_ref=stored.ref,
                signature_hash=signature.signature_hash,
                signer_ip=meta.ip_address if meta else None,
            )
            if not signed:
                current = self.db.scalar(select(Contract.status).where(Contract.id == contract.id))
                raise InvalidTransitionError(sign_conflict_message(current))
            self.commit()
        except Exception:
            self.rollback()
            self._discard_signature(stored.ref)
            raise

        self.db.refresh(contract)
        logger.info(
            "contract.signed",
            extra={"event": "contract.signed", "contract_id": contract.id, "signature_ref": stored.ref},
        )
        self.audit.log_activity(
            "SIGN_CONTRACT",
            "Contract",
            contract.id,
            {"signer_name": contract.signer_name, "signature_hash": contract.signature_hash},
            meta,
        )
        return contract

    # Internals

    def _transition(self, contract_id: str, action: ContractAction, **values: object) -> bool:
        """Apply ``action`` only if the row is still in one of its source statuses."""
        stmt = (
            update(Contract)
            .where(Contract.id == contract_id, Contract.status.in_(sources_for(action)))
            .values(status=target_for(action), updated_at=self._utcnow(), **values)
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        return result.rowcount == 1

    def _discard_signature(self, ref: str) -> None:
        try:
            self.signatures.delete(ref)
        except OSError:
            logger.exception(
                "signature.cleanup_failed",
                extra={"event": "signature.cleanup_failed", "signature_ref": ref},
            )

    def _notify_sent(self, contract: Contract) -> None:
        if self.notifier is None:
            return
        customer = self.db.get(Customer, contract.customer_id)
        if customer is None or customer.user is None:
            return
        delivered = self.notifier.contract_sent(
            to_email=customer.user.email,
            recipient_name=customer.user.name,
            contract_id=contract.id,
            title=contract.title,
        )
        if not delivered:
            logger.warning(
                "contract.notification_not_delivered",
                extra={"event": "contract.notification_not_delivered", "contract_id": contract.id},
            )
