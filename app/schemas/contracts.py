"""Contract request/response schemas for API contracts."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import ContractStatus
from app.orchestration.contract_lifecycle import ContractAction, available_actions

CUSTOMER_ACTIONS = (ContractAction.VIEW, ContractAction.SIGN)
ADMIN_ACTIONS = (ContractAction.DISPATCH, ContractAction.EXPIRE)


class ContractCreateRequest(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    customer_id: str = Field(min_length=1, max_length=36)
    file_url: str = Field(min_length=1, max_length=2048)


class ContractUpdateRequest(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    file_url: str | None = Field(default=None, min_length=1, max_length=2048)


class SignContractRequest(BaseModel):
    """Sign form payload.

    Fields are deliberately lenient so an incomplete form reaches
    ``first_missing_field`` instead of failing schema validation.
    """

    signature_data: str | None = None
    signer_name: str | None = None
    agreed_to_terms: Any = None

    def first_missing_field(self) -> str | None:
        if not self.signature_data:
            return "signature"
        if not (self.signer_name or "").strip():
            return "name"
        if self.agreed_to_terms is not True:
            return "consent"
        return None


class ContractResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    file_url: str
    status: ContractStatus
    customer_id: str
    signer_name: str | None = None
    signed_at: datetime | None = None
    signature_hash: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    can_sign: bool = False
    available_actions: list[ContractAction] = Field(default_factory=list)

    @classmethod
    def from_contract(cls, contract: Any, as_admin: bool = False) -> "ContractResponse":
        audience = ADMIN_ACTIONS if as_admin else CUSTOMER_ACTIONS
        actions = [action for action in available_actions(contract.status) if action in audience]
        response = cls.model_validate(contract)
        response.can_sign = ContractAction.SIGN in actions
        response.available_actions = actions
        return response
