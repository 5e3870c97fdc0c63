"""Clawback: an issuer claws back tokens it issued from a holder."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Literal, Union

from pydantic import Field

from xrpl_agent.core.currency import normalize_amount
from xrpl_agent.core.models import IssuedCurrencyAmount, MPTAmount
from xrpl_agent.transactions.base import TransactionDescriptor, TransactionKind
from xrpl_agent.transactions.fields import CommonFields


class ClawbackInput(CommonFields):
    TransactionType: Literal["Clawback"] = "Clawback"
    Amount: Union[IssuedCurrencyAmount, MPTAmount] = Field(
        ...,
        description=(
            "Amount to claw back. For trust-line tokens the issuer field names the HOLDER "
            "to claw back from; for MPTs use Holder instead."
        ),
    )
    Holder: str | None = Field(None, description="Holder to claw back from (MPTs only)")


class ClawbackKind(TransactionKind[ClawbackInput]):
    transaction_type = "Clawback"
    tool_id = "submit_clawback"
    description = (
        "Submit a Clawback transaction: the issuer (Account) claws back tokens it issued. "
        "For trust-line tokens Amount.issuer is the holder's address, not the issuer's. "
        "The issuer must have enabled asfAllowTrustLineClawback before issuing any tokens."
    )
    input_model = ClawbackInput

    def build(self, params: ClawbackInput) -> TransactionDescriptor:
        values: dict[str, Any] = params.model_dump(exclude_none=True)
        values["Amount"] = normalize_amount(values["Amount"])
        return self.descriptor(values)

    def validate(self, txn: TransactionDescriptor) -> None:
        amount = txn.get("Amount") or {}
        try:
            value = Decimal(str(amount.get("value")))
        except InvalidOperation:
            self._reject(f"Amount.value is not a number: {amount.get('value')}")
        if not value.is_finite() or value <= 0:
            self._reject(f"Amount.value must be a finite number greater than 0: {amount.get('value')}")

        if "mpt_issuance_id" in amount:
            if not txn.get("Holder"):
                self._reject("Holder is required when clawing back an MPT")
            if txn.get("Holder") == txn.get("Account"):
                self._reject("Holder cannot be the same as Account")
            return

        if str(amount.get("currency", "")).upper() == "XRP":
            self._reject("XRP cannot be clawed back")
        if amount.get("issuer") == txn.get("Account"):
            self._reject("Amount.issuer (the holder) cannot be the same as Account")
