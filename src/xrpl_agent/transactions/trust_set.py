"""TrustSet: create or modify a trust line so an account can hold a token."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from xrpl_agent.core.currency import currency_code_to_hex
from xrpl_agent.core.models import IssuedCurrencyAmount
from xrpl_agent.transactions.base import TransactionDescriptor, TransactionKind
from xrpl_agent.transactions.fields import CommonFields

TRUST_SET_FLAGS: dict[str, int] = {
    "tfSetfAuth": 65536,
    "tfSetNoRipple": 131072,
    "tfClearNoRipple": 262144,
    "tfSetFreeze": 1048576,
    "tfClearFreeze": 2097152,
    "tfSetDeepFreeze": 4194304,
    "tfClearDeepFreeze": 8388608,
}


class TrustSetInput(CommonFields):
    TransactionType: Literal["TrustSet"] = "TrustSet"
    LimitAmount: IssuedCurrencyAmount = Field(
        ..., description="The trust line to create or modify: currency, limit value and issuer"
    )
    QualityIn: int | None = Field(
        None, ge=0, description="Value incoming balances at this ratio per 1,000,000,000 units"
    )
    QualityOut: int | None = Field(
        None, ge=0, description="Value outgoing balances at this ratio per 1,000,000,000 units"
    )


class TrustSetKind(TransactionKind[TrustSetInput]):
    transaction_type = "TrustSet"
    tool_id = "submit_trust_set"
    description = (
        "Submit a TrustSet transaction: create or modify a trust line from Account to the "
        "issuer in LimitAmount, allowing Account to hold up to LimitAmount.value of that token. "
        "XRP does not use trust lines. Each trust line counts toward the account's reserve. "
        "Flags: tfSetfAuth=65536, tfSetNoRipple=131072, tfClearNoRipple=262144, "
        "tfSetFreeze=1048576, tfClearFreeze=2097152, tfSetDeepFreeze=4194304, "
        "tfClearDeepFreeze=8388608."
    )
    input_model = TrustSetInput

    def build(self, params: TrustSetInput) -> TransactionDescriptor:
        values: dict[str, Any] = params.model_dump(exclude_none=True)
        limit = values["LimitAmount"]
        values["LimitAmount"] = {
            "currency": currency_code_to_hex(limit["currency"]),
            "value": limit["value"],
            "issuer": limit["issuer"],
        }
        return self.descriptor(values)

    def validate(self, txn: TransactionDescriptor) -> None:
        limit = txn.get("LimitAmount") or {}
        if str(limit.get("currency", "")).upper() == "XRP":
            self._reject("XRP is not allowed for TrustSet")
        if limit.get("issuer") == txn.get("Account"):
            self._reject("Cannot create trust line to yourself (issuer cannot be the same as Account)")
