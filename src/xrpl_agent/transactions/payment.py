"""Payment: transfer XRP, tokens or MPTs from one account to another."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from xrpl_agent.core.currency import is_xrp_amount, normalize_amount
from xrpl_agent.core.models import AnyAmount
from xrpl_agent.transactions.base import TransactionDescriptor, TransactionKind
from xrpl_agent.transactions.fields import CommonFields

PAYMENT_FLAGS: dict[str, int] = {
    "tfNoRippleDirect": 65536,
    "tfPartialPayment": 131072,
    "tfLimitQuality": 262144,
}


class PathStep(BaseModel):
    account: str | None = Field(None, description="Intermediary account in the path")
    currency: str | None = Field(None, description="Currency code for this step")
    issuer: str | None = Field(None, description="Issuer account for this step")


class PaymentInput(CommonFields):
    TransactionType: Literal["Payment"] = "Payment"
    Amount: AnyAmount | None = Field(
        None, description='Amount to deliver: XRP drops as a string ("1000000" = 1 XRP) or a token amount'
    )
    DeliverMax: AnyAmount | None = Field(
        None, description="API v2 name for Amount; takes precedence when both are given"
    )
    DeliverMin: AnyAmount | None = Field(
        None, description="Minimum amount to deliver (partial payments only)"
    )
    Destination: str = Field(..., description="The account receiving the payment (r-address)")
    DestinationTag: int | None = Field(None, description="Arbitrary tag identifying the recipient")
    DomainID: str | None = Field(None, description="Permissioned domain ID for cross-currency payments")
    InvoiceID: str | None = Field(None, description="Arbitrary 256-bit hex value identifying this payment")
    Paths: list[list[PathStep]] | None = Field(
        None, description="Payment paths; omit for direct XRP payments"
    )
    SendMax: AnyAmount | None = Field(None, description="Maximum amount to spend, in the source currency")
    CredentialIDs: list[str] | None = Field(
        None, description="Credential ledger entry IDs authorizing the deposit"
    )


class PaymentKind(TransactionKind[PaymentInput]):
    transaction_type = "Payment"
    tool_id = "submit_payment"
    description = (
        "Submit a Payment transaction: transfer XRP, an issued token or an MPT from one "
        "account to another. Payment is the only transaction that can create a new account, "
        "by sending it at least the base reserve in XRP. Amounts in XRP are strings of drops "
        '("1000000" = 1 XRP); token amounts are {currency, value, issuer}. Currency codes '
        "longer than 3 characters are hex-encoded automatically."
    )
    input_model = PaymentInput

    def build(self, params: PaymentInput) -> TransactionDescriptor:
        values: dict[str, Any] = params.model_dump(exclude_none=True)
        # DeliverMax is the API v2 alias of Amount
        deliver_max = values.pop("DeliverMax", None)
        amount = deliver_max if deliver_max is not None else values.get("Amount")
        if amount is not None:
            values["Amount"] = normalize_amount(amount)
        for key in ("SendMax", "DeliverMin"):
            if key in values:
                values[key] = normalize_amount(values[key])
        return self.descriptor(values)

    def validate(self, txn: TransactionDescriptor) -> None:
        amount = txn.get("Amount")
        if amount is None:
            self._reject("Provide Amount (API v1) or DeliverMax (API v2)")
        if txn.get("Destination") == txn.get("Account") and is_xrp_amount(amount):
            self._reject("Cannot send XRP to the sending account itself")
