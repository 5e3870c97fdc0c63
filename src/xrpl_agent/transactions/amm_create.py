"""AMMCreate: create an automated market maker pool for two assets."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from xrpl_agent.core.currency import is_xrp_amount, normalize_amount
from xrpl_agent.core.models import CurrencyAmount
from xrpl_agent.transactions.base import TransactionDescriptor, TransactionKind
from xrpl_agent.transactions.fields import CommonFields

# TradingFee is in units of 1/100,000; 1000 is a 1% fee
MAX_TRADING_FEE = 1000


class AMMCreateInput(CommonFields):
    TransactionType: Literal["AMMCreate"] = "AMMCreate"
    Amount: CurrencyAmount = Field(..., description="First asset to deposit into the pool")
    Amount2: CurrencyAmount = Field(..., description="Second asset to deposit into the pool")
    TradingFee: int = Field(
        ..., description="Fee charged on trades against the pool, 0-1000 (1000 = 1%)"
    )


class AMMCreateKind(TransactionKind[AMMCreateInput]):
    transaction_type = "AMMCreate"
    tool_id = "submit_amm_create"
    description = (
        "Submit an AMMCreate transaction: create an automated market maker pool for two "
        "assets, funded with Amount and Amount2. At most one side may be XRP. The transaction "
        "cost is much higher than usual (one owner reserve). TradingFee ranges 0-1000, "
        "where 1000 is a 1% fee."
    )
    input_model = AMMCreateInput

    def build(self, params: AMMCreateInput) -> TransactionDescriptor:
        values: dict[str, Any] = params.model_dump(exclude_none=True)
        values["Amount"] = normalize_amount(values["Amount"])
        values["Amount2"] = normalize_amount(values["Amount2"])
        return self.descriptor(values)

    def validate(self, txn: TransactionDescriptor) -> None:
        amount, amount2 = txn.get("Amount"), txn.get("Amount2")
        if amount is None or amount2 is None:
            self._reject("Both Amount and Amount2 are required")
        if is_xrp_amount(amount) and is_xrp_amount(amount2):
            self._reject("Amount and Amount2 cannot both be XRP")
        fee = txn.get("TradingFee")
        if fee is None or not 0 <= fee <= MAX_TRADING_FEE:
            self._reject(f"TradingFee must be between 0 and {MAX_TRADING_FEE}")
