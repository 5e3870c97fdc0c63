"""
Core data models for the XRP Ledger.
All XRP amounts are in drops (1 XRP = 1,000,000 drops) internally.
"""

from __future__ import annotations

from typing import Any, Union

from pydantic import BaseModel, Field

SUCCESS_RESULT = "tesSUCCESS"


class IssuedCurrencyAmount(BaseModel):
    """An amount of a non-XRP token, held on a trust line."""
    currency: str = Field(
        ..., description='Currency code (3-char ISO code or 160-bit hex), e.g. "USD"'
    )
    value: str = Field(..., description="Amount as a decimal string")
    issuer: str = Field(..., description="Issuer account address (r-address)")


class MPTAmount(BaseModel):
    """A Multi-Purpose Token amount."""
    mpt_issuance_id: str = Field(..., description="Hex string identifying the MPT issuance")
    value: str = Field(..., description="Amount as a decimal string")


# XRP in drops as a string, or a token amount
CurrencyAmount = Union[str, IssuedCurrencyAmount]
AnyAmount = Union[str, IssuedCurrencyAmount, MPTAmount]


class AccountKeys(BaseModel):
    """A generated or funded ledger account. The seed never appears in repr()."""
    address: str
    seed: str = Field(..., repr=False)
    public_key: str | None = None
    balance_xrp: str | None = None

    def to_agent_summary(self) -> str:
        """Human-readable summary for the LLM."""
        if self.balance_xrp is not None:
            return f"{self.address} ({self.balance_xrp} XRP)"
        return self.address


class SubmissionResult(BaseModel):
    """The finalized outcome of one submitted transaction."""
    hash: str | None = None
    engine_result: str | None = None
    validated: bool = False
    ledger_index: int | None = None
    response: dict[str, Any] = Field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        """True when the ledger applied the transaction with tesSUCCESS."""
        return self.engine_result == SUCCESS_RESULT

    @classmethod
    def from_response(cls, result: dict[str, Any]) -> SubmissionResult:
        """
        Parse the ``result`` object of a finalized ``tx`` response.

        Handles both API v1 (fields at the top level) and API v2 (``tx_json``)
        response shapes.
        """
        meta = result.get("meta")
        engine_result = None
        if isinstance(meta, dict):
            engine_result = meta.get("TransactionResult")
        if engine_result is None:
            engine_result = result.get("engine_result")

        tx_hash = result.get("hash")
        if tx_hash is None and isinstance(result.get("tx_json"), dict):
            tx_hash = result["tx_json"].get("hash")

        ledger_index = result.get("ledger_index")
        return cls(
            hash=tx_hash,
            engine_result=engine_result,
            validated=bool(result.get("validated", False)),
            ledger_index=int(ledger_index) if ledger_index is not None else None,
            response=result,
        )

    def to_agent_summary(self) -> str:
        """Human-readable summary for the LLM."""
        status = self.engine_result or "N/A"
        state = "validated" if self.validated else "not validated"
        return f"{status} ({state}) hash={self.hash or 'unknown'}"
