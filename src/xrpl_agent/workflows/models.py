"""
Data models for the token issuance workflow.

The WorkflowContext is frozen: every stage returns an extended copy and the
recorded history of earlier stages is never changed.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from xrpl_agent.core.models import AccountKeys
from xrpl_agent.transactions.account_set import ACCOUNT_SET_FLAGS

# Faucet-backed networks only; the workflow funds fresh accounts from a faucet
TOKEN_ISSUANCE_NETWORKS: tuple[str, ...] = (
    "wss://s.altnet.rippletest.net:51233/",
    "wss://testnet.xrpl-labs.com/",
    "wss://clio.devnet.rippletest.net:51233/",
    "wss://s.devnet.rippletest.net:51233/",
)

TokenIssuanceNetwork = Literal[
    "wss://s.altnet.rippletest.net:51233/",
    "wss://testnet.xrpl-labs.com/",
    "wss://clio.devnet.rippletest.net:51233/",
    "wss://s.devnet.rippletest.net:51233/",
]


class TrustlineSpec(BaseModel):
    currency: str = Field(..., description='Currency code for the token (e.g. "USD", "TOKEN")')
    trustline_limit: str = Field(..., description="Trust line limit value for each holder")


class IssuerSettings(BaseModel):
    domain: str | None = Field(None, description="Issuer domain for account identification")
    flags: list[str] | None = Field(
        None, description="Account flags to set on the issuer account, by name"
    )

    @field_validator("flags")
    @classmethod
    def _known_flags(cls, flags: list[str] | None) -> list[str] | None:
        for name in flags or []:
            if name not in ACCOUNT_SET_FLAGS:
                raise ValueError(f"Unknown AccountSet flag: {name}")
        return flags


class TokenIssuanceInput(BaseModel):
    """Everything the workflow needs up front."""

    network: TokenIssuanceNetwork = Field(..., description="Test network to issue the token on")
    trustline: TrustlineSpec = Field(..., description="Trust line settings for the token")
    issuer_settings: IssuerSettings = Field(
        default_factory=IssuerSettings, description="Settings for the issuer account"
    )
    holders: int = Field(..., ge=1, description="Number of holder accounts to create")
    mint_amount: str = Field(..., description="Amount of tokens to mint for each holder")


class TxnResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    description: str
    hash: str | None = None
    status: str = "N/A"


class WorkflowContext(BaseModel):
    """Accumulated state of one workflow run."""

    model_config = ConfigDict(frozen=True)

    inputs: TokenIssuanceInput
    issuer: AccountKeys | None = None
    holders: tuple[AccountKeys, ...] = ()
    txn_results: tuple[TxnResult, ...] = ()
    completed_stages: tuple[str, ...] = ()

    def with_accounts(self, issuer: AccountKeys, holders: list[AccountKeys]) -> WorkflowContext:
        return self.model_copy(update={"issuer": issuer, "holders": tuple(holders)})

    def with_results(self, results: list[TxnResult]) -> WorkflowContext:
        return self.model_copy(update={"txn_results": self.txn_results + tuple(results)})

    def with_completed(self, stage: str) -> WorkflowContext:
        return self.model_copy(update={"completed_stages": self.completed_stages + (stage,)})

    def to_agent_summary(self) -> dict[str, Any]:
        """Result for the LLM. Seeds are included since these are fresh test-network accounts."""
        return {
            "network": self.inputs.network,
            "issuer": self._account(self.issuer) if self.issuer else None,
            "holders": [self._account(h) for h in self.holders],
            "txn_results": [r.model_dump() for r in self.txn_results],
            "completed_stages": list(self.completed_stages),
        }

    @staticmethod
    def _account(account: AccountKeys) -> dict[str, Any]:
        return {"address": account.address, "seed": account.seed}
