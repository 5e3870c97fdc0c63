"""Input models for the non-transaction tools. Their JSON schemas are the tool schemas."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class EmptyInput(BaseModel):
    pass


class NetworkInput(BaseModel):
    network: str | None = Field(
        None,
        description='Network endpoint, e.g. "wss://s.altnet.rippletest.net:51233/". Defaults to the configured network.',
    )


class AccountQueryInput(NetworkInput):
    account: str = Field(..., description="Account address (r-address)")
    ledger_index: str | int = Field(
        "validated", description='Ledger to query: "validated", "current", "closed" or an index'
    )


class AccountLinesInput(AccountQueryInput):
    peer: str | None = Field(None, description="Only return trust lines with this counterparty")
    limit: int | None = Field(None, ge=10, le=400, description="Maximum number of trust lines to return")


class AccountObjectsInput(AccountQueryInput):
    type: str | None = Field(
        None, description='Only return ledger entries of this type, e.g. "offer", "state", "nft_page"'
    )
    limit: int | None = Field(None, ge=10, le=400, description="Maximum number of objects to return")
    deletion_blockers_only: bool | None = Field(
        None, description="Only return objects that would block deleting the account"
    )


class CreateWalletInput(BaseModel):
    algorithm: Literal["ed25519", "secp256k1"] = Field(
        "ed25519", description="Signing algorithm for the new keypair"
    )


class FundWalletInput(NetworkInput):
    seed: str | None = Field(
        None, description="Fund the account for this seed; a new account is created if omitted"
    )
    amount: str | None = Field(
        None, description="XRP to request from the faucet, rounded up to a whole number (default 10)"
    )


class CurrencyCodeInput(BaseModel):
    code: str = Field(..., description='Currency code to encode, e.g. "GOLD"')


class HexCurrencyInput(BaseModel):
    hex: str = Field(..., description="40-character hex currency code to decode")


class XrpAmountInput(BaseModel):
    xrp: str = Field(..., description='Amount in XRP, e.g. "1.5"')


class DropsAmountInput(BaseModel):
    drops: str = Field(..., description='Amount in drops, e.g. "1500000"')
