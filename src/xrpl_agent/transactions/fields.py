"""
Common transaction fields shared by every transaction kind.

Field names follow the ledger's JSON format (PascalCase), so a parsed input
dumps straight into a submittable transaction.

Reference: https://xrpl.org/docs/references/protocol/transactions/common-fields
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Memo(BaseModel):
    MemoData: str | None = Field(None, description="Arbitrary hex value; conventionally the memo content")
    MemoFormat: str | None = Field(None, description="Hex value; conventionally the encoding (e.g. MIME type)")
    MemoType: str | None = Field(None, description="Hex value; conventionally defines the memo format")


class MemoWrapper(BaseModel):
    Memo: Memo


class Signer(BaseModel):
    Account: str = Field(..., description="Address associated with this signature")
    TxnSignature: str = Field(..., description="Hex signature for this transaction")
    SigningPubKey: str = Field(..., description="Hex public key used to create this signature")


class SignerWrapper(BaseModel):
    Signer: Signer


class CommonFields(BaseModel):
    """Fields every transaction accepts. Sequence, Fee and LastLedgerSequence are autofilled."""

    model_config = ConfigDict(extra="ignore")

    Account: str = Field(..., description="The account that initiates the transaction (r-address)")
    Fee: str | None = Field(None, description="Transaction cost in drops; typically autofilled")
    Sequence: int | None = Field(None, description="Account sequence number; typically autofilled")
    LastLedgerSequence: int | None = Field(
        None, description="Highest ledger index this transaction can appear in"
    )
    Flags: int | None = Field(None, description="Bit-flags for this transaction")
    AccountTxnID: str | None = Field(
        None, description="Hash that the sending account's previous transaction must match"
    )
    SourceTag: int | None = Field(None, description="Arbitrary integer identifying the sender or reason")
    TicketSequence: int | None = Field(
        None, description="Ticket to use in place of Sequence (Sequence must then be 0)"
    )
    NetworkID: int | None = Field(
        None, description="Chain network ID; omit for networks with ID <= 1024"
    )
    Memos: list[MemoWrapper] | None = Field(None, description="Additional arbitrary information")
    Signers: list[SignerWrapper] | None = Field(None, description="Multi-signature entries")
