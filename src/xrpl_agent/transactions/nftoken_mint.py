"""NFTokenMint: mint a non-fungible token, optionally with a sell offer."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field
from xrpl.utils import str_to_hex

from xrpl_agent.core.currency import normalize_amount
from xrpl_agent.core.models import CurrencyAmount
from xrpl_agent.transactions.base import TransactionDescriptor, TransactionKind
from xrpl_agent.transactions.fields import CommonFields

NFTOKEN_MINT_FLAGS: dict[str, int] = {
    "tfBurnable": 1,
    "tfOnlyXRP": 2,
    "tfTrustLine": 4,
    "tfTransferable": 8,
    "tfMutable": 16,
}
NFTOKEN_MINT_FLAG_MASK = 1 | 2 | 4 | 8 | 16

# TransferFee is in units of 1/100,000; 50000 is a 50% fee
MAX_TRANSFER_FEE = 50000
MAX_URI_HEX_LENGTH = 512


class NFTokenMintInput(CommonFields):
    TransactionType: Literal["NFTokenMint"] = "NFTokenMint"
    NFTokenTaxon: int = Field(
        0, ge=0, description="Arbitrary taxon identifying a series of related NFTokens"
    )
    Issuer: str | None = Field(
        None, description="Issuer when minting on behalf of another account (authorized minter)"
    )
    TransferFee: int | None = Field(
        None, description="Secondary-sale fee, 0-50000 (50000 = 50%); requires tfTransferable"
    )
    URI: str | None = Field(
        None, description="URI pointing to the token's data, as plain text (hex-encoded automatically)"
    )
    Amount: CurrencyAmount | None = Field(
        None, description="Price of a sell offer created with the token"
    )
    Expiration: int | None = Field(
        None, description="Expiration of the sell offer, in seconds since the Ripple Epoch; requires Amount"
    )
    Destination: str | None = Field(
        None, description="Only this account may accept the sell offer; requires Amount"
    )


class NFTokenMintKind(TransactionKind[NFTokenMintInput]):
    transaction_type = "NFTokenMint"
    tool_id = "submit_nftoken_mint"
    description = (
        "Submit an NFTokenMint transaction: mint a non-fungible token. Giving Amount also "
        "creates a sell offer for the token. Flags: tfBurnable=1, tfOnlyXRP=2, "
        "tfTrustLine=4, tfTransferable=8, tfMutable=16. URI is given as plain text and "
        "hex-encoded automatically."
    )
    input_model = NFTokenMintInput

    def build(self, params: NFTokenMintInput) -> TransactionDescriptor:
        values: dict[str, Any] = params.model_dump(exclude_none=True)
        if "URI" in values:
            values["URI"] = str_to_hex(values["URI"]).upper()
        if "Amount" in values:
            values["Amount"] = normalize_amount(values["Amount"])
        return self.descriptor(values)

    def validate(self, txn: TransactionDescriptor) -> None:
        flags = txn.get("Flags") or 0
        if flags & ~NFTOKEN_MINT_FLAG_MASK:
            self._reject(f"Flags {flags} include bits outside the NFTokenMint flags")

        fee = txn.get("TransferFee")
        if fee is not None:
            if not 0 <= fee <= MAX_TRANSFER_FEE:
                self._reject(f"TransferFee must be between 0 and {MAX_TRANSFER_FEE}")
            if fee > 0 and not flags & NFTOKEN_MINT_FLAGS["tfTransferable"]:
                self._reject("TransferFee requires the tfTransferable flag")

        if txn.get("Issuer") is not None and txn.get("Issuer") == txn.get("Account"):
            self._reject("Issuer must be omitted when minting for yourself")

        uri = txn.get("URI")
        if uri is not None and len(uri) > MAX_URI_HEX_LENGTH:
            self._reject("URI must be at most 256 bytes")

        if "Amount" not in txn:
            if "Expiration" in txn or "Destination" in txn:
                self._reject("Expiration and Destination require Amount")
