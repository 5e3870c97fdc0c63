"""OfferCreate and OfferCancel: place and withdraw offers on the decentralized exchange."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from xrpl_agent.core.currency import normalize_amount
from xrpl_agent.core.models import CurrencyAmount
from xrpl_agent.transactions.base import TransactionDescriptor, TransactionKind
from xrpl_agent.transactions.fields import CommonFields

OFFER_CREATE_FLAGS: dict[str, int] = {
    "tfPassive": 65536,
    "tfImmediateOrCancel": 131072,
    "tfFillOrKill": 262144,
    "tfSell": 524288,
    "tfHybrid": 1048576,
}


class OfferCreateInput(CommonFields):
    TransactionType: Literal["OfferCreate"] = "OfferCreate"
    TakerGets: CurrencyAmount = Field(
        ..., description="Amount the offer creator gives up (what the taker gets)"
    )
    TakerPays: CurrencyAmount = Field(
        ..., description="Amount the offer creator receives (what the taker pays)"
    )
    Expiration: int | None = Field(
        None, description="Time after which the offer is no longer active, in seconds since the Ripple Epoch"
    )
    OfferSequence: int | None = Field(
        None, description="Sequence number of an offer to cancel before placing this one"
    )
    DomainID: str | None = Field(None, description="Permissioned DEX domain to place the offer in")


class OfferCreateKind(TransactionKind[OfferCreateInput]):
    transaction_type = "OfferCreate"
    tool_id = "submit_offer_create"
    description = (
        "Submit an OfferCreate transaction: place an offer to exchange currencies on the DEX. "
        "The offer may be consumed immediately, partially or fully, and any remainder stays on "
        "the order book. Flags: tfPassive=65536, tfImmediateOrCancel=131072, "
        "tfFillOrKill=262144, tfSell=524288, tfHybrid=1048576 (requires DomainID)."
    )
    input_model = OfferCreateInput

    def build(self, params: OfferCreateInput) -> TransactionDescriptor:
        values: dict[str, Any] = params.model_dump(exclude_none=True)
        values["TakerGets"] = normalize_amount(values["TakerGets"])
        values["TakerPays"] = normalize_amount(values["TakerPays"])
        return self.descriptor(values)

    def validate(self, txn: TransactionDescriptor) -> None:
        flags = txn.get("Flags") or 0
        ioc = flags & OFFER_CREATE_FLAGS["tfImmediateOrCancel"]
        fok = flags & OFFER_CREATE_FLAGS["tfFillOrKill"]
        if ioc and fok:
            self._reject("tfImmediateOrCancel and tfFillOrKill cannot both be set")
        if flags & OFFER_CREATE_FLAGS["tfHybrid"] and not txn.get("DomainID"):
            self._reject("tfHybrid requires DomainID")


class OfferCancelInput(CommonFields):
    TransactionType: Literal["OfferCancel"] = "OfferCancel"
    OfferSequence: int = Field(
        ..., description="Sequence number (or Ticket number) of the offer to cancel"
    )


class OfferCancelKind(TransactionKind[OfferCancelInput]):
    transaction_type = "OfferCancel"
    tool_id = "submit_offer_cancel"
    description = (
        "Submit an OfferCancel transaction: remove an offer from the DEX, identified by "
        "the Sequence of the OfferCreate that placed it."
    )
    input_model = OfferCancelInput
