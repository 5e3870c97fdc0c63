"""
Transaction kinds exposed as agent tools.

Each kind builds and validates one ledger transaction type; the shared
pipeline in ``base`` wraps it with authentication and submission.
"""

from xrpl_agent.transactions.account_set import ACCOUNT_SET_FLAGS, AccountSetKind
from xrpl_agent.transactions.amm_create import AMMCreateKind
from xrpl_agent.transactions.base import (
    TransactionDescriptor,
    TransactionKind,
    TransactionTool,
    TransactionToolInput,
    create_transaction_tool,
)
from xrpl_agent.transactions.clawback import ClawbackKind
from xrpl_agent.transactions.nftoken_mint import NFTOKEN_MINT_FLAGS, NFTokenMintKind
from xrpl_agent.transactions.offers import OFFER_CREATE_FLAGS, OfferCancelKind, OfferCreateKind
from xrpl_agent.transactions.payment import PAYMENT_FLAGS, PaymentKind
from xrpl_agent.transactions.trust_set import TRUST_SET_FLAGS, TrustSetKind

ALL_KINDS: list[type[TransactionKind]] = [
    PaymentKind,
    TrustSetKind,
    AccountSetKind,
    ClawbackKind,
    OfferCreateKind,
    OfferCancelKind,
    AMMCreateKind,
    NFTokenMintKind,
]

__all__ = [
    "ACCOUNT_SET_FLAGS",
    "ALL_KINDS",
    "AMMCreateKind",
    "AccountSetKind",
    "ClawbackKind",
    "NFTOKEN_MINT_FLAGS",
    "NFTokenMintKind",
    "OFFER_CREATE_FLAGS",
    "OfferCancelKind",
    "OfferCreateKind",
    "PAYMENT_FLAGS",
    "PaymentKind",
    "TRUST_SET_FLAGS",
    "TransactionDescriptor",
    "TransactionKind",
    "TransactionTool",
    "TransactionToolInput",
    "TrustSetKind",
    "create_transaction_tool",
]
