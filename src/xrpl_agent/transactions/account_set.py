"""AccountSet: modify the properties of an account."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field
from xrpl.utils import str_to_hex

from xrpl_agent.transactions.base import TransactionDescriptor, TransactionKind
from xrpl_agent.transactions.fields import CommonFields

ACCOUNT_SET_FLAGS: dict[str, int] = {
    "asfRequireDest": 1,
    "asfRequireAuth": 2,
    "asfDisallowXRP": 3,
    "asfDisableMaster": 4,
    "asfAccountTxnID": 5,
    "asfNoFreeze": 6,
    "asfGlobalFreeze": 7,
    "asfDefaultRipple": 8,
    "asfDepositAuth": 9,
    "asfAuthorizedNFTokenMinter": 10,
    "asfDisallowIncomingNFTokenOffer": 12,
    "asfDisallowIncomingCheck": 13,
    "asfDisallowIncomingPayChan": 14,
    "asfDisallowIncomingTrustline": 15,
    "asfAllowTrustLineClawback": 16,
    "asfAllowTrustLineLocking": 17,
}

# TransferRate is billionths of a unit: 1000000000 means no fee, 2000000000 a 100% fee
TRANSFER_RATE_MIN = 1_000_000_000
TRANSFER_RATE_MAX = 2_000_000_000
TICK_SIZE_MIN = 3
TICK_SIZE_MAX = 15
MAX_DOMAIN_HEX_LENGTH = 512


def resolve_account_flag(flag: int | str) -> int:
    """Map an asf* flag name (or its number) to the flag number."""
    if isinstance(flag, int):
        return flag
    if flag.isdigit():
        return int(flag)
    try:
        return ACCOUNT_SET_FLAGS[flag]
    except KeyError:
        raise ValueError(f"Unknown AccountSet flag: {flag}") from None


class AccountSetInput(CommonFields):
    TransactionType: Literal["AccountSet"] = "AccountSet"
    SetFlag: int | str | None = Field(
        None, description='Account flag to enable, by number or name (e.g. "asfDefaultRipple")'
    )
    ClearFlag: int | str | None = Field(
        None, description="Account flag to disable, by number or name"
    )
    Domain: str | None = Field(
        None, description='Domain that owns this account, as plain text (e.g. "example.com")'
    )
    EmailHash: str | None = Field(None, description="MD5 hash of an email address, for a Gravatar")
    MessageKey: str | None = Field(None, description="Public key for sending encrypted messages")
    NFTokenMinter: str | None = Field(
        None, description="Account allowed to mint NFTokens on this account's behalf"
    )
    TransferRate: int | None = Field(
        None, description="Fee charged on transfers of this account's tokens; 0 or 1000000000-2000000000"
    )
    TickSize: int | None = Field(
        None, description="Significant digits for offers involving this account's tokens; 0 or 3-15"
    )
    WalletLocator: str | None = Field(None, description="Arbitrary 256-bit value")


class AccountSetKind(TransactionKind[AccountSetInput]):
    transaction_type = "AccountSet"
    tool_id = "submit_account_set"
    description = (
        "Submit an AccountSet transaction: modify account properties such as the Domain, "
        "TransferRate, TickSize, or account flags. SetFlag and ClearFlag accept a flag name "
        f"or number: {', '.join(f'{k}={v}' for k, v in ACCOUNT_SET_FLAGS.items())}. "
        "Domain is given as plain text and hex-encoded automatically."
    )
    input_model = AccountSetInput

    def build(self, params: AccountSetInput) -> TransactionDescriptor:
        values: dict[str, Any] = params.model_dump(exclude_none=True)
        for key in ("SetFlag", "ClearFlag"):
            if key in values:
                values[key] = resolve_account_flag(values[key])
        if "Domain" in values:
            values["Domain"] = str_to_hex(values["Domain"]).upper()
        return self.descriptor(values)

    def validate(self, txn: TransactionDescriptor) -> None:
        set_flag = txn.get("SetFlag")
        clear_flag = txn.get("ClearFlag")
        if set_flag is not None and set_flag == clear_flag:
            self._reject("SetFlag and ClearFlag cannot name the same flag")

        domain = txn.get("Domain")
        if domain is not None and len(domain) > MAX_DOMAIN_HEX_LENGTH:
            self._reject("Domain must be at most 256 bytes")

        rate = txn.get("TransferRate")
        if rate is not None and rate != 0 and not TRANSFER_RATE_MIN <= rate <= TRANSFER_RATE_MAX:
            self._reject(
                f"TransferRate must be 0 or between {TRANSFER_RATE_MIN} and {TRANSFER_RATE_MAX}"
            )

        tick = txn.get("TickSize")
        if tick is not None and tick != 0 and not TICK_SIZE_MIN <= tick <= TICK_SIZE_MAX:
            self._reject(f"TickSize must be 0 or between {TICK_SIZE_MIN} and {TICK_SIZE_MAX}")
