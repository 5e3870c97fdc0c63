"""
Currency code utilities for the XRP Ledger.

The ledger accepts two currency code formats:
  - standard codes: exactly 3 ASCII characters (e.g. "USD"), "XRP" is reserved
  - nonstandard codes: 160-bit values written as 40 hex characters

Longer human-readable codes (e.g. "RLUSD") are hex-encoded and right-padded
with zeros to 40 characters.

Reference: https://xrpl.org/docs/references/protocol/data-types/currency-formats
"""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Any

from xrpl.utils import drops_to_xrp, hex_to_str, str_to_hex, xrp_to_drops

CURRENCY_HEX_LENGTH = 40
_HEX_RE = re.compile(r"^[0-9A-Fa-f]{40}$")


class CurrencyCodeError(ValueError):
    """Raised for currency codes that cannot be represented on the ledger."""

    pass


def is_hex_currency(code: str) -> bool:
    """Return True if ``code`` is already a 160-bit hex currency code."""
    return bool(_HEX_RE.match(code))


def currency_code_to_hex(code: str) -> str:
    """
    Normalize a currency code for use in a transaction.

    3-character codes and 40-character hex codes pass through unchanged.
    Anything else is hex-encoded (uppercase) and right-padded with ``0``
    to 40 characters.

    Raises:
        CurrencyCodeError: if the code is empty or longer than 20 bytes
    """
    if not code:
        raise CurrencyCodeError("Currency code must not be empty.")
    if len(code) == 3 or len(code) == CURRENCY_HEX_LENGTH:
        return code

    encoded = str_to_hex(code).upper()
    if len(encoded) > CURRENCY_HEX_LENGTH:
        raise CurrencyCodeError(
            f"Currency code '{code}' is longer than 20 bytes and cannot be encoded."
        )
    return encoded.ljust(CURRENCY_HEX_LENGTH, "0")


def hex_to_currency_code(value: str) -> str:
    """Decode a 160-bit hex currency code, stripping the zero padding."""
    if len(value) == 3:
        return value
    if not is_hex_currency(value):
        raise CurrencyCodeError(f"Not a 160-bit hex currency code: {value}")
    stripped = value.rstrip("0")
    if len(stripped) % 2:
        stripped += "0"
    return hex_to_str(stripped).rstrip("\x00")


def normalize_amount(amount: Any) -> Any:
    """
    Hex-encode the currency of an issued-currency amount.

    XRP amounts (drops as a string) and MPT amounts are returned unchanged.
    """
    if isinstance(amount, dict) and "currency" in amount and "mpt_issuance_id" not in amount:
        return {**amount, "currency": currency_code_to_hex(amount["currency"])}
    return amount


def is_xrp_amount(amount: Any) -> bool:
    """Return True for an XRP amount (drops string, or currency 'XRP')."""
    if isinstance(amount, str):
        return True
    return isinstance(amount, dict) and str(amount.get("currency", "")).upper() == "XRP"


def xrp_to_drops_str(xrp: str | int | float | Decimal) -> str:
    """Convert an XRP amount to drops."""
    return xrp_to_drops(Decimal(str(xrp)))


def drops_to_xrp_str(drops: str | int) -> str:
    """Convert a drops amount to XRP, without trailing zeros ("1500000" -> "1.5")."""
    xrp = drops_to_xrp(str(drops))
    return format(xrp.normalize(), "f")
