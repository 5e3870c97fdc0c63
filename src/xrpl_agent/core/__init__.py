"""core module init"""
from xrpl_agent.core.client import LedgerClient, XrplClient, faucet_url_for
from xrpl_agent.core.currency import (
    CurrencyCodeError,
    currency_code_to_hex,
    hex_to_currency_code,
    is_hex_currency,
    normalize_amount,
)
from xrpl_agent.core.errors import (
    AuthenticationError,
    LedgerConnectionError,
    LedgerRequestError,
    SubmissionError,
    TransactionBuildError,
    TransactionValidationError,
    WorkflowStageError,
    XrplAgentError,
)
from xrpl_agent.core.models import (
    AccountKeys,
    IssuedCurrencyAmount,
    MPTAmount,
    SubmissionResult,
)
from xrpl_agent.core.registry import ConnectionRegistry
from xrpl_agent.core.submission import SubmissionEngine
from xrpl_agent.core.wallet import Credential, generate_account

__all__ = [
    "AccountKeys",
    "AuthenticationError",
    "ConnectionRegistry",
    "Credential",
    "CurrencyCodeError",
    "IssuedCurrencyAmount",
    "LedgerClient",
    "LedgerConnectionError",
    "LedgerRequestError",
    "MPTAmount",
    "SubmissionEngine",
    "SubmissionError",
    "SubmissionResult",
    "TransactionBuildError",
    "TransactionValidationError",
    "WorkflowStageError",
    "XrplAgentError",
    "XrplClient",
    "currency_code_to_hex",
    "faucet_url_for",
    "generate_account",
    "hex_to_currency_code",
    "is_hex_currency",
    "normalize_amount",
]
