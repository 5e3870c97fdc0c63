"""
xrpl-agent: Python SDK for AI agents submitting transactions to the XRP Ledger.

Usage:
    from xrpl_agent import ConnectionRegistry, SubmissionEngine
    from xrpl_agent.tools import XrplToolkit, SafetyConfig
"""

from xrpl_agent.core.client import LedgerClient, XrplClient
from xrpl_agent.core.models import AccountKeys, SubmissionResult
from xrpl_agent.core.registry import ConnectionRegistry
from xrpl_agent.core.submission import SubmissionEngine

__version__ = "0.1.0"
__all__ = [
    "AccountKeys",
    "ConnectionRegistry",
    "LedgerClient",
    "SubmissionEngine",
    "SubmissionResult",
    "XrplClient",
]
