"""
Error taxonomy for the submission pipeline.

Every error carries a ``layer`` naming where it was raised, so a tool host can
tell a bad input apart from a ledger rejection without parsing messages.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from xrpl_agent.core.models import SubmissionResult


class XrplAgentError(Exception):
    """Base class for all errors raised by xrpl-agent."""

    layer = "agent"

    def to_dict(self) -> dict[str, Any]:
        return {"error": type(self).__name__, "layer": self.layer, "message": str(self)}


class LedgerConnectionError(XrplAgentError, ConnectionError):
    """Raised when the transport fails to connect or reconnect to an endpoint."""

    layer = "connection"

    def __init__(self, message: str, network: str | None = None) -> None:
        super().__init__(message)
        self.network = network


class AuthenticationError(XrplAgentError):
    """Raised when a submission has neither or both of seed / signature."""

    layer = "authentication"


class TransactionBuildError(XrplAgentError):
    """Raised when raw tool input cannot be turned into a transaction."""

    layer = "build"


class TransactionValidationError(XrplAgentError):
    """Raised when a kind-specific validator rejects a built transaction."""

    layer = "validate"


class SubmissionError(XrplAgentError):
    """Raised when the ledger rejects or cannot finalize a transaction."""

    layer = "submit"

    def __init__(self, message: str, result: SubmissionResult | None = None) -> None:
        super().__init__(message)
        self.result = result

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        if self.result is not None:
            data["hash"] = self.result.hash
            data["engine_result"] = self.result.engine_result
        return data


class LedgerRequestError(XrplAgentError):
    """Raised when a read-only ledger request returns an error."""

    layer = "request"


class WorkflowStageError(XrplAgentError):
    """
    Raised when a workflow stage fails.

    Attributes:
        stage: the Stage that failed
        context: the WorkflowContext accumulated before the failing stage.
            Ledger effects of completed stages stay committed.
    """

    layer = "stage"

    def __init__(self, stage: Any, context: Any, cause: BaseException) -> None:
        stage_name = getattr(stage, "value", stage)
        super().__init__(f"Stage '{stage_name}' failed: {cause}")
        self.stage = stage
        self.context = context
        self.cause = cause

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["stage"] = getattr(self.stage, "value", self.stage)
        if isinstance(self.cause, XrplAgentError):
            data["cause"] = self.cause.to_dict()
        else:
            data["cause"] = {"error": type(self.cause).__name__, "message": str(self.cause)}
        return data
