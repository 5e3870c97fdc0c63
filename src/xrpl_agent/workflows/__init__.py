from xrpl_agent.workflows.models import (
    TOKEN_ISSUANCE_NETWORKS,
    IssuerSettings,
    TokenIssuanceInput,
    TrustlineSpec,
    TxnResult,
    WorkflowContext,
)
from xrpl_agent.workflows.token_issuance import Stage, TokenIssuanceWorkflow, next_stage

__all__ = [
    "IssuerSettings",
    "Stage",
    "TOKEN_ISSUANCE_NETWORKS",
    "TokenIssuanceInput",
    "TokenIssuanceWorkflow",
    "TrustlineSpec",
    "TxnResult",
    "WorkflowContext",
    "next_stage",
]
