from typing import Any

from fastapi import APIRouter, Body, HTTPException, Request

from xrpl_agent.api.models import ToolCallResponse, ToolDefinition
from xrpl_agent.tools.toolkit import XrplToolkit
from xrpl_agent.workflows.models import TokenIssuanceInput

router = APIRouter(tags=["XRPL Agent"])


def get_toolkit(request: Request) -> XrplToolkit:
    """Dependency to retrieve the initialized XrplToolkit from app state."""
    toolkit = getattr(request.app.state, "toolkit", None)
    if not toolkit:
        raise HTTPException(status_code=500, detail="toolkit not initialized")
    return toolkit


@router.get("/tools", response_model=list[ToolDefinition])
async def list_tools(request: Request):
    """List every tool with its input schema."""
    toolkit = get_toolkit(request)
    return [ToolDefinition(**definition) for definition in toolkit.to_anthropic_tools()]


@router.post("/tools/{tool_name}", response_model=ToolCallResponse)
async def call_tool(request: Request, tool_name: str, tool_input: dict[str, Any] = Body(default_factory=dict)):
    """
    Run one tool. The body is the tool input, as described by its schema in GET /tools.

    Transaction tools take ``{network, seed | signature, txn}``.
    """
    toolkit = get_toolkit(request)
    result = await toolkit.call_tool(tool_name, tool_input)
    return ToolCallResponse(tool=tool_name, result=result)


@router.post("/workflows/token-issuance")
async def token_issuance(request: Request, req: TokenIssuanceInput):
    """
    Issue a token on testnet or devnet.

    On a stage failure the response is 502 and carries the failing stage and
    the accounts and transactions completed before it. Those ledger effects
    are not rolled back.
    """
    toolkit = get_toolkit(request)
    return await toolkit.run_token_issuance(req)
