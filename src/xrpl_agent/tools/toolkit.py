"""
XrplToolkit: the main entry point for AI agents.

This class wraps all XRP Ledger capabilities into a unified interface that:
1. Exposes every capability as a named tool with a JSON input schema
2. Validates every state-changing action against SafetyConfig rules
3. Generates tool schemas for OpenAI and Anthropic

Usage:
    from xrpl_agent import ConnectionRegistry
    from xrpl_agent.tools import XrplToolkit, SafetyConfig

    registry = ConnectionRegistry()
    toolkit = XrplToolkit(registry, safety=SafetyConfig(dry_run=True))

    info = await toolkit.call_tool("get_account_info", {"account": "r..."})

    # For LLM integration:
    tools = toolkit.to_openai_tools()    # list of OpenAI tool dicts
    tools = toolkit.to_anthropic_tools() # list of Anthropic tool dicts
    result_json = await toolkit.execute_tool(name, tool_input)
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterator

from pydantic import BaseModel, ValidationError
from xrpl.constants import XRPLException

from xrpl_agent.core.currency import (
    currency_code_to_hex,
    drops_to_xrp_str,
    hex_to_currency_code,
    xrp_to_drops_str,
)
from xrpl_agent.core.errors import WorkflowStageError, XrplAgentError
from xrpl_agent.core.registry import ConnectionRegistry
from xrpl_agent.core.submission import SubmissionEngine
from xrpl_agent.core.wallet import generate_account
from xrpl_agent.tools.inputs import (
    AccountLinesInput,
    AccountObjectsInput,
    AccountQueryInput,
    CreateWalletInput,
    CurrencyCodeInput,
    DropsAmountInput,
    EmptyInput,
    FundWalletInput,
    HexCurrencyInput,
    NetworkInput,
    XrpAmountInput,
)
from xrpl_agent.tools.safety import SafetyConfig, SafetyViolation
from xrpl_agent.transactions import ALL_KINDS
from xrpl_agent.transactions.base import TransactionTool, create_transaction_tool
from xrpl_agent.workflows.models import TokenIssuanceInput
from xrpl_agent.workflows.token_issuance import TokenIssuanceWorkflow

logger = logging.getLogger("xrpl_agent.toolkit")

DEFAULT_NETWORK = "wss://s.altnet.rippletest.net:51233/"


class UnknownToolError(XrplAgentError, KeyError):
    """Raised when a tool name is not registered."""

    layer = "tool"

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class ToolInputError(XrplAgentError):
    """Raised when tool input does not match the tool's schema."""

    layer = "input"


@dataclass(frozen=True)
class Tool:
    """A named capability: ``{id, description, input_schema, execute}``."""

    id: str
    description: str
    input_schema: dict[str, Any]
    execute: Callable[[dict[str, Any]], Awaitable[Any]]


def _parse(model: type[BaseModel], tool_input: dict[str, Any], tool_name: str) -> Any:
    try:
        return model.model_validate(tool_input or {})
    except ValidationError as e:
        raise ToolInputError(f"Invalid input for {tool_name}:\n{e}") from None


@contextmanager
def _input_errors(tool_name: str) -> Iterator[None]:
    try:
        yield
    except (ValueError, ArithmeticError, XRPLException) as e:
        raise ToolInputError(f"{tool_name}: {e}") from e


class XrplToolkit:
    """
    Unified AI agent toolkit for the XRP Ledger.

    All tools are safe to call directly from an LLM's tool-calling loop.
    Every state-changing action is validated by the SafetyConfig before execution.
    """

    def __init__(
        self,
        registry: ConnectionRegistry,
        engine: SubmissionEngine | None = None,
        safety: SafetyConfig | None = None,
        default_network: str | None = None,
    ) -> None:
        self._registry = registry
        self._engine = engine or SubmissionEngine(registry)
        self._safety = safety or SafetyConfig()
        self._default_network = default_network or DEFAULT_NETWORK
        self._workflow = TokenIssuanceWorkflow(registry, self._engine)
        self._transaction_tools: dict[str, TransactionTool] = {
            tool.id: tool
            for tool in (create_transaction_tool(kind(), self._engine) for kind in ALL_KINDS)
        }
        self._tools: dict[str, Tool] = {}
        self._register_tools()

    @property
    def safety(self) -> SafetyConfig:
        return self._safety

    @property
    def registry(self) -> ConnectionRegistry:
        return self._registry

    @property
    def default_network(self) -> str:
        return self._default_network

    @property
    def tools(self) -> list[Tool]:
        return list(self._tools.values())

    def get_tool(self, name: str) -> Tool:
        try:
            return self._tools[name]
        except KeyError:
            raise UnknownToolError(f"Unknown tool: {name}") from None

    # ------------------------------------------------------------------
    # Read-only actions (no safety checks needed)
    # ------------------------------------------------------------------

    async def get_account_info(self, params: AccountQueryInput) -> dict[str, Any]:
        """
        Get an account's XRP balance, sequence number and settings.

        Returns:
            dict with 'account_data' (raw ledger entry) and 'summary' (str)
        """
        result = await self._request(
            params.network, "account_info",
            account=params.account, ledger_index=params.ledger_index,
        )
        data = result.get("account_data", {})
        balance = drops_to_xrp_str(data["Balance"]) if "Balance" in data else None
        return {
            "account_data": data,
            "validated": result.get("validated", False),
            "summary": f"{params.account}: {balance} XRP, sequence {data.get('Sequence')}",
        }

    async def get_account_lines(self, params: AccountLinesInput) -> dict[str, Any]:
        """Get the trust lines of an account, with currency codes decoded."""
        result = await self._request(
            params.network, "account_lines",
            **params.model_dump(exclude_none=True, exclude={"network"}),
        )
        lines = result.get("lines", [])
        for line in lines:
            currency = line.get("currency", "")
            if len(currency) == 40:
                try:
                    line["currency_decoded"] = hex_to_currency_code(currency)
                except ValueError:
                    pass
        return {"account": params.account, "lines": lines, "marker": result.get("marker")}

    async def get_account_objects(self, params: AccountObjectsInput) -> dict[str, Any]:
        """Get the ledger entries owned by an account (offers, trust lines, NFT pages, ...)."""
        result = await self._request(
            params.network, "account_objects",
            **params.model_dump(exclude_none=True, exclude={"network"}),
        )
        return {
            "account": params.account,
            "account_objects": result.get("account_objects", []),
            "marker": result.get("marker"),
        }

    async def get_server_info(self, params: NetworkInput) -> dict[str, Any]:
        """Get the status of the server behind the endpoint."""
        result = await self._request(params.network, "server_info")
        return result.get("info", result)

    async def get_fee(self, params: NetworkInput) -> dict[str, Any]:
        """Get the current transaction cost, in drops."""
        result = await self._request(params.network, "fee")
        return {
            "drops": result.get("drops", {}),
            "current_queue_size": result.get("current_queue_size"),
            "ledger_current_index": result.get("ledger_current_index"),
        }

    async def is_client_connected(self, params: NetworkInput) -> dict[str, Any]:
        """Connect to the endpoint and report whether the connection is live."""
        network = self._network(params.network)
        async with self._registry.lease(network) as client:
            return {"network": network, "connected": client.is_connected()}

    async def get_safety_status(self, params: EmptyInput) -> dict[str, Any]:
        """Get current safety limits and usage status."""
        return self._safety.get_status()

    # ------------------------------------------------------------------
    # Offline helpers
    # ------------------------------------------------------------------

    async def create_wallet(self, params: CreateWalletInput) -> dict[str, Any]:
        """
        Generate a new keypair offline. The account exists on a ledger only
        once it is funded.
        """
        account = generate_account(params.algorithm)
        return {
            "address": account.address,
            "seed": account.seed,
            "public_key": account.public_key,
            "note": "Not funded yet. Use fund_wallet on testnet or devnet.",
        }

    async def currency_code_to_hex(self, params: CurrencyCodeInput) -> dict[str, Any]:
        with _input_errors("currency_code_to_hex"):
            return {"code": params.code, "hex": currency_code_to_hex(params.code)}

    async def hex_to_currency_code(self, params: HexCurrencyInput) -> dict[str, Any]:
        with _input_errors("hex_to_currency_code"):
            return {"hex": params.hex, "code": hex_to_currency_code(params.hex)}

    async def xrp_to_drops(self, params: XrpAmountInput) -> dict[str, Any]:
        with _input_errors("xrp_to_drops"):
            return {"xrp": params.xrp, "drops": xrp_to_drops_str(params.xrp)}

    async def drops_to_xrp(self, params: DropsAmountInput) -> dict[str, Any]:
        with _input_errors("drops_to_xrp"):
            return {"drops": params.drops, "xrp": drops_to_xrp_str(params.drops)}

    # ------------------------------------------------------------------
    # State-changing actions (validated by safety layer)
    # ------------------------------------------------------------------

    async def fund_wallet(self, params: FundWalletInput) -> dict[str, Any]:
        """
        Fund an account from the test network faucet.

        Returns:
            dict with address, seed and funded balance (or dry_run confirmation)
        """
        network = self._network(params.network)
        self._safety.validate_rate_limit()
        self._safety.validate_network(network, uses_seed=True)

        if self._safety.dry_run:
            logger.info(f"[DRY RUN] Would fund a wallet on {network}")
            return {"status": "dry_run", "network": network, "amount": params.amount or "10"}

        async with self._registry.lease(network) as client:
            account = await client.fund_wallet(seed=params.seed, amount=params.amount)

        self._safety.record_action()
        return {
            "status": "funded",
            "address": account.address,
            "seed": account.seed,
            "balance_xrp": account.balance_xrp,
        }

    async def submit_transaction(self, tool_id: str, tool_input: dict[str, Any]) -> dict[str, Any]:
        """
        Build, validate and submit one transaction through its kind's tool.

        Returns:
            dict with hash and engine result (or dry_run preview)
        """
        tool = self._transaction_tools[tool_id]
        payload = dict(tool_input or {})
        payload.setdefault("network", self._default_network)
        network = payload["network"]

        self._safety.validate_rate_limit()
        self._safety.validate_network(network, uses_seed=bool(payload.get("seed")))

        if self._safety.dry_run:
            _, txn = tool.prepare(payload)
            logger.info(f"[DRY RUN] Would submit {tool.kind.transaction_type} to {network}")
            return {
                "status": "dry_run",
                "network": network,
                "tx_json": txn.to_xrpl() if txn is not None else None,
                "pre_signed": txn is None,
            }

        result = await tool.execute(payload)
        self._safety.record_action()
        logger.info(f"{tool.kind.transaction_type} {result.hash} -> {result.engine_result}")
        return {
            "status": "submitted",
            "hash": result.hash,
            "engine_result": result.engine_result,
            "validated": result.validated,
            "summary": result.to_agent_summary(),
        }

    async def run_token_issuance(self, params: TokenIssuanceInput) -> dict[str, Any]:
        """
        Issue a token on a test network: fund an issuer and holders, configure
        the issuer, open trust lines and mint to every holder.
        """
        self._safety.validate_rate_limit()
        self._safety.validate_network(params.network, uses_seed=True)
        self._safety.validate_holder_count(params.holders)

        if self._safety.dry_run:
            logger.info(f"[DRY RUN] Would issue {params.trustline.currency} to {params.holders} holders")
            return {"status": "dry_run", "inputs": params.model_dump()}

        context = await self._workflow.run(params)
        self._safety.record_action()
        return {"status": "completed", **context.to_agent_summary()}

    # ------------------------------------------------------------------
    # Tool registry
    # ------------------------------------------------------------------

    def _register_tools(self) -> None:
        plain: list[tuple[str, str, type[BaseModel], Callable[[Any], Awaitable[Any]]]] = [
            ("get_account_info",
             "Get an account's XRP balance, sequence number and account settings.",
             AccountQueryInput, self.get_account_info),
            ("get_account_lines",
             "Get the trust lines of an account: tokens it holds or can hold, with balances and limits.",
             AccountLinesInput, self.get_account_lines),
            ("get_account_objects",
             "Get the ledger entries owned by an account, such as offers, trust lines and NFT pages.",
             AccountObjectsInput, self.get_account_objects),
            ("get_server_info",
             "Get the status of the XRP Ledger server behind a network endpoint.",
             NetworkInput, self.get_server_info),
            ("get_fee",
             "Get the current transaction cost on a network, in drops.",
             NetworkInput, self.get_fee),
            ("is_client_connected",
             "Connect to a network endpoint and report whether the connection is live.",
             NetworkInput, self.is_client_connected),
            ("get_safety_status",
             "Get the agent's current safety limits and usage (rate limit, dry run).",
             EmptyInput, self.get_safety_status),
            ("create_wallet",
             "Generate a new XRP Ledger keypair offline. The account must be funded before use.",
             CreateWalletInput, self.create_wallet),
            ("fund_wallet",
             "Fund an account with test XRP from the testnet or devnet faucet. Subject to safety limits.",
             FundWalletInput, self.fund_wallet),
            ("currency_code_to_hex",
             "Encode a currency code longer than 3 characters as the 40-character hex form the ledger uses.",
             CurrencyCodeInput, self.currency_code_to_hex),
            ("hex_to_currency_code",
             "Decode a 40-character hex currency code to readable text.",
             HexCurrencyInput, self.hex_to_currency_code),
            ("xrp_to_drops",
             "Convert an XRP amount to drops (1 XRP = 1,000,000 drops).",
             XrpAmountInput, self.xrp_to_drops),
            ("drops_to_xrp",
             "Convert a drops amount to XRP.",
             DropsAmountInput, self.drops_to_xrp),
            ("run_token_issuance",
             "Issue a new token on testnet or devnet: fund an issuer and N holders, set issuer "
             "domain and flags, create holder trust lines, and mint tokens to each holder.",
             TokenIssuanceInput, self.run_token_issuance),
        ]
        for name, description, model, method in plain:
            self._tools[name] = Tool(
                id=name,
                description=description,
                input_schema=model.model_json_schema(),
                execute=self._bind(name, model, method),
            )

        for tool_id, txn_tool in self._transaction_tools.items():
            self._tools[tool_id] = Tool(
                id=tool_id,
                description=txn_tool.description,
                input_schema=txn_tool.input_schema,
                execute=self._bind_transaction(tool_id),
            )

    def _bind(
        self, name: str, model: type[BaseModel], method: Callable[[Any], Awaitable[Any]]
    ) -> Callable[[dict[str, Any]], Awaitable[Any]]:
        async def execute(tool_input: dict[str, Any]) -> Any:
            return await method(_parse(model, tool_input, name))
        return execute

    def _bind_transaction(self, tool_id: str) -> Callable[[dict[str, Any]], Awaitable[Any]]:
        async def execute(tool_input: dict[str, Any]) -> Any:
            return await self.submit_transaction(tool_id, tool_input)
        return execute

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _network(self, network: str | None) -> str:
        return network or self._default_network

    async def _request(self, network: str | None, method: str, **params: Any) -> dict[str, Any]:
        endpoint = self._network(network)
        async with self._registry.lease(endpoint) as client:
            return await client.request(method, **params)

    # ------------------------------------------------------------------
    # Tool schema generators
    # ------------------------------------------------------------------

    def to_openai_tools(self) -> list[dict[str, Any]]:
        """Generate OpenAI function-calling tool definitions."""
        from xrpl_agent.tools.openai_tools import build_openai_tools
        return build_openai_tools(self)

    def to_anthropic_tools(self) -> list[dict[str, Any]]:
        """Generate Anthropic tool-use definitions."""
        from xrpl_agent.tools.anthropic_tools import build_anthropic_tools
        return build_anthropic_tools(self)

    async def call_tool(self, tool_name: str, tool_input: dict[str, Any] | None = None) -> Any:
        """Run a tool by name. Errors propagate as XrplAgentError subclasses."""
        tool = self.get_tool(tool_name)
        return await tool.execute(tool_input or {})

    async def execute_tool(self, tool_name: str, tool_input: dict[str, Any] | None = None) -> str:
        """
        Execute a tool by name with given inputs.
        Used by LLM frameworks to dispatch tool calls.

        Returns:
            str: JSON-encoded result, or ``{error, layer, message}`` on failure
        """
        try:
            result = await self.call_tool(tool_name, tool_input)
            return json.dumps(result, indent=2, default=str)
        except SafetyViolation as e:
            logger.warning(f"Safety violation on {tool_name}: {e}")
            return json.dumps({"error": "safety_violation", "layer": e.layer, "message": str(e)})
        except WorkflowStageError as e:
            logger.error(f"Tool {tool_name} failed at stage {e.stage.value}: {e.cause}")
            data = e.to_dict()
            data["context"] = e.context.to_agent_summary()
            return json.dumps(data, indent=2, default=str)
        except XrplAgentError as e:
            logger.error(f"Tool {tool_name} failed: {e}")
            return json.dumps(e.to_dict(), default=str)
        except Exception as e:
            logger.error(f"Tool {tool_name} failed: {e}")
            return json.dumps({"error": type(e).__name__, "layer": "agent", "message": str(e)})
