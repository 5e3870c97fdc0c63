"""Unit tests for XrplToolkit dispatch, safety checks and error translation."""

import json

import pytest

from xrpl_agent.core.currency import currency_code_to_hex
from xrpl_agent.tools.safety import SafetyConfig, SafetyViolation
from xrpl_agent.tools.toolkit import ToolInputError, UnknownToolError, XrplToolkit

TESTNET = "wss://s.altnet.rippletest.net:51233/"
MAINNET = "wss://xrplcluster.com/"
ISSUER = "rPT1Sjq2YGrBMTttX4GZHjKu9dyfzbpAYe"


@pytest.fixture
def toolkit(registry, engine):
    return XrplToolkit(registry, engine, safety=SafetyConfig(), default_network=TESTNET)


def trust_set(account):
    return {"Account": account, "LimitAmount": {"currency": "GOLD", "value": "10", "issuer": ISSUER}}


@pytest.mark.asyncio
async def test_submit_tool_returns_summary(toolkit, factory, alice):
    result = await toolkit.call_tool("submit_trust_set", {
        "network": TESTNET, "seed": alice.seed, "txn": trust_set(alice.address),
    })
    assert result["status"] == "submitted"
    assert result["engine_result"] == "tesSUCCESS"
    assert result["hash"]
    assert len(factory.submissions) == 1
    assert toolkit.safety.get_status()["actions_last_hour"] == 1


@pytest.mark.asyncio
async def test_submit_tool_uses_default_network(toolkit, factory, alice):
    await toolkit.call_tool("submit_trust_set", {"seed": alice.seed, "txn": trust_set(alice.address)})
    assert factory.created[0].url == TESTNET


@pytest.mark.asyncio
async def test_dry_run_validates_without_network(registry, engine, factory, alice):
    toolkit = XrplToolkit(registry, engine, safety=SafetyConfig(dry_run=True))
    result = await toolkit.call_tool("submit_trust_set", {
        "network": TESTNET, "seed": alice.seed, "txn": trust_set(alice.address),
    })
    assert result["status"] == "dry_run"
    assert result["tx_json"]["LimitAmount"]["currency"] == currency_code_to_hex("GOLD")
    assert factory.created == []


@pytest.mark.asyncio
async def test_seed_on_mainnet_refused(toolkit, factory, alice):
    with pytest.raises(SafetyViolation):
        await toolkit.call_tool("submit_trust_set", {
            "network": MAINNET, "seed": alice.seed, "txn": trust_set(alice.address),
        })
    assert factory.created == []


@pytest.mark.asyncio
async def test_rate_limit_blocks_submissions(registry, engine, factory, alice):
    toolkit = XrplToolkit(registry, engine, safety=SafetyConfig(rate_limit_per_hour=1))
    payload = {"network": TESTNET, "seed": alice.seed, "txn": trust_set(alice.address)}
    await toolkit.call_tool("submit_trust_set", payload)
    with pytest.raises(SafetyViolation, match="Rate limit"):
        await toolkit.call_tool("submit_trust_set", payload)
    assert len(factory.submissions) == 1


@pytest.mark.asyncio
async def test_execute_tool_returns_json_error_for_validation(toolkit, alice):
    raw = await toolkit.execute_tool("submit_trust_set", {
        "network": TESTNET, "seed": alice.seed, "txn": trust_set(ISSUER),
    })
    data = json.loads(raw)
    assert data["layer"] == "validate"
    assert data["error"] == "TransactionValidationError"


@pytest.mark.asyncio
async def test_execute_tool_reports_safety_violation(toolkit, alice):
    raw = await toolkit.execute_tool("submit_trust_set", {
        "network": MAINNET, "seed": alice.seed, "txn": trust_set(alice.address),
    })
    assert json.loads(raw)["error"] == "safety_violation"


@pytest.mark.asyncio
async def test_execute_tool_unknown_tool(toolkit):
    data = json.loads(await toolkit.execute_tool("send_bitcoin", {}))
    assert data["layer"] == "tool"
    assert "Unknown tool" in data["message"]


@pytest.mark.asyncio
async def test_call_tool_unknown_raises(toolkit):
    with pytest.raises(UnknownToolError):
        await toolkit.call_tool("nope")


@pytest.mark.asyncio
async def test_query_tool_acquires_and_releases(toolkit, factory, registry):
    factory.responses["account_info"] = {
        "account_data": {"Account": ISSUER, "Balance": "25000000", "Sequence": 7},
        "validated": True,
    }
    result = await toolkit.call_tool("get_account_info", {"account": ISSUER})
    assert "25 XRP" in result["summary"]
    assert factory.created[0].requests == [
        ("account_info", {"account": ISSUER, "ledger_index": "validated"})
    ]
    assert registry.endpoints == []


@pytest.mark.asyncio
async def test_account_lines_decodes_hex_currency(toolkit, factory):
    factory.responses["account_lines"] = {
        "lines": [{"account": ISSUER, "currency": currency_code_to_hex("GOLD"), "balance": "5"}],
    }
    result = await toolkit.call_tool("get_account_lines", {"account": ISSUER})
    assert result["lines"][0]["currency_decoded"] == "GOLD"


@pytest.mark.asyncio
async def test_query_input_validated(toolkit, factory):
    with pytest.raises(ToolInputError):
        await toolkit.call_tool("get_account_info", {})
    assert factory.created == []


@pytest.mark.asyncio
async def test_conversion_tools(toolkit):
    assert (await toolkit.call_tool("currency_code_to_hex", {"code": "GOLD"}))["hex"] == currency_code_to_hex("GOLD")
    assert (await toolkit.call_tool("xrp_to_drops", {"xrp": "2"}))["drops"] == "2000000"
    assert (await toolkit.call_tool("drops_to_xrp", {"drops": "2000000"}))["xrp"] == "2"


@pytest.mark.asyncio
async def test_conversion_error_is_input_error(toolkit):
    with pytest.raises(ToolInputError):
        await toolkit.call_tool("currency_code_to_hex", {"code": "X" * 30})


@pytest.mark.asyncio
async def test_create_wallet_is_offline(toolkit, factory):
    result = await toolkit.call_tool("create_wallet", {"algorithm": "secp256k1"})
    assert result["address"].startswith("r")
    assert factory.created == []


@pytest.mark.asyncio
async def test_fund_wallet_uses_faucet(toolkit, factory, registry):
    result = await toolkit.call_tool("fund_wallet", {"network": TESTNET})
    assert result["status"] == "funded"
    assert factory.created[0].funded == [result["address"]]
    assert registry.endpoints == []


@pytest.mark.asyncio
async def test_is_client_connected_connects_then_releases(toolkit, factory, registry):
    result = await toolkit.call_tool("is_client_connected", {})
    assert result == {"network": TESTNET, "connected": True}
    assert factory.connect_calls == 1
    assert registry.endpoints == []


@pytest.mark.asyncio
async def test_is_client_connected_reports_connect_failure(toolkit, factory):
    factory.fail_connect = True
    data = json.loads(await toolkit.execute_tool("is_client_connected", {}))
    assert data["layer"] == "connection"


@pytest.mark.asyncio
async def test_is_client_connected_keeps_held_connection(toolkit, registry):
    client = await registry.acquire(TESTNET)
    assert (await toolkit.call_tool("is_client_connected", {}))["connected"] is True
    assert client.is_connected()


@pytest.mark.asyncio
async def test_run_token_issuance_tool(toolkit, factory):
    result = await toolkit.call_tool("run_token_issuance", {
        "network": TESTNET,
        "trustline": {"currency": "GOLD", "trustline_limit": "100"},
        "holders": 2,
        "mint_amount": "10",
    })
    assert result["status"] == "completed"
    assert len(result["holders"]) == 2
    assert len(result["txn_results"]) == 4


@pytest.mark.asyncio
async def test_run_token_issuance_holder_limit(registry, engine):
    toolkit = XrplToolkit(registry, engine, safety=SafetyConfig(max_holders=2))
    with pytest.raises(SafetyViolation):
        await toolkit.call_tool("run_token_issuance", {
            "network": TESTNET,
            "trustline": {"currency": "GOLD", "trustline_limit": "100"},
            "holders": 3,
            "mint_amount": "10",
        })


@pytest.mark.asyncio
async def test_execute_tool_stage_error_includes_context(toolkit, factory):
    factory.engine_result = "tecNO_PERMISSION"
    raw = await toolkit.execute_tool("run_token_issuance", {
        "network": TESTNET,
        "trustline": {"currency": "GOLD", "trustline_limit": "100"},
        "issuer_settings": {"flags": ["asfDefaultRipple"]},
        "holders": 1,
        "mint_amount": "10",
    })
    data = json.loads(raw)
    assert data["layer"] == "stage"
    assert data["stage"] == "configure-issuer"
    assert data["context"]["issuer"]["address"].startswith("r")
