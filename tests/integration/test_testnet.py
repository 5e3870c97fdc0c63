"""
Integration tests for the submission core against the live XRPL testnet.

Run:  XRPL_INTEGRATION=1 pytest tests/integration/ -v -m integration
"""

import pytest

from xrpl_agent.core.registry import ConnectionRegistry
from xrpl_agent.core.submission import SubmissionEngine
from xrpl_agent.tools.toolkit import XrplToolkit
from xrpl_agent.transactions import PaymentKind, create_transaction_tool
from xrpl_agent.workflows import TokenIssuanceWorkflow


@pytest.mark.integration
@pytest.mark.asyncio
async def test_server_info(testnet):
    async with ConnectionRegistry() as registry:
        toolkit = XrplToolkit(registry, default_network=testnet)
        info = await toolkit.call_tool("get_server_info", {})
        assert "build_version" in info


@pytest.mark.integration
@pytest.mark.asyncio
async def test_fund_and_pay(testnet):
    async with ConnectionRegistry() as registry:
        client = await registry.acquire(testnet)
        sender = await client.fund_wallet()
        receiver = await client.fund_wallet()
        await registry.release(testnet)

        tool = create_transaction_tool(PaymentKind(), SubmissionEngine(registry))
        result = await tool.execute({
            "network": testnet,
            "seed": sender.seed,
            "txn": {"Account": sender.address, "Destination": receiver.address, "Amount": "1000000"},
        })
        assert result.succeeded
        assert result.validated
        assert not registry.is_live(testnet)


@pytest.mark.integration
@pytest.mark.asyncio
async def test_token_issuance_end_to_end(testnet):
    async with ConnectionRegistry() as registry:
        workflow = TokenIssuanceWorkflow(registry)
        context = await workflow.run({
            "network": "wss://s.altnet.rippletest.net:51233/",
            "trustline": {"currency": "AGENT", "trustline_limit": "1000000"},
            "issuer_settings": {"domain": "example.com", "flags": ["asfDefaultRipple"]},
            "holders": 2,
            "mint_amount": "500",
        })
        assert len(context.holders) == 2
        assert all(r.status == "tesSUCCESS" for r in context.txn_results)
        assert len(context.txn_results) == 2 + 2 + 2
