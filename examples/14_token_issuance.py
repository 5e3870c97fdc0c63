#!/usr/bin/env python3
"""
Example 14: Issue a token on the XRPL testnet.

Runs the token issuance workflow end to end: funds an issuer and two
holders from the faucet, sets the issuer's domain and DefaultRipple flag,
opens a trust line from each holder and mints tokens to every holder.

A dry run is printed first; pass --live to submit.

Usage:
    python examples/14_token_issuance.py
    python examples/14_token_issuance.py --live
"""

import asyncio
import json
import logging
import sys

from xrpl_agent import ConnectionRegistry
from xrpl_agent.tools import SafetyConfig, XrplToolkit

TESTNET = "wss://s.altnet.rippletest.net:51233/"

ISSUANCE = {
    "network": TESTNET,
    "trustline": {"currency": "AGENT", "trustline_limit": "1000000"},
    "issuer_settings": {"domain": "agent.example.com", "flags": ["asfDefaultRipple"]},
    "holders": 2,
    "mint_amount": "5000",
}


async def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    live = "--live" in sys.argv[1:]

    async with ConnectionRegistry() as registry:
        toolkit = XrplToolkit(registry, safety=SafetyConfig(dry_run=not live))

        print("Issuing AGENT on testnet..." if live else "Dry run (pass --live to submit)...")
        result = await toolkit.execute_tool("run_token_issuance", ISSUANCE)
        parsed = json.loads(result)
        print(json.dumps(parsed, indent=2))

        if parsed.get("status") == "completed":
            print()
            print("Transactions:")
            for txn in parsed["txn_results"]:
                print(f"  {txn['status']:<12} {txn['hash']}  {txn['description']}")


if __name__ == "__main__":
    asyncio.run(main())
