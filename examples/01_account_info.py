#!/usr/bin/env python3
"""
Example 01: Look up an account on the XRPL testnet.

Funds a fresh testnet account from the faucet, then reads its account
info and trust lines through the toolkit.

Usage:
    python examples/01_account_info.py
    python examples/01_account_info.py rPT1Sjq2YGrBMTttX4GZHjKu9dyfzbpAYe
"""

import asyncio
import json
import sys

if hasattr(sys.stdout, "reconfigure"):
    sys.stdout.reconfigure(errors="replace")

from xrpl_agent import ConnectionRegistry
from xrpl_agent.tools import XrplToolkit

TESTNET = "wss://s.altnet.rippletest.net:51233/"


async def main() -> None:
    async with ConnectionRegistry() as registry:
        toolkit = XrplToolkit(registry, default_network=TESTNET)

        if len(sys.argv) > 1:
            address = sys.argv[1]
        else:
            print("Funding a new testnet account...")
            funded = await toolkit.call_tool("fund_wallet", {})
            address = funded["address"]
            print(f"  Address: {address}")
            print(f"  Balance: {funded['balance_xrp']} XRP")
            print()

        print("=== Account Info ===")
        info = await toolkit.call_tool("get_account_info", {"account": address})
        print(json.dumps(info, indent=2))

        print()
        print("=== Trust Lines ===")
        lines = await toolkit.call_tool("get_account_lines", {"account": address})
        print(json.dumps(lines, indent=2))


if __name__ == "__main__":
    asyncio.run(main())
