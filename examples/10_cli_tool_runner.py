#!/usr/bin/env python3
"""
Example 10: Multi-tool agent (no LLM required).

Demonstrates using the XrplToolkit as a standalone command-line tool
that can execute any registered tool by name. Transaction tools run in
dry-run mode, so they print the prepared transaction instead of submitting it.

Usage:
    python examples/10_cli_tool_runner.py get_server_info
    python examples/10_cli_tool_runner.py get_fee
    python examples/10_cli_tool_runner.py currency_code_to_hex '{"code":"GOLD"}'
    python examples/10_cli_tool_runner.py get_account_info '{"account":"rPT1Sjq2YGrBMTttX4GZHjKu9dyfzbpAYe"}'
    python examples/10_cli_tool_runner.py get_safety_status
"""

import asyncio
import json
import sys

if hasattr(sys.stdout, "reconfigure"):
    sys.stdout.reconfigure(errors="replace")

from xrpl_agent import ConnectionRegistry
from xrpl_agent.tools import SafetyConfig, XrplToolkit


async def main() -> None:
    async with ConnectionRegistry() as registry:
        toolkit = XrplToolkit(registry, safety=SafetyConfig(dry_run=True))

        # Parse command line
        if len(sys.argv) < 2:
            print("Usage: python 10_cli_tool_runner.py <tool_name> [args_json]")
            print()
            print("Available tools:")
            for tool in toolkit.to_openai_tools():
                name = tool["function"]["name"]
                desc = tool["function"]["description"][:60]
                print(f"  {name:<25} {desc}")
            return

        tool_name = sys.argv[1]
        tool_args = json.loads(sys.argv[2]) if len(sys.argv) > 2 else {}

        print(f"Tool:   {tool_name}")
        print(f"Args:   {json.dumps(tool_args)}")
        print("-" * 50)

        result = await toolkit.execute_tool(tool_name, tool_args)

        # Pretty-print JSON result
        try:
            parsed = json.loads(result)
            print(json.dumps(parsed, indent=2))
        except (json.JSONDecodeError, TypeError):
            print(result)


if __name__ == "__main__":
    asyncio.run(main())
