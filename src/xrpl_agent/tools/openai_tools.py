"""OpenAI function-calling tool definitions for XrplToolkit."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from xrpl_agent.tools.toolkit import XrplToolkit


def _parameters(schema: dict[str, Any]) -> dict[str, Any]:
    # OpenAI requires an object schema with a required list, even when empty
    parameters = dict(schema)
    parameters.pop("title", None)
    parameters.setdefault("type", "object")
    parameters.setdefault("properties", {})
    parameters.setdefault("required", [])
    return parameters


def build_openai_tools(toolkit: XrplToolkit) -> list[dict[str, Any]]:
    """Return a list of OpenAI function-calling tool definitions."""
    return [
        {
            "type": "function",
            "function": {
                "name": tool.id,
                "description": tool.description,
                "parameters": _parameters(tool.input_schema),
            },
        }
        for tool in toolkit.tools
    ]
