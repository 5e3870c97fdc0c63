"""Anthropic tool-use definitions for XrplToolkit."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from xrpl_agent.tools.toolkit import XrplToolkit


def build_anthropic_tools(toolkit: XrplToolkit) -> list[dict[str, Any]]:
    """Return a list of Anthropic tool-use definitions."""
    return [
        {
            "name": tool.id,
            "description": tool.description,
            "input_schema": tool.input_schema,
        }
        for tool in toolkit.tools
    ]
