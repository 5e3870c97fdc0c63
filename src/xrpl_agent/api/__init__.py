"""
API module for the XRPL Agent SDK.

Provides FastAPI routes and models for exposing the agent toolkit as a REST API.
"""

from xrpl_agent.api.models import ErrorResponse, ToolCallResponse, ToolDefinition

__all__ = [
    "ErrorResponse",
    "ToolCallResponse",
    "ToolDefinition",
]
