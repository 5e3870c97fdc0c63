from typing import Any

from pydantic import BaseModel, Field


class ToolDefinition(BaseModel):
    """An Anthropic-style tool definition."""

    name: str = Field(..., description="Tool name, used in POST /tools/{name}")
    description: str = Field(..., description="What the tool does, for the LLM")
    input_schema: dict[str, Any] = Field(..., description="JSON schema of the tool input")


class ToolCallResponse(BaseModel):
    """Response model for a successful tool call."""

    tool: str = Field(..., description="Name of the tool that ran")
    result: Any = Field(None, description="Tool result")


class ErrorResponse(BaseModel):
    """Body returned for every failed call."""

    error: str = Field(..., description="Error class name")
    layer: str = Field(..., description="Where the failure happened: build, validate, submit, stage, ...")
    message: str = Field(..., description="Human-readable reason")
    stage: str | None = Field(None, description="Failing workflow stage, for stage errors")
    context: dict[str, Any] | None = Field(
        None, description="Workflow state accumulated before the failing stage"
    )
