"""tools module init"""
from xrpl_agent.tools.safety import SafetyConfig, SafetyViolation
from xrpl_agent.tools.toolkit import Tool, ToolInputError, UnknownToolError, XrplToolkit

__all__ = [
    "SafetyConfig",
    "SafetyViolation",
    "Tool",
    "ToolInputError",
    "UnknownToolError",
    "XrplToolkit",
]
