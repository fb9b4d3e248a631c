"""
Tools package exports.
"""

from .base import (
    JsonSchema,
    ParamMetadata,
    Tool,
    ToolParameter,
    build_legacy_schema,
    build_schema,
    split_legacy_parameters,
)
from .decorators import tool
from .registry import ToolRegistry, resolve_tool_call

__all__ = [
    "JsonSchema",
    "ParamMetadata",
    "Tool",
    "ToolParameter",
    "ToolRegistry",
    "build_legacy_schema",
    "build_schema",
    "resolve_tool_call",
    "split_legacy_parameters",
    "tool",
]
