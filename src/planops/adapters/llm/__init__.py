"""Language-model tool-call adapter for plan operations."""

from __future__ import annotations

from .schema import OPERATION_CALLS_ADAPTER, TOOL_MODELS, OperationCall
from .tools import ToolDefinition, operation_tool_definitions, tool_definition
from .translator import OperationParseError, parse_operations, parse_tool_calls, to_operation

__all__ = [
    "OPERATION_CALLS_ADAPTER",
    "TOOL_MODELS",
    "OperationCall",
    "OperationParseError",
    "ToolDefinition",
    "operation_tool_definitions",
    "parse_operations",
    "parse_tool_calls",
    "to_operation",
    "tool_definition",
]
