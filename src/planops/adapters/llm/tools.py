"""Tool definitions advertised to a language model for expressing plan edits."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .schema import TOOL_MODELS

if TYPE_CHECKING:
    from .schema import ToolModel


@dataclass(frozen=True, slots=True)
class ToolDefinition:
    name: str
    description: str
    parameters: dict[str, Any]

    def as_dict(self) -> dict[str, Any]:
        return {"name": self.name, "description": self.description, "parameters": self.parameters}


def tool_definition(model: type[ToolModel]) -> ToolDefinition:
    """Build the JSON-schema tool definition for one tool-call model.

    The ``op`` discriminator becomes the tool name and is removed from the parameters.
    """

    schema = model.model_json_schema(by_alias=True)
    properties: dict[str, Any] = dict(schema.get("properties", {}))
    op_property = properties.pop("op")
    required = [name for name in schema.get("required", []) if name != "op"]

    parameters: dict[str, Any] = {
        "type": "object",
        "properties": properties,
        "required": required,
        "additionalProperties": False,
    }
    if "$defs" in schema:
        parameters["$defs"] = schema["$defs"]
    return ToolDefinition(
        name=op_property["default"],
        description=(model.__doc__ or "").strip(),
        parameters=parameters,
    )


def operation_tool_definitions() -> list[ToolDefinition]:
    """Tool definitions for every operation plus ``request_fallback``."""

    return [tool_definition(model) for model in TOOL_MODELS]
