"""Vendor-neutral tool definitions and their JSON schema dialects."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict

from llm_bridge.errors import MissingField


class ToolParameter(BaseModel):
    """One named argument of a tool."""

    model_config = ConfigDict(frozen=True)

    parameter_type: str
    description: str
    required: bool = False
    enum_values: tuple[str, ...] | None = None

    def to_property(self) -> dict[str, Any]:
        prop: dict[str, Any] = {"type": self.parameter_type, "description": self.description}
        if self.enum_values is not None:
            prop["enum"] = list(self.enum_values)
        return prop


class Tool(BaseModel):
    """A function the model may ask the caller to invoke."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    parameter_items: tuple[tuple[str, ToolParameter], ...] = ()

    @property
    def parameters(self) -> Mapping[str, ToolParameter]:
        """Read-only view of the parameters by name."""
        return MappingProxyType(dict(self.parameter_items))

    @staticmethod
    def builder() -> ToolBuilder:
        return ToolBuilder()

    def to_anthropic_format(self) -> dict[str, Any]:
        """Build the flat ``{"name", "description", "input_schema"}`` tool dict."""
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": self._parameters_schema(),
        }

    def to_openai_format(self) -> dict[str, Any]:
        """
        Build the ``{"type": "function", "function": {...}}`` dict for the
        OpenAI function-calling API.
        """
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self._parameters_schema(),
            },
        }

    def _parameters_schema(self) -> dict[str, Any]:
        properties: dict[str, Any] = {}
        required: list[str] = []
        for name, param in self.parameter_items:
            properties[name] = param.to_property()
            if param.required:
                required.append(name)
        return {"type": "object", "properties": properties, "required": required}


class ToolBuilder:
    """Fluent builder for :class:`Tool`."""

    def __init__(self) -> None:
        self._name: str | None = None
        self._description: str | None = None
        self._parameters: dict[str, ToolParameter] = {}

    def name(self, name: str) -> ToolBuilder:
        self._name = name
        return self

    def description(self, description: str) -> ToolBuilder:
        self._description = description
        return self

    def add_parameter(
        self,
        name: str,
        parameter_type: str,
        description: str,
        required: bool,
    ) -> ToolBuilder:
        """Register a plain-typed parameter, replacing any previous one of that name."""
        self._parameters[name] = ToolParameter(
            parameter_type=parameter_type,
            description=description,
            required=required,
        )
        return self

    def add_enum_parameter(
        self,
        name: str,
        description: str,
        required: bool,
        enum_values: list[str],
    ) -> ToolBuilder:
        """Register a string parameter restricted to ``enum_values``."""
        self._parameters[name] = ToolParameter(
            parameter_type="string",
            description=description,
            required=required,
            enum_values=tuple(enum_values),
        )
        return self

    def build(self) -> Tool:
        if self._name is None:
            raise MissingField("name")
        if self._description is None:
            raise MissingField("description")
        return Tool(
            name=self._name,
            description=self._description,
            parameter_items=tuple(self._parameters.items()),
        )
