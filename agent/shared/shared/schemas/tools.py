"""Tool and module manifest schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class ToolParameter(BaseModel):
    """Parameter definition for a tool."""

    name: str
    type: str  # string, integer, boolean, number, array, object
    description: str
    required: bool = True
    enum: list[str] | None = None


class ToolDefinition(BaseModel):
    """Definition of a single tool exposed by a module."""

    name: str  # e.g. "youdotcom.search"
    title: str | None = None
    description: str
    parameters: list[ToolParameter]
    # JSON Schema of the tool's structured output, when it declares one
    output_schema: dict[str, Any] | None = None
    required_permission: str = "guest"  # minimum permission level


class ModuleManifest(BaseModel):
    """Manifest describing a module and its tools."""

    module_name: str
    description: str
    version: str | None = None
    tools: list[ToolDefinition]


class ClientInfo(BaseModel):
    """Identity of the application on whose behalf a tool is called."""

    name: str | None = None
    version: str | None = None
    title: str | None = None
    website_url: str | None = None

    def describe(self) -> str:
        """Join the known fields with ``"; "``, or return an empty string."""
        parts = [self.name, self.version, self.title, self.website_url]
        return "; ".join(p for p in parts if p)


class ToolCall(BaseModel):
    """A tool call request."""

    tool_name: str
    arguments: dict
    client: ClientInfo | None = None


class ToolResult(BaseModel):
    """Result from a tool execution."""

    tool_name: str
    success: bool
    result: Any = None
    error: str | None = None
