"""Pydantic schemas shared by module services."""

from shared.schemas.common import HealthResponse
from shared.schemas.tools import (
    ClientInfo,
    ModuleManifest,
    ToolCall,
    ToolDefinition,
    ToolParameter,
    ToolResult,
)

__all__ = [
    "ClientInfo",
    "HealthResponse",
    "ModuleManifest",
    "ToolCall",
    "ToolDefinition",
    "ToolParameter",
    "ToolResult",
]
