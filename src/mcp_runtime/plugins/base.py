"""Plugin base class and tool definitions.

A plugin bundles related tools (and optionally prompts and resources)
so a server can register them in one call.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from mcp_runtime.registry import ToolHandler


@dataclass
class ToolDefinition:
    """Definition of a tool provided by a plugin."""

    name: str
    description: str
    handler: ToolHandler
    parameters: dict[str, Any] = field(default_factory=dict)
    schema_key: str = "parameters"

    def to_metadata(self) -> dict[str, Any]:
        """Convert to the metadata listed by tools/list.

        Returns:
            Dictionary with name, description and the parameter schema stored
            under schema_key ("parameters", or "inputSchema" for MCP-style tools).
        """
        return {
            "name": self.name,
            "description": self.description,
            self.schema_key: self.parameters,
        }


class PluginBase(ABC):
    """Abstract base class for all plugins."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the plugin identifier."""
        pass

    @property
    @abstractmethod
    def version(self) -> str:
        """Return the plugin version."""
        pass

    @abstractmethod
    def get_tools(self) -> list[ToolDefinition]:
        """Return tool definitions provided by this plugin."""
        pass

    def get_prompts(self) -> dict[str, Any]:
        """Return prompts provided by this plugin, keyed by name."""
        return {}

    def get_resources(self) -> dict[str, Any]:
        """Return resources provided by this plugin, keyed by name."""
        return {}

    def close(self) -> None:
        """Release resources held by the plugin (HTTP clients, files)."""
        return None
