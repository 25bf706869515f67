"""Registry of tools, prompts and resources owned by one server."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

ToolHandler = Callable[[dict[str, Any]], Any]

DEFAULT_DESCRIPTION = "No description provided"


class ToolNotFoundError(Exception):
    """Raised when a tool is not registered."""

    pass


class NotFoundError(Exception):
    """Raised when a prompt or resource is not registered."""

    pass


def _unimplemented_tool(params: dict[str, Any]) -> Any:
    raise NotImplementedError("Tool function not implemented")


def default_metadata(name: str) -> dict[str, Any]:
    """Build the metadata synthesized for a tool registered without any.

    Args:
        name: Tool name.

    Returns:
        Metadata with a placeholder description and empty parameters.
    """
    return {"name": name, "description": DEFAULT_DESCRIPTION, "parameters": {}}


class Registry:
    """Holds named tools (handler and metadata), prompts and resources.

    Handlers and metadata are stored separately so metadata can be
    registered ahead of the handler that implements it.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._tools: dict[str, ToolHandler] = {}
        self._metadata: dict[str, dict[str, Any]] = {}
        self._prompts: dict[str, Any] = {}
        self._resources: dict[str, Any] = {}

    def register_tool(
        self,
        name: str,
        handler: ToolHandler | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """Register a tool.

        With both handler and metadata, both replace any prior entry. With only
        a handler, existing metadata is kept (or a default is synthesized).
        With only metadata, an existing handler is kept (or a stub that always
        fails is installed).

        Args:
            name: Tool name (unique key).
            handler: Callable taking the parameter mapping.
            metadata: Tool metadata (name, description, parameters schema).

        Raises:
            ValueError: If neither handler nor metadata is given.
        """
        if handler is not None and metadata is not None:
            self._tools[name] = handler
            self._metadata[name] = metadata
        elif handler is not None:
            self._tools[name] = handler
            if name not in self._metadata:
                self._metadata[name] = default_metadata(name)
        elif metadata is not None:
            self._metadata[name] = metadata
            if name not in self._tools:
                self._tools[name] = _unimplemented_tool
        else:
            raise ValueError(f"Tool '{name}' needs a handler or metadata")

    def register_prompt(self, name: str, content: Any) -> None:
        self._prompts[name] = content

    def register_resource(self, name: str, content: Any) -> None:
        self._resources[name] = content

    def has_tool(self, name: str) -> bool:
        return name in self._tools

    def get_handler(self, name: str) -> ToolHandler:
        """Get the handler for a tool.

        Raises:
            ToolNotFoundError: If the tool is not registered.
        """
        handler = self._tools.get(name)
        if handler is None:
            raise ToolNotFoundError(f"Tool not found: {name}")
        return handler

    def get_metadata(self, name: str) -> dict[str, Any] | None:
        return self._metadata.get(name)

    def call_tool(self, name: str, params: dict[str, Any]) -> Any:
        """Invoke a tool handler.

        Args:
            name: Tool name.
            params: Parameter mapping passed to the handler.

        Returns:
            Whatever the handler returns.

        Raises:
            ToolNotFoundError: If the tool is not registered.
        """
        return self.get_handler(name)(params)

    def get_prompt(self, name: str) -> Any:
        """Get a prompt by name.

        Raises:
            NotFoundError: If the prompt is not registered.
        """
        if name not in self._prompts:
            raise NotFoundError(f"Prompt not found: {name}")
        return self._prompts[name]

    def get_resource(self, name: str) -> Any:
        """Get a resource by name.

        Raises:
            NotFoundError: If the resource is not registered.
        """
        if name not in self._resources:
            raise NotFoundError(f"Resource not found: {name}")
        return self._resources[name]

    def list_tool_metadata(self) -> list[dict[str, Any]]:
        """List metadata for every registered tool."""
        return [self._metadata[name] for name in self._tools]

    def list_prompts(self) -> list[dict[str, Any]]:
        return [{"name": name} for name in self._prompts]

    def list_resources(self) -> list[dict[str, Any]]:
        return [{"name": name} for name in self._resources]
