"""MCP server - request dispatch and the stdio loop.

Integrates the registry, lifecycle, tool handling and transport into a
complete server.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

from mcp_runtime.audit import AuditLogger
from mcp_runtime.config import ServerConfig
from mcp_runtime.plugins.base import PluginBase
from mcp_runtime.protocol.jsonrpc import (
    JsonRpcError,
    Notification,
    Request,
    Response,
    SuccessResponse,
    create_internal_error,
    create_invalid_params_error,
    create_method_not_found_error,
    create_parse_error,
    create_server_not_initialized_error,
    create_unknown_resource_error,
    parse_message,
    serialize,
)
from mcp_runtime.protocol.lifecycle import LifecycleManager, ServerNotInitializedError
from mcp_runtime.protocol.tools import ToolsHandler, normalize_result
from mcp_runtime.protocol.transport import StdioTransport
from mcp_runtime.registry import NotFoundError, Registry, ToolHandler


class MCPServer:
    """MCP server implementation.

    Provides:
    - Registration of tools, prompts, resources and plugins
    - Initialization gating (only initialize is accepted until it succeeds)
    - Routing of the built-in methods and legacy direct tool calls
    - Conversion of every failure into a structured error response
    """

    def __init__(
        self,
        name: str,
        version: str = "0.1.0",
        config: ServerConfig | None = None,
    ) -> None:
        """Initialize the server.

        Args:
            name: Server name reported by initialize.
            version: Server version reported by initialize.
            config: Runtime configuration (defaults if omitted).
        """
        self.name = name
        self.version = version
        self._config = config or ServerConfig.default()

        if self._config.audit_log_file:
            self._audit_logger: AuditLogger | None = AuditLogger(
                Path(self._config.audit_log_file)
            )
        else:
            self._audit_logger = None

        self._registry = Registry()
        self._lifecycle = LifecycleManager()
        self._tools_handler = ToolsHandler(
            self._registry,
            audit_logger=self._audit_logger,
            check_arguments=self._config.validate_arguments,
        )
        self._plugins: list[PluginBase] = []

    @property
    def config(self) -> ServerConfig:
        return self._config

    @property
    def registry(self) -> Registry:
        return self._registry

    @property
    def initialized(self) -> bool:
        """Whether a successful initialize has been handled."""
        return self._lifecycle.is_ready

    def register_tool(
        self,
        name: str,
        handler: ToolHandler | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> MCPServer:
        """Register a tool handler, its metadata, or both.

        See Registry.register_tool for how partial registrations combine.

        Returns:
            The server, for chaining.
        """
        self._registry.register_tool(name, handler, metadata)
        return self

    def register_prompt(self, name: str, content: Any) -> MCPServer:
        self._registry.register_prompt(name, content)
        return self

    def register_resource(self, name: str, content: Any) -> MCPServer:
        self._registry.register_resource(name, content)
        return self

    def register_plugin(self, plugin: PluginBase) -> MCPServer:
        """Register every tool, prompt and resource of a plugin.

        Args:
            plugin: Plugin to register.

        Returns:
            The server, for chaining.
        """
        self._plugins.append(plugin)
        for tool in plugin.get_tools():
            self._registry.register_tool(tool.name, tool.handler, tool.to_metadata())
        for name, content in plugin.get_prompts().items():
            self._registry.register_prompt(name, content)
        for name, content in plugin.get_resources().items():
            self._registry.register_resource(name, content)
        return self

    def list_tools(self) -> list[dict[str, Any]]:
        """List metadata of all registered tools."""
        return self._registry.list_tool_metadata()

    def get_capabilities(self) -> dict[str, Any]:
        """Get the tools, prompts and resources advertised by initialize."""
        return {
            "tools": self._registry.list_tool_metadata(),
            "prompts": self._registry.list_prompts(),
            "resources": self._registry.list_resources(),
        }

    def handle_message(self, raw_message: str) -> str:
        """Handle one line of wire text.

        Args:
            raw_message: Raw JSON-RPC message string.

        Returns:
            Response line without the trailing newline. Every line gets one;
            a message without an id is answered with an id-less reply.
        """
        max_size = self._config.max_message_size
        size = len(raw_message.encode("utf-8"))
        if max_size and size > max_size:
            return serialize(
                create_parse_error(
                    None, f"Message too large: {size} bytes exceeds {max_size} limit"
                )
            )

        try:
            message = parse_message(raw_message)
        except JsonRpcError as e:
            return serialize(create_parse_error(None, str(e)))

        if isinstance(message, Notification):
            message = Request(method=message.method, params=message.params)

        return serialize(self.handle_request(message))

    def handle_request(self, request: Request) -> Response:
        """Turn a request into a response.

        Never raises: every failure becomes an ErrorResponse.

        Args:
            request: The request to handle.

        Returns:
            SuccessResponse or ErrorResponse echoing the request id.
        """
        method = request.method
        msg_id = request.id

        # Initialize is special - allowed before ready
        if method != "initialize":
            try:
                self._lifecycle.require_ready()
            except ServerNotInitializedError:
                return create_server_not_initialized_error(msg_id)

        params = request.params if request.params is not None else {}

        try:
            if method == "initialize":
                return self._handle_initialize(params, msg_id)

            elif method == "tools/list":
                return SuccessResponse(self._tools_handler.handle_list(), msg_id)

            elif method == "tools/call":
                return self._tools_handler.handle_call(params, msg_id)

            elif method == "resources/list":
                result = {"resources": self._registry.list_resources(), "nextCursor": None}
                return SuccessResponse(result, msg_id)

            elif method == "resources/get":
                return self._handle_get(params, msg_id, self._registry.get_resource, "Resource")

            elif method == "prompts/list":
                result = {"prompts": self._registry.list_prompts(), "nextCursor": None}
                return SuccessResponse(result, msg_id)

            elif method == "prompts/get":
                return self._handle_get(params, msg_id, self._registry.get_prompt, "Prompt")

            # Direct tool calling, kept for backward compatibility. Failures
            # here surface as INTERNAL_ERROR, not TOOL_EXECUTION_ERROR.
            elif self._registry.has_tool(method):
                result = self._registry.call_tool(method, params)
                return SuccessResponse(normalize_result(result), msg_id)

            else:
                return create_method_not_found_error(msg_id, f"Method not supported: {method}")

        except Exception as e:
            return create_internal_error(msg_id, str(e))

    def _handle_initialize(self, params: dict[str, Any], msg_id: Any) -> Response:
        self._lifecycle.handle_initialize(params)
        result = {
            "name": self.name,
            "version": self.version,
            "capabilities": self.get_capabilities(),
        }
        return SuccessResponse(result, msg_id)

    def _handle_get(
        self,
        params: dict[str, Any],
        msg_id: Any,
        lookup: Callable[[str], Any],
        kind: str,
    ) -> Response:
        """Shared handling of resources/get and prompts/get."""
        if "name" not in params:
            return create_invalid_params_error(msg_id, "Missing required field: name")

        name = params["name"]
        if not isinstance(name, str):
            return create_unknown_resource_error(
                msg_id, f"{kind} not found or invalid", f"Invalid {kind.lower()} name: {name!r}"
            )
        try:
            content = lookup(name)
        except NotFoundError as e:
            return create_unknown_resource_error(
                msg_id, f"{kind} not found or invalid", str(e)
            )

        return SuccessResponse({"name": name, "content": content}, msg_id)

    def close(self) -> None:
        """Close plugins and the audit log."""
        for plugin in self._plugins:
            plugin.close()
        if self._audit_logger is not None:
            self._audit_logger.close()

    def __enter__(self) -> MCPServer:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()


def run_server(server: MCPServer, transport: StdioTransport | None = None) -> None:
    """Serve requests line by line until end of stream.

    One request is fully handled and its reply flushed before the next line
    is read. Termination signals are left to the caller.

    Args:
        server: Server to dispatch requests to.
        transport: Transport to use (stdin/stdout if omitted).
    """
    transport = transport or StdioTransport()
    transport.log(f"{server.name} {server.version} serving on stdio")

    for message in transport.messages():
        transport.write_message(server.handle_message(message))

    transport.log("EOF received, shutting down")
