"""tools/list and tools/call handlers.

Routes tool requests to the registry and maps failures onto the protocol
error taxonomy.
"""

from __future__ import annotations

import uuid
from contextlib import AbstractContextManager, nullcontext
from typing import Any

from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError

from mcp_runtime.audit import AuditLogger
from mcp_runtime.protocol.content import ToolResult
from mcp_runtime.protocol.jsonrpc import (
    MessageId,
    Response,
    SuccessResponse,
    create_invalid_params_error,
    create_method_not_found_error,
    create_tool_execution_error,
)
from mcp_runtime.registry import Registry


class ArgumentValidationError(Exception):
    """Raised when tool arguments do not match the tool's schema."""

    pass


def _schema_for(metadata: dict[str, Any] | None) -> dict[str, Any] | None:
    """Pick the JSON Schema out of tool metadata, if it carries one."""
    if not metadata:
        return None
    for key in ("parameters", "inputSchema"):
        schema = metadata.get(key)
        if isinstance(schema, dict) and "type" in schema:
            return schema
    return None


def validate_arguments(tool_name: str, schema: dict[str, Any], arguments: dict[str, Any]) -> None:
    """Validate tool arguments against a JSON Schema.

    Args:
        tool_name: Name of the tool (for error messages).
        schema: JSON Schema for the tool's parameters.
        arguments: Arguments to validate.

    Raises:
        ArgumentValidationError: If validation fails or the schema is invalid.
    """
    try:
        Draft202012Validator.check_schema(schema)
    except SchemaError as e:
        raise ArgumentValidationError(f"Invalid schema for tool {tool_name}: {e.message}") from e

    errors = list(Draft202012Validator(schema).iter_errors(arguments))

    if errors:
        # Report first error
        error = errors[0]
        path = ".".join(str(p) for p in error.path) if error.path else "root"
        raise ArgumentValidationError(f"Schema validation failed at '{path}': {error.message}")


def normalize_result(result: Any) -> Any:
    """Convert ToolResult instances returned by handlers into envelopes."""
    if isinstance(result, ToolResult):
        return result.to_dict()
    return result


class ToolsHandler:
    """Handles tools/list and tools/call requests."""

    def __init__(
        self,
        registry: Registry,
        audit_logger: AuditLogger | None = None,
        check_arguments: bool = False,
    ) -> None:
        """Initialize the handler.

        Args:
            registry: Registry holding the tools.
            audit_logger: Optional audit log for tool invocations.
            check_arguments: Validate parameters against tool schemas.
        """
        self._registry = registry
        self._audit_logger = audit_logger
        self._check_arguments = check_arguments

    def handle_list(self) -> dict[str, Any]:
        """Handle tools/list.

        Returns:
            Result with every tool's metadata. Pagination is not implemented,
            so nextCursor is always None.
        """
        return {"tools": self._registry.list_tool_metadata(), "nextCursor": None}

    def handle_call(self, params: dict[str, Any], msg_id: MessageId | None) -> Response:
        """Handle tools/call.

        Args:
            params: Request params, expected as {"tool": {"name", "parameters"?}}.
            msg_id: Request ID to echo back.

        Returns:
            SuccessResponse with the handler's result, or an ErrorResponse.
        """
        tool = params.get("tool")
        if not isinstance(tool, dict) or "name" not in tool:
            return create_invalid_params_error(msg_id, "Missing required field: tool.name")

        tool_name = tool["name"]
        arguments = tool.get("parameters")
        if arguments is None:
            arguments = {}

        if not isinstance(tool_name, str) or not self._registry.has_tool(tool_name):
            return create_method_not_found_error(msg_id, f"Tool not found: {tool_name}")

        if not isinstance(arguments, dict):
            return create_invalid_params_error(msg_id, "Tool parameters must be an object")

        if self._check_arguments:
            schema = _schema_for(self._registry.get_metadata(tool_name))
            if schema is not None:
                try:
                    validate_arguments(tool_name, schema, arguments)
                except ArgumentValidationError as e:
                    return create_invalid_params_error(
                        msg_id, f"Invalid parameters for tool: {tool_name}", str(e)
                    )

        try:
            with self._audited(msg_id, tool_name, arguments):
                result = self._registry.call_tool(tool_name, arguments)
        except Exception as e:
            return create_tool_execution_error(msg_id, str(e))

        return SuccessResponse(result=normalize_result(result), id=msg_id)

    def _audited(
        self, msg_id: MessageId | None, tool_name: str, arguments: dict[str, Any]
    ) -> AbstractContextManager[None]:
        if self._audit_logger is None:
            return nullcontext()
        audit_id = str(msg_id) if msg_id is not None else uuid.uuid4().hex
        return self._audit_logger.tool_call(audit_id, tool_name, arguments)
