"""JSON-RPC message model, lifecycle, tool handling and transport."""

from mcp_runtime.protocol.content import (
    ToolResult,
    create_html_content,
    create_image_content,
    create_json_content,
    create_text_content,
    create_tool_response,
)
from mcp_runtime.protocol.jsonrpc import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    SERVER_NOT_INITIALIZED,
    TOOL_EXECUTION_ERROR,
    UNKNOWN_RESOURCE_TYPE,
    ErrorResponse,
    InvalidNotification,
    InvalidRequest,
    InvalidResponse,
    JsonRpcError,
    Notification,
    Request,
    SuccessResponse,
    create_error_response,
    parse_message,
    parse_notification,
    parse_request,
    parse_response,
    serialize,
)
from mcp_runtime.protocol.lifecycle import (
    LifecycleManager,
    LifecycleState,
    ProtocolError,
    ServerNotInitializedError,
)
from mcp_runtime.protocol.tools import ArgumentValidationError, ToolsHandler
from mcp_runtime.protocol.transport import StdioTransport

__all__ = [
    "INTERNAL_ERROR",
    "INVALID_PARAMS",
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "PARSE_ERROR",
    "SERVER_NOT_INITIALIZED",
    "TOOL_EXECUTION_ERROR",
    "UNKNOWN_RESOURCE_TYPE",
    "ArgumentValidationError",
    "ErrorResponse",
    "InvalidNotification",
    "InvalidRequest",
    "InvalidResponse",
    "JsonRpcError",
    "LifecycleManager",
    "LifecycleState",
    "Notification",
    "ProtocolError",
    "Request",
    "ServerNotInitializedError",
    "StdioTransport",
    "SuccessResponse",
    "ToolResult",
    "ToolsHandler",
    "create_error_response",
    "create_html_content",
    "create_image_content",
    "create_json_content",
    "create_text_content",
    "create_tool_response",
    "parse_message",
    "parse_notification",
    "parse_request",
    "parse_response",
    "serialize",
]
