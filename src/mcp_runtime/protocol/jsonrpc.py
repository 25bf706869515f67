"""JSON-RPC 2.0 message model.

Parses newline-delimited wire text into the four message variants and
serializes them back with canonical key order and omission rules.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

JSONRPC_VERSION = "2.0"

# Standard JSON-RPC 2.0 error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

# Protocol-specific extensions
SERVER_NOT_INITIALIZED = -32002
UNKNOWN_RESOURCE_TYPE = -32001
TOOL_EXECUTION_ERROR = -32000

MessageId = int | str


class JsonRpcError(Exception):
    """JSON-RPC error with code and message."""

    def __init__(self, code: int, message: str, data: Any | None = None) -> None:
        """Initialize the error.

        Args:
            code: JSON-RPC error code.
            message: Human-readable error message.
            data: Optional additional error data.
        """
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data


class InvalidRequest(JsonRpcError):
    """Raised when text cannot be parsed as a request."""


class InvalidResponse(JsonRpcError):
    """Raised when text cannot be parsed as a response."""


class InvalidNotification(JsonRpcError):
    """Raised when text cannot be parsed as a notification."""


@dataclass
class Request:
    """Represents a JSON-RPC request."""

    method: str
    params: dict[str, Any] | None = None
    id: MessageId | None = None

    def to_dict(self) -> dict[str, Any]:
        message: dict[str, Any] = {"jsonrpc": JSONRPC_VERSION, "method": self.method}
        if self.params is not None:
            message["params"] = self.params
        if self.id is not None:
            message["id"] = self.id
        return message


@dataclass
class Notification:
    """Represents a JSON-RPC notification (never carries an id)."""

    method: str
    params: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        message: dict[str, Any] = {"jsonrpc": JSONRPC_VERSION, "method": self.method}
        if self.params is not None:
            message["params"] = self.params
        return message


@dataclass
class SuccessResponse:
    """Represents a successful JSON-RPC response."""

    result: Any
    id: MessageId | None = None

    def to_dict(self) -> dict[str, Any]:
        # The id slot is always present on success replies, null if unknown.
        return {"jsonrpc": JSONRPC_VERSION, "result": self.result, "id": self.id}


@dataclass
class ErrorResponse:
    """Represents a JSON-RPC error response."""

    error: dict[str, Any]
    id: MessageId | None = None

    @property
    def code(self) -> int:
        """Return the error code."""
        return self.error["code"]

    @property
    def message(self) -> str:
        """Return the error message."""
        return self.error["message"]

    @property
    def data(self) -> dict[str, Any] | None:
        """Return the optional error data."""
        return self.error.get("data")

    def to_dict(self) -> dict[str, Any]:
        message: dict[str, Any] = {"jsonrpc": JSONRPC_VERSION, "error": self.error}
        if self.id is not None:
            message["id"] = self.id
        return message


Response = SuccessResponse | ErrorResponse
Message = Request | Notification | SuccessResponse | ErrorResponse


def _load_object(raw: str, error_cls: type[JsonRpcError]) -> dict[str, Any]:
    """Decode raw text into a JSON-RPC 2.0 object.

    Args:
        raw: Raw JSON text.
        error_cls: Error class raised on failure.

    Returns:
        The decoded object.

    Raises:
        JsonRpcError: Of type error_cls if the text is not a JSON-RPC 2.0 object.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise error_cls(PARSE_ERROR, f"Parse error: {e}") from e

    if not isinstance(data, dict):
        raise error_cls(INVALID_REQUEST, "Invalid message: must be a JSON object")

    if data.get("jsonrpc") != JSONRPC_VERSION:
        raise error_cls(INVALID_REQUEST, "Invalid message: jsonrpc must be '2.0'")

    return data


def _method_and_params(
    data: dict[str, Any], error_cls: type[JsonRpcError]
) -> tuple[str, dict[str, Any] | None]:
    method = data.get("method")
    if not isinstance(method, str):
        raise error_cls(INVALID_REQUEST, "Invalid message: method must be a string")

    params = data.get("params")
    if params is not None and not isinstance(params, dict):
        raise error_cls(INVALID_REQUEST, "Invalid message: params must be an object")

    return method, params


def _message_id(data: dict[str, Any], error_cls: type[JsonRpcError]) -> MessageId | None:
    msg_id = data.get("id")
    if msg_id is not None and (isinstance(msg_id, bool) or not isinstance(msg_id, int | str)):
        raise error_cls(INVALID_REQUEST, "Invalid message: id must be integer or string")
    return msg_id


def parse_request(raw: str) -> Request:
    """Parse a JSON-RPC request.

    Absent params stay None; they are never defaulted to an empty mapping.

    Args:
        raw: Raw JSON string.

    Returns:
        Parsed request.

    Raises:
        InvalidRequest: If the text is not a valid request.
    """
    data = _load_object(raw, InvalidRequest)
    method, params = _method_and_params(data, InvalidRequest)
    return Request(method=method, params=params, id=_message_id(data, InvalidRequest))


def parse_notification(raw: str) -> Notification:
    """Parse a JSON-RPC notification.

    Args:
        raw: Raw JSON string.

    Returns:
        Parsed notification.

    Raises:
        InvalidNotification: If the text is invalid or carries an id.
    """
    data = _load_object(raw, InvalidNotification)
    method, params = _method_and_params(data, InvalidNotification)
    if "id" in data:
        raise InvalidNotification(INVALID_REQUEST, "Invalid notification: id must be absent")
    return Notification(method=method, params=params)


def parse_response(raw: str) -> Response:
    """Parse a JSON-RPC response.

    Args:
        raw: Raw JSON string.

    Returns:
        ErrorResponse if an error member is present, else SuccessResponse.

    Raises:
        InvalidResponse: If the text is not a valid response.
    """
    data = _load_object(raw, InvalidResponse)
    msg_id = _message_id(data, InvalidResponse)

    if "error" in data:
        error = data["error"]
        if not isinstance(error, dict) or "code" not in error or "message" not in error:
            raise InvalidResponse(
                INVALID_REQUEST, "Invalid response: error must have code and message"
            )
        return ErrorResponse(error=error, id=msg_id)

    if "result" not in data:
        raise InvalidResponse(INVALID_REQUEST, "Invalid response: missing result or error")

    return SuccessResponse(result=data["result"], id=msg_id)


def parse_message(raw: str) -> Request | Notification:
    """Parse an incoming message, telling requests from notifications.

    Args:
        raw: Raw JSON string.

    Returns:
        Request if an id member is present, otherwise Notification.

    Raises:
        InvalidRequest: If the message is invalid.
    """
    data = _load_object(raw, InvalidRequest)
    method, params = _method_and_params(data, InvalidRequest)
    if "id" in data:
        return Request(method=method, params=params, id=_message_id(data, InvalidRequest))
    return Notification(method=method, params=params)


def serialize(message: Message) -> str:
    """Serialize a message to compact JSON.

    Args:
        message: Any message variant.

    Returns:
        JSON string without a trailing newline.
    """
    return json.dumps(message.to_dict(), separators=(",", ":"), ensure_ascii=False)


def create_error_response(
    code: int,
    message: str,
    msg_id: MessageId | None = None,
    data: dict[str, Any] | None = None,
) -> ErrorResponse:
    """Build an error response.

    Args:
        code: Error code.
        message: Error message.
        msg_id: Request ID (or None when it could not be recovered).
        data: Optional error data, omitted from the wire when None.

    Returns:
        ErrorResponse.
    """
    error: dict[str, Any] = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return ErrorResponse(error=error, id=msg_id)


def _details(details: str | None) -> dict[str, Any] | None:
    return {"details": details} if details is not None else None


def create_parse_error(
    msg_id: MessageId | None = None, details: str | None = None
) -> ErrorResponse:
    return create_error_response(PARSE_ERROR, "Parse error", msg_id, _details(details))


def create_invalid_request_error(
    msg_id: MessageId | None = None, details: str | None = None
) -> ErrorResponse:
    return create_error_response(INVALID_REQUEST, "Invalid Request", msg_id, _details(details))


def create_method_not_found_error(
    msg_id: MessageId | None, message: str = "Method not found"
) -> ErrorResponse:
    return create_error_response(METHOD_NOT_FOUND, message, msg_id)


def create_invalid_params_error(
    msg_id: MessageId | None, message: str = "Invalid params", details: str | None = None
) -> ErrorResponse:
    return create_error_response(INVALID_PARAMS, message, msg_id, _details(details))


def create_internal_error(msg_id: MessageId | None, details: str | None = None) -> ErrorResponse:
    return create_error_response(INTERNAL_ERROR, "Internal error", msg_id, _details(details))


def create_server_not_initialized_error(msg_id: MessageId | None) -> ErrorResponse:
    return create_error_response(SERVER_NOT_INITIALIZED, "Server not initialized", msg_id)


def create_unknown_resource_error(
    msg_id: MessageId | None,
    message: str = "Resource not found or invalid",
    details: str | None = None,
) -> ErrorResponse:
    return create_error_response(UNKNOWN_RESOURCE_TYPE, message, msg_id, _details(details))


def create_tool_execution_error(
    msg_id: MessageId | None, details: str | None = None
) -> ErrorResponse:
    return create_error_response(
        TOOL_EXECUTION_ERROR, "Tool execution failed", msg_id, _details(details)
    )
