"""Tests for tools/list and tools/call handlers."""

import json
from pathlib import Path

import pytest

from mcp_runtime.audit import AuditLogger
from mcp_runtime.protocol.content import ToolResult, create_text_content
from mcp_runtime.protocol.jsonrpc import (
    INVALID_PARAMS,
    METHOD_NOT_FOUND,
    TOOL_EXECUTION_ERROR,
    ErrorResponse,
    SuccessResponse,
)
from mcp_runtime.protocol.tools import ArgumentValidationError, ToolsHandler, validate_arguments
from mcp_runtime.registry import Registry

ADD_SCHEMA = {
    "type": "object",
    "properties": {"a": {"type": "number"}, "b": {"type": "number"}},
    "required": ["a", "b"],
}


def add(params):
    return {"sum": params["a"] + params["b"]}


def crash(params):
    raise RuntimeError("Intentional crash for testing")


@pytest.fixture
def registry() -> Registry:
    registry = Registry()
    registry.register_tool(
        "add", add, {"name": "add", "description": "Adds", "parameters": ADD_SCHEMA}
    )
    registry.register_tool("crash", crash)
    return registry


class TestToolsList:
    """Tests for tools/list handling."""

    def test_lists_all_tools(self, registry: Registry):
        """Should list every tool with a null cursor."""
        result = ToolsHandler(registry).handle_list()

        assert [t["name"] for t in result["tools"]] == ["add", "crash"]
        assert result["nextCursor"] is None


class TestToolsCall:
    """Tests for tools/call handling."""

    def test_calls_tool(self, registry: Registry):
        """Should return the handler's result."""
        response = ToolsHandler(registry).handle_call(
            {"tool": {"name": "add", "parameters": {"a": 2, "b": 3}}}, 1
        )
        assert response == SuccessResponse({"sum": 5}, 1)

    def test_missing_tool_is_invalid_params(self, registry: Registry):
        """Should reject params without a tool member."""
        response = ToolsHandler(registry).handle_call({}, 1)

        assert isinstance(response, ErrorResponse)
        assert response.code == INVALID_PARAMS
        assert response.message == "Missing required field: tool.name"

    def test_missing_tool_name_is_invalid_params(self, registry: Registry):
        """Should reject a tool member without name."""
        response = ToolsHandler(registry).handle_call({"tool": {"parameters": {}}}, 1)
        assert response.code == INVALID_PARAMS

    def test_unknown_tool_is_method_not_found(self, registry: Registry):
        """Should report unknown tools as METHOD_NOT_FOUND."""
        response = ToolsHandler(registry).handle_call({"tool": {"name": "missing"}}, 2)

        assert response.code == METHOD_NOT_FOUND
        assert response.message == "Tool not found: missing"
        assert response.id == 2

    def test_rejects_non_object_parameters(self, registry: Registry):
        """Should reject parameters that are not a mapping."""
        response = ToolsHandler(registry).handle_call(
            {"tool": {"name": "add", "parameters": [1, 2]}}, 1
        )
        assert response.code == INVALID_PARAMS

    def test_defaults_parameters_to_empty_mapping(self):
        """Should pass {} when parameters is absent."""
        registry = Registry()
        registry.register_tool("echo", lambda params: params)

        response = ToolsHandler(registry).handle_call({"tool": {"name": "echo"}}, 1)
        assert response.result == {}

    def test_handler_failure_is_tool_execution_error(self, registry: Registry):
        """Should map handler exceptions to TOOL_EXECUTION_ERROR."""
        response = ToolsHandler(registry).handle_call({"tool": {"name": "crash"}}, 3)

        assert response.code == TOOL_EXECUTION_ERROR
        assert response.data == {"details": "Intentional crash for testing"}
        assert response.id == 3

    def test_converts_tool_result(self):
        """Should convert a returned ToolResult to an envelope."""
        registry = Registry()
        registry.register_tool(
            "hello", lambda params: ToolResult(content=[create_text_content("hi")])
        )

        response = ToolsHandler(registry).handle_call({"tool": {"name": "hello"}}, 1)
        assert response.result == {"content": [{"type": "text", "text": "hi"}], "isError": False}


class TestArgumentValidation:
    """Tests for optional JSON Schema validation of tool parameters."""

    def test_rejects_invalid_arguments(self, registry: Registry):
        """Should reply INVALID_PARAMS with details."""
        handler = ToolsHandler(registry, check_arguments=True)
        response = handler.handle_call({"tool": {"name": "add", "parameters": {"a": 1}}}, 1)

        assert response.code == INVALID_PARAMS
        assert response.message == "Invalid parameters for tool: add"
        assert "'b' is a required property" in response.data["details"]

    def test_accepts_valid_arguments(self, registry: Registry):
        """Should call the tool when arguments match."""
        handler = ToolsHandler(registry, check_arguments=True)
        response = handler.handle_call({"tool": {"name": "add", "parameters": {"a": 1, "b": 1}}}, 1)

        assert response.result == {"sum": 2}

    def test_skips_tools_without_schema(self, registry: Registry):
        """Should not validate against the synthesized empty parameters."""
        handler = ToolsHandler(registry, check_arguments=True)
        response = handler.handle_call({"tool": {"name": "crash", "parameters": {"x": 1}}}, 1)

        assert response.code == TOOL_EXECUTION_ERROR

    def test_validation_is_off_by_default(self, registry: Registry):
        """Should let the handler see unvalidated arguments."""
        response = ToolsHandler(registry).handle_call(
            {"tool": {"name": "add", "parameters": {"a": 1}}}, 1
        )
        assert response.code == TOOL_EXECUTION_ERROR

    def test_reports_error_path(self):
        """Should name the failing property path."""
        schema = {"type": "object", "properties": {"n": {"type": "integer"}}}
        with pytest.raises(ArgumentValidationError, match="at 'n'"):
            validate_arguments("t", schema, {"n": "x"})

    def test_reports_invalid_schema(self):
        """Should raise for a broken schema."""
        with pytest.raises(ArgumentValidationError, match="Invalid schema"):
            validate_arguments("t", {"type": 12}, {})


class TestAuditing:
    """Tests for audit logging of tool calls."""

    def test_logs_request_and_response(self, registry: Registry, tmp_path: Path):
        """Should write a request and a response event."""
        log_path = tmp_path / "audit.jsonl"
        with AuditLogger(log_path) as logger:
            ToolsHandler(registry, audit_logger=logger).handle_call(
                {"tool": {"name": "add", "parameters": {"a": 1, "b": 2}}}, 7
            )

        events = [json.loads(line) for line in log_path.read_text().splitlines()]
        assert [e["type"] for e in events] == ["request", "response"]
        assert events[0]["request_id"] == "7"
        assert events[0]["tool_name"] == "add"
        assert events[1]["result_status"] == "success"

    def test_logs_failed_call(self, registry: Registry, tmp_path: Path):
        """Should record error status for failing tools."""
        log_path = tmp_path / "audit.jsonl"
        with AuditLogger(log_path) as logger:
            ToolsHandler(registry, audit_logger=logger).handle_call({"tool": {"name": "crash"}}, 1)

        events = [json.loads(line) for line in log_path.read_text().splitlines()]
        assert events[-1]["result_status"] == "error"
