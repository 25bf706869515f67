"""Tests for the tool, prompt and resource registry."""

import pytest

from mcp_runtime.registry import (
    DEFAULT_DESCRIPTION,
    NotFoundError,
    Registry,
    ToolNotFoundError,
)


def echo(params):
    return params


class TestToolRegistration:
    """Tests for Registry.register_tool."""

    def test_registers_handler_and_metadata(self):
        """Should store both when both are given."""
        registry = Registry()
        registry.register_tool("echo", echo, {"name": "echo", "description": "Echo"})

        assert registry.get_handler("echo") is echo
        assert registry.get_metadata("echo") == {"name": "echo", "description": "Echo"}

    def test_handler_only_synthesizes_metadata(self):
        """Should synthesize default metadata for a bare handler."""
        registry = Registry()
        registry.register_tool("echo", echo)

        assert registry.get_metadata("echo") == {
            "name": "echo",
            "description": DEFAULT_DESCRIPTION,
            "parameters": {},
        }

    def test_handler_only_keeps_existing_metadata(self):
        """Should not overwrite metadata registered earlier."""
        registry = Registry()
        registry.register_tool("t", metadata={"name": "t", "description": "custom"})
        registry.register_tool("t", echo)

        assert registry.get_metadata("t")["description"] == "custom"
        assert registry.get_handler("t") is echo

    def test_metadata_only_installs_failing_stub(self):
        """Should install a stub that raises when called."""
        registry = Registry()
        registry.register_tool("t", metadata={"name": "t"})

        with pytest.raises(NotImplementedError, match="Tool function not implemented"):
            registry.call_tool("t", {})

    def test_metadata_only_keeps_existing_handler(self):
        """Should not replace a real handler with the stub."""
        registry = Registry()
        registry.register_tool("t", echo)
        registry.register_tool("t", metadata={"name": "t", "description": "later"})

        assert registry.call_tool("t", {"a": 1}) == {"a": 1}
        assert registry.get_metadata("t")["description"] == "later"

    def test_requires_handler_or_metadata(self):
        """Should reject a registration with neither."""
        with pytest.raises(ValueError):
            Registry().register_tool("t")

    def test_lists_each_name_once(self):
        """Should list one entry per distinct name."""
        registry = Registry()
        registry.register_tool("a", echo)
        registry.register_tool("b", echo)
        registry.register_tool("a", metadata={"name": "a"})

        assert [m["name"] for m in registry.list_tool_metadata()] == ["a", "b"]

    def test_unknown_tool_raises(self):
        """Should raise ToolNotFoundError for unknown tools."""
        with pytest.raises(ToolNotFoundError, match="Tool not found: nope"):
            Registry().call_tool("nope", {})


class TestPromptsAndResources:
    """Tests for prompt and resource storage."""

    def test_registers_and_gets_prompt(self):
        """Should return the stored prompt content."""
        registry = Registry()
        registry.register_prompt("help", {"type": "text", "text": "Help"})

        assert registry.get_prompt("help") == {"type": "text", "text": "Help"}
        assert registry.list_prompts() == [{"name": "help"}]

    def test_registers_and_gets_resource(self):
        """Should return the stored resource content."""
        registry = Registry()
        registry.register_resource("codes", ["en", "fr"])

        assert registry.get_resource("codes") == ["en", "fr"]
        assert registry.list_resources() == [{"name": "codes"}]

    def test_missing_prompt_raises(self):
        """Should raise NotFoundError for unknown prompts."""
        with pytest.raises(NotFoundError, match="Prompt not found: x"):
            Registry().get_prompt("x")

    def test_missing_resource_raises(self):
        """Should raise NotFoundError for unknown resources."""
        with pytest.raises(NotFoundError, match="Resource not found: x"):
            Registry().get_resource("x")
