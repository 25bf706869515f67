"""End-to-end tests of a client talking to an in-process server."""

import json

import pytest

from mcp_runtime.client import MCPClient, ServerError
from mcp_runtime.plugins import TimePlugin, TranslatePlugin
from mcp_runtime.protocol.jsonrpc import METHOD_NOT_FOUND, SERVER_NOT_INITIALIZED
from mcp_runtime.server import MCPServer


@pytest.fixture
def demo_server() -> MCPServer:
    server = MCPServer("demo", "0.2.0")
    server.register_plugin(TimePlugin()).register_plugin(TranslatePlugin())
    return server


class TestClientServer:
    """Client and server exchanging wire lines over a loopback stream."""

    def test_requires_initialize(self, demo_server, loopback_stream):
        """Should surface SERVER_NOT_INITIALIZED through the client."""
        client = MCPClient().connect(loopback_stream(demo_server))

        with pytest.raises(ServerError) as exc_info:
            client.list_tools()
        assert exc_info.value.code == SERVER_NOT_INITIALIZED

    def test_full_session(self, demo_server, loopback_stream):
        """Should initialize, list and call tools."""
        with MCPClient().connect(loopback_stream(demo_server)) as client:
            client.initialize()
            assert client.server_info["name"] == "demo"
            assert client.server_info["version"] == "0.2.0"

            names = {tool["name"] for tool in client.list_tools()}
            assert names == {
                "get_current_time",
                "convert_time",
                "translate_text",
                "detect_language",
                "get_language_info",
            }

            result = client.call_tool(
                "translate_text", {"text": "hello", "target_lang": "fr"}
            )
            values = client.extract_content(result)
            assert values[0]["translated"]["text"] == "Bonjour"

    def test_prompts_and_resources(self, demo_server, loopback_stream):
        """Should list and fetch prompts and resources."""
        client = MCPClient().connect(loopback_stream(demo_server)).initialize()

        assert {p["name"] for p in client.list_prompts()} == {"time_zone_help", "translation_help"}
        assert {r["name"] for r in client.list_resources()} == {
            "language_codes",
            "language_families",
        }

        codes = client.get_resource("language_codes")["content"]
        assert codes["type"] == "json"
        assert len(codes["json"]["languages"]) == 8

        prompt = client.get_prompt("time_zone_help")
        assert prompt["content"]["text"].startswith("# Time Zone Help")

    def test_server_answers_notifications(self, demo_server, loopback_stream):
        """Should leave an id-less reply for each notification on the stream."""
        stream = loopback_stream(demo_server)
        client = MCPClient().connect(stream).initialize()

        client.send_notification("notifications/initialized")

        assert client.id_counter == 2
        assert len(stream.replies) == 1
        reply = json.loads(stream.replies.pop())
        assert reply["error"]["code"] == METHOD_NOT_FOUND
        assert "id" not in reply
        assert len(client.list_tools()) == 5

    def test_unknown_tool(self, demo_server, loopback_stream):
        """Should raise ServerError for unknown tools."""
        client = MCPClient().connect(loopback_stream(demo_server)).initialize()

        with pytest.raises(ServerError) as exc_info:
            client.call_tool("missing")
        assert exc_info.value.code == METHOD_NOT_FOUND

    def test_failed_tool_reports_details(self, demo_server, loopback_stream):
        """Should carry handler errors back in the error data."""
        client = MCPClient().connect(loopback_stream(demo_server)).initialize()

        with pytest.raises(ServerError) as exc_info:
            client.call_tool("get_current_time", {"timezone": "Mars/Olympus"})
        assert "Invalid timezone" in exc_info.value.data["details"]
