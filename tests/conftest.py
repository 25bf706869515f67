"""Shared fixtures for server and client tests."""

from __future__ import annotations

from typing import Any

import pytest

from mcp_runtime.protocol.jsonrpc import Request
from mcp_runtime.server import MCPServer


class LoopbackStream:
    """Duplex stream that hands each written line to an in-process server.

    Each line produces exactly one queued reply, returned by readline.
    """

    def __init__(self, server: MCPServer) -> None:
        self.server = server
        self.written: list[str] = []
        self._buffer = ""
        self.replies: list[str] = []
        self.closed = False

    def write(self, data: str) -> int:
        self._buffer += data
        while "\n" in self._buffer:
            line, self._buffer = self._buffer.split("\n", 1)
            self.written.append(line)
            self.replies.append(self.server.handle_message(line) + "\n")
        return len(data)

    def flush(self) -> None:
        pass

    def readline(self) -> str:
        if not self.replies:
            return ""
        return self.replies.pop(0)

    def close(self) -> None:
        self.closed = True


class ScriptedStream:
    """Duplex stream that replays canned reply lines and records writes."""

    def __init__(self, replies: list[str] | None = None) -> None:
        self.replies = list(replies or [])
        self.written: list[str] = []
        self.closed = False

    def write(self, data: str) -> int:
        self.written.append(data)
        return len(data)

    def flush(self) -> None:
        pass

    def readline(self) -> str:
        if not self.replies:
            return ""
        return self.replies.pop(0)

    def close(self) -> None:
        self.closed = True


def echo(params: dict[str, Any]) -> dict[str, Any]:
    return params


@pytest.fixture
def server() -> MCPServer:
    """Create an uninitialized server."""
    return MCPServer("test-server", "1.0.0")


@pytest.fixture
def initialized_server(server: MCPServer) -> MCPServer:
    """Create a server that has completed the initialize handshake."""
    server.handle_request(Request("initialize", {}, 0))
    return server


@pytest.fixture
def scripted_stream():
    """Factory for streams that replay canned reply lines."""
    return ScriptedStream


@pytest.fixture
def loopback_stream():
    """Factory for streams wired to an in-process server."""
    return LoopbackStream
