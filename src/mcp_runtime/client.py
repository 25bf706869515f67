"""MCP client - request/response correlation over a duplex stream.

The client writes one request line and reads exactly one reply line per
call. Calls block until the reply arrives; there is no timeout.
"""

from __future__ import annotations

import shlex
import subprocess
from typing import IO, Any, Protocol

from mcp_runtime.markdown import html_to_markdown
from mcp_runtime.protocol.jsonrpc import (
    ErrorResponse,
    JsonRpcError,
    Notification,
    Request,
    Response,
    parse_response,
    serialize,
)


class DuplexStream(Protocol):
    """Text stream the client can write requests to and read replies from."""

    def write(self, data: str) -> Any: ...
    def flush(self) -> None: ...
    def readline(self) -> str: ...
    def close(self) -> None: ...


class ClientError(Exception):
    """Raised when a client operation fails."""

    pass


class NotConnectedError(ClientError):
    """Raised when a request is sent without a connected stream."""

    pass


class ResponseParseError(ClientError):
    """Raised when a reply line is not a valid JSON-RPC response."""

    pass


class ServerError(ClientError):
    """Raised by the typed calls when the server replies with an error."""

    def __init__(self, context: str, response: ErrorResponse) -> None:
        """Initialize from an error reply.

        Args:
            context: What the client was trying to do.
            response: The server's error response.
        """
        super().__init__(f"{context}: {response.message}")
        self.code = response.code
        self.message = response.message
        self.data = response.data


class ProcessStream:
    """Duplex stream over a server subprocess's stdin and stdout."""

    def __init__(self, command: str, env: dict[str, str] | None = None) -> None:
        """Launch the server process.

        Args:
            command: Command line, split with shlex.
            env: Optional environment for the child process.
        """
        self._process = subprocess.Popen(
            shlex.split(command),
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            bufsize=1,
            env=env,
        )

    @property
    def process(self) -> subprocess.Popen[str]:
        return self._process

    def _pipe(self, pipe: IO[str] | None) -> IO[str]:
        if pipe is None:
            raise ClientError("Server process pipe is not available")
        return pipe

    def write(self, data: str) -> int:
        return self._pipe(self._process.stdin).write(data)

    def flush(self) -> None:
        self._pipe(self._process.stdin).flush()

    def readline(self) -> str:
        return self._pipe(self._process.stdout).readline()

    def close(self) -> None:
        """Close the pipes and stop the process.

        The process is reaped even when closing stdin fails because the
        child has already exited; that error still propagates.
        """
        try:
            if self._process.stdout:
                self._process.stdout.close()
            if self._process.stdin:
                self._process.stdin.close()
        finally:
            self._stop()

    def _stop(self) -> None:
        if self._process.poll() is None:
            self._process.terminate()
            try:
                self._process.wait(timeout=5)
            except subprocess.TimeoutExpired:
                self._process.kill()
                self._process.wait()


def extract_content(response: dict[str, Any]) -> list[Any] | None:
    """Flatten a tool response envelope into plain values.

    Text items become their text, json items their embedded value, html items
    markdown text, and image items {"url", "alt_text"}. Unrecognized or
    malformed items are skipped.

    Args:
        response: Tool response envelope.

    Returns:
        List of extracted values, or None if there is no content list.
    """
    content = response.get("content") if isinstance(response, dict) else None
    if not isinstance(content, list):
        return None

    result: list[Any] = []
    for item in content:
        if not isinstance(item, dict):
            continue

        item_type = item.get("type")
        if item_type == "text" and "text" in item:
            result.append(item["text"])
        elif item_type == "json" and "json" in item:
            result.append(item["json"])
        elif item_type == "html" and "html" in item:
            result.append(html_to_markdown(item["html"]))
        elif item_type == "image" and "url" in item:
            result.append({"url": item["url"], "alt_text": item.get("alt_text", "")})

    return result


class MCPClient:
    """Client for line-oriented MCP servers.

    Usage::

        with MCPClient().connect(ProcessStream("mcp-line-runtime --plugin time")) as client:
            client.initialize()
            result = client.call_tool("get_current_time", {"timezone": "UTC"})
            print(extract_content(result))
    """

    def __init__(self) -> None:
        """Create a disconnected client."""
        self.stream: DuplexStream | None = None
        self.initialized = False
        self.server_info: dict[str, Any] = {}
        self.id_counter = 1

    def connect(self, stream: DuplexStream) -> MCPClient:
        """Attach a duplex stream. The id counter is not reset.

        Returns:
            The client, for chaining.
        """
        self.stream = stream
        return self

    def initialize(self) -> MCPClient:
        """Perform the initialize handshake, once.

        Returns:
            The client, for chaining.

        Raises:
            ClientError: If the server rejects initialize; initialized stays False.
        """
        if self.initialized:
            return self

        response = self.send_request("initialize", {})
        if response is None:
            raise ClientError("Failed to initialize: no response from server")
        if isinstance(response, ErrorResponse):
            raise ServerError("Failed to initialize", response)

        self.server_info = response.result if isinstance(response.result, dict) else {}
        self.initialized = True
        return self

    def send_request(self, method: str, params: dict[str, Any] | None = None) -> Response | None:
        """Send a request and read its reply.

        An error reply is returned, not raised.

        Args:
            method: Method name.
            params: Request params.

        Returns:
            SuccessResponse or ErrorResponse, or None if the reply line is empty.

        Raises:
            NotConnectedError: If no stream is attached.
            ResponseParseError: If the reply is not a valid response.
        """
        stream = self._require_stream()

        request_id = str(self.id_counter)
        self.id_counter += 1

        request = Request(method=method, params=params, id=request_id)
        stream.write(serialize(request) + "\n")
        stream.flush()

        line = stream.readline()
        if not line or not line.strip():
            return None

        try:
            return parse_response(line.strip())
        except JsonRpcError as e:
            raise ResponseParseError(f"Failed to parse response: {e}") from e

    def send_notification(self, method: str, params: dict[str, Any] | None = None) -> None:
        """Send a notification. No id is used and no reply is read.

        Raises:
            NotConnectedError: If no stream is attached.
        """
        stream = self._require_stream()
        stream.write(serialize(Notification(method=method, params=params)) + "\n")
        stream.flush()

    def list_tools(self, cursor: str | None = None) -> list[dict[str, Any]]:
        """List tools exposed by the server."""
        result = self._call("tools/list", self._cursor_params(cursor), "Failed to list tools")
        return result["tools"]

    def list_resources(self, cursor: str | None = None) -> list[dict[str, Any]]:
        """List resources exposed by the server."""
        params = self._cursor_params(cursor)
        return self._call("resources/list", params, "Failed to list resources")["resources"]

    def list_prompts(self, cursor: str | None = None) -> list[dict[str, Any]]:
        """List prompts exposed by the server."""
        params = self._cursor_params(cursor)
        return self._call("prompts/list", params, "Failed to list prompts")["prompts"]

    def get_resource(self, name: str) -> Any:
        """Get a resource; returns the {"name", "content"} result."""
        return self._call("resources/get", {"name": name}, "Failed to get resource")

    def get_prompt(self, name: str) -> Any:
        """Get a prompt; returns the {"name", "content"} result."""
        return self._call("prompts/get", {"name": name}, "Failed to get prompt")

    def call_tool(self, name: str, parameters: dict[str, Any] | None = None) -> Any:
        """Call a tool through tools/call.

        Args:
            name: Tool name.
            parameters: Tool parameters.

        Returns:
            The tool's result, usually a tool response envelope.

        Raises:
            ServerError: If the server replies with an error.
        """
        params = {"tool": {"name": name, "parameters": parameters or {}}}
        return self._call("tools/call", params, "Tool call failed")

    extract_content = staticmethod(extract_content)

    def close(self) -> None:
        """Close and detach the stream, forgetting the handshake."""
        if self.stream is not None:
            self.stream.close()
            self.stream = None
        self.initialized = False
        self.server_info = {}

    def __enter__(self) -> MCPClient:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def _require_stream(self) -> DuplexStream:
        if self.stream is None:
            raise NotConnectedError("Client not connected")
        return self.stream

    @staticmethod
    def _cursor_params(cursor: str | None) -> dict[str, Any]:
        return {"cursor": cursor} if cursor is not None else {}

    def _call(self, method: str, params: dict[str, Any], context: str) -> Any:
        response = self.send_request(method, params)
        if response is None:
            raise ClientError(f"{context}: no response from server")
        if isinstance(response, ErrorResponse):
            raise ServerError(context, response)
        return response.result
