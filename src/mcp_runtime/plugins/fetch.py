"""Fetch plugin - retrieve a URL as markdown or raw text."""

from __future__ import annotations

import re
from typing import Any

import httpx

from mcp_runtime.config import DEFAULT_HTTP_TIMEOUT, DEFAULT_USER_AGENT
from mcp_runtime.markdown import html_to_markdown
from mcp_runtime.plugins.base import PluginBase, ToolDefinition

DEFAULT_MAX_LENGTH = 5000

_META_CHARSET = re.compile(r"<meta[^>]*charset=[^>]*>", re.IGNORECASE)


class FetchPlugin(PluginBase):
    """Plugin providing the fetch tool.

    HTML pages are converted to markdown unless raw output is requested;
    other content types are returned as text. The content can be windowed
    with start_index and max_length.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the plugin with a reusable HTTP client.

        Args:
            timeout: Request timeout in seconds.
            user_agent: User-Agent header sent with every request.
            client: Pre-built client (used by tests).
        """
        self._client = client or httpx.Client(
            headers={"User-Agent": user_agent},
            follow_redirects=True,
            timeout=timeout,
        )

    @property
    def name(self) -> str:
        return "fetch"

    @property
    def version(self) -> str:
        return "0.1.0"

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def get_tools(self) -> list[ToolDefinition]:
        return [
            ToolDefinition(
                name="fetch",
                description="Fetch content from a URL",
                handler=self.fetch_url,
                parameters={
                    "type": "object",
                    "properties": {
                        "url": {"type": "string", "description": "URL to fetch"},
                        "max_length": {
                            "type": "integer",
                            "description": "Maximum number of characters to return",
                            "default": DEFAULT_MAX_LENGTH,
                            "minimum": 0,
                        },
                        "start_index": {
                            "type": "integer",
                            "description": "Start content from this character index",
                            "default": 0,
                            "minimum": 0,
                        },
                        "raw": {
                            "type": "boolean",
                            "description": "Return raw HTML instead of markdown",
                            "default": False,
                        },
                    },
                    "required": ["url"],
                },
            )
        ]

    def fetch_url(self, params: dict[str, Any]) -> dict[str, Any]:
        """Fetch a URL.

        Args:
            params: {"url", "max_length"?, "start_index"?, "raw"?}.

        Returns:
            {"content": text, "url": url, "length": len(text)}.

        Raises:
            ValueError: If url is missing.
            RuntimeError: If the request fails or returns an HTTP error.
        """
        if "url" not in params:
            raise ValueError("Missing required parameter: url")

        url = str(params["url"])
        max_length = int(params.get("max_length", DEFAULT_MAX_LENGTH))
        start_index = int(params.get("start_index", 0))
        raw = bool(params.get("raw", False))

        try:
            response = self._client.get(url)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise RuntimeError(f"Failed to fetch URL: request to {url} timed out") from e
        except httpx.HTTPStatusError as e:
            raise RuntimeError(
                f"Failed to fetch URL: HTTP {e.response.status_code} from {url}"
            ) from e
        except httpx.HTTPError as e:
            raise RuntimeError(f"Failed to fetch URL: {e}") from e

        content = response.text
        content_type = response.headers.get("Content-Type", "text/html")
        if "text/html" in content_type and not raw:
            content = html_to_markdown(_META_CHARSET.sub("", content))

        if start_index > 0:
            content = content[start_index:]
        if max_length > 0:
            content = content[:max_length]

        return {"content": content, "url": url, "length": len(content)}
