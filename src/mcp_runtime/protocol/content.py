"""Content items and the standard tool result envelope.

Tool handlers build their results from these helpers; clients flatten
them back with ``mcp_runtime.client.extract_content``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class ToolResult:
    """Result of a tool execution."""

    content: list[dict[str, Any]]
    is_error: bool = False
    status: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the tool response envelope.

        Returns:
            Dictionary with content, isError and (if set) status.
        """
        envelope: dict[str, Any] = {
            "content": self.content,
            "isError": self.is_error,
        }
        if self.status is not None:
            envelope["status"] = self.status
        return envelope


def create_text_content(text: str) -> dict[str, Any]:
    """Create a text content item."""
    return {"type": "text", "text": text}


def create_json_content(value: Any) -> dict[str, Any]:
    """Create a JSON content item embedding an arbitrary JSON value."""
    return {"type": "json", "json": value}


def create_html_content(html: str) -> dict[str, Any]:
    """Create an HTML content item."""
    return {"type": "html", "html": html}


def create_image_content(url: str, alt_text: str = "") -> dict[str, Any]:
    """Create an image content item referencing an image by URL."""
    return {"type": "image", "url": url, "alt_text": alt_text}


def create_tool_response(
    content: list[dict[str, Any]],
    is_error: bool = False,
    status: str | None = None,
) -> dict[str, Any]:
    """Wrap content items into the standard tool response envelope.

    Args:
        content: Content items built with the create_*_content helpers.
        is_error: Whether the tool reports a business-level failure.
        status: Optional free-form status string.

    Returns:
        Envelope of the form {"content": [...], "isError": bool, "status"?: str}.
    """
    return ToolResult(content=content, is_error=is_error, status=status).to_dict()
