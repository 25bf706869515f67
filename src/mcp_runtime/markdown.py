"""Minimal HTML to markdown conversion.

A regex-based text transform: good enough for page bodies returned by the
fetch tool and html content items, not a full HTML parser.
"""

from __future__ import annotations

import html
import re

_SCRIPT = re.compile(r"<script[^>]*>.*?</script>", re.IGNORECASE | re.DOTALL)
_STYLE = re.compile(r"<style[^>]*>.*?</style>", re.IGNORECASE | re.DOTALL)
_HEADING = re.compile(r"<h([1-6])[^>]*>(.*?)</h\1>", re.IGNORECASE | re.DOTALL)
_PARAGRAPH = re.compile(r"<p(?:\s[^>]*)?>(.*?)</p>", re.IGNORECASE | re.DOTALL)
_BREAK = re.compile(r"<br[^>]*>", re.IGNORECASE)
_LIST_ITEM = re.compile(r"<li[^>]*>(.*?)</li>", re.IGNORECASE | re.DOTALL)
_TAG = re.compile(r"<[^>]+>")
_BLANK_RUN = re.compile(r"\n\s*\n\s*\n")


def html_to_markdown(source: str) -> str:
    """Convert HTML into simplified markdown text.

    Headings become "#" lines, paragraphs are separated by blank lines, list
    items become "* " bullets; all other tags are dropped and entities are
    decoded.

    Args:
        source: HTML text.

    Returns:
        Markdown text with surrounding whitespace stripped.
    """
    text = _SCRIPT.sub("", source)
    text = _STYLE.sub("", text)

    text = _HEADING.sub(lambda m: "#" * int(m.group(1)) + " " + m.group(2).strip() + "\n", text)
    text = _PARAGRAPH.sub(r"\1\n\n", text)
    text = _BREAK.sub("\n", text)
    text = _LIST_ITEM.sub(lambda m: "* " + m.group(1).strip() + "\n", text)

    text = _TAG.sub("", text)
    text = html.unescape(text).replace("\xa0", " ")

    # Collapse indentation left behind by removed markup
    text = "\n".join(line.strip() for line in text.splitlines())
    text = _BLANK_RUN.sub("\n\n", text)
    return text.strip()
