"""Newline-delimited message framing over text streams.

Each JSON-RPC message occupies exactly one line. Diagnostics are written to
a separate log stream so the protocol stream only ever carries messages.
"""

from __future__ import annotations

import sys
from collections.abc import Iterator
from typing import TextIO

LOG_PREFIX = "[MCP]"


class StdioTransport:
    """Reads and writes one message per line.

    The streams default to the process's stdin/stdout/stderr but any text
    streams work (pipes, ``socket.makefile`` wrappers, ``io.StringIO``).
    """

    def __init__(
        self,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> None:
        self._reader = stdin or sys.stdin
        self._writer = stdout or sys.stdout
        self._log_stream = stderr or sys.stderr

    def read_message(self) -> str | None:
        """Block until a non-blank line arrives.

        Returns:
            The line without surrounding whitespace, or None once the input
            is exhausted or can no longer be read.
        """
        try:
            for raw in iter(self._reader.readline, ""):
                message = raw.strip()
                if message:
                    return message
        except (OSError, ValueError) as e:
            self.log(f"Read failed, treating as end of stream: {e}")
        return None

    def messages(self) -> Iterator[str]:
        """Yield incoming messages until end of stream."""
        while (message := self.read_message()) is not None:
            yield message

    def write_message(self, message: str) -> None:
        self._writer.write(f"{message}\n")
        self._writer.flush()

    def log(self, message: str) -> None:
        print(LOG_PREFIX, message, file=self._log_stream, flush=True)
