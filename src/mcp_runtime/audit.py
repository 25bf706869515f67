"""Audit trail of tool invocations.

Every ``tools/call`` produces a ``request`` line and a ``response`` line in a
JSON Lines file. Lines are flushed as they are written so the trail can be
followed with ``tail -f`` while the server runs.
"""

from __future__ import annotations

import json
import re
import time
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

REDACTED = "[REDACTED]"

# Argument names whose values never reach the log
_SENSITIVE_KEY = re.compile(
    r"password|secret|api[_-]?key|token|auth|credential|private[_-]?key",
    re.IGNORECASE,
)


def sanitize_arguments(arguments: dict[str, Any]) -> dict[str, Any]:
    """Copy tool arguments with sensitive values replaced.

    Nested mappings are sanitized too; the input is not modified.
    """
    return {key: _redact(key, value) for key, value in arguments.items()}


def _redact(key: str, value: Any) -> Any:
    if _SENSITIVE_KEY.search(key):
        return REDACTED
    if isinstance(value, dict):
        return sanitize_arguments(value)
    return value


def _utc_now() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


class AuditLogger:
    """Appends tool call events to a JSON Lines file."""

    def __init__(self, log_path: Path) -> None:
        """Open the log for appending, creating parent directories.

        Args:
            log_path: Location of the audit file.
        """
        log_path.parent.mkdir(parents=True, exist_ok=True)
        self._log_path = log_path
        self._file = log_path.open("a", encoding="utf-8")

    @property
    def path(self) -> Path:
        return self._log_path

    def _append(self, event_type: str, **fields: Any) -> None:
        record = {"type": event_type, "timestamp": _utc_now(), **fields}
        # Tool arguments may hold values json cannot encode natively
        self._file.write(json.dumps(record, default=str) + "\n")
        self._file.flush()

    def log_request(self, request_id: str, tool_name: str, arguments: dict[str, Any]) -> None:
        self._append(
            "request",
            request_id=request_id,
            tool_name=tool_name,
            arguments=sanitize_arguments(arguments),
        )

    def log_response(self, request_id: str, status: str, duration_ms: float) -> None:
        self._append(
            "response",
            request_id=request_id,
            result_status=status,
            execution_time_ms=duration_ms,
        )

    @contextmanager
    def tool_call(
        self, request_id: str, tool_name: str, arguments: dict[str, Any]
    ) -> Iterator[None]:
        """Record one tool invocation around the block that runs it.

        The response event carries status ``error`` if the block raises
        (the exception propagates) and ``success`` otherwise.

        Args:
            request_id: Correlates the request and response events.
            tool_name: Name of the invoked tool.
            arguments: Tool arguments, sanitized before writing.
        """
        self.log_request(request_id, tool_name, arguments)
        started = time.perf_counter()
        status = "error"
        try:
            yield
            status = "success"
        finally:
            elapsed_ms = round((time.perf_counter() - started) * 1000, 3)
            self.log_response(request_id, status, elapsed_ms)

    def close(self) -> None:
        if not self._file.closed:
            self._file.close()

    def __enter__(self) -> AuditLogger:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
