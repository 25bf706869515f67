"""Server initialization lifecycle.

Tracks whether the peer has completed the ``initialize`` handshake. The
transition from UNINITIALIZED to READY is one-way; repeating ``initialize``
simply re-confirms it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class LifecycleState(Enum):
    """Server lifecycle states."""

    UNINITIALIZED = "uninitialized"
    READY = "ready"


class ProtocolError(Exception):
    """Raised when protocol constraints are violated."""

    pass


class ServerNotInitializedError(ProtocolError):
    """Raised when a method other than initialize arrives too early."""

    pass


@dataclass
class LifecycleManager:
    """Manages the initialization state of one server instance."""

    state: LifecycleState = LifecycleState.UNINITIALIZED
    client_info: dict[str, Any] | None = None
    initialize_count: int = 0

    @property
    def is_ready(self) -> bool:
        """Check if the server accepts methods other than initialize."""
        return self.state == LifecycleState.READY

    def require_ready(self) -> None:
        """Assert that initialize has been handled.

        Raises:
            ServerNotInitializedError: If the server is still uninitialized.
        """
        if self.state != LifecycleState.READY:
            raise ServerNotInitializedError("Server not initialized")

    def handle_initialize(self, params: dict[str, Any]) -> None:
        """Record a successful initialize call.

        Args:
            params: Initialize request parameters (clientInfo is kept if sent).
        """
        client_info = params.get("clientInfo")
        if isinstance(client_info, dict):
            self.client_info = client_info
        self.initialize_count += 1
        self.state = LifecycleState.READY
