"""Tests for the server initialization lifecycle."""

import pytest

from mcp_runtime.protocol.lifecycle import (
    LifecycleManager,
    LifecycleState,
    ProtocolError,
    ServerNotInitializedError,
)


class TestLifecycleManager:
    """Tests for LifecycleManager."""

    def test_starts_uninitialized(self):
        """Should start in UNINITIALIZED state."""
        manager = LifecycleManager()
        assert manager.state == LifecycleState.UNINITIALIZED
        assert manager.is_ready is False

    def test_require_ready_raises_before_initialize(self):
        """Should refuse work before initialize."""
        manager = LifecycleManager()
        with pytest.raises(ServerNotInitializedError, match="Server not initialized"):
            manager.require_ready()

    def test_not_initialized_is_protocol_error(self):
        """Should be catchable as a ProtocolError."""
        assert issubclass(ServerNotInitializedError, ProtocolError)

    def test_initialize_moves_to_ready(self):
        """Should transition to READY and store client info."""
        manager = LifecycleManager()
        manager.handle_initialize({"clientInfo": {"name": "test", "version": "1.0"}})

        assert manager.state == LifecycleState.READY
        assert manager.client_info == {"name": "test", "version": "1.0"}
        manager.require_ready()

    def test_initialize_accepts_empty_params(self):
        """Should not require clientInfo."""
        manager = LifecycleManager()
        manager.handle_initialize({})

        assert manager.is_ready
        assert manager.client_info is None

    def test_repeated_initialize_stays_ready(self):
        """Should stay READY and count every initialize."""
        manager = LifecycleManager()
        manager.handle_initialize({})
        manager.handle_initialize({})

        assert manager.is_ready
        assert manager.initialize_count == 2
