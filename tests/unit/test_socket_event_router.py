"""
Socket Event Router Unit Tests

Tests for the SocketEventRouter class: routing, middleware, after-request
hooks and error propagation.
"""

from unittest.mock import Mock, patch

import pytest

from rps.handlers.socket_event_router import (
    EventRouteNotFoundError,
    SocketEventRouter,
    request_logging_middleware,
    setup_router,
)


@pytest.fixture(autouse=True)
def fake_request():
    mock_request = Mock(sid="test_socket_123")
    with patch('rps.handlers.socket_event_router.request', new=mock_request):
        yield mock_request


class TestSocketEventRouter:
    """Test SocketEventRouter core functionality"""

    def setup_method(self):
        self.router = SocketEventRouter()

    def test_register_route(self):
        def handler(data):
            return "ok"

        self.router.register_route("createRoom", handler)

        assert self.router.get_registered_events() == ["createRoom"]

    def test_handle_event_calls_handler(self):
        handler = Mock(return_value="done", __name__="handler")
        self.router.register_route("createRoom", handler)

        assert self.router.handle_event("createRoom", "ABCD") == "done"
        handler.assert_called_once_with("ABCD")

    def test_unknown_event(self):
        with pytest.raises(EventRouteNotFoundError):
            self.router.handle_event("nope")

    def test_dispatch_order(self):
        calls = []

        def middleware(event_name, data):
            calls.append("middleware")
            return data

        def handler(data):
            calls.append("handler")

        def after(event_name, data, result, error=None):
            calls.append("after")

        self.router.add_middleware(middleware)
        self.router.add_after_request(after)
        self.router.register_route("p1Choice", handler)

        self.router.handle_event("p1Choice", {})

        assert calls == ["middleware", "handler", "after"]

    def test_middleware_can_replace_data(self):
        handler = Mock(__name__="handler")

        def upper(event_name, data):
            return data.upper()

        self.router.add_middleware(upper)
        self.router.register_route("createRoom", handler)

        self.router.handle_event("createRoom", "abcd")

        handler.assert_called_once_with("ABCD")

    def test_after_request_runs_on_error(self):
        after = Mock(__name__="after")

        def broken(data):
            raise RuntimeError("boom")

        self.router.add_after_request(after)
        self.router.register_route("p1Choice", broken)

        with pytest.raises(RuntimeError):
            self.router.handle_event("p1Choice", {})

        kwargs = after.call_args[1]
        assert isinstance(kwargs["error"], RuntimeError)

    def test_failing_after_hook_does_not_mask_error(self):
        def broken(data):
            raise RuntimeError("boom")

        def bad_after(event_name, data, result, error=None):
            raise ValueError("after failed")

        self.router.add_after_request(bad_after)
        self.router.register_route("p1Choice", broken)

        with pytest.raises(RuntimeError, match="boom"):
            self.router.handle_event("p1Choice", {})

    def test_register_with_socketio(self):
        handler = Mock(return_value="routed", __name__="handler")
        self.router.register_route("createRoom", handler)
        self.router.register_route("joinRoom", handler)
        socketio = Mock()

        self.router.register_with_socketio(socketio)

        registered = {call[0][0]: call[0][1] for call in socketio.on_event.call_args_list}
        assert set(registered) == {"createRoom", "joinRoom"}
        assert registered["createRoom"]("ABCD") == "routed"
        handler.assert_called_with("ABCD")


class TestRouterSetup:
    """Test the module-level router helpers."""

    def test_setup_router(self):
        router = setup_router()

        assert request_logging_middleware in router._middleware
        assert router.get_registered_events() == []

    def test_logging_middleware_passes_data_through(self):
        assert request_logging_middleware("createRoom", "ABCD") == "ABCD"
