"""
Socket Event Router

This module provides declarative event-to-handler mapping with middleware support,
request logging, and after-request hooks for Socket.IO events.
"""

import logging
from functools import wraps
from typing import Any, Callable, Dict, List

from flask import request

logger = logging.getLogger(__name__)


class EventRouteNotFoundError(Exception):
    """Raised when an event route is not found."""
    pass


class SocketEventRouter:
    """
    Router for Socket.IO events with middleware support and logging.

    Every dispatch runs middleware, the route handler and then
    after_request handlers, in that order. After_request handlers also run
    when the route handler raises.
    """

    def __init__(self):
        self._routes: Dict[str, Callable] = {}
        self._middleware: List[Callable] = []
        self._after_request_handlers: List[Callable] = []

    def register_route(self, event_name: str, handler: Callable) -> None:
        """Register an event handler for a specific event."""
        self._routes[event_name] = handler
        logger.debug(f"Registered route: {event_name} -> {handler.__name__}")

    def add_middleware(self, middleware: Callable) -> None:
        """Add middleware that will be executed for all events."""
        self._middleware.append(middleware)
        logger.debug(f"Added middleware: {middleware.__name__}")

    def add_after_request(self, handler: Callable) -> None:
        """Add a handler that will be executed after every request."""
        self._after_request_handlers.append(handler)
        logger.debug(f"Added after_request handler: {handler.__name__}")

    def handle_event(self, event_name: str, data: Any = None) -> Any:
        """
        Handle an incoming Socket.IO event.

        Args:
            event_name: The name of the event to handle
            data: The event data

        Returns:
            The result from the handler (if any)

        Raises:
            EventRouteNotFoundError: If no handler is registered for the event
        """
        if event_name not in self._routes:
            raise EventRouteNotFoundError(f"No handler registered for event: {event_name}")

        logger.debug(f"Handling event: {event_name} from client: {request.sid}")  # type: ignore[attr-defined]

        try:
            for middleware in self._middleware:
                data = middleware(event_name, data) or data

            result = self._routes[event_name](data)

            for handler in self._after_request_handlers:
                handler(event_name, data, result)

            logger.debug(f"Successfully handled event: {event_name}")
            return result

        except Exception as e:
            logger.error(f"Error handling event {event_name}: {str(e)}")
            for handler in self._after_request_handlers:
                try:
                    handler(event_name, data, None, error=e)
                except Exception as after_error:
                    logger.error(f"Error in after_request handler: {str(after_error)}")
            raise

    def get_registered_events(self) -> List[str]:
        """Get a list of all registered event names."""
        return list(self._routes.keys())

    def register_with_socketio(self, socketio_instance) -> None:
        """Bind every registered route to the SocketIO instance."""
        for event_name in self.get_registered_events():
            socketio_instance.on_event(event_name, self._create_socketio_handler(event_name))
            logger.debug(f"Registered SocketIO handler for: {event_name}")

    def _create_socketio_handler(self, event_name: str):
        """Create a handler function for SocketIO that routes through this router."""
        @wraps(self.handle_event)
        def socketio_handler(data=None):
            return self.handle_event(event_name, data)
        return socketio_handler


def request_logging_middleware(event_name: str, data: Any) -> Any:
    """Middleware for logging requests."""
    logger.info(f"Processing {event_name}")
    return data


def setup_router() -> SocketEventRouter:
    """Create a router with the default middleware."""
    router = SocketEventRouter()
    router.add_middleware(request_logging_middleware)

    logger.info("Socket event router initialized")
    return router
