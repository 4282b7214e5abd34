"""
Socket.IO event handlers for the RPS game server.

This module provides the main registration function and the
connection/disconnection handlers.
"""

import logging

from flask import request

from config_factory import get_config
from container import get_container
from .socket_event_router import setup_router
from .room_connection_handler import RoomConnectionHandler
from .game_action_handler import GameActionHandler

logger = logging.getLogger(__name__)


def register_socket_handlers(socketio_instance):
    """Register all socket handlers with the SocketIO instance."""
    router = setup_router()

    room_handler = RoomConnectionHandler()
    game_handler = GameActionHandler()

    # connect/disconnect bypass the router, they have special signatures
    socketio_instance.on_event('connect', handle_connect)
    socketio_instance.on_event('disconnect', handle_disconnect)

    router.register_route('createRoom', room_handler.handle_create_room)
    router.register_route('joinRoom', room_handler.handle_join_room)
    router.register_route('exitGame', room_handler.handle_exit_game)

    router.register_route('p1Choice', game_handler.handle_p1_choice)
    router.register_route('p2Choice', game_handler.handle_p2_choice)
    router.register_route('playerClicked', game_handler.handle_play_again)

    router.add_after_request(drain_deferred_tasks)

    router.register_with_socketio(socketio_instance)

    logger.info(f"Registered {len(router.get_registered_events())} socket event handlers")
    return router


def drain_deferred_tasks(event_name, data, result, error=None):
    """Run work deferred by the handler once its own emits are out."""
    deferred = get_container().get('DeferredTaskQueue')
    ran = deferred.drain()
    if ran:
        logger.debug(f'Ran {ran} deferred task(s) after {event_name}')


def handle_connect(auth=None):
    """Handle client connection with optional Origin enforcement in production."""
    app_config = get_config()
    origin = request.headers.get('Origin')
    # Enforce Origin in production if a CORS allowlist is configured
    if app_config.is_production and app_config.cors_allowed_origins:
        if origin and origin not in app_config.cors_allowed_origins:
            logger.warning(f'Rejecting connection from disallowed Origin: {origin}')
            return False
    logger.info(f'Client connected: {request.sid} from Origin: {origin}')  # type: ignore[attr-defined]


def handle_disconnect(reason=None):
    """Release the dropped connection's role, if it held one."""
    coordinator = get_container().get('SessionCoordinator')
    logger.info(f'Client disconnected: {request.sid} ({reason})')  # type: ignore[attr-defined]
    coordinator.disconnect(request.sid)  # type: ignore[attr-defined]
