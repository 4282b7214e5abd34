"""
Broadcast Service - Centralized Socket.IO group management and broadcasting.

This is the only place that talks to the Socket.IO server directly:
- Broadcast group membership (join, leave, size, members)
- Room-wide broadcasts, optionally skipping the sender
- Individual player messages
- Liveness checks for stored connection IDs
"""

import logging
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class BroadcastService:
    """Centralized service for all Socket.IO broadcasting operations."""

    def __init__(self, socketio, namespace: str = '/'):
        """Initialize the broadcast service.

        Args:
            socketio: Flask-SocketIO instance for emitting messages
            namespace: Socket.IO namespace the game runs on
        """
        self.socketio = socketio
        self.namespace = namespace

    @property
    def _server(self):
        return self.socketio.server

    # Group membership

    def join_group(self, socket_id: str, room_id: str):
        """Add a connection to a room's broadcast group."""
        self._server.enter_room(socket_id, room_id, namespace=self.namespace)
        logger.debug(f'Client {socket_id} joined group {room_id}')

    def leave_group(self, socket_id: str, room_id: str):
        """Remove a connection from a room's broadcast group."""
        self._server.leave_room(socket_id, room_id, namespace=self.namespace)
        logger.debug(f'Client {socket_id} left group {room_id}')

    def group_members(self, room_id: str) -> List[str]:
        """Connection IDs currently in a room's broadcast group."""
        return [sid for sid, _ in self._server.manager.get_participants(self.namespace, room_id)]

    def group_size(self, room_id: str) -> int:
        return len(self.group_members(room_id))

    def is_member(self, socket_id: str, room_id: str) -> bool:
        return socket_id in self.group_members(room_id)

    def is_connected(self, socket_id: Optional[str]) -> bool:
        """Check whether a stored connection ID still belongs to a live connection."""
        if not socket_id:
            return False
        return self._server.manager.is_connected(socket_id, self.namespace)

    # Emission

    def emit_to_room(self, event: str, data: Optional[Dict[str, Any]], room_id: str,
                     skip_sid: Optional[str] = None):
        """Emit an event to all players in a room, optionally skipping one."""
        args = () if data is None else (data,)
        self.socketio.emit(event, *args, to=room_id, skip_sid=skip_sid, namespace=self.namespace)
        logger.debug(f'Emitted {event} to room {room_id}' + (f' (skipping {skip_sid})' if skip_sid else ''))

    def emit_to_player(self, event: str, data: Optional[Dict[str, Any]], socket_id: str):
        """Emit an event to a specific player."""
        args = () if data is None else (data,)
        self.socketio.emit(event, *args, to=socket_id, namespace=self.namespace)
        logger.debug(f'Emitted {event} to player {socket_id}')
