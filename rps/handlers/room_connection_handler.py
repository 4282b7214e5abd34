"""
Room Connection Handler

This module handles Socket.IO events related to room membership:
creating rooms, joining rooms and exiting games.
"""

import logging

from rps.core.errors import ErrorCode, ValidationError
from rps.error_handler import with_error_handling
from .base_handler import BaseHandler

logger = logging.getLogger(__name__)

# Join failures that clients expect as dedicated events instead of 'error'
JOIN_SIGNALS = {
    ErrorCode.INVALID_ROOM_ID: 'notValidToken',
    ErrorCode.ROOM_NOT_FOUND: 'notValidToken',
    ErrorCode.ROOM_FULL: 'roomFull',
}


class RoomConnectionHandler(BaseHandler):
    """Handler for room connection operations like create, join and exit."""

    @with_error_handling
    def handle_create_room(self, data):
        """
        Handle a player creating a room.

        Expected data: the room ID as a plain string.
        """
        self.log_handler_start('handle_create_room', data)

        room_id = self.validation_service.validate_room_id(data)
        self.coordinator.create_room(room_id, self.sid)

        self.log_handler_success('handle_create_room', f'Room {room_id} created')

    @with_error_handling
    def handle_join_room(self, data):
        """
        Handle a player joining a room.

        Expected data: the room ID as a plain string.
        """
        self.log_handler_start('handle_join_room', data)

        try:
            room_id = self.validation_service.validate_room_id(data)
            room = self.coordinator.join_room(room_id, self.sid)
        except ValidationError as e:
            signal = JOIN_SIGNALS.get(e.code)
            if signal is None:
                raise
            logger.info(f'Join rejected for {self.sid}: {e.code.value}')
            self.emit_signal(signal)
            return

        if room is not None:
            self.log_handler_success('handle_join_room', f'Joined room {room_id}')

    @with_error_handling
    def handle_exit_game(self, data):
        """
        Handle a player leaving their game.

        Expected data format:
        {
            'roomId': 'room_name',
            'player': true   # true if the sender is player 1
        }
        """
        self.log_handler_start('handle_exit_game', data)

        room_id = self.validation_service.validate_room_payload(data)
        is_player1 = self.validation_service.validate_role_flag(data, 'player')
        self.coordinator.exit_game(room_id, self.sid, is_player1)

        self.log_handler_success('handle_exit_game', f'Left room {room_id}')
