"""
Game Action Handler

This module handles Socket.IO events related to game actions:
submitting choices and starting another round.
"""

import logging

from rps.error_handler import with_error_handling
from .base_handler import BaseHandler

logger = logging.getLogger(__name__)


class GameActionHandler(BaseHandler):
    """Handler for in-game operations."""

    def _submit_choice(self, data, is_player1: bool):
        room_id, move = self.validation_service.validate_choice_payload(data)
        self.coordinator.submit_choice(room_id, self.sid, move, is_player1)
        return room_id, move

    @with_error_handling
    def handle_p1_choice(self, data):
        """
        Handle player 1 submitting a move.

        Expected data format:
        {
            'roomId': 'room_name',
            'rpschoice': 'rock' | 'paper' | 'scissors'
        }
        """
        self.log_handler_start('handle_p1_choice', data)
        room_id, move = self._submit_choice(data, is_player1=True)
        self.log_handler_success('handle_p1_choice', f'{move.value} in room {room_id}')

    @with_error_handling
    def handle_p2_choice(self, data):
        """Handle player 2 submitting a move. Same payload as p1Choice."""
        self.log_handler_start('handle_p2_choice', data)
        room_id, move = self._submit_choice(data, is_player1=False)
        self.log_handler_success('handle_p2_choice', f'{move.value} in room {room_id}')

    @with_error_handling
    def handle_play_again(self, data):
        """
        Handle a player asking for another round.

        Expected data format:
        {
            'roomId': 'room_name',
            'player1': true
        }
        """
        self.log_handler_start('handle_play_again', data)

        room_id = self.validation_service.validate_room_payload(data)
        self.coordinator.play_again(room_id, self.sid)

        self.log_handler_success('handle_play_again', f'New round in room {room_id}')
