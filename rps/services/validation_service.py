"""
Validation Service for the RPS game server

Schema validation for inbound socket payloads. Everything is checked here,
before any coordinator logic runs.
"""

import logging
from typing import Any, Optional, Tuple

from rps.core.errors import ErrorCode, ValidationError
from rps.core.moves import Move
from rps.message_catalog import MessageCatalog

logger = logging.getLogger(__name__)


class ValidationService:
    """Service responsible for input validation."""

    DEFAULT_MAX_ROOM_ID_LENGTH = 50

    # Older clients send roomID
    ROOM_ID_KEYS = ('roomId', 'roomID')

    def __init__(self, messages: Optional[MessageCatalog] = None):
        self._messages = messages or MessageCatalog()

    def get_max_room_id_length(self) -> int:
        """Get maximum room ID length from configuration"""
        try:
            from config_factory import get_config
            return get_config().max_room_id_length
        except Exception:
            return self.DEFAULT_MAX_ROOM_ID_LENGTH

    def validate_room_id(self, room_id: Any) -> str:
        """
        Validate and normalize a room ID.

        Room IDs are opaque and case-sensitive; only surrounding whitespace
        is stripped.

        Raises:
            ValidationError: If room ID is missing, empty or too long
        """
        if not isinstance(room_id, str) or not room_id.strip():
            raise ValidationError(
                ErrorCode.INVALID_ROOM_ID,
                self._messages.get('invalid_room_id')
            )

        room_id = room_id.strip()

        max_length = self.get_max_room_id_length()
        if len(room_id) > max_length:
            raise ValidationError(
                ErrorCode.INVALID_ROOM_ID,
                f"Room ID must be {max_length} characters or less",
                {"max_length": max_length, "actual_length": len(room_id)}
            )

        return room_id

    def extract_room_id(self, data: Any) -> Any:
        """Pull the raw room ID out of a dict payload, accepting either key."""
        if not isinstance(data, dict):
            return None
        for key in self.ROOM_ID_KEYS:
            if key in data:
                return data[key]
        return None

    def validate_room_payload(self, data: Any) -> str:
        """
        Validate a dict payload carrying a room ID.

        Raises:
            ValidationError: If the payload isn't a dict or the room ID is bad
        """
        if not isinstance(data, dict):
            raise ValidationError(
                ErrorCode.INVALID_DATA,
                "Invalid data format - expected dictionary"
            )
        return self.validate_room_id(self.extract_room_id(data))

    def validate_choice(self, choice: Any) -> Move:
        """
        Validate a move.

        Raises:
            ValidationError: If the choice is not rock, paper or scissors
        """
        move = Move.parse(choice)
        if move is None:
            raise ValidationError(
                ErrorCode.INVALID_CHOICE,
                self._messages.get('invalid_choice')
            )
        return move

    def validate_choice_payload(self, data: Any) -> Tuple[str, Move]:
        """
        Validate a p1Choice/p2Choice payload.

        A malformed payload is reported as an invalid choice.

        Returns:
            Tuple of (room_id, move)

        Raises:
            ValidationError: With INVALID_CHOICE for any malformed payload
        """
        room_id = self.extract_room_id(data)
        if not isinstance(room_id, str) or not room_id.strip() or 'rpschoice' not in data:
            raise ValidationError(
                ErrorCode.INVALID_CHOICE,
                self._messages.get('invalid_choice')
            )

        move = self.validate_choice(data['rpschoice'])
        return room_id.strip(), move

    def validate_role_flag(self, data: Any, key: str) -> bool:
        """Read a boolean role flag from a dict payload. Missing means False."""
        value = data.get(key, False) if isinstance(data, dict) else False
        return value is True
