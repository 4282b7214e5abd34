"""
Core error definitions for the RPS game server

Provides error codes and validation exception that don't depend on other services.
"""

from enum import Enum
from typing import Dict, Optional


class ErrorCode(Enum):
    """Standardized error codes for the application."""

    # Payload Errors
    INVALID_DATA = "INVALID_DATA"
    INVALID_ROOM_ID = "INVALID_ROOM_ID"

    # Room Management Errors
    ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
    ROOM_FULL = "ROOM_FULL"
    ROOM_IN_USE = "ROOM_IN_USE"

    # Choice Submission Errors
    INVALID_CHOICE = "INVALID_CHOICE"
    NEED_TWO_PLAYERS = "NEED_TWO_PLAYERS"
    NOT_PLAYER1 = "NOT_PLAYER1"
    NOT_PLAYER2 = "NOT_PLAYER2"
    OPPONENT_NOT_IN_ROOM = "OPPONENT_NOT_IN_ROOM"
    ALREADY_CHOSEN = "ALREADY_CHOSEN"

    # System Errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ValidationError(Exception):
    """Custom exception for validation errors."""

    def __init__(self, code: ErrorCode, message: str, details: Optional[Dict] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)
