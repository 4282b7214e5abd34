"""
Room Status Enumeration

Defines the room states used throughout the application.
"""

from enum import Enum


class RoomStatus(Enum):
    """Room status enumeration."""
    WAITING = "waiting"
    PLAYING = "playing"
