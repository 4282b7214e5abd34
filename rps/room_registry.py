"""
Room Registry for the RPS game server

Owns the authoritative in-memory map of room ID -> Room. All mutations go
through this class; callers only ever see copies.
"""

import copy
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from rps.core.errors import ErrorCode, ValidationError
from rps.core.moves import Move, Outcome
from rps.core.room_status import RoomStatus

logger = logging.getLogger(__name__)


@dataclass
class Room:
    """State of one two-player room."""
    room_id: str
    player1_ref: Optional[str] = None
    player2_ref: Optional[str] = None
    choice1: Optional[Move] = None
    choice2: Optional[Move] = None
    score1: int = 0
    score2: int = 0
    status: RoomStatus = RoomStatus.WAITING

    def holds(self, ref: str) -> bool:
        """Check whether a connection occupies either role."""
        return ref is not None and ref in (self.player1_ref, self.player2_ref)

    def ref_for(self, is_player1: bool) -> Optional[str]:
        return self.player1_ref if is_player1 else self.player2_ref

    def choice_for(self, is_player1: bool) -> Optional[Move]:
        return self.choice1 if is_player1 else self.choice2

    def score_for(self, is_player1: bool) -> int:
        return self.score1 if is_player1 else self.score2

    @property
    def round_complete(self) -> bool:
        return self.choice1 is not None and self.choice2 is not None


class RoomRegistry:
    """In-memory room store. One instance per process, injected where needed."""

    def __init__(self):
        self._rooms: Dict[str, Room] = {}

    def create(self, room_id: str, creator_ref: str) -> Room:
        """
        Create a waiting room with the creator in the player1 slot.

        Overwrites any existing entry for the same ID.

        Raises:
            ValidationError: If the room ID is empty
        """
        if not isinstance(room_id, str) or not room_id.strip():
            raise ValidationError(ErrorCode.INVALID_ROOM_ID, "Room ID cannot be empty")

        if room_id in self._rooms:
            logger.debug(f"Re-seeding existing room {room_id}")

        room = Room(room_id=room_id, player1_ref=creator_ref)
        self._rooms[room_id] = room
        return copy.copy(room)

    def get(self, room_id: str) -> Optional[Room]:
        """Get a copy of a room, or None if it doesn't exist."""
        room = self._rooms.get(room_id)
        return copy.copy(room) if room else None

    def exists(self, room_id: str) -> bool:
        return room_id in self._rooms

    def assign_role(self, room_id: str, ref: str, observed_group_size: int) -> Room:
        """
        Put a connection into the first free role of a room.

        Args:
            room_id: ID of the room
            ref: Connection ID of the joining player
            observed_group_size: Broadcast group size seen after the join

        Returns:
            Copy of the updated room
        """
        room = self._rooms.get(room_id)
        if room is None:
            # Out-of-order event: nothing was created for this ID yet
            room = Room(room_id=room_id, player1_ref=ref, status=RoomStatus.PLAYING)
            self._rooms[room_id] = room
            logger.debug(f"Fabricated room {room_id} for {ref}")
            return copy.copy(room)

        if room.player1_ref is None and room.player2_ref is None and observed_group_size == 1:
            logger.debug(f"Resetting orphaned room {room_id}")
            room = Room(room_id=room_id)
            self._rooms[room_id] = room

        if not room.holds(ref):
            if room.player1_ref is None:
                room.player1_ref = ref
            elif room.player2_ref is None:
                room.player2_ref = ref

        if observed_group_size >= 2:
            room.choice1 = None
            room.choice2 = None

        if room.player1_ref is not None and room.player2_ref is not None:
            room.status = RoomStatus.PLAYING
        else:
            room.status = RoomStatus.WAITING

        return copy.copy(room)

    def set_choice(self, room_id: str, is_player1: bool, choice: Move) -> bool:
        room = self._rooms.get(room_id)
        if room is None:
            return False

        if is_player1:
            room.choice1 = choice
        else:
            room.choice2 = choice
        return True

    def clear_choices(self, room_id: str) -> bool:
        """Null both choice slots for the next round."""
        room = self._rooms.get(room_id)
        if room is None:
            return False

        room.choice1 = None
        room.choice2 = None
        return True

    def apply_outcome(self, room_id: str, outcome: Outcome) -> bool:
        """Credit the round winner. Draws leave scores alone."""
        room = self._rooms.get(room_id)
        if room is None:
            return False

        if outcome == Outcome.A_WINS:
            room.score1 += 1
        elif outcome == Outcome.B_WINS:
            room.score2 += 1
        return True

    def vacate_role(self, room_id: str, is_player1: bool) -> bool:
        """
        Free a role and reset the room.

        Both scores go back to zero as well as the choices, so whoever pairs
        up next starts at 0-0.
        """
        room = self._rooms.get(room_id)
        if room is None:
            return False

        if is_player1:
            room.player1_ref = None
        else:
            room.player2_ref = None

        room.choice1 = None
        room.choice2 = None
        room.score1 = 0
        room.score2 = 0
        room.status = RoomStatus.WAITING
        return True

    def delete(self, room_id: str) -> bool:
        """Remove a room. Returns False if it didn't exist."""
        if room_id not in self._rooms:
            return False
        del self._rooms[room_id]
        logger.debug(f"Deleted room {room_id}")
        return True

    def all(self) -> List[Room]:
        """Copies of every room, for disconnect scanning."""
        return [copy.copy(room) for room in self._rooms.values()]

    def find_by_ref(self, ref: str) -> Optional[Room]:
        """Find the room where a connection holds a role."""
        for room in self._rooms.values():
            if room.holds(ref):
                return copy.copy(room)
        return None

    def count(self) -> int:
        return len(self._rooms)
