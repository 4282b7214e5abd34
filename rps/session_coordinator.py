"""
Session Coordinator for the RPS game server

Runs the room protocol: create, join, choice submission, round resolution,
play again, exit and disconnect. Validates every event against registry
state, mutates the registry, and decides which events go to which
connections.

Rejections are raised as ValidationError and reported by the handler layer
to the offending connection only. Registry state is untouched on rejection.
"""

import logging
from typing import Dict, Optional

from rps.core.errors import ErrorCode, ValidationError
from rps.core.moves import Move, resolve
from rps.core.room_status import RoomStatus
from rps.message_catalog import MessageCatalog
from rps.room_registry import Room, RoomRegistry
from rps.services.broadcast_service import BroadcastService
from rps.services.deferred_task_queue import DeferredTaskQueue

logger = logging.getLogger(__name__)

ROOM_CAPACITY = 2


class SessionCoordinator:
    """Protocol state machine over the room registry."""

    def __init__(self, registry: RoomRegistry, broadcast_service: BroadcastService,
                 deferred: DeferredTaskQueue, messages: MessageCatalog):
        self.registry = registry
        self.broadcast = broadcast_service
        self.deferred = deferred
        self.messages = messages

    def _reject(self, code: ErrorCode, message_key: str, **details):
        raise ValidationError(code, self.messages.get(message_key), details or None)

    # Room lifecycle

    def create_room(self, room_id: str, sid: str) -> Room:
        """
        Create a room with the requester as player1.

        The creator is not added to the broadcast group here; that happens
        when a second player joins. An existing room is only re-seeded when
        no other live connection holds a role in it.
        """
        existing = self.registry.get(room_id)
        if existing and (existing.status == RoomStatus.PLAYING or self._live_holders(existing, sid)):
            self._reject(ErrorCode.ROOM_IN_USE, 'room_in_use', room_id=room_id)

        room = self.registry.create(room_id, sid)
        logger.info(f'Room {room_id} created by {sid}')

        self.broadcast.emit_to_player('roomCreated', {'roomId': room_id}, sid)
        return room

    def _live_holders(self, room: Room, sid: str):
        return [ref for ref in (room.player1_ref, room.player2_ref)
                if ref is not None and ref != sid and self.broadcast.is_connected(ref)]

    def join_room(self, room_id: str, sid: str) -> Optional[Room]:
        """
        Join a created room as the second player.

        Returns:
            The updated room, or None when the creator's own join was ignored

        Raises:
            ValidationError: ROOM_NOT_FOUND for unknown rooms or a vanished
                creator, ROOM_FULL when the group already holds two players
        """
        room = self.registry.get(room_id)
        if room is None:
            logger.debug(f'Join for unknown room {room_id} from {sid}')
            self._reject(ErrorCode.ROOM_NOT_FOUND, 'room_not_found', room_id=room_id)

        if room.player1_ref == sid:
            logger.debug(f'Creator {sid} joined own room {room_id}, ignoring')
            return None

        if room.player1_ref is not None:
            if not self.broadcast.is_connected(room.player1_ref):
                logger.debug(f'Creator {room.player1_ref} of room {room_id} is gone')
                self._reject(ErrorCode.ROOM_NOT_FOUND, 'room_not_found', room_id=room_id)
            if not self.broadcast.is_member(room.player1_ref, room_id):
                self.broadcast.join_group(room.player1_ref, room_id)

        self.broadcast.join_group(sid, room_id)
        group_size = self.broadcast.group_size(room_id)
        logger.debug(f'Group {room_id} size after join: {group_size}')

        if group_size > ROOM_CAPACITY:
            self.broadcast.leave_group(sid, room_id)
            logger.info(f'Room {room_id} is full, rejected {sid}')
            self._reject(ErrorCode.ROOM_FULL, 'room_full', room_id=room_id)

        room = self.registry.assign_role(room_id, sid, group_size)

        if group_size >= ROOM_CAPACITY:
            self._announce_players(room)
        else:
            logger.debug(f'Room {room_id} waiting for a second player')

        return room

    def _announce_players(self, room: Room):
        """Send playersConnected to each member with its own role flag."""
        members = self.broadcast.group_members(room.room_id)
        for member in members:
            self.broadcast.emit_to_player('playersConnected', {
                'roomId': room.room_id,
                'roomSize': len(members),
                'isPlayer1': room.player1_ref == member,
                'player1Id': room.player1_ref,
                'player2Id': room.player2_ref,
            }, member)
        logger.info(f'Players connected in room {room.room_id}')

    # Rounds

    def submit_choice(self, room_id: str, sid: str, choice: Move, is_player1: bool) -> Room:
        """
        Record one player's move for the current round.

        When this completes the round, resolution is deferred until the
        current handler has returned so both choice broadcasts go out first.
        """
        room = self.registry.get(room_id)
        if room is None:
            self._reject(ErrorCode.ROOM_NOT_FOUND, 'room_not_found', room_id=room_id)

        group_size = self.broadcast.group_size(room_id)
        if group_size < ROOM_CAPACITY:
            logger.debug(f'Choice rejected, only {group_size} player(s) in room {room_id}')
            self._reject(ErrorCode.NEED_TWO_PLAYERS, 'need_two_players')

        if room.ref_for(is_player1) != sid:
            logger.warning(f'{sid} submitted a choice for player{1 if is_player1 else 2} in room {room_id} without holding that role')
            if is_player1:
                self._reject(ErrorCode.NOT_PLAYER1, 'not_player1')
            else:
                self._reject(ErrorCode.NOT_PLAYER2, 'not_player2')

        if room.ref_for(not is_player1) is None:
            self._reject(ErrorCode.OPPONENT_NOT_IN_ROOM, 'opponent_not_in_room')

        if room.choice_for(is_player1) is not None:
            self._reject(ErrorCode.ALREADY_CHOSEN, 'already_chosen')

        self.registry.set_choice(room_id, is_player1, choice)
        room = self.registry.get(room_id)
        logger.debug(f'Player{1 if is_player1 else 2} chose {choice.value} in room {room_id}')

        self.broadcast.emit_to_room(
            _choice_event(is_player1),
            _choice_payload(room, is_player1),
            room_id,
            skip_sid=sid
        )

        # Both may have submitted before either saw the other's broadcast
        if room.choice_for(not is_player1) is not None:
            self.broadcast.emit_to_player(
                _choice_event(not is_player1),
                _choice_payload(room, not is_player1),
                sid
            )

        if room.round_complete:
            self.deferred.defer(self.resolve_round, room_id)

        return room

    def resolve_round(self, room_id: str) -> Optional[Room]:
        """Score a completed round and broadcast the result."""
        room = self.registry.get(room_id)
        if room is None or not room.round_complete:
            logger.debug(f'Skipping resolution for room {room_id}, round no longer complete')
            return None

        outcome = resolve(room.choice1, room.choice2)
        self.registry.apply_outcome(room_id, outcome)
        room = self.registry.get(room_id)

        logger.info(f'Room {room_id}: {outcome.value} ({room.choice1.value} vs {room.choice2.value}), '
                    f'score {room.score1}-{room.score2}')

        self.broadcast.emit_to_room('winner', {
            'winner': outcome.value,
            'p1Score': room.score1,
            'p2Score': room.score2,
            'p1Choice': room.choice1.value,
            'p2Choice': room.choice2.value,
        }, room_id)
        return room

    def play_again(self, room_id: str, sid: str) -> None:
        if self.registry.clear_choices(room_id):
            logger.debug(f'{sid} restarted the round in room {room_id}')
        self.broadcast.emit_to_room('playAgain', None, room_id)

    # Leaving

    def exit_game(self, room_id: str, sid: str, is_player1: bool) -> None:
        """Handle an explicit exit from a room."""
        self.broadcast.leave_group(sid, room_id)

        if not self.registry.exists(room_id):
            return

        self.registry.vacate_role(room_id, is_player1)
        logger.info(f'Player{1 if is_player1 else 2} ({sid}) left room {room_id}')

        self.broadcast.emit_to_room('opponentLeft', self._opponent_left_payload(room_id), room_id, skip_sid=sid)

        if self.broadcast.group_size(room_id) == 0:
            self.registry.delete(room_id)
            logger.info(f'Room {room_id} is empty, deleted')

    def disconnect(self, sid: str) -> Optional[str]:
        """
        Release whatever role a dropped connection held.

        Returns:
            The affected room ID, if any
        """
        room = self.registry.find_by_ref(sid)
        if room is None:
            return None

        is_player1 = room.player1_ref == sid
        self.registry.vacate_role(room.room_id, is_player1)
        logger.info(f'Player{1 if is_player1 else 2} ({sid}) disconnected from room {room.room_id}')

        remaining = [member for member in self.broadcast.group_members(room.room_id) if member != sid]
        if remaining:
            self.broadcast.emit_to_room('opponentLeft', self._opponent_left_payload(room.room_id),
                                        room.room_id, skip_sid=sid)
        else:
            self.registry.delete(room.room_id)
            logger.info(f'Room {room.room_id} is empty, deleted')

        return room.room_id

    def _opponent_left_payload(self, room_id: str) -> Dict[str, str]:
        return {'message': self.messages.get('opponent_left'), 'roomId': room_id}


def _choice_event(is_player1: bool) -> str:
    return 'p1Choice' if is_player1 else 'p2Choice'


def _choice_payload(room: Room, is_player1: bool) -> Dict:
    return {
        'rpsValue': room.choice_for(is_player1).value,
        'score': room.score_for(is_player1),
        'p1Score': room.score1,
        'p2Score': room.score2,
    }
