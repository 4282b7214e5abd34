"""
Unit tests for RoomRegistry.
"""

import pytest

from rps.core.errors import ErrorCode, ValidationError
from rps.core.moves import Move, Outcome
from rps.core.room_status import RoomStatus
from rps.room_registry import Room, RoomRegistry


class TestRoomRegistryCreate:
    """Test cases for room creation and lookup."""

    def setup_method(self):
        self.registry = RoomRegistry()

    def test_create_room_success(self):
        room = self.registry.create("ABCD1234", "sid-a")

        assert room.room_id == "ABCD1234"
        assert room.player1_ref == "sid-a"
        assert room.player2_ref is None
        assert room.choice1 is None and room.choice2 is None
        assert room.score1 == 0 and room.score2 == 0
        assert room.status == RoomStatus.WAITING

    @pytest.mark.parametrize("room_id", ["", "   ", None])
    def test_create_rejects_empty_id(self, room_id):
        with pytest.raises(ValidationError) as exc_info:
            self.registry.create(room_id, "sid-a")

        assert exc_info.value.code == ErrorCode.INVALID_ROOM_ID
        assert self.registry.count() == 0

    def test_create_overwrites_existing_entry(self):
        self.registry.create("ABCD1234", "sid-a")
        self.registry.set_choice("ABCD1234", True, Move.ROCK)

        room = self.registry.create("ABCD1234", "sid-c")

        assert room.player1_ref == "sid-c"
        assert room.choice1 is None
        assert self.registry.count() == 1

    def test_room_ids_are_case_sensitive(self):
        self.registry.create("abcd", "sid-a")

        assert self.registry.get("ABCD") is None
        assert self.registry.exists("abcd")

    def test_get_returns_copy(self):
        self.registry.create("ABCD1234", "sid-a")

        room = self.registry.get("ABCD1234")
        room.score1 = 99

        assert self.registry.get("ABCD1234").score1 == 0

    def test_get_nonexistent(self):
        assert self.registry.get("NOPE9999") is None


class TestRoomRegistryAssignRole:
    """Test cases for assign_role."""

    def setup_method(self):
        self.registry = RoomRegistry()

    def test_fills_player2_after_creator(self):
        self.registry.create("ABCD1234", "sid-a")

        room = self.registry.assign_role("ABCD1234", "sid-b", 2)

        assert room.player1_ref == "sid-a"
        assert room.player2_ref == "sid-b"
        assert room.status == RoomStatus.PLAYING

    def test_fills_player1_before_player2(self):
        self.registry.create("ABCD1234", "sid-a")
        self.registry.assign_role("ABCD1234", "sid-b", 2)
        self.registry.vacate_role("ABCD1234", True)

        room = self.registry.assign_role("ABCD1234", "sid-c", 2)

        assert room.player1_ref == "sid-c"
        assert room.player2_ref == "sid-b"

    def test_is_idempotent_for_existing_holder(self):
        self.registry.create("ABCD1234", "sid-a")
        self.registry.assign_role("ABCD1234", "sid-b", 2)

        room = self.registry.assign_role("ABCD1234", "sid-b", 2)

        assert room.player1_ref == "sid-a"
        assert room.player2_ref == "sid-b"

    def test_fabricates_missing_room(self):
        room = self.registry.assign_role("GHOST", "sid-a", 1)

        assert room.player1_ref == "sid-a"
        assert room.player2_ref is None
        assert room.status == RoomStatus.PLAYING
        assert self.registry.exists("GHOST")

    def test_resets_orphaned_room(self):
        self.registry.create("ABCD1234", "sid-a")
        self.registry.assign_role("ABCD1234", "sid-b", 2)
        self.registry.vacate_role("ABCD1234", True)
        self.registry.vacate_role("ABCD1234", False)

        room = self.registry.assign_role("ABCD1234", "sid-c", 1)

        assert room.player1_ref == "sid-c"
        assert room.player2_ref is None
        assert room.status == RoomStatus.WAITING

    def test_pairing_clears_choices(self):
        self.registry.create("ABCD1234", "sid-a")
        self.registry.set_choice("ABCD1234", True, Move.PAPER)

        room = self.registry.assign_role("ABCD1234", "sid-b", 2)

        assert room.choice1 is None
        assert room.choice2 is None

    def test_single_member_keeps_choices(self):
        self.registry.create("ABCD1234", "sid-a")
        self.registry.assign_role("ABCD1234", "sid-b", 2)
        self.registry.vacate_role("ABCD1234", True)
        self.registry.set_choice("ABCD1234", False, Move.ROCK)

        room = self.registry.assign_role("ABCD1234", "sid-c", 1)

        assert room.player1_ref == "sid-c"
        assert room.player2_ref == "sid-b"
        assert room.choice2 == Move.ROCK


class TestRoomRegistryRounds:
    """Test cases for choices and scoring."""

    def setup_method(self):
        self.registry = RoomRegistry()
        self.registry.create("ABCD1234", "sid-a")
        self.registry.assign_role("ABCD1234", "sid-b", 2)

    def test_set_choice_per_role(self):
        assert self.registry.set_choice("ABCD1234", True, Move.ROCK) is True
        assert self.registry.set_choice("ABCD1234", False, Move.PAPER) is True

        room = self.registry.get("ABCD1234")
        assert room.choice1 == Move.ROCK
        assert room.choice2 == Move.PAPER
        assert room.round_complete

    def test_set_choice_missing_room(self):
        assert self.registry.set_choice("NOPE9999", True, Move.ROCK) is False

    def test_clear_choices(self):
        self.registry.set_choice("ABCD1234", True, Move.ROCK)
        self.registry.set_choice("ABCD1234", False, Move.ROCK)

        assert self.registry.clear_choices("ABCD1234") is True

        room = self.registry.get("ABCD1234")
        assert room.choice1 is None and room.choice2 is None

    @pytest.mark.parametrize("outcome,expected", [
        (Outcome.A_WINS, (1, 0)),
        (Outcome.B_WINS, (0, 1)),
        (Outcome.DRAW, (0, 0)),
    ])
    def test_apply_outcome(self, outcome, expected):
        self.registry.apply_outcome("ABCD1234", outcome)

        room = self.registry.get("ABCD1234")
        assert (room.score1, room.score2) == expected

    def test_scores_accumulate(self):
        for outcome in (Outcome.A_WINS, Outcome.A_WINS, Outcome.B_WINS, Outcome.DRAW):
            self.registry.apply_outcome("ABCD1234", outcome)

        room = self.registry.get("ABCD1234")
        assert (room.score1, room.score2) == (2, 1)

    def test_apply_outcome_missing_room(self):
        assert self.registry.apply_outcome("NOPE9999", Outcome.A_WINS) is False


class TestRoomRegistryTeardown:
    """Test cases for vacate, delete and enumeration."""

    def setup_method(self):
        self.registry = RoomRegistry()
        self.registry.create("ABCD1234", "sid-a")
        self.registry.assign_role("ABCD1234", "sid-b", 2)

    def test_vacate_resets_everything(self):
        self.registry.apply_outcome("ABCD1234", Outcome.A_WINS)
        self.registry.apply_outcome("ABCD1234", Outcome.A_WINS)
        self.registry.apply_outcome("ABCD1234", Outcome.B_WINS)
        self.registry.set_choice("ABCD1234", False, Move.ROCK)

        assert self.registry.vacate_role("ABCD1234", True) is True

        room = self.registry.get("ABCD1234")
        assert room.player1_ref is None
        assert room.player2_ref == "sid-b"
        assert room.choice1 is None and room.choice2 is None
        assert room.score1 == 0 and room.score2 == 0
        assert room.status == RoomStatus.WAITING

    def test_vacate_missing_room(self):
        assert self.registry.vacate_role("NOPE9999", True) is False

    def test_delete(self):
        assert self.registry.delete("ABCD1234") is True
        assert not self.registry.exists("ABCD1234")
        assert self.registry.delete("ABCD1234") is False

    def test_all_and_find_by_ref(self):
        self.registry.create("OTHER", "sid-c")

        rooms = self.registry.all()

        assert sorted(room.room_id for room in rooms) == ["ABCD1234", "OTHER"]
        assert all(isinstance(room, Room) for room in rooms)
        assert self.registry.find_by_ref("sid-b").room_id == "ABCD1234"
        assert self.registry.find_by_ref("sid-c").room_id == "OTHER"
        assert self.registry.find_by_ref("sid-z") is None
