"""
Unit tests for BroadcastService.
"""

from rps.services.broadcast_service import BroadcastService
from tests.helpers.socket_mocks import create_mock_socketio


class TestBroadcastService:
    """Test cases for BroadcastService."""

    def setup_method(self):
        self.socketio = create_mock_socketio()
        self.service = BroadcastService(self.socketio)

    def test_join_and_leave_group(self):
        self.service.join_group("sid-a", "ABCD")
        self.service.leave_group("sid-a", "ABCD")

        self.socketio.server.enter_room.assert_called_once_with("sid-a", "ABCD", namespace="/")
        self.socketio.server.leave_room.assert_called_once_with("sid-a", "ABCD", namespace="/")

    def test_group_members(self):
        self.socketio.server.manager.get_participants.return_value = iter([("sid-a", "eio-a"), ("sid-b", "eio-b")])

        assert self.service.group_members("ABCD") == ["sid-a", "sid-b"]
        self.socketio.server.manager.get_participants.assert_called_once_with("/", "ABCD")

    def test_group_size_and_membership(self):
        participants = [("sid-a", "eio-a")]
        self.socketio.server.manager.get_participants.side_effect = lambda ns, room: iter(participants)

        assert self.service.group_size("ABCD") == 1
        assert self.service.is_member("sid-a", "ABCD")
        assert not self.service.is_member("sid-b", "ABCD")

    def test_is_connected(self):
        self.socketio.server.manager.is_connected.return_value = False

        assert self.service.is_connected("sid-a") is False
        assert self.service.is_connected(None) is False
        self.socketio.server.manager.is_connected.assert_called_once_with("sid-a", "/")

    def test_emit_to_room_with_skip(self):
        self.service.emit_to_room("p1Choice", {"rpsValue": "rock"}, "ABCD", skip_sid="sid-a")

        self.socketio.emit.assert_called_once_with(
            "p1Choice", {"rpsValue": "rock"}, to="ABCD", skip_sid="sid-a", namespace="/"
        )

    def test_emit_without_payload(self):
        self.service.emit_to_room("playAgain", None, "ABCD")

        self.socketio.emit.assert_called_once_with("playAgain", to="ABCD", skip_sid=None, namespace="/")

    def test_emit_to_player(self):
        self.service.emit_to_player("roomCreated", {"roomId": "ABCD"}, "sid-a")

        self.socketio.emit.assert_called_once_with("roomCreated", {"roomId": "ABCD"}, to="sid-a", namespace="/")
