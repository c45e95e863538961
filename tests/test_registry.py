import pytest

from cardroom.errors import AlreadyInRoom, GameInProgress, InvalidRoomConfig, RoomFull, RoomNotFound
from cardroom.models import Player, RoomState
from cardroom.registry import ROOM_ID_ALPHABET, RoomRegistry, parse_max_players

from .helpers import create_registry, fill_room


def test_create_room_seats_host_in_waiting_room():
    registry = create_registry()
    room = registry.create_room("conn-a", "Alice", 2)
    assert room.room_id in registry
    assert len(room.room_id) == 6
    assert all(ch in ROOM_ID_ALPHABET for ch in room.room_id)
    assert room.state == RoomState.WAITING
    assert len(room.players) == 1
    host = room.players[0]
    assert host.is_host is True
    assert host.name == "Alice"
    assert host.hand == []


def test_room_id_retries_on_collision(monkeypatch):
    registry = create_registry()
    ids = iter(["AAAAAA", "AAAAAA", "BBBBBB"])
    monkeypatch.setattr(registry, "_new_room_id", lambda: next(ids))
    first = registry.create_room("conn-a", "Alice", 2)
    second = registry.create_room("conn-b", "Bob", 2)
    assert first.room_id == "AAAAAA"
    assert second.room_id == "BBBBBB"


@pytest.mark.parametrize("value", [None, "abc", 0, -3, 1, 13, 2.5, True, float("inf"), float("nan")])
def test_invalid_max_players_rejected(value):
    registry = create_registry()
    with pytest.raises(InvalidRoomConfig):
        registry.create_room("conn-a", "Alice", value)
    assert len(registry) == 0


def test_max_players_coerced_from_string():
    assert parse_max_players("4") == 4
    assert parse_max_players(12) == 12
    assert parse_max_players(3.0) == 3


def test_blank_player_name_rejected():
    registry = create_registry()
    with pytest.raises(InvalidRoomConfig, match="playerName"):
        registry.create_room("conn-a", "   ", 2)


def test_join_preserves_order_and_does_not_start_early():
    registry = create_registry()
    room = registry.create_room("conn-0", "Host", 3)
    result = registry.join_room(room.room_id, "conn-1", "Guest")
    assert result.started is False
    assert result.player.is_host is False
    assert [p.name for p in room.players] == ["Host", "Guest"]
    assert room.state == RoomState.WAITING


def test_join_missing_room_raises_not_found():
    registry = create_registry()
    with pytest.raises(RoomNotFound):
        registry.join_room("NOPE00", "conn-1", "Bob")


def test_join_full_room_raises_room_full():
    registry = create_registry()
    room = registry.create_room("conn-0", "Host", 2)
    room.players.append(Player(connection_id="ghost", name="Ghost"))
    with pytest.raises(RoomFull):
        registry.join_room(room.room_id, "conn-2", "Late")


def test_join_started_room_rejected():
    registry = create_registry()
    room, conns = fill_room(registry, players=3)
    with pytest.raises(RoomFull):
        registry.join_room(room.room_id, "conn-8", "Late")
    registry.remove_player(conns[1])
    with pytest.raises(GameInProgress):
        registry.join_room(room.room_id, "conn-9", "Late")


def test_connection_can_only_sit_in_one_room():
    registry = create_registry()
    room = registry.create_room("conn-0", "Host", 3)
    with pytest.raises(AlreadyInRoom):
        registry.create_room("conn-0", "Host", 2)
    with pytest.raises(AlreadyInRoom):
        registry.join_room(room.room_id, "conn-0", "Again")


def test_last_player_leaving_closes_room():
    registry = create_registry()
    room = registry.create_room("conn-a", "Alice", 2)
    result = registry.remove_player("conn-a")
    assert result is not None
    assert result.closed
    assert room.room_id not in registry
    with pytest.raises(RoomNotFound):
        registry.join_room(room.room_id, "conn-b", "Bob")


def test_remove_player_keeps_others_in_order():
    registry = create_registry()
    room = registry.create_room("conn-0", "A", 4)
    registry.join_room(room.room_id, "conn-1", "B")
    registry.join_room(room.room_id, "conn-2", "C")
    result = registry.remove_player("conn-1")
    assert result is not None
    assert not result.closed
    assert result.player.name == "B"
    assert [p.name for p in room.players] == ["A", "C"]
    assert registry.room_for("conn-1") is None
    assert registry.room_for("conn-2") is room


def test_remove_unknown_connection_is_noop():
    registry = create_registry()
    registry.create_room("conn-0", "A", 2)
    assert registry.remove_player("stranger") is None
    assert len(registry) == 1


def test_connection_can_join_again_after_leaving():
    registry = RoomRegistry()
    first = registry.create_room("conn-0", "A", 3)
    registry.join_room(first.room_id, "conn-1", "B")
    registry.remove_player("conn-1")
    second = registry.create_room("conn-1", "B", 2)
    assert registry.room_for("conn-1") is second


def test_room_errors_take_precedence_over_bad_names():
    registry = create_registry()
    room, _ = fill_room(registry, players=2)
    with pytest.raises(RoomFull):
        registry.join_room(room.room_id, "conn-7", "")
    with pytest.raises(RoomNotFound):
        registry.join_room("NOPE00", "conn-7", None)
