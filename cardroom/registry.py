from __future__ import annotations

import logging
import random
import string
from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from . import actions, lifecycle
from .errors import AlreadyInRoom, GameInProgress, InvalidRoomConfig, RoomFull, RoomNotFound
from .models import MAX_PLAYERS, MIN_PLAYERS, ROOM_ID_LENGTH, Player, Room, RoomState

LOGGER = logging.getLogger("cardroom")

ROOM_ID_ALPHABET = string.ascii_uppercase + string.digits


@dataclass
class JoinResult:
    room: Room
    player: Player
    started: bool = False


@dataclass
class LeaveResult:
    room_id: str
    player: Player
    room: Optional[Room]

    @property
    def closed(self) -> bool:
        return self.room is None


def parse_max_players(value: object) -> int:
    if isinstance(value, bool):
        raise InvalidRoomConfig("maxPlayers must be a number")
    try:
        max_players = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        raise InvalidRoomConfig("maxPlayers must be a number") from None
    if isinstance(value, float) and value != max_players:
        raise InvalidRoomConfig("maxPlayers must be a whole number")
    if not MIN_PLAYERS <= max_players <= MAX_PLAYERS:
        raise InvalidRoomConfig(f"maxPlayers must be between {MIN_PLAYERS} and {MAX_PLAYERS}")
    return max_players


def clean_name(value: object) -> str:
    name = value.strip() if isinstance(value, str) else ""
    if not name:
        raise InvalidRoomConfig("playerName required")
    return name


class RoomRegistry:
    """Every live room in the process, keyed by room id.

    Rooms are created by their host and dropped as soon as the last player
    leaves. No networking here; callers serialize access.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()
        self.rooms: Dict[str, Room] = {}
        self._membership: Dict[str, str] = {}

    def __len__(self) -> int:
        return len(self.rooms)

    def __contains__(self, room_id: object) -> bool:
        return room_id in self.rooms

    def __iter__(self) -> Iterator[Room]:
        return iter(list(self.rooms.values()))

    def get(self, room_id: str) -> Room:
        room = self.rooms.get(room_id)
        if room is None:
            raise RoomNotFound(f"Room {room_id} does not exist")
        return room

    def room_for(self, connection_id: str) -> Optional[Room]:
        room_id = self._membership.get(connection_id)
        return self.rooms.get(room_id) if room_id else None

    # Membership --------------------------------------------------------

    def create_room(self, connection_id: str, player_name: object, max_players: object) -> Room:
        self._ensure_unseated(connection_id)
        name = clean_name(player_name)
        limit = parse_max_players(max_players)

        room_id = self._new_room_id()
        while room_id in self.rooms:
            room_id = self._new_room_id()

        room = Room(room_id=room_id, max_players=limit)
        room.players.append(Player(connection_id=connection_id, name=name, is_host=True))
        self.rooms[room_id] = room
        self._membership[connection_id] = room_id
        LOGGER.info("Room %s created by %s (max_players=%s)", room_id, name, limit)
        return room

    def join_room(self, room_id: str, connection_id: str, player_name: object) -> JoinResult:
        room = self.get(room_id)
        if room.is_full():
            raise RoomFull(f"Room {room_id} is full")
        if room.state != RoomState.WAITING:
            raise GameInProgress(f"Game in room {room_id} has already started")
        self._ensure_unseated(connection_id)
        name = clean_name(player_name)

        player = Player(connection_id=connection_id, name=name)
        room.players.append(player)
        self._membership[connection_id] = room_id
        LOGGER.info("%s joined room %s (%s/%s)", name, room_id, len(room.players), room.max_players)

        started = False
        if room.is_full():
            lifecycle.start_game(room, rng=self.rng)
            started = True
            LOGGER.info("Game started in room %s with %s players", room_id, len(room.players))
        return JoinResult(room=room, player=player, started=started)

    def draw_card(self, room_id: str, connection_id: str) -> actions.DrawResult:
        room = self.get(room_id)
        result = actions.draw_card(room, connection_id, rng=self.rng)
        LOGGER.debug(
            "Room %s: %s drew %s, next=%s, deck=%s",
            room_id,
            result.player.name,
            result.card.label,
            result.next_player.name,
            len(room.deck),
        )
        return result

    def remove_player(self, connection_id: str) -> Optional[LeaveResult]:
        room_id = self._membership.pop(connection_id, None)
        if room_id is None:
            return None
        room = self.rooms[room_id]
        index = room.index_of(connection_id)
        assert index is not None
        player = lifecycle.remove_from_play(room, index)

        if not room.players:
            del self.rooms[room_id]
            LOGGER.info("Room %s closed", room_id)
            return LeaveResult(room_id=room_id, player=player, room=None)
        LOGGER.info("%s left room %s (%s remaining)", player.name, room_id, len(room.players))
        return LeaveResult(room_id=room_id, player=player, room=room)

    # Helpers -----------------------------------------------------------

    def _ensure_unseated(self, connection_id: str) -> None:
        if connection_id in self._membership:
            raise AlreadyInRoom(f"Already seated in room {self._membership[connection_id]}")

    def _new_room_id(self) -> str:
        return "".join(self.rng.choice(ROOM_ID_ALPHABET) for _ in range(ROOM_ID_LENGTH))
