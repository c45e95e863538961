from __future__ import annotations

import random
from typing import List, Tuple

from cardroom.models import Room
from cardroom.registry import RoomRegistry


def create_registry(seed: int = 42) -> RoomRegistry:
    return RoomRegistry(rng=random.Random(seed))


def fill_room(registry: RoomRegistry, players: int = 2, max_players: int | None = None) -> Tuple[Room, List[str]]:
    """Create a room hosted by conn-0 and seat ``players`` in total."""
    limit = max_players if max_players is not None else players
    room = registry.create_room("conn-0", "Player0", limit)
    connections = ["conn-0"]
    for idx in range(1, players):
        registry.join_room(room.room_id, f"conn-{idx}", f"Player{idx}")
        connections.append(f"conn-{idx}")
    return room, connections


def current_connection(room: Room) -> str:
    player = room.current_player()
    assert player is not None
    return player.connection_id
