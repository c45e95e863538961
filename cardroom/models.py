from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .cards import Card

DECK_SIZE = 52
HAND_SIZE = 4
ROOM_ID_LENGTH = 6
MIN_PLAYERS = 2
# Every seat gets a full hand and one card seeds the discard pile.
MAX_PLAYERS = (DECK_SIZE - 1) // HAND_SIZE


class RoomState(str, Enum):
    WAITING = "waiting"
    PLAYING = "playing"


@dataclass
class Player:
    connection_id: str
    name: str
    hand: List[Card] = field(default_factory=list)
    is_host: bool = False


@dataclass
class Room:
    room_id: str
    max_players: int
    players: List[Player] = field(default_factory=list)
    state: RoomState = RoomState.WAITING
    deck: List[Card] = field(default_factory=list)
    discard_pile: List[Card] = field(default_factory=list)
    current_player_index: int = 0
    seed: Optional[int] = None

    def index_of(self, connection_id: str) -> Optional[int]:
        for idx, player in enumerate(self.players):
            if player.connection_id == connection_id:
                return idx
        return None

    def find_player(self, connection_id: str) -> Optional[Player]:
        idx = self.index_of(connection_id)
        return self.players[idx] if idx is not None else None

    def is_full(self) -> bool:
        return len(self.players) >= self.max_players

    def current_player(self) -> Optional[Player]:
        if self.state != RoomState.PLAYING or not self.players:
            return None
        return self.players[self.current_player_index]

    def top_card(self) -> Optional[Card]:
        return self.discard_pile[-1] if self.discard_pile else None

    def card_count(self) -> int:
        return len(self.deck) + len(self.discard_pile) + sum(len(p.hand) for p in self.players)
