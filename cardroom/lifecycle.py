from __future__ import annotations

import random
import time
from typing import Optional

from .cards import build_deck, deal, shuffle
from .errors import InvalidRoomConfig
from .models import DECK_SIZE, HAND_SIZE, Player, Room, RoomState

# Room state transitions: waiting -> playing on a full table, plus seat removal.
# There is no way back to waiting.


def start_game(room: Room, rng: Optional[random.Random] = None, seed: Optional[int] = None) -> Room:
    if room.state != RoomState.WAITING:
        raise RuntimeError("Game already started")
    if len(room.players) * HAND_SIZE + 1 > DECK_SIZE:
        raise InvalidRoomConfig("Too many players for one deck")

    if rng is None:
        if seed is None:
            seed = int(time.time() * 1000) & 0xFFFFFFFF
        rng = random.Random(seed)
    deck = shuffle(build_deck(), rng)

    for player in room.players:
        player.hand = deal(deck, HAND_SIZE)

    room.discard_pile = [deck.pop()]
    room.deck = deck
    room.current_player_index = 0
    room.seed = seed
    room.state = RoomState.PLAYING
    return room


def remove_from_play(room: Room, index: int) -> Player:
    """Drop the player at ``index`` and keep the turn pointer on a live seat.

    A departing hand is tucked under the top of the discard pile so the card
    total stays at a full deck. If the current player is the one leaving, the
    turn passes to whoever sat after them.
    """
    player = room.players.pop(index)
    if room.state != RoomState.PLAYING:
        return player

    room.discard_pile[:0] = player.hand
    player.hand = []

    if not room.players:
        room.current_player_index = 0
        return player
    if index < room.current_player_index:
        room.current_player_index -= 1
    room.current_player_index %= len(room.players)
    return player
