from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

from .cards import Card, deal, shuffle
from .errors import DeckEmpty, GameNotStarted, NotYourTurn
from .models import Player, Room, RoomState


@dataclass
class DrawResult:
    player: Player
    card: Card
    next_player: Player
    reshuffled: bool = False


def check_turn(room: Room, connection_id: str) -> Player:
    if room.state != RoomState.PLAYING:
        raise GameNotStarted("Game has not started yet")
    current = room.current_player()
    if current is None or current.connection_id != connection_id:
        raise NotYourTurn("Not your turn")
    return current


def recycle_discard(room: Room, rng: Optional[random.Random] = None) -> bool:
    # Everything but the top card goes back into play.
    if len(room.discard_pile) <= 1:
        return False
    top = room.discard_pile.pop()
    room.deck.extend(shuffle(room.discard_pile, rng))
    room.discard_pile = [top]
    return True


def draw_card(room: Room, connection_id: str, rng: Optional[random.Random] = None) -> DrawResult:
    player = check_turn(room, connection_id)

    reshuffled = False
    if not room.deck:
        reshuffled = recycle_discard(room, rng)
        if not room.deck:
            raise DeckEmpty("No cards left to draw")

    card = deal(room.deck, 1)[0]
    player.hand.append(card)
    room.current_player_index = (room.current_player_index + 1) % len(room.players)
    return DrawResult(
        player=player,
        card=card,
        next_player=room.players[room.current_player_index],
        reshuffled=reshuffled,
    )


def turn_message(result: DrawResult) -> str:
    text = f"{result.player.name} drew a card."
    if result.reshuffled:
        text = f"The discard pile was reshuffled. {text}"
    return f"{text} It's {result.next_player.name}'s turn."
