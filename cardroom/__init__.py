"""Card room engine: rooms, dealing, turn order and per-player views."""

from .actions import DrawResult, draw_card, turn_message
from .cards import HIDDEN_CARD, RANKS, SUITS, Card, build_deck, card_value, deal, shuffle
from .errors import (
    AlreadyInRoom,
    DeckEmpty,
    GameError,
    GameInProgress,
    GameNotStarted,
    InvalidRoomConfig,
    NotYourTurn,
    RoomFull,
    RoomNotFound,
)
from .lifecycle import remove_from_play, start_game
from .models import HAND_SIZE, MAX_PLAYERS, MIN_PLAYERS, Player, Room, RoomState
from .registry import JoinResult, LeaveResult, RoomRegistry
from .views import player_list, project, project_all

__all__ = [
    "Card",
    "HIDDEN_CARD",
    "RANKS",
    "SUITS",
    "build_deck",
    "card_value",
    "deal",
    "shuffle",
    "GameError",
    "AlreadyInRoom",
    "DeckEmpty",
    "GameInProgress",
    "GameNotStarted",
    "InvalidRoomConfig",
    "NotYourTurn",
    "RoomFull",
    "RoomNotFound",
    "start_game",
    "remove_from_play",
    "DrawResult",
    "draw_card",
    "turn_message",
    "HAND_SIZE",
    "MAX_PLAYERS",
    "MIN_PLAYERS",
    "Player",
    "Room",
    "RoomState",
    "JoinResult",
    "LeaveResult",
    "RoomRegistry",
    "player_list",
    "project",
    "project_all",
]
