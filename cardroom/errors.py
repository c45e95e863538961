from __future__ import annotations

from typing import Optional


class GameError(Exception):
    """Rejected request. ``code`` goes on the wire, ``msg`` is for humans."""

    code = "GAME_ERROR"

    def __init__(self, msg: str, code: Optional[str] = None) -> None:
        super().__init__(msg)
        self.msg = msg
        if code is not None:
            self.code = code


class RoomNotFound(GameError):
    code = "ROOM_NOT_FOUND"


class RoomFull(GameError):
    code = "ROOM_FULL"


class GameInProgress(GameError):
    code = "GAME_IN_PROGRESS"


class GameNotStarted(GameError):
    code = "GAME_NOT_STARTED"


class NotYourTurn(GameError):
    code = "NOT_YOUR_TURN"


class InvalidRoomConfig(GameError):
    code = "INVALID_ROOM_CONFIG"


class AlreadyInRoom(GameError):
    code = "ALREADY_IN_ROOM"


class DeckEmpty(GameError):
    code = "DECK_EMPTY"
