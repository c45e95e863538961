"""Room server package: exposes the card room engine over WebSockets."""

from .server import ClientSession, RoomServer

__all__ = ["ClientSession", "RoomServer"]
