from __future__ import annotations

import asyncio
import json
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Awaitable, Callable, Dict, Iterable, Optional

import websockets
from websockets.asyncio.server import ServerConnection, serve

from cardroom.actions import turn_message
from cardroom.errors import GameError
from cardroom.models import RoomState
from cardroom.registry import RoomRegistry
from cardroom.views import player_list, project_all

LOGGER = logging.getLogger("room_server")

# RoomServer binds the room engine to WebSocket clients. Sockets, envelopes and
# fan-out live here; RoomRegistry stays free of networking.


@dataclass
class ClientSession:
    connection_id: str
    websocket: ServerConnection


Handler = Callable[[ClientSession, Dict[str, object]], Awaitable[None]]


class RoomServer:
    def __init__(self, registry: Optional[RoomRegistry] = None) -> None:
        self.registry = registry or RoomRegistry()
        self.sessions: Dict[str, ClientSession] = {}
        # Every room mutation and the messages it produces run under this lock,
        # so each client sees updates in the order they were applied.
        self.lock = asyncio.Lock()
        self.handlers: Dict[str, Handler] = {
            "createRoom": self._handle_create_room,
            "joinRoom": self._handle_join_room,
            "drawCard": self._handle_draw_card,
        }

    async def start(self, host: str = "0.0.0.0", port: int = 3001) -> None:
        async with serve(self._handle_connection, host, port):
            LOGGER.info("Room server listening on %s:%s", host, port)
            await asyncio.Future()

    async def _handle_connection(self, websocket: ServerConnection) -> None:
        session = ClientSession(connection_id=uuid.uuid4().hex, websocket=websocket)
        self.sessions[session.connection_id] = session
        LOGGER.info("User connected: %s", session.connection_id)
        await self._send_json(websocket, "connected", {"id": session.connection_id})

        try:
            async for raw in websocket:
                await self._dispatch(session, raw)
        except websockets.ConnectionClosed:
            pass
        finally:
            self.sessions.pop(session.connection_id, None)
            LOGGER.info("User disconnected: %s", session.connection_id)
            await self._handle_disconnect(session)

    async def _dispatch(self, session: ClientSession, raw: object) -> None:
        message = self._decode(raw)
        if message is None:
            await self._send_error(session.websocket, code="BAD_JSON", msg="Expected a JSON object")
            return
        handler = self.handlers.get(str(message.get("type")))
        if handler is None:
            await self._send_error(session.websocket, code="UNKNOWN_TYPE", msg="Unsupported message type")
            return
        try:
            await handler(session, message)
        except GameError as exc:
            LOGGER.warning(
                "Rejected %s from %s: %s",
                message.get("type"),
                session.connection_id,
                exc.msg,
            )
            await self._send_error(session.websocket, code=exc.code, msg=exc.msg)

    # Inbound events --------------------------------------------------

    async def _handle_create_room(self, session: ClientSession, message: Dict[str, object]) -> None:
        async with self.lock:
            room = self.registry.create_room(
                session.connection_id,
                message.get("playerName"),
                message.get("maxPlayers"),
            )
            await self._send_json(
                session.websocket,
                "roomCreated",
                {"roomId": room.room_id, "players": player_list(room)},
            )

    async def _handle_join_room(self, session: ClientSession, message: Dict[str, object]) -> None:
        room_id = self._room_id(message)
        async with self.lock:
            result = self.registry.join_room(room_id, session.connection_id, message.get("playerName"))
            room = result.room
            members = [player.connection_id for player in room.players]
            players = player_list(room)

            await self._send_json(session.websocket, "joinedRoom", {"roomId": room.room_id, "players": players})
            await self._broadcast(members, "playerJoined", {"roomId": room.room_id, "players": players})
            if result.started:
                await self._send_views(project_all(room))

    async def _handle_draw_card(self, session: ClientSession, message: Dict[str, object]) -> None:
        room_id = self._room_id(message)
        async with self.lock:
            result = self.registry.draw_card(room_id, session.connection_id)
            room = self.registry.get(room_id)
            members = [player.connection_id for player in room.players]

            await self._broadcast(members, "message", {"text": turn_message(result)})
            await self._send_views(project_all(room))

    async def _handle_disconnect(self, session: ClientSession) -> None:
        async with self.lock:
            result = self.registry.remove_player(session.connection_id)
            if result is None or result.room is None:
                return
            room = result.room
            members = [player.connection_id for player in room.players]

            await self._broadcast(members, "playerLeft", {"roomId": room.room_id, "players": player_list(room)})
            if room.state == RoomState.PLAYING:
                await self._send_views(project_all(room))

    # Outbound helpers ------------------------------------------------

    async def _broadcast(self, connection_ids: Iterable[str], msg_type: str, payload: Dict[str, object]) -> None:
        targets = [self.sessions[cid].websocket for cid in connection_ids if cid in self.sessions]
        if not targets:
            return
        message = self._envelope(msg_type, payload)
        await asyncio.gather(*(socket.send(message) for socket in targets), return_exceptions=True)

    async def _send_views(self, views: Dict[str, Dict[str, object]]) -> None:
        # One individually addressed gameUpdate per player.
        await asyncio.gather(
            *(
                self._send_json(self.sessions[cid].websocket, "gameUpdate", view)
                for cid, view in views.items()
                if cid in self.sessions
            )
        )

    async def _send_json(self, websocket: ServerConnection, msg_type: str, payload: Dict[str, object]) -> None:
        try:
            await websocket.send(self._envelope(msg_type, payload))
        except websockets.ConnectionClosed:
            pass

    async def _send_error(self, websocket: ServerConnection, code: str, msg: str) -> None:
        await self._send_json(websocket, "error", {"code": code, "message": msg})

    def _envelope(self, msg_type: str, payload: Dict[str, object]) -> str:
        body: Dict[str, object] = {"type": msg_type, "v": 1, "ts": datetime.now(timezone.utc).isoformat()}
        body.update(payload)
        return json.dumps(body)

    def _decode(self, raw: object) -> Optional[Dict[str, object]]:
        # ValueError covers both JSONDecodeError and undecodable binary frames.
        try:
            message = json.loads(raw)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return None
        return message if isinstance(message, dict) else None

    def _room_id(self, message: Dict[str, object]) -> str:
        room_id = message.get("roomId")
        return room_id.strip().upper() if isinstance(room_id, str) else ""
