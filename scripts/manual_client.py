#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Dict, Optional

from websockets.asyncio.client import ClientConnection, connect

logging.basicConfig(level=logging.INFO)

# ManualClient drives one seat from the terminal: create or join a room, then
# press enter to draw whenever it is your turn.


class ManualClient:
    def __init__(self, url: str, name: str, room_id: Optional[str], max_players: int) -> None:
        self.url = url
        self.name = name
        self.room_id = room_id
        self.max_players = max_players
        self.websocket: Optional[ClientConnection] = None
        self.connection_id: Optional[str] = None

    async def run(self) -> None:
        async with connect(self.url) as ws:
            self.websocket = ws
            if self.room_id:
                await self._send({"type": "joinRoom", "roomId": self.room_id, "playerName": self.name})
            else:
                await self._send({"type": "createRoom", "playerName": self.name, "maxPlayers": self.max_players})
            await asyncio.gather(self._recv_loop(), self._input_loop())

    async def _recv_loop(self) -> None:
        assert self.websocket is not None
        async for raw in self.websocket:
            msg = json.loads(raw)
            msg_type = msg.get("type")
            if msg_type == "connected":
                self.connection_id = msg.get("id")
            elif msg_type in ("roomCreated", "joinedRoom"):
                self.room_id = msg.get("roomId")
                print(f"In room {self.room_id}: {self._names(msg)}")
            elif msg_type in ("playerJoined", "playerLeft"):
                print(f"{msg_type}: {self._names(msg)}")
            elif msg_type == "message":
                print(msg.get("text"))
            elif msg_type == "gameUpdate":
                self._render_view(msg)
            elif msg_type == "error":
                print(f"Error [{msg.get('code')}]: {msg.get('message')}")

    async def _input_loop(self) -> None:
        loop = asyncio.get_running_loop()
        while True:
            line = await loop.run_in_executor(None, sys.stdin.readline)
            if not line:
                break
            if line.strip().lower() in ("q", "quit"):
                assert self.websocket is not None
                await self.websocket.close()
                break
            if self.room_id:
                await self._send({"type": "drawCard", "roomId": self.room_id})

    def _render_view(self, view: Dict[str, Any]) -> None:
        top = view.get("topCard") or {}
        print(f"--- {view.get('roomId')} [{view.get('gameState')}] deck={view.get('deckSize')} top={top.get('rank')}{top.get('suit')}")
        for player in view.get("players", []):
            hand = " ".join("??" if c["rank"] == "hidden" else f"{c['rank']}{c['suit']}" for c in player["hand"])
            marker = "*" if player["id"] == view.get("currentPlayerId") else " "
            you = " (you)" if player["id"] == self.connection_id else ""
            print(f" {marker} {player['name']}{you}: {hand}")
        if view.get("currentPlayerId") == self.connection_id:
            print("Your turn: press enter to draw.")

    def _names(self, msg: Dict[str, Any]) -> str:
        return ", ".join(player["name"] for player in msg.get("players", []))

    async def _send(self, payload: Dict[str, Any]) -> None:
        assert self.websocket is not None
        await self.websocket.send(json.dumps(payload))


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Interactive card room client")
    parser.add_argument("--url", default="ws://localhost:3001")
    parser.add_argument("--name", required=True)
    parser.add_argument("--room", default=None, help="Room id to join; omit to create a room")
    parser.add_argument("--max-players", type=int, default=2)
    return parser.parse_args(argv)


def main(argv: list[str]) -> None:
    args = parse_args(argv)
    client = ManualClient(args.url, args.name, args.room, args.max_players)
    try:
        asyncio.run(client.run())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main(sys.argv[1:])
