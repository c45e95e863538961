from __future__ import annotations

from typing import Dict, List

from .cards import HIDDEN_CARD, cards_to_dicts
from .models import Player, Room, RoomState

# Everything a client receives about a room is built here. Hands are only ever
# shown to their owner and the undealt deck is reduced to its size.


def player_list(room: Room) -> List[Dict[str, object]]:
    return [
        {
            "id": player.connection_id,
            "name": player.name,
            "isHost": player.is_host,
            "cardCount": len(player.hand),
        }
        for player in room.players
    ]


def _shared_view(room: Room) -> Dict[str, object]:
    current = room.current_player()
    top = room.top_card()
    return {
        "roomId": room.room_id,
        "maxPlayers": room.max_players,
        "gameState": room.state.value,
        "discardPile": cards_to_dicts(room.discard_pile),
        "topCard": top.to_dict() if top else None,
        "currentPlayerIndex": room.current_player_index if room.state == RoomState.PLAYING else None,
        "currentPlayerId": current.connection_id if current else None,
        "deckSize": len(room.deck),
    }


def _seat_view(player: Player, viewer_id: str) -> Dict[str, object]:
    if player.connection_id == viewer_id:
        hand = cards_to_dicts(player.hand)
    else:
        hand = [dict(HIDDEN_CARD) for _ in player.hand]
    return {
        "id": player.connection_id,
        "name": player.name,
        "isHost": player.is_host,
        "hand": hand,
    }


def project(room: Room, viewer_id: str) -> Dict[str, object]:
    view = _shared_view(room)
    view["players"] = [_seat_view(player, viewer_id) for player in room.players]
    return view


def project_all(room: Room) -> Dict[str, Dict[str, object]]:
    """One view per seated player, keyed by connection id."""
    shared = _shared_view(room)
    views: Dict[str, Dict[str, object]] = {}
    for viewer in room.players:
        view = dict(shared)
        view["discardPile"] = cards_to_dicts(room.discard_pile)
        view["players"] = [_seat_view(player, viewer.connection_id) for player in room.players]
        views[viewer.connection_id] = view
    return views
