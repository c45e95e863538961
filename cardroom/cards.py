from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, TypeVar

SUITS = ("H", "D", "C", "S")
RANKS = ("A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K")

# What other players see in place of a real card.
HIDDEN_CARD: Dict[str, str] = {"suit": "hidden", "rank": "hidden"}

T = TypeVar("T")


@dataclass(frozen=True)
class Card:
    suit: str
    rank: str

    def __post_init__(self) -> None:
        if self.suit not in SUITS:
            raise ValueError(f"Invalid suit: {self.suit}")
        if self.rank not in RANKS:
            raise ValueError(f"Invalid rank: {self.rank}")

    @property
    def label(self) -> str:
        return f"{self.rank}{self.suit}"

    def to_dict(self) -> Dict[str, str]:
        return {"suit": self.suit, "rank": self.rank}


def build_deck() -> List[Card]:
    return [Card(suit, rank) for suit in SUITS for rank in RANKS]


def shuffle(cards: Sequence[T], rng: Optional[random.Random] = None) -> List[T]:
    """Return a Fisher-Yates permutation of ``cards``; the input is left alone."""
    rng = rng or random.Random()
    shuffled = list(cards)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def deal(deck: List[Card], count: int) -> List[Card]:
    if len(deck) < count:
        raise ValueError("Not enough cards left in deck")
    cards = deck[:count]
    del deck[:count]
    return cards


def card_value(card: Card) -> int:
    # Jacks are a special card for later rules, hence the negative score.
    if card.rank == "A":
        return 1
    if card.rank in ("K", "Q"):
        return 10
    if card.rank == "J":
        return -1
    return int(card.rank)


def cards_to_dicts(cards: Sequence[Card]) -> List[Dict[str, str]]:
    return [card.to_dict() for card in cards]
