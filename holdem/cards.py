from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

RANKS = "AKQJT98765432"
SUITS = "cdhs"

SUIT_SYMBOLS = {"c": "♣", "d": "♦", "h": "♥", "s": "♠"}


class CardColor(str, Enum):
    RED = "#ff0000"
    BLACK = "#000000"


@dataclass(frozen=True)
class Card:
    rank: str
    suit: str

    def __post_init__(self) -> None:
        if len(self.rank) != 1 or self.rank not in RANKS:
            raise ValueError(f"Invalid rank: {self.rank}")
        if len(self.suit) != 1 or self.suit not in SUITS:
            raise ValueError(f"Invalid suit: {self.suit}")

    @property
    def label(self) -> str:
        return f"{self.rank}{self.suit}"

    @property
    def color(self) -> CardColor:
        if self.suit in ("d", "h"):
            return CardColor.RED
        return CardColor.BLACK

    @property
    def symbol(self) -> str:
        return SUIT_SYMBOLS[self.suit]

    @property
    def display(self) -> str:
        return f"{self.rank}{self.symbol}"

    def __str__(self) -> str:
        return self.label


def build_deck(seed: Optional[int] = None, rng: Optional[random.Random] = None) -> List[Card]:
    """Return all 52 cards in a uniformly shuffled order.

    The permutation is only as good as ``rng``; pass a vetted generator when
    fairness has to be demonstrable.
    """
    if rng is None:
        rng = random.Random(seed)
    deck = [Card(rank, suit) for rank in RANKS for suit in SUITS]
    rng.shuffle(deck)
    return deck


def deal(deck: List[Card], count: int) -> List[Card]:
    # The end of the list is the top of the deck.
    if len(deck) < count:
        raise RuntimeError("Not enough cards left in deck")
    return [deck.pop() for _ in range(count)]


def cards_to_labels(cards: Sequence[Card]) -> List[str]:
    return [card.label for card in cards]


def parse_label(label: str) -> Card:
    if len(label) != 2:
        raise ValueError(f"Invalid card label: {label}")
    return Card(label[0], label[1])


def parse_cards(labels: Sequence[str]) -> List[Card]:
    return [parse_label(label) for label in labels]
