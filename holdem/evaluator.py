from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol, Sequence, Tuple

from .cards import Card

RANK_ORDER = "23456789TJQKA"
RANK_VALUE = {rank: idx for idx, rank in enumerate(RANK_ORDER, start=2)}

Score = Tuple[int, Tuple[int, ...]]

CATEGORY_NAMES = (
    "high_card",
    "pair",
    "two_pair",
    "three_of_a_kind",
    "straight",
    "flush",
    "full_house",
    "four_of_a_kind",
    "straight_flush",
)


@dataclass(frozen=True, order=True)
class Hand:
    """Ranked holding. Ordering and equality only look at ``score``."""

    score: Score
    cards: Tuple[Card, ...] = field(default=(), compare=False)

    @property
    def category(self) -> int:
        return self.score[0]

    @property
    def description(self) -> str:
        return describe_rank(self.score)


class HandEvaluator(Protocol):
    def rank(self, cards: Sequence[Card]) -> Hand:
        ...

    def winners(self, hands: Sequence[Hand]) -> List[Hand]:
        ...


class StandardEvaluator:
    """Best-five-card evaluator used by the table unless another is injected."""

    def rank(self, cards: Sequence[Card]) -> Hand:
        return Hand(score=evaluate_best(cards), cards=tuple(cards))

    def winners(self, hands: Sequence[Hand]) -> List[Hand]:
        if not hands:
            raise ValueError("No hands to compare")
        best = max(hand.score for hand in hands)
        return [hand for hand in hands if hand.score == best]


def describe_rank(score: Score) -> str:
    return CATEGORY_NAMES[score[0]]


def evaluate_best(cards: Sequence[Card]) -> Score:
    """Return a strength tuple for up to 7 cards (Texas Hold'em). Higher is better.

    Fewer than five cards (a partial board) are scored as they stand, which
    only leaves room for pairs, trips, quads and high cards.
    """
    if not cards:
        raise ValueError("Cannot evaluate an empty hand")
    if len(cards) <= 5:
        return _evaluate(cards)
    best: Optional[Score] = None
    for combo in itertools.combinations(cards, 5):
        rank = _evaluate(combo)
        if best is None or rank > best:
            best = rank
    assert best is not None
    return best


def _evaluate(cards: Sequence[Card]) -> Score:
    ranks = tuple(sorted((RANK_VALUE[card.rank] for card in cards), reverse=True))
    complete = len(cards) == 5

    is_flush = complete and len({card.suit for card in cards}) == 1
    straight_high = _straight_high(cards) if complete else None

    counts: Dict[str, int] = {}
    for card in cards:
        counts[card.rank] = counts.get(card.rank, 0) + 1

    ordered_counts = sorted(counts.items(), key=lambda x: (x[1], RANK_VALUE[x[0]]), reverse=True)
    count_values = [count for _, count in ordered_counts] + [0]
    grouped = tuple(RANK_VALUE[rank] for rank, _ in ordered_counts)

    if straight_high and is_flush:
        return (8, (straight_high,))
    if count_values[0] == 4:
        return (7, grouped)
    if count_values[0] == 3 and count_values[1] == 2:
        return (6, grouped)
    if is_flush:
        return (5, ranks)
    if straight_high:
        return (4, (straight_high,))
    if count_values[0] == 3:
        return (3, grouped)
    if count_values[0] == 2 and count_values[1] == 2:
        return (2, grouped)
    if count_values[0] == 2:
        return (1, grouped)
    return (0, ranks)


def _straight_high(cards: Sequence[Card]) -> Optional[int]:
    ranks = {RANK_VALUE[card.rank] for card in cards}
    if len(ranks) != 5:
        return None
    ordered = sorted(ranks)
    if ordered[-1] - ordered[0] == 4:
        return ordered[-1]
    if ordered == [2, 3, 4, 5, 14]:  # wheel
        return 5
    return None
