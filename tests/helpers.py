from __future__ import annotations

import random
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from holdem.cards import Card, build_deck, parse_cards
from holdem.models import ActionType, TableConfig
from holdem.player import Player
from holdem.table import Table


def create_table(
    *,
    players: int = 4,
    buy_in: int = 1_000,
    small_blind: int = 5,
    big_blind: int = 10,
    seats: int = 10,
    seed: int = 7,
) -> Table:
    """Instantiate a table with ``players`` seated in the first seats."""
    table = Table(
        TableConfig(buy_in=buy_in, small_blind=small_blind, big_blind=big_blind, seats=seats),
        rng=random.Random(seed),
    )
    for idx in range(players):
        table.sit_down(f"Player{idx}", buy_in)
    return table


def seat_players(table: Table, layout: Dict[int, int]) -> List[Player]:
    """Seat one player per ``{seat: stack}`` entry, named after the seat."""
    for seat, stack in layout.items():
        table.sit_down(f"Seat{seat}", stack, seat)
    return [table.seats[seat] for seat in layout]  # type: ignore[misc]


def stacked_deck(labels: Sequence[str]) -> List[Card]:
    """Deck that deals ``labels`` first, in order: hole cards seat by seat, then the board."""
    top = parse_cards(labels)
    rest = [card for card in build_deck(seed=0) if card not in top]
    return rest + list(reversed(top))


def stack_deck(monkeypatch, labels: Sequence[str]) -> None:
    deck = stacked_deck(labels)
    monkeypatch.setattr("holdem.table.build_deck", lambda seed=None, rng=None: list(deck))


def perform_actions(table: Table, actions: Iterable[Tuple[ActionType, Optional[int]]]) -> None:
    """Apply a scripted sequence of (action, amount) for whoever is to act."""
    for action, amount in actions:
        actor = table.current_actor
        assert actor is not None
        table.apply_action(actor.id, action, amount)


def auto_complete_hand(table: Table) -> None:
    """Check or call down until the hand is over."""
    while table.hand_in_progress:
        actor = table.current_actor
        assert actor is not None
        legal = actor.legal_actions(table)
        if ActionType.CHECK in legal:
            actor.check_action(table)
        elif ActionType.CALL in legal:
            actor.call_action(table)
        else:
            actor.fold_action(table)
