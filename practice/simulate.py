"""Run a table of baseline bots locally, with no transport in between."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from holdem.errors import TableError
from holdem.models import ActionType, TableConfig
from holdem.player import Player
from holdem.table import Table

from .bots import baseline_strategy, timeout_fallback

LOGGER = logging.getLogger("practice")

Strategy = Callable[[Table, Player, random.Random], Tuple[ActionType, Optional[int]]]


@dataclass
class SessionResult:
    hands_played: int
    final_stacks: Dict[str, int]
    starting_chips: int
    rejected_actions: int = 0
    busted: List[str] = field(default_factory=list)

    @property
    def chips_conserved(self) -> bool:
        return sum(self.final_stacks.values()) == self.starting_chips


def play_hand(table: Table, rng: random.Random, strategy: Strategy = baseline_strategy) -> int:
    """Deal one hand and drive it to showdown. Returns the number of rejected actions."""
    table.deal_cards()
    rejected = 0
    # Every action either advances the cursor or ends the hand, so this bound is generous.
    for _ in range(10_000):
        actor = table.current_actor
        if not table.hand_in_progress or actor is None:
            return rejected
        action, amount = strategy(table, actor, rng)
        try:
            table.apply_action(actor.id, action, amount)
        except TableError as exc:
            rejected += 1
            LOGGER.warning("Rejected %s %s from %s: %s", action.value, amount, actor.id, exc)
            fallback, _ = timeout_fallback(table, actor)
            table.apply_action(actor.id, fallback)
    raise RuntimeError("Hand did not finish")


def run_session(
    config: TableConfig,
    players: int,
    hands: int,
    seed: Optional[int] = None,
    strategy: Strategy = baseline_strategy,
) -> SessionResult:
    rng = random.Random(seed)
    table = Table(config, rng=random.Random(rng.getrandbits(32)))
    for idx in range(players):
        table.sit_down(f"Bot{idx}", config.buy_in)

    starting_chips = table.total_chips()
    hands_played = 0
    rejected = 0
    busted: List[str] = []

    while hands_played < hands and len([p for p in table.players if p.stack_size > 0]) >= 2:
        rejected += play_hand(table, rng, strategy)
        hands_played += 1
        stacks = {player.id: player.stack_size for player in table.players}
        LOGGER.info("Hand %s finished; stacks=%s", table.hand_number, stacks)
        if table.total_chips() != starting_chips:
            raise RuntimeError(f"Chip count drifted after hand {table.hand_number}")
        for player in table.players:
            if player.stack_size == 0 and player.id not in busted:
                busted.append(player.id)

    return SessionResult(
        hands_played=hands_played,
        final_stacks={player.id: player.stack_size for player in table.players},
        starting_chips=starting_chips,
        rejected_actions=rejected,
        busted=busted,
    )
