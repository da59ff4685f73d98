from __future__ import annotations

import random
from typing import Optional, Tuple

from holdem.evaluator import RANK_VALUE
from holdem.models import ActionType, BettingRound
from holdem.player import Player
from holdem.table import Table

_RNG = random.Random()


def _rough_hand_strength(table: Table, player: Player) -> int:
    """Crude strength score used to pick between passive and aggressive lines.

    Before the flop only the hole cards count. Once there is a board the made
    hand category dominates, so a flopped set outranks any starting hand.
    """
    if player.hole_cards is None:
        return 0

    first, second = player.hole_cards
    high, low = sorted((RANK_VALUE[first.rank], RANK_VALUE[second.rank]), reverse=True)

    score = high + low
    if high == low:
        score += 14
    elif high - low <= 2:
        score += 6 - 2 * (high - low)  # connectors
    if first.suit == second.suit:
        score += 3
    if low >= 11:
        score += 2

    if table.community_cards:
        made = player.hand(table)
        if made is not None:
            score += 8 * made.category
    return score


def _should_raise(strength: int, street: Optional[BettingRound], facing_bet: bool, rng: random.Random) -> bool:
    base = 0.2 if facing_bet else 0.35
    street_bonus = {
        BettingRound.PRE_FLOP: 0.0,
        BettingRound.FLOP: 0.05,
        BettingRound.TURN: 0.1,
        BettingRound.RIVER: 0.12,
    }.get(street, 0.0)
    scaled_strength = min(strength / 45.0, 0.45)
    probability = min(0.85, base + street_bonus + scaled_strength)

    # Always attack with premium holdings.
    if strength >= 36:
        return True
    return rng.random() < probability


def raise_bounds(table: Table, player: Player) -> Tuple[int, int]:
    """Smallest and largest chip amount ``player`` may put in with a raise or bet."""
    if table.current_bet is None:
        minimum = table.config.big_blind
    else:
        minimum = table.current_bet + table.min_raise - player.bet
    maximum = player.stack_size
    return min(minimum, maximum), maximum


def _choose_raise_amount(minimum: int, maximum: int, facing_bet: bool, rng: random.Random) -> int:
    if maximum <= minimum:
        return maximum

    span = maximum - minimum
    roll = rng.random()

    # Facing a bet → weight toward stronger responses, otherwise mix in more probes.
    if facing_bet:
        if roll < 0.2:
            return minimum
        if roll > 0.85:
            return maximum
    else:
        if roll < 0.35:
            return minimum
        if roll > 0.9:
            return maximum

    return minimum + int(span * rng.random())


def baseline_strategy(
    table: Table, player: Player, rng: Optional[random.Random] = None
) -> Tuple[ActionType, Optional[int]]:
    """Aggressive demo bot: mixes in random raises with a bias toward stronger holdings."""
    rng = rng or _RNG
    legal = player.legal_actions(table)

    if legal == [ActionType.FOLD]:
        return ActionType.FOLD, None

    strength = _rough_hand_strength(table, player)
    facing_bet = player.call_amount(table) > 0
    aggressive = next((action for action in (ActionType.BET, ActionType.RAISE) if action in legal), None)

    if aggressive is not None and _should_raise(strength, table.current_round, facing_bet, rng):
        minimum, maximum = raise_bounds(table, player)
        return aggressive, _choose_raise_amount(minimum, maximum, facing_bet, rng)

    if ActionType.CALL in legal:
        return ActionType.CALL, None

    if ActionType.CHECK in legal:
        return ActionType.CHECK, None

    return ActionType.FOLD, None


def timeout_fallback(table: Table, player: Player) -> Tuple[ActionType, Optional[int]]:
    """Action taken on behalf of a player whose clock ran out: check > call > fold."""
    legal = player.legal_actions(table)
    if ActionType.CHECK in legal:
        return ActionType.CHECK, None
    if ActionType.CALL in legal:
        return ActionType.CALL, None
    return ActionType.FOLD, None
