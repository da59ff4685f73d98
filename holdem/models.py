from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from .errors import InvalidConfigError

if TYPE_CHECKING:
    from .player import Player


class BettingRound(str, Enum):
    PRE_FLOP = "pre-flop"
    FLOP = "flop"
    TURN = "turn"
    RIVER = "river"


class ActionType(str, Enum):
    FOLD = "fold"
    CHECK = "check"
    CALL = "call"
    BET = "bet"
    RAISE = "raise"


@dataclass
class TableConfig:
    buy_in: int = 1000
    small_blind: int = 5
    big_blind: int = 10
    seats: int = 10
    auto_move_dealer: bool = True
    debug: bool = False

    def __post_init__(self) -> None:
        if self.seats < 2:
            raise InvalidConfigError("A table needs at least two seats.")
        if self.small_blind <= 0 or self.buy_in <= 0:
            raise InvalidConfigError("Blinds and buy-in must be positive.")
        if self.small_blind >= self.big_blind:
            raise InvalidConfigError("The small blind must be less than the big blind.")


@dataclass
class Pot:
    amount: int = 0
    eligible_players: List["Player"] = field(default_factory=list)
    winners: Optional[List["Player"]] = None

    def add_eligible(self, player: "Player") -> None:
        if not any(existing is player for existing in self.eligible_players):
            self.eligible_players.append(player)
