"""Texas Hold'em table core: seating, betting rounds, side pots and showdown."""

from .cards import RANKS, SUITS, Card, CardColor, build_deck, deal, parse_cards
from .errors import (
    ActiveHandError,
    BelowMinimumError,
    DuplicatePlayerError,
    ExceedsStackError,
    IllegalActionError,
    InsufficientPlayersError,
    InvalidAmountError,
    InvalidConfigError,
    OutOfTurnError,
    PlayerNotFoundError,
    SeatUnavailableError,
    TableError,
)
from .evaluator import Hand, HandEvaluator, StandardEvaluator, evaluate_best
from .models import ActionType, BettingRound, Pot, TableConfig
from .player import Player
from .table import Table

__all__ = [
    "Card",
    "CardColor",
    "RANKS",
    "SUITS",
    "build_deck",
    "deal",
    "Hand",
    "HandEvaluator",
    "StandardEvaluator",
    "evaluate_best",
    "parse_cards",
    "ActionType",
    "BettingRound",
    "Pot",
    "TableConfig",
    "Player",
    "Table",
    "TableError",
    "OutOfTurnError",
    "IllegalActionError",
    "InvalidAmountError",
    "BelowMinimumError",
    "ExceedsStackError",
    "SeatUnavailableError",
    "DuplicatePlayerError",
    "InsufficientPlayersError",
    "ActiveHandError",
    "PlayerNotFoundError",
    "InvalidConfigError",
]
