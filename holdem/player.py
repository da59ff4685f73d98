from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Tuple

from .cards import Card
from .errors import (
    BelowMinimumError,
    ExceedsStackError,
    IllegalActionError,
    InvalidAmountError,
    OutOfTurnError,
)
from .evaluator import Hand
from .models import ActionType

if TYPE_CHECKING:
    from .table import Table

LOGGER = logging.getLogger("holdem.player")

# Players never keep a reference to their table: every operation receives the
# table explicitly, and the table owns the seat array.


@dataclass(eq=False)
class Player:
    id: str
    stack_size: int
    bet: int = 0
    raise_amount: Optional[int] = None
    folded: bool = False
    show_cards: bool = False
    left: bool = False
    hole_cards: Optional[Tuple[Card, Card]] = None

    @property
    def is_all_in(self) -> bool:
        return self.stack_size == 0

    def hand(self, table: "Table") -> Optional[Hand]:
        if self.hole_cards is None:
            return None
        return table.evaluator.rank(list(self.hole_cards) + list(table.community_cards))

    def call_amount(self, table: "Table") -> int:
        if table.current_bet is None:
            return 0
        return max(table.current_bet - self.bet, 0)

    # Legality --------------------------------------------------------

    def legal_actions(self, table: "Table") -> List[ActionType]:
        current_bet = table.current_bet
        actions: List[ActionType] = []
        if current_bet is None:
            actions.extend((ActionType.CHECK, ActionType.BET))
        else:
            # Raising is pointless once every opponent is all-in or out.
            others_can_act = any(
                player is not self and not player.folded and player.stack_size > 0
                for player in table.players
            )
            can_raise = self.stack_size + self.bet > current_bet and others_can_act
            if self.bet == current_bet:
                actions.append(ActionType.CHECK)
                if can_raise:
                    actions.append(ActionType.RAISE)
            elif self.bet < current_bet:
                actions.append(ActionType.CALL)
                last_raise = table.last_raise
                # A player whose own raise has not been topped cannot raise again.
                if can_raise and (
                    last_raise is None or self.raise_amount is None or last_raise >= self.raise_amount
                ):
                    actions.append(ActionType.RAISE)
        actions.append(ActionType.FOLD)
        return actions

    def _require_turn(self, table: "Table") -> None:
        if table.current_actor is not self:
            raise OutOfTurnError("Action invoked on player out of turn!")

    def _require_legal(self, table: "Table", *accepted: ActionType) -> None:
        legal = self.legal_actions(table)
        if not any(action in legal for action in accepted):
            names = "/".join(action.value for action in accepted)
            raise IllegalActionError(f"Illegal action: {names} is not allowed now.")

    def _validate_amount(self, amount: object) -> int:
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise InvalidAmountError("Amount was not a valid number.")
        if amount > self.stack_size:
            raise ExceedsStackError("You cannot bet more than you brought to the table.")
        return amount

    # Actions ---------------------------------------------------------

    def bet_action(self, table: "Table", amount: int) -> None:
        self._require_turn(table)
        self._require_legal(table, ActionType.BET)
        amount = self._validate_amount(amount)
        if amount < table.config.big_blind and amount < self.stack_size:
            raise BelowMinimumError("A bet must be at least as much as the big blind.")
        self._commit_raise(table, amount)

    def call_action(self, table: "Table") -> None:
        self._require_turn(table)
        self._require_legal(table, ActionType.CALL)
        call_amount = self.call_amount(table)
        if call_amount > self.stack_size:
            # Partial call: all-in for whatever is left.
            self.bet += self.stack_size
            self.stack_size = 0
        else:
            self.raise_amount = None
            self.stack_size -= call_amount
            self.bet += call_amount
        LOGGER.debug("%s calls (bet=%s stack=%s)", self.id, self.bet, self.stack_size)
        table.next_action()

    def raise_action(self, table: "Table", amount: int) -> None:
        """Put ``amount`` more chips in, raising the bet (or opening it)."""
        self._require_turn(table)
        self._require_legal(table, ActionType.RAISE, ActionType.BET)
        amount = self._validate_amount(amount)
        current_bet = table.current_bet
        min_raise = table.min_raise
        raise_delta = self._raise_delta(current_bet, amount)
        if raise_delta < min_raise and amount < self.stack_size:
            if current_bet is not None:
                raise BelowMinimumError(
                    f"You must raise by at least {min_raise}, making the bet {current_bet + min_raise}."
                )
            raise BelowMinimumError(f"You must bet at least {min_raise}.")
        self._commit_raise(table, amount)

    def check_action(self, table: "Table") -> None:
        self._require_turn(table)
        self._require_legal(table, ActionType.CHECK)
        LOGGER.debug("%s checks", self.id)
        table.next_action()

    def fold_action(self, table: "Table") -> None:
        self._require_turn(table)
        self._require_legal(table, ActionType.FOLD)
        self.folded = True
        LOGGER.debug("%s folds", self.id)
        table.next_action()

    def _raise_delta(self, current_bet: Optional[int], amount: int) -> int:
        if current_bet is None:
            return amount
        return self.bet + amount - current_bet

    def _commit_raise(self, table: "Table", amount: int) -> None:
        current_bet = table.current_bet
        raise_delta = self._raise_delta(current_bet, amount)
        full_raise = raise_delta >= table.min_raise

        self.stack_size -= amount
        self.bet += amount
        table.current_bet = max(self.bet, current_bet or 0)
        # A short all-in lifts the bet but leaves the minimum raise alone.
        if full_raise:
            table.last_raise = raise_delta
            if current_bet is not None:
                self.raise_amount = raise_delta
        table.reopen_action()
        LOGGER.debug(
            "%s %s %s (bet=%s stack=%s)",
            self.id,
            "raises" if current_bet is not None else "bets",
            amount,
            self.bet,
            self.stack_size,
        )
        table.next_action()
