from __future__ import annotations

import logging
import random
from typing import Dict, List, Optional, Union

from .cards import Card, build_deck, cards_to_labels, deal
from .errors import (
    ActiveHandError,
    BelowMinimumError,
    DuplicatePlayerError,
    IllegalActionError,
    InsufficientPlayersError,
    InvalidAmountError,
    PlayerNotFoundError,
    SeatUnavailableError,
)
from .evaluator import HandEvaluator, StandardEvaluator
from .models import ActionType, BettingRound, Pot, TableConfig
from .player import Player

LOGGER = logging.getLogger("holdem.table")

# Table keeps every seat, blind position and pot in memory. Rendering,
# persistence and transport live outside; they read the views below and call
# the player actions.

_STREETS = {
    BettingRound.PRE_FLOP: (BettingRound.FLOP, 3),
    BettingRound.FLOP: (BettingRound.TURN, 1),
    BettingRound.TURN: (BettingRound.RIVER, 1),
}


class Table:
    """No-Limit Texas Hold'em table with a fixed, sparsely occupied seat array."""

    def __init__(
        self,
        config: Optional[TableConfig] = None,
        evaluator: Optional[HandEvaluator] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or TableConfig()
        self.evaluator: HandEvaluator = evaluator or StandardEvaluator()
        self.rng = rng or random.Random()
        self.seats: List[Optional[Player]] = [None] * self.config.seats
        self.dealer_position: Optional[int] = None
        self.small_blind_position: Optional[int] = None
        self.big_blind_position: Optional[int] = None
        self.current_round: Optional[BettingRound] = None
        self.current_position: Optional[int] = None
        self.last_position: Optional[int] = None
        self.current_bet: Optional[int] = None
        self.last_raise: Optional[int] = None
        self.community_cards: List[Card] = []
        self.deck: List[Card] = []
        self.pots: List[Pot] = [Pot()]
        self.winners: Optional[List[Player]] = None
        self.hand_number = 0

    @classmethod
    def create(
        cls,
        buy_in: int = 1000,
        small_blind: int = 5,
        big_blind: int = 10,
        *,
        evaluator: Optional[HandEvaluator] = None,
        rng: Optional[random.Random] = None,
    ) -> "Table":
        config = TableConfig(buy_in=buy_in, small_blind=small_blind, big_blind=big_blind)
        return cls(config, evaluator=evaluator, rng=rng)

    # Views -----------------------------------------------------------

    @property
    def players(self) -> List[Player]:
        return [player for player in self.seats if player is not None]

    @property
    def active_players(self) -> List[Player]:
        return [player for player in self.seats if player is not None and not player.folded]

    @property
    def acting_players(self) -> List[Player]:
        current_bet = self.current_bet
        return [
            player
            for player in self.seats
            if player is not None
            and not player.folded
            and player.stack_size > 0
            and (current_bet is None or player.raise_amount is None or player.bet < current_bet)
        ]

    @property
    def current_actor(self) -> Optional[Player]:
        return self._player_at(self.current_position)

    @property
    def last_actor(self) -> Optional[Player]:
        return self._player_at(self.last_position)

    @property
    def dealer(self) -> Optional[Player]:
        return self._player_at(self.dealer_position)

    @property
    def small_blind_player(self) -> Optional[Player]:
        return self._player_at(self.small_blind_position)

    @property
    def big_blind_player(self) -> Optional[Player]:
        return self._player_at(self.big_blind_position)

    @property
    def current_pot(self) -> Pot:
        if not self.pots:
            self.pots.append(Pot())
        return self.pots[-1]

    @property
    def side_pots(self) -> List[Pot]:
        return self.pots[:-1]

    @property
    def min_raise(self) -> int:
        return self.last_raise if self.last_raise is not None else self.config.big_blind

    @property
    def hand_in_progress(self) -> bool:
        return self.current_round is not None

    def _player_at(self, position: Optional[int]) -> Optional[Player]:
        if position is None:
            return None
        return self.seats[position]

    def find_player(self, player_id: str) -> Optional[Player]:
        for player in self.seats:
            if player is not None and player.id == player_id and not player.left:
                return player
        return None

    def seat_of(self, player: Player) -> int:
        for idx, seated in enumerate(self.seats):
            if seated is player:
                return idx
        raise PlayerNotFoundError(f"{player.id} is not seated at this table.")

    def total_chips(self) -> int:
        in_front = sum(player.stack_size + player.bet for player in self.players)
        return in_front + sum(pot.amount for pot in self.pots if pot.winners is None)

    # Seat management -------------------------------------------------

    def sit_down(self, player_id: str, buy_in: int, seat: Optional[int] = None) -> int:
        if all(seated is not None for seated in self.seats):
            raise SeatUnavailableError("The table is currently full.")
        if isinstance(buy_in, bool) or not isinstance(buy_in, int):
            raise InvalidAmountError("Buy-in was not a valid number.")
        if buy_in < self.config.buy_in:
            raise BelowMinimumError(
                f"Your buy-in must be greater or equal to the minimum buy-in of {self.config.buy_in}."
            )
        if self.find_player(player_id) is not None and not self.config.debug:
            raise DuplicatePlayerError("Player already joined this table.")
        if seat is not None:
            if not 0 <= seat < len(self.seats):
                raise SeatUnavailableError(f"Seat {seat} does not exist.")
            if self.seats[seat] is not None:
                raise SeatUnavailableError("There is already a player in the requested seat.")
        else:
            seat = self.seats.index(None)

        player = Player(id=player_id, stack_size=buy_in)
        self.seats[seat] = player
        LOGGER.info("%s sat down at seat %s with %s", player_id, seat, buy_in)
        if self.current_round is not None:
            # Joins the next hand.
            player.folded = True
        else:
            self.clean_up()
            self.move_dealer(self.dealer_position if self.dealer_position is not None else seat)
        return seat

    def stand_up(self, player: Union[str, Player]) -> List[Player]:
        if isinstance(player, str):
            leaving = [p for p in self.seats if p is not None and p.id == player and not p.left]
        else:
            leaving = [p for p in self.seats if p is player and not p.left]
        if not leaving:
            name = player if isinstance(player, str) else player.id
            raise PlayerNotFoundError(f"No player found with id {name!r}.")

        for departing in leaving:
            if self.current_round is not None:
                departing.folded = True
                departing.left = True
                LOGGER.info("%s leaves after this hand", departing.id)
                if (
                    self.current_actor is departing
                    or not self.acting_players
                    or len(self.active_players) <= 1
                ):
                    self.next_action()
            else:
                self._remove(departing)
        return leaving

    def _remove(self, player: Player) -> None:
        index = self.seat_of(player)
        self.seats[index] = None
        LOGGER.info("%s left seat %s", player.id, index)
        if not self.players:
            self.dealer_position = None
            self.small_blind_position = None
            self.big_blind_position = None
        elif self.dealer_position is None or index == self.dealer_position:
            self.move_dealer(index + 1)
        elif index in (self.small_blind_position, self.big_blind_position):
            self.move_dealer(self.dealer_position)

    def move_dealer(self, seat_number: int) -> None:
        if not self.players:
            raise InsufficientPlayersError("Move dealer was called but there are no seated players.")
        self.dealer_position = self._occupied_from(seat_number)
        self.small_blind_position = self._occupied_from(self.dealer_position + 1)
        self.big_blind_position = self._occupied_from(self.small_blind_position + 1)

    def _occupied_from(self, position: int) -> int:
        size = len(self.seats)
        for offset in range(size):
            idx = (position + offset) % size
            if self.seats[idx] is not None:
                return idx
        raise InsufficientPlayersError("No occupied seat found.")

    # Hand lifecycle --------------------------------------------------

    def clean_up(self) -> None:
        if self.current_round is not None:
            raise ActiveHandError("Cannot clean up while a hand is in progress.")
        for player in [p for p in self.seats if p is not None and p.left]:
            self._remove(player)
        for player in [p for p in self.seats if p is not None and p.stack_size == 0]:
            self._remove(player)

        for player in self.players:
            player.bet = 0
            player.raise_amount = None
            player.hole_cards = None
            player.folded = False
            player.show_cards = False

        self.winners = None
        self.community_cards = []
        self.pots = [Pot()]
        self.last_raise = None
        self.current_bet = None

    def new_deck(self) -> List[Card]:
        return build_deck(rng=self.rng)

    def deal_cards(self) -> None:
        if self.current_round is not None:
            raise ActiveHandError("There is already an active hand!")
        self.clean_up()
        if len(self.active_players) < 2:
            raise InsufficientPlayersError("Not enough players to start.")

        self.current_round = BettingRound.PRE_FLOP
        self.hand_number += 1
        if self.dealer_position is None:
            self.move_dealer(0)
        elif self.hand_number > 1 and self.config.auto_move_dealer:
            self.move_dealer(self.dealer_position + 1)

        sb_player = self.small_blind_player
        bb_player = self.big_blind_player
        if sb_player is None or bb_player is None:
            raise InsufficientPlayersError("Blind seats are not occupied.")
        self._post_blind(sb_player, self.config.small_blind)
        self._post_blind(bb_player, self.config.big_blind)
        self.current_bet = self.config.big_blind

        self.last_position = self.seat_of(bb_player)
        self.current_position = self._occupied_from(self.last_position + 1)

        self.deck = self.new_deck()
        for player in self.players:
            first, second = deal(self.deck, 2)
            player.hole_cards = (first, second)

        LOGGER.info(
            "Hand %s dealt: dealer=%s sb=%s bb=%s",
            self.hand_number,
            self.dealer_position,
            self.small_blind_position,
            self.big_blind_position,
        )
        if self.current_actor not in self.acting_players:
            self.next_action()

    def _post_blind(self, player: Player, blind: int) -> None:
        # A short stack posts what it has and is all-in.
        amount = min(blind, player.stack_size)
        player.stack_size -= amount
        player.bet = amount

    # Turn order ------------------------------------------------------

    def next_action(self) -> None:
        if self.current_round is None or self.current_position is None:
            raise ActiveHandError("No hand in progress.")
        size = len(self.seats)
        for _ in range(size + 1):
            if len(self.active_players) <= 1:
                self.showdown()
                return
            if self.current_position == self.last_position:
                self.next_round()
                return
            self.current_position = (self.current_position + 1) % size
            actor = self.current_actor
            acting = self.acting_players
            if actor is None or actor not in acting or (self.current_bet is None and len(acting) == 1):
                continue
            return
        raise RuntimeError("Turn order did not settle on an acting seat")

    def reopen_action(self) -> None:
        """Move the closing seat to the acting player just behind the raiser."""
        if self.current_position is None:
            raise ActiveHandError("No hand in progress.")
        size = len(self.seats)
        acting = self.acting_players
        position = self.current_position
        for _ in range(size):
            position = (position - 1) % size
            player = self.seats[position]
            if player is not None and player in acting:
                self.last_position = position
                return
        self.last_position = self.current_position

    def next_round(self) -> None:
        if self.current_round is None:
            raise ActiveHandError("No hand in progress.")
        if self.current_round == BettingRound.RIVER:
            for player in self.players:
                player.show_cards = not player.folded
            self.showdown()
            return

        self.gather_bets()
        self.current_bet = None
        self.last_raise = None
        for player in self.players:
            player.raise_amount = None

        next_street, count = _STREETS[self.current_round]
        self.current_round = next_street
        self.community_cards.extend(deal(self.deck, count))
        LOGGER.debug("%s: %s", next_street.value, cards_to_labels(self.community_cards))
        self._reset_position()

    def _reset_position(self) -> None:
        if self.dealer_position is None:
            raise InsufficientPlayersError("No dealer seat to act from.")
        self.current_position = self._occupied_from(self.dealer_position + 1)
        self.last_position = self.dealer_position
        acting = self.acting_players
        if self.current_actor not in acting or len(acting) <= 1:
            self.next_action()

    # Pots ------------------------------------------------------------

    def gather_bets(self) -> None:
        betting = [player for player in self.seats if player is not None and player.bet > 0]

        if len(betting) <= 1:
            for player in betting:
                player.stack_size += player.bet
                player.bet = 0
            self._strip_ineligible()
            return

        all_in = [player for player in betting if player.stack_size == 0]
        while all_in:
            lowest = min(player.bet for player in all_in)
            pot = self.current_pot
            for player in betting:
                if player.bet == 0:
                    continue
                if player.bet >= lowest:
                    player.bet -= lowest
                    pot.amount += lowest
                else:
                    # Folded short contributions go in whole.
                    pot.amount += player.bet
                    player.bet = 0
                pot.add_eligible(player)
            all_in = [player for player in all_in if player.bet > 0]
            self.pots.append(Pot())

        pot = self.current_pot
        for player in betting:
            if player.bet == 0:
                continue
            pot.amount += player.bet
            player.bet = 0
            pot.add_eligible(player)
        self._strip_ineligible()

    def _strip_ineligible(self) -> None:
        # Chips stay in the pot; folded and departed players cannot win it.
        for pot in self.pots:
            pot.eligible_players = [p for p in pot.eligible_players if not p.folded and not p.left]

    # Showdown --------------------------------------------------------

    def showdown(self) -> None:
        if self.current_round is None:
            raise ActiveHandError("There is no hand to show down.")
        self.current_round = None
        self.current_position = None
        self.last_position = None
        self.current_bet = None
        self.last_raise = None

        self.gather_bets()

        active = self.active_players
        if len(active) > 1:
            for player in active:
                player.show_cards = True

        self.winners = self._find_winners(active)

        for pot in self.pots:
            if pot.amount == 0:
                pot.winners = []
                continue
            if pot.eligible_players:
                pot.winners = self._find_winners(pot.eligible_players)
            else:
                pot.winners = list(self.winners)
            self._award(pot)

    def _find_winners(self, players: List[Player]) -> List[Player]:
        if len(players) <= 1:
            return list(players)
        hands = []
        for player in players:
            hand = player.hand(self)
            if hand is None:
                raise ActiveHandError(f"{player.id} has no hole cards to show.")
            hands.append((player, hand))
        best = self.evaluator.winners([hand for _, hand in hands])
        return [player for player, hand in hands if any(hand is winner for winner in best)]

    def _award(self, pot: Pot) -> None:
        winners = self._button_order(pot.winners or [])
        if not winners:
            LOGGER.warning("Pot of %s has nobody to award it to", pot.amount)
            return
        share, remainder = divmod(pot.amount, len(winners))
        # Odd chips go one each to the winners closest to the left of the button.
        for idx, player in enumerate(winners):
            payout = share + (1 if idx < remainder else 0)
            player.stack_size += payout
            LOGGER.info("%s wins %s", player.id, payout)

    def _button_order(self, players: List[Player]) -> List[Player]:
        size = len(self.seats)
        dealer = self.dealer_position or 0
        return sorted(players, key=lambda player: (self.seat_of(player) - dealer - 1) % size)

    # Dispatch --------------------------------------------------------

    def apply_action(self, player_id: str, action: Union[ActionType, str], amount: Optional[int] = None) -> None:
        player = self.find_player(player_id)
        if player is None:
            raise PlayerNotFoundError(f"No player found with id {player_id!r}.")
        try:
            action = ActionType(action)
        except ValueError as exc:
            raise IllegalActionError(f"Unsupported action {action!r}") from exc

        if action == ActionType.FOLD:
            player.fold_action(self)
        elif action == ActionType.CHECK:
            player.check_action(self)
        elif action == ActionType.CALL:
            player.call_action(self)
        elif action == ActionType.BET:
            player.bet_action(self, amount)  # type: ignore[arg-type]
        else:
            player.raise_action(self, amount)  # type: ignore[arg-type]

    # Snapshot --------------------------------------------------------

    def snapshot(self, reveal: bool = False) -> Dict[str, object]:
        """Read-only view for a rendering layer.

        Hole cards are included for players showing them, or for everyone when
        ``reveal`` is set.
        """
        actor = self.current_actor
        seats = []
        for idx, player in enumerate(self.seats):
            if player is None:
                continue
            show = reveal or player.show_cards
            seats.append(
                {
                    "seat": idx,
                    "id": player.id,
                    "stack": player.stack_size,
                    "bet": player.bet,
                    "folded": player.folded,
                    "left": player.left,
                    "all_in": player.is_all_in,
                    "hole": cards_to_labels(player.hole_cards) if show and player.hole_cards else None,
                    "is_dealer": idx == self.dealer_position,
                    "is_small_blind": idx == self.small_blind_position,
                    "is_big_blind": idx == self.big_blind_position,
                }
            )
        return {
            "hand_number": self.hand_number,
            "round": self.current_round.value if self.current_round else None,
            "dealer": self.dealer_position,
            "small_blind": self.small_blind_position,
            "big_blind": self.big_blind_position,
            "current_actor": self.current_position if actor else None,
            "current_bet": self.current_bet,
            "last_raise": self.last_raise,
            "community": cards_to_labels(self.community_cards),
            "pots": [
                {
                    "amount": pot.amount,
                    "eligible": [player.id for player in pot.eligible_players],
                    "winners": [player.id for player in pot.winners] if pot.winners is not None else None,
                }
                for pot in self.pots
            ],
            "winners": [player.id for player in self.winners] if self.winners is not None else None,
            "seats": seats,
        }
