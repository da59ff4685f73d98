import pytest

from holdem.errors import (
    BelowMinimumError,
    ExceedsStackError,
    IllegalActionError,
    InvalidAmountError,
    OutOfTurnError,
    TableError,
)
from holdem.models import ActionType, BettingRound

from .helpers import create_table, perform_actions

CHECK, CALL, BET, RAISE, FOLD = (
    ActionType.CHECK,
    ActionType.CALL,
    ActionType.BET,
    ActionType.RAISE,
    ActionType.FOLD,
)


def _start_hand(players=4):
    table = create_table(players=players)
    table.deal_cards()
    return table


def test_first_actor_is_left_of_big_blind():
    table = _start_hand()
    assert table.dealer_position == 0
    assert table.small_blind_position == 1
    assert table.big_blind_position == 2
    assert table.current_position == 3
    assert table.last_position == 2
    assert table.current_bet == 10
    assert table.last_actor is table.big_blind_player


@pytest.mark.parametrize(
    "current_bet,bet,stack,last_raise,raise_amount,expected",
    [
        (None, 0, 1000, None, None, [CHECK, BET, FOLD]),
        (10, 10, 990, None, None, [CHECK, RAISE, FOLD]),
        (10, 0, 1000, None, None, [CALL, RAISE, FOLD]),
        (10, 0, 10, None, None, [CALL, FOLD]),
        (10, 10, 0, None, None, [CHECK, FOLD]),
        (40, 0, 1000, 20, 30, [CALL, FOLD]),
        (40, 0, 1000, 30, 30, [CALL, RAISE, FOLD]),
        (40, 0, 1000, 30, None, [CALL, RAISE, FOLD]),
        (40, 10, 1000, None, 30, [CALL, RAISE, FOLD]),
    ],
)
def test_legal_action_table(current_bet, bet, stack, last_raise, raise_amount, expected):
    table = _start_hand()
    player = table.current_actor
    table.current_bet = current_bet
    table.last_raise = last_raise
    player.bet = bet
    player.stack_size = stack
    player.raise_amount = raise_amount
    assert player.legal_actions(table) == expected


def test_no_raise_when_every_opponent_is_all_in():
    table = _start_hand(players=3)
    for player in table.players:
        if player is not table.current_actor:
            player.stack_size = 0
    actor = table.current_actor
    assert actor.legal_actions(table) == [CALL, FOLD]


def test_heads_up_reraise_allowed():
    table = _start_hand(players=2)
    # Dealer posts the big blind heads-up; the small blind acts first.
    assert table.dealer_position == table.big_blind_position == 0
    small_blind = table.current_actor
    assert small_blind is table.small_blind_player
    small_blind.raise_action(table, 25)
    assert table.current_bet == 30
    assert table.last_raise == 20
    big_blind = table.current_actor
    assert big_blind is table.big_blind_player
    assert big_blind.legal_actions(table) == [CALL, RAISE, FOLD]


def test_out_of_turn_action_rejected():
    table = _start_hand()
    dealer = table.dealer
    with pytest.raises(OutOfTurnError):
        dealer.call_action(table)


@pytest.mark.parametrize(
    "action,amount,error",
    [
        (CHECK, None, IllegalActionError),
        (BET, 50, IllegalActionError),
        (RAISE, "abc", InvalidAmountError),
        (RAISE, None, InvalidAmountError),
        (RAISE, True, InvalidAmountError),
        (RAISE, 2_000, ExceedsStackError),
        (RAISE, 15, BelowMinimumError),
        ("dance", None, IllegalActionError),
    ],
)
def test_rejected_actions_leave_state_untouched(action, amount, error):
    table = _start_hand()
    actor = table.current_actor
    before = table.snapshot(reveal=True)
    with pytest.raises(error):
        table.apply_action(actor.id, action, amount)
    assert table.snapshot(reveal=True) == before
    assert table.current_actor is actor


def test_table_errors_keep_builtin_bases():
    table = _start_hand()
    actor = table.current_actor
    with pytest.raises(ValueError):
        actor.raise_action(table, 15)
    with pytest.raises(RuntimeError):
        table.dealer.fold_action(table)
    with pytest.raises(TableError):
        actor.check_action(table)


def test_below_minimum_raise_message_names_target():
    table = _start_hand()
    with pytest.raises(BelowMinimumError, match="making the bet 20"):
        table.current_actor.raise_action(table, 15)


def test_full_raise_updates_markers_and_reopens():
    table = _start_hand()
    raiser = table.current_actor
    raiser.raise_action(table, 20)
    assert raiser.bet == 20
    assert raiser.stack_size == 980
    assert raiser.raise_amount == 10
    assert table.current_bet == 20
    assert table.last_raise == 10
    assert table.last_position == 2
    assert table.current_position == 0


def test_call_clears_raise_marker():
    table = _start_hand()
    perform_actions(table, [(RAISE, 20), (RAISE, 40)])
    # Seat 0 re-raised to 40; the first raiser calls.
    perform_actions(table, [(FOLD, None), (FOLD, None)])
    opener = table.seats[3]
    assert table.current_actor is opener
    assert opener.raise_amount == 10
    opener.call_action(table)
    assert opener.raise_amount is None
    assert table.current_round == BettingRound.FLOP


def test_partial_call_goes_all_in():
    table = _start_hand()
    actor = table.current_actor
    actor.stack_size = 6
    actor.call_action(table)
    assert actor.bet == 6
    assert actor.stack_size == 0
    assert actor.is_all_in
    assert table.current_bet == 10


def test_short_all_in_raise_keeps_minimum_raise():
    table = _start_hand()
    perform_actions(table, [(RAISE, 30)])
    assert table.last_raise == 20
    short = table.current_actor
    assert table.seat_of(short) == 0
    short.stack_size = 40
    short.raise_action(table, 40)
    assert short.stack_size == 0
    assert table.current_bet == 40
    assert table.last_raise == 20
    assert short.raise_amount is None
    # The first raiser still owes chips, so the round closes on them.
    assert table.last_position == 3

    perform_actions(table, [(CALL, None), (CALL, None), (CALL, None)])
    assert table.current_round == BettingRound.FLOP
    funded = [pot for pot in table.pots if pot.amount]
    assert [pot.amount for pot in funded] == [160]
    assert len(funded[0].eligible_players) == 4


def test_opening_bet_after_flop():
    table = _start_hand()
    perform_actions(table, [(CALL, None), (CALL, None), (CALL, None), (CHECK, None)])
    assert table.current_round == BettingRound.FLOP
    assert table.current_bet is None
    assert table.pots[0].amount == 40
    opener = table.current_actor
    assert table.seat_of(opener) == 1

    with pytest.raises(BelowMinimumError):
        opener.bet_action(table, 5)
    opener.bet_action(table, 10)
    assert table.current_bet == 10
    assert table.last_raise == 10
    assert opener.raise_amount is None
    assert table.last_position == 0
    assert table.seat_of(table.current_actor) == 2


def test_all_in_bet_below_big_blind_allowed():
    table = _start_hand()
    perform_actions(table, [(CALL, None), (CALL, None), (CALL, None), (CHECK, None)])
    opener = table.current_actor
    opener.stack_size = 4
    opener.bet_action(table, 4)
    assert opener.is_all_in
    assert table.current_bet == 4
    assert table.last_raise is None


def test_folded_seat_is_skipped():
    table = _start_hand()
    perform_actions(table, [(FOLD, None), (CALL, None), (CALL, None), (CHECK, None)])
    assert table.seat_of(table.current_actor) == 1
    perform_actions(table, [(CHECK, None), (CHECK, None)])
    # Seat 3 folded pre-flop.
    assert table.seat_of(table.current_actor) == 0


def test_all_in_seat_is_skipped_and_round_closes():
    table = _start_hand()
    perform_actions(table, [(CALL, None)])
    table.current_actor.stack_size = 10
    perform_actions(table, [(CALL, None), (CALL, None), (CHECK, None)])
    assert table.seats[0].is_all_in
    perform_actions(table, [(CHECK, None), (CHECK, None), (CHECK, None)])
    assert table.current_round == BettingRound.TURN
    assert table.seat_of(table.current_actor) == 1


def test_blind_raise_counts_chips_already_in_front():
    table = _start_hand()
    perform_actions(table, [(RAISE, 30), (FOLD, None), (FOLD, None)])
    big_blind = table.current_actor
    assert big_blind is table.big_blind_player
    assert big_blind.bet == 10
    assert table.current_bet == 30
    assert table.last_raise == 20

    # 35 more makes 45, only 15 over the bet.
    with pytest.raises(BelowMinimumError, match="making the bet 50"):
        big_blind.raise_action(table, 35)
    assert big_blind.bet == 10

    big_blind.raise_action(table, 40)
    assert big_blind.bet == 50
    assert big_blind.stack_size == 950
    assert big_blind.raise_amount == 20
    assert table.current_bet == 50
    assert table.last_raise == 20
    assert table.last_position == 3
    assert table.seat_of(table.current_actor) == 3
