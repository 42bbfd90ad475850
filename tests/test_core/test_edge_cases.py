"""
Edge case tests for the Table engine.

Covers heads-up play, short stacks, all-in raises that do or do not reopen
the betting, and rejected actions leaving the table untouched.
"""

import pytest

from holdemtable.core.errors import (
    IllegalCheckError, IllegalRaiseError, IneligibleActorError,
    NotCurrentActorError, UnknownActionError,
)
from holdemtable.core.rules import ActionType, Round

from tests.helpers import act, play_round_with_calls


class TestHeadsUp:
    """Heads-up (2 seats): dealer posts the big blind, small blind acts first."""

    def test_small_blind_calls_then_big_blind_checks(self, heads_up_table):
        table = heads_up_table
        table.start_round(Round.PREFLOP)
        assert table.small_blind_index == 1
        assert table.big_blind_index == 0
        assert table.current_actor_id() == "P2"

        table.apply_action("P2", "CALL")
        sb = table.get_seat("P2")
        assert sb.bet == 100
        assert sb.stack == 1900
        assert not table.is_round_complete()

        table.advance_actor()
        assert table.current_actor_id() == "P1"
        table.apply_action("P1", "CHECK")
        assert table.is_round_complete()

    def test_postflop_big_blind_acts_first(self, heads_up_table):
        table = heads_up_table
        table.start_round(Round.PREFLOP)
        play_round_with_calls(table)
        table.start_round(Round.FLOP)
        assert table.current_actor_id() == "P2"

    def test_small_blind_all_in_from_blind(self, heads_up_table):
        table = heads_up_table
        table.get_seat("P2").stack = 50
        table.start_round(Round.PREFLOP)

        assert table.get_seat("P2").is_all_in
        # The all-in small blind is skipped; the big blind already matches
        assert table.current_actor_id() == "P1"
        assert table.is_round_complete()


class TestShortStacks:
    """Seats that cannot cover a call or a full raise."""

    def test_raise_beyond_stack_goes_all_in(self, table):
        table.get_seat("P4").stack = 30
        table.start_round(Round.PREFLOP)

        record = table.apply_action("P4", "RAISE", 500)
        seat = table.get_seat("P4")
        assert seat.is_all_in
        assert seat.stack == 0
        assert seat.bet == 30
        # All-in below the highest bet is recorded as a call
        assert record.action_type is ActionType.CALL
        assert table.highest_bet == 100

    def test_short_raise_must_be_all_in(self, table):
        table.get_seat("P4").stack = 150
        table.start_round(Round.PREFLOP)
        before = table.snapshot()

        with pytest.raises(IllegalRaiseError) as exc:
            table.apply_action("P4", "RAISE", 120)
        assert exc.value.minimum_total == 150
        assert table.snapshot() == before

        record = table.apply_action("P4", "RAISE", 400)
        assert record.total_bet == 150
        assert record.is_all_in
        assert not record.reopened

    def test_call_for_less(self, table):
        table.get_seat("P4").stack = 60
        table.start_round(Round.PREFLOP)
        record = table.apply_action("P4", "CALL")
        assert record.chips == 60
        assert record.is_all_in
        assert table.highest_bet == 100

    def test_all_in_for_less_than_call(self, table):
        table.get_seat("P4").stack = 60
        table.start_round(Round.PREFLOP)
        assert {"type": "ALL_IN", "amount": 60} in table.legal_actions()
        record = table.apply_action("P4", "ALL_IN")
        assert record.action_type is ActionType.CALL
        assert record.total_bet == 60

    def test_short_big_blind(self, table):
        table.get_seat("P3").stack = 60
        table.start_round(Round.PREFLOP)
        bb = table.get_seat("P3")
        assert bb.bet == 60
        assert bb.is_all_in
        assert table.highest_bet == 60
        assert table.to_call("P4") == 60

    def test_big_blind_shorter_than_small_blind(self, table):
        table.get_seat("P3").stack = 30
        table.start_round(Round.PREFLOP)
        assert table.get_seat("P3").bet == 30
        assert table.highest_bet == 50

    def test_one_seat_left_to_act_postflop(self, three_seat_table):
        table = three_seat_table
        table.get_seat("P1").stack = 500
        table.start_round(Round.PREFLOP)
        act(table, "ALL_IN")       # P1 to 500
        act(table, "FOLD")         # P2
        act(table, "CALL")         # P3
        assert table.is_round_complete()

        table.start_round(Round.FLOP)
        # Only P3 can still act and owes nothing
        assert table.num_can_act == 1
        assert table.is_round_complete()
        assert not table.is_showdown()


class TestShortAllInRaise:
    """An all-in raise smaller than the minimum raise."""

    @pytest.fixture
    def short_raised_table(self, three_seat_table):
        """P1 raises to 300, P2 (SB) goes all-in to 400: a short raise of 100."""
        table = three_seat_table
        table.get_seat("P2").stack = 400
        table.start_round(Round.PREFLOP)
        act(table, "RAISE", 300)
        record = act(table, "ALL_IN")
        assert record.action_type is ActionType.RAISE
        assert record.total_bet == 400
        assert not record.reopened
        return table

    def test_does_not_change_min_raise(self, short_raised_table):
        table = short_raised_table
        assert table.highest_bet == 400
        assert table.min_raise == 200
        assert table.last_aggressor_index == 0

    def test_seat_yet_to_act_may_raise(self, short_raised_table):
        table = short_raised_table
        assert table.current_actor_id() == "P3"
        actions = {a["type"]: a for a in table.legal_actions()}
        assert actions["RAISE"]["min"] == 600
        assert actions["CALL"]["amount"] == 300

    def test_acted_seat_may_only_call_or_fold(self, short_raised_table):
        table = short_raised_table
        act(table, "CALL")         # P3
        assert table.current_actor_id() == "P1"
        assert not table.is_round_complete()

        types = [a["type"] for a in table.legal_actions()]
        assert types == ["FOLD", "CALL"]

        with pytest.raises(IllegalRaiseError) as exc:
            table.apply_action("P1", "RAISE", 1000)
        assert exc.value.minimum_total is None

        act(table, "CALL")
        assert table.is_round_complete()
        assert table.pot == 1200

    def test_full_reraise_reopens(self, short_raised_table):
        table = short_raised_table
        record = act(table, "RAISE", 600)     # P3
        assert record.reopened
        assert table.get_seat("P1").can_raise
        types = [a["type"] for a in table.legal_actions("P1")]
        assert "RAISE" in types

    def test_capped_seat_may_still_call_all_in(self, three_seat_table):
        """A seat limited to calling can send a raise that clamps to an all-in call."""
        table = three_seat_table
        table.start_round(Round.PREFLOP)
        play_round_with_calls(table)
        table.get_seat("P3").stack = 130
        table.get_seat("P1").stack = 150
        table.start_round(Round.FLOP)

        act(table, "BET", 100)     # P2
        act(table, "CALL")         # P3, 30 behind
        act(table, "ALL_IN")       # P1 short all-in to 150
        act(table, "CALL")         # P2
        assert not table.get_seat("P3").can_raise
        assert table.current_actor_id() == "P3"

        record = table.apply_action("P3", "RAISE", 500)
        assert record.action_type is ActionType.CALL
        assert record.total_bet == 130
        assert record.is_all_in
        assert table.highest_bet == 150
        assert table.is_round_complete()

    def test_capped_seat_still_cannot_raise(self, short_raised_table):
        table = short_raised_table
        act(table, "CALL")         # P3
        with pytest.raises(IllegalRaiseError) as exc:
            table.apply_action("P1", "RAISE", 2000)
        assert exc.value.minimum_total is None

    def test_next_round_restores_raising(self, short_raised_table):
        table = short_raised_table
        act(table, "CALL")
        act(table, "CALL")
        table.start_round(Round.FLOP)
        assert table.get_seat("P1").can_raise

    def test_full_all_in_raise_reopens(self, three_seat_table):
        table = three_seat_table
        table.get_seat("P2").stack = 600
        table.start_round(Round.PREFLOP)
        act(table, "RAISE", 300)
        record = act(table, "ALL_IN")          # P2 to 600: a raise of 300
        assert record.reopened
        assert table.min_raise == 300
        assert not table.get_seat("P1").has_acted


class TestRejectedActions:
    """A rejected action must leave the table exactly as it was."""

    @pytest.mark.parametrize("seat_id,action,amount,error", [
        ("P5", "CALL", None, NotCurrentActorError),
        ("nobody", "CALL", None, NotCurrentActorError),
        ("P4", "SHOVE", None, UnknownActionError),
        ("P4", "CHECK", None, IllegalCheckError),
        ("P4", "RAISE", 150, IllegalRaiseError),
        ("P4", "BET", None, IllegalRaiseError),
    ])
    def test_state_unchanged(self, preflop_table, seat_id, action, amount, error):
        table = preflop_table
        table.current_actor_id()
        before = table.snapshot()

        with pytest.raises(error):
            table.apply_action(seat_id, action, amount)
        assert table.snapshot() == before

    def test_ineligible_state_unchanged(self, preflop_table):
        table = preflop_table
        table.apply_action("P4", "FOLD")
        before = table.snapshot()
        with pytest.raises(IneligibleActorError):
            table.apply_action("P4", "CALL")
        assert table.snapshot() == before

    def test_wrong_seat_does_not_move_turn(self, preflop_table):
        table = preflop_table
        table.apply_action("P4", "FOLD")
        with pytest.raises(NotCurrentActorError):
            table.apply_action("P6", "CALL")
        assert table.current_actor_index == 3

    def test_folded_seat_bet_frozen(self, three_seat_table):
        table = three_seat_table
        table.start_round(Round.PREFLOP)
        act(table, "FOLD")
        bet = table.get_seat("P1").bet
        act(table, "RAISE", 400)
        act(table, "CALL")
        assert table.get_seat("P1").bet == bet
        assert table.get_seat("P1").is_folded
