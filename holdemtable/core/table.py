"""
Texas Hold'em Table Engine - Betting Round State Machine.

This module implements the state of one no-limit Hold'em table for one hand.
It handles:
- Seat, pot and round state
- Blind posting and first-actor selection
- Seat actions (fold, check, call, bet, raise, all-in)
- Turn advancement and betting round completion
- Immutable snapshots for decision sources and UIs

The table never advances by itself. A driver calls, in order:

    table.reset()
    table.deal_hole_cards()
    table.start_round("PREFLOP")
    while not table.is_round_complete():
        seat_id = table.current_actor_id()
        table.apply_action(seat_id, "CALL")
        table.advance_actor()
    table.deal_flop()
    table.start_round("FLOP")
    ...

Every operation validates before it mutates anything: a rejected call
leaves the table exactly as it was.
"""

from __future__ import annotations
from typing import List, Dict, Optional, Any, Union
from dataclasses import dataclass
import logging
import random

from holdemtable.core.card import Card, CardSupply
from holdemtable.core.config import TableConfig
from holdemtable.core.errors import (
    ConfigurationError, IllegalCheckError, IllegalRaiseError,
    IneligibleActorError, InvalidRoundError, NotCurrentActorError,
)
from holdemtable.core.rules import (
    Round, ActionType, NO_ACTOR, BOARD_SIZE_BEFORE,
    FLOP_CARDS, TURN_CARDS, RIVER_CARDS,
    get_blind_positions, get_first_to_act_preflop, get_role_order,
    dealer_index_for_role, calculate_min_raise, is_full_raise,
)
from holdemtable.core.seat import Seat
from holdemtable.core.snapshot import SeatSnapshot, TableSnapshot


logger = logging.getLogger(__name__)

STREET_CARDS = {
    Round.FLOP: FLOP_CARDS,
    Round.TURN: TURN_CARDS,
    Round.RIVER: RIVER_CARDS,
}


@dataclass(frozen=True)
class ActionRecord:
    """What an accepted action did to the table."""
    seat_id: str
    action_type: ActionType
    round: Round
    chips: int          # Chips moved from stack to bet by this action
    total_bet: int      # Seat's bet in the round after the action
    is_all_in: bool
    reopened: bool      # A full bet/raise that reopened the action


class Table:
    """
    No-limit Texas Hold'em table for a fixed number of seats.

    Usage:
        table = Table(TableConfig(small_blind=50, big_blind=100))
        table.reset()
        table.deal_hole_cards()
        table.start_round(Round.PREFLOP)

        while not table.is_round_complete():
            seat_id = table.current_actor_id()
            decision = get_decision(table.snapshot(), seat_id)  # From UI or AI
            table.apply_action(seat_id, decision.action, decision.amount)
            table.advance_actor()
    """

    def __init__(
        self,
        config: Optional[TableConfig] = None,
        seat_ids: Optional[List[str]] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Create the table and prepare the first hand.

        Args:
            config: Table configuration (defaults to ``TableConfig()``)
            seat_ids: Optional seat identifiers, "P1".."Pn" by default
            rng: Random number generator for stacks, dealer and deck
        """
        self.config = self._check_config(config or TableConfig())
        self.rng = rng or random.Random(self.config.seed)

        if seat_ids is None:
            seat_ids = [f"P{i + 1}" for i in range(self.config.seat_count)]
        if len(seat_ids) != self.config.seat_count:
            raise ConfigurationError(
                f"Expected {self.config.seat_count} seat ids, got {len(seat_ids)}"
            )
        if len(set(seat_ids)) != len(seat_ids):
            raise ConfigurationError("Seat ids must be unique")

        self.seats: List[Seat] = [
            Seat(seat_id=sid, index=i) for i, sid in enumerate(seat_ids)
        ]
        self._seats_by_id: Dict[str, Seat] = {s.seat_id: s for s in self.seats}

        self.hand_number = 0
        self.reset()

    # ------------------------------------------------------------------
    # Hand lifecycle
    # ------------------------------------------------------------------

    def _check_config(self, config: TableConfig) -> TableConfig:
        if not isinstance(config, TableConfig):
            raise ConfigurationError(f"Expected TableConfig, got {type(config).__name__}")
        if hasattr(self, "seats"):
            if config.seat_count != len(self.seats):
                raise ConfigurationError("Seat count cannot change on an existing table")
            unknown = set(config.preset_hole_cards) - set(self._seats_by_id)
            if unknown:
                raise ConfigurationError(f"Preset hole cards for unknown seats: {sorted(unknown)}")
        return config

    def reset(self, config: Optional[TableConfig] = None, dealer_index: Optional[int] = None) -> None:
        """
        Reinitialise every seat and all round state for a new hand.

        Args:
            config: Optional replacement configuration (same seat count)
            dealer_index: Dealer seat for this hand; falls back to
                ``config.dealer_index``, then ``config.hero_role``, then random
        """
        if config is not None:
            self.config = self._check_config(config)
            if config.seed is not None:
                self.rng = random.Random(config.seed)
        else:
            self._check_config(self.config)

        num_seats = len(self.seats)
        if dealer_index is None:
            dealer_index = self.config.dealer_index
        if dealer_index is None and self.config.hero_role is not None:
            dealer_index = dealer_index_for_role(num_seats, self.config.hero_role)
        if dealer_index is None:
            dealer_index = self.rng.randrange(num_seats)
        if not 0 <= dealer_index < num_seats:
            raise ConfigurationError(f"Dealer index must be 0-{num_seats - 1}, got {dealer_index}")

        self.dealer_index = dealer_index
        self.small_blind_index, self.big_blind_index = get_blind_positions(num_seats, dealer_index)

        for seat in self.seats:
            seat.reset_for_new_hand(self.config.stack_for_seat(self.rng))
        self._assign_roles()

        self.community_cards: List[Card] = []
        self.current_round: Optional[Round] = None
        self.current_actor_index = NO_ACTOR
        self.highest_bet = 0
        self.min_raise = self.config.big_blind
        self.last_aggressor_index = NO_ACTOR
        self.preflop_raise_count = 0
        self._blinds_posted = False
        self.supply = CardSupply(rng=self.rng, exclude=self.config.preset_cards())

        self.hand_number += 1
        logger.info(
            f"Hand #{self.hand_number} reset: dealer={self.seats[self.dealer_index].seat_id} "
            f"blinds={self.config.small_blind}/{self.config.big_blind}"
        )

    def _assign_roles(self) -> None:
        """Label seats SB, BB, UTG, ..., BTN clockwise from the dealer."""
        num_seats = len(self.seats)
        for i, role in enumerate(get_role_order(num_seats)):
            self.seats[(self.dealer_index + i + 1) % num_seats].role = role

    def start_round(self, round: Union[Round, str]) -> None:
        """
        Start a betting round.

        Rounds must follow PREFLOP -> FLOP -> TURN -> RIVER after a reset.
        Preflop also posts the blinds.

        Raises:
            InvalidRoundError: Unknown round or out of sequence
        """
        rnd = Round.coerce(round)
        expected = Round.PREFLOP if self.current_round is None else self.current_round.next_round
        if rnd is not expected:
            expected_name = expected.value if expected else "a new hand"
            raise InvalidRoundError(f"Cannot start {rnd.value}, expected {expected_name}")

        self.current_round = rnd
        self.highest_bet = 0
        self.min_raise = self.config.big_blind
        self.last_aggressor_index = NO_ACTOR

        for seat in self.seats:
            seat.reset_for_new_round()

        num_seats = len(self.seats)
        if rnd is Round.PREFLOP:
            self.current_actor_index = get_first_to_act_preflop(num_seats, self.dealer_index)
            self.post_blinds()
            self.last_aggressor_index = self.big_blind_index
            if not self.seats[self.current_actor_index].can_act:
                self.current_actor_index = self._find_actor(self.current_actor_index)
        else:
            self.current_actor_index = self._find_actor(self.dealer_index)

        logger.info(
            f"{rnd.value} started: first actor="
            f"{self.current_actor_id() or 'none'} pot={self.pot}"
        )

    def post_blinds(self) -> None:
        """
        Post small and big blinds (called by ``start_round`` at preflop).

        Short stacks post what they have and go all-in. Posting a blind does
        not count as acting, so the big blind keeps its option.
        """
        if self.current_round is not Round.PREFLOP or self._blinds_posted:
            raise InvalidRoundError("Blinds are posted once, at the start of preflop")

        sb_seat = self.seats[self.small_blind_index]
        bb_seat = self.seats[self.big_blind_index]

        sb_amount = sb_seat.commit(self.config.small_blind)
        sb_seat.last_action = f"SB {sb_amount}"

        bb_amount = bb_seat.commit(self.config.big_blind)
        bb_seat.last_action = f"BB {bb_amount}"

        # A big blind shorter than the small blind leaves the small blind highest
        self.highest_bet = max(sb_amount, bb_amount)
        self._blinds_posted = True

        logger.debug(f"Blinds posted: SB={sb_amount} BB={bb_amount}")

    # ------------------------------------------------------------------
    # Dealing
    # ------------------------------------------------------------------

    def deal_hole_cards(self) -> None:
        """Deal two hole cards to every seat, preset cards first."""
        if any(seat.hole_cards for seat in self.seats):
            raise InvalidRoundError("Hole cards were already dealt this hand")

        for seat in self.seats:
            preset = self.config.preset_hole_cards.get(seat.seat_id)
            if preset:
                seat.hole_cards = [Card.from_string(c) for c in preset]
            else:
                self.supply.deal_hole(seat)

    def _deal_street(self, street: Round) -> List[Card]:
        expected = BOARD_SIZE_BEFORE[street]
        if len(self.community_cards) != expected:
            raise InvalidRoundError(
                f"Cannot deal the {street.value.lower()} with {len(self.community_cards)} board cards"
            )

        count = STREET_CARDS[street]
        if self.config.preset_board:
            cards = [Card.from_string(c) for c in self.config.preset_board[expected:expected + count]]
        else:
            self.supply.burn()
            cards = self.supply.deal_community(count)

        self.community_cards.extend(cards)
        logger.debug(f"{street.value} dealt: {' '.join(c.short_str for c in cards)}")
        return cards

    def deal_flop(self) -> List[Card]:
        """Deal the flop (3 community cards)."""
        return self._deal_street(Round.FLOP)

    def deal_turn(self) -> List[Card]:
        """Deal the turn (4th community card)."""
        return self._deal_street(Round.TURN)

    def deal_river(self) -> List[Card]:
        """Deal the river (5th community card)."""
        return self._deal_street(Round.RIVER)

    def deal_remaining(self) -> List[Card]:
        """Complete the board to five cards (all-in run-out)."""
        dealt = []
        for street in (Round.FLOP, Round.TURN, Round.RIVER):
            if len(self.community_cards) == BOARD_SIZE_BEFORE[street]:
                dealt.extend(self._deal_street(street))
        return dealt

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def apply_action(
        self,
        seat_id: str,
        action: Union[ActionType, str],
        amount: Optional[int] = None,
    ) -> ActionRecord:
        """
        Apply one action for the current actor.

        Args:
            seat_id: Seat taking the action; must be the current actor
            action: FOLD, CHECK, CALL, BET, RAISE or ALL_IN
            amount: Total bet for BET/RAISE (not the increment)

        Returns:
            ActionRecord describing the accepted action

        Raises:
            NotCurrentActorError, IneligibleActorError, UnknownActionError,
            IllegalCheckError, IllegalRaiseError
        """
        seat = self._seats_by_id.get(seat_id)
        expected = self._peek_actor_index()
        # The seat at a stale index is reported as ineligible below
        if seat is None or seat.index not in (expected, self.current_actor_index):
            current = self.seats[expected].seat_id if expected != NO_ACTOR else None
            raise NotCurrentActorError(f"It is not {seat_id}'s turn (current actor: {current})")
        if not seat.can_act:
            state = "folded" if seat.is_folded else "all-in"
            raise IneligibleActorError(f"{seat_id} cannot act ({state})")

        action_type = ActionType.coerce(action)
        if action_type is ActionType.ALL_IN:
            if seat.all_in_total > self.highest_bet:
                action_type = ActionType.BET if self.highest_bet == 0 else ActionType.RAISE
                amount = seat.all_in_total
            else:
                action_type = ActionType.CALL

        if action_type is ActionType.CHECK and seat.bet < self.highest_bet:
            raise IllegalCheckError(
                f"{seat_id} cannot check, must call {self.highest_bet - seat.bet} or fold"
            )

        target = 0
        if action_type in (ActionType.BET, ActionType.RAISE):
            target = self._validate_raise(seat, amount)

        # Validated: from here on the action is applied
        self.current_actor_index = seat.index
        old_highest = self.highest_bet
        chips = 0
        reopened = False

        if action_type is ActionType.FOLD:
            seat.fold()

        elif action_type is ActionType.CHECK:
            seat.last_action = "CHECK"

        elif action_type is ActionType.CALL:
            owed = max(0, self.highest_bet - seat.bet)
            chips = seat.commit(owed)
            if owed == 0:
                action_type = ActionType.CHECK
                seat.last_action = "CHECK"
            else:
                seat.last_action = f"ALL-IN {seat.bet}" if seat.is_all_in else f"CALL {chips}"

        else:
            if target <= old_highest:
                action_type = ActionType.CALL
            elif old_highest == 0:
                action_type = ActionType.BET
            else:
                action_type = ActionType.RAISE
            chips = seat.commit(target - seat.bet)
            if target > old_highest:
                self.highest_bet = target
                if is_full_raise(target, old_highest, self.min_raise):
                    reopened = True
                    self._reopen_action(seat, target - old_highest)
                else:
                    self._close_raising_for_acted(seat)
            seat.last_action = (
                f"ALL-IN {seat.bet}" if seat.is_all_in else f"{action_type.value} {seat.bet}"
            )

        seat.has_acted = True

        logger.debug(
            f"[{self.current_round.value}] {seat_id} {action_type.value}"
            f"{f' {seat.bet}' if chips else ''} stack={seat.stack} highest={self.highest_bet}"
        )

        return ActionRecord(
            seat_id=seat_id,
            action_type=action_type,
            round=self.current_round,
            chips=chips,
            total_bet=seat.bet,
            is_all_in=seat.is_all_in,
            reopened=reopened,
        )

    def _validate_raise(self, seat: Seat, amount: Optional[int]) -> int:
        """
        Check a BET/RAISE and return the effective total target.

        A seat that cannot reach a full raise may only go all-in. Requests
        above the seat's chips are clamped to an all-in.
        """
        full_total = calculate_min_raise(self.highest_bet, self.min_raise)
        all_in_total = seat.all_in_total
        minimum = min(full_total, all_in_total)

        # An all-in that cannot exceed the highest bet is a call, always allowed
        if not seat.can_raise and all_in_total > self.highest_bet:
            raise IllegalRaiseError(
                f"{seat.seat_id} cannot raise: a short all-in did not reopen the betting",
                minimum_total=None,
            )
        if amount is None or isinstance(amount, bool) or not isinstance(amount, int):
            raise IllegalRaiseError(
                f"Bet/raise needs a total amount (minimum {minimum})", minimum_total=minimum
            )

        if all_in_total < full_total:
            if amount < all_in_total:
                raise IllegalRaiseError(
                    f"{seat.seat_id} can only go all-in to {all_in_total}",
                    minimum_total=all_in_total,
                )
        elif amount < full_total:
            raise IllegalRaiseError(
                f"Minimum raise is to {full_total} (highest bet: {self.highest_bet}, "
                f"min raise: {self.min_raise})",
                minimum_total=full_total,
            )

        return min(amount, all_in_total)

    def _reopen_action(self, raiser: Seat, increment: int) -> None:
        """A full raise: everyone else who can act must act again."""
        self.min_raise = increment
        self.last_aggressor_index = raiser.index
        if self.current_round is Round.PREFLOP:
            self.preflop_raise_count += 1

        for seat in self.seats:
            if seat is not raiser and seat.can_act:
                seat.has_acted = False
                seat.can_raise = True

    def _close_raising_for_acted(self, raiser: Seat) -> None:
        """A short all-in raise: seats that already acted may only call or fold."""
        for seat in self.seats:
            if seat is not raiser and seat.can_act and seat.has_acted:
                seat.can_raise = False

    # ------------------------------------------------------------------
    # Turn order
    # ------------------------------------------------------------------

    def _find_actor(self, after: int) -> int:
        """First seat strictly after ``after`` that can act, wrapping; NO_ACTOR if none."""
        num_seats = len(self.seats)
        for offset in range(1, num_seats + 1):
            idx = (after + offset) % num_seats
            if self.seats[idx].can_act:
                return idx
        return NO_ACTOR

    def advance_actor(self) -> int:
        """
        Move the turn to the next seat that can act.

        Returns:
            The new current actor index, or NO_ACTOR when nobody can act
        """
        self.current_actor_index = self._find_actor(self.current_actor_index)
        if self.current_actor_index == NO_ACTOR:
            logger.debug("No seat left to act")
        return self.current_actor_index

    def current_actor_id(self) -> Optional[str]:
        """
        Id of the seat expected to act.

        If the seat at the current index cannot act, the turn moves forward
        to the next seat that can. Returns None when no seat can act.
        """
        self.current_actor_index = self._peek_actor_index()
        if self.current_actor_index == NO_ACTOR:
            return None
        return self.seats[self.current_actor_index].seat_id

    def _peek_actor_index(self) -> int:
        """Index ``current_actor_id`` would settle on, without moving the turn."""
        if self.current_actor_index == NO_ACTOR:
            return NO_ACTOR
        if self.seats[self.current_actor_index].can_act:
            return self.current_actor_index
        return self._find_actor(self.current_actor_index)

    def is_round_complete(self) -> bool:
        """
        Check if the current betting round is complete.

        Complete when the hand is decided (one seat left), when nobody can
        act, when the only seat that can act owes nothing, or when every
        seat that can act has acted and matched the highest bet.
        """
        in_hand = [s for s in self.seats if s.is_in_hand]
        if len(in_hand) <= 1:
            return True

        can_act = [s for s in in_hand if s.can_act]
        if not can_act:
            return True

        if len(can_act) == 1 and can_act[0].bet >= self.highest_bet:
            return True

        return all(s.has_acted and s.bet == self.highest_bet for s in can_act)

    def is_showdown(self) -> bool:
        """Two or more seats remain and none of them can act (all-in run-out)."""
        in_hand = [s for s in self.seats if s.is_in_hand]
        return len(in_hand) >= 2 and not any(s.can_act for s in in_hand)

    def is_hand_decided(self) -> bool:
        """Only one seat has not folded."""
        return self.num_in_hand <= 1

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def seat_count(self) -> int:
        return len(self.seats)

    @property
    def pot(self) -> int:
        """All chips committed this hand (informational)."""
        return sum(seat.total_invested for seat in self.seats)

    @property
    def num_in_hand(self) -> int:
        return sum(1 for s in self.seats if s.is_in_hand)

    @property
    def num_can_act(self) -> int:
        return sum(1 for s in self.seats if s.can_act)

    def get_seat(self, seat_id: str) -> Optional[Seat]:
        """Get seat by ID."""
        return self._seats_by_id.get(seat_id)

    def to_call(self, seat_id: str) -> int:
        """Chips the seat still owes this round (before clamping to its stack)."""
        seat = self._seats_by_id[seat_id]
        return max(0, self.highest_bet - seat.bet)

    def legal_actions(self, seat_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Get legal actions for a seat (the current actor by default).

        Returns:
            List of action dicts with type and constraints
        """
        if seat_id is None:
            seat_id = self.current_actor_id()
        seat = self._seats_by_id.get(seat_id) if seat_id else None
        if seat is None or not seat.can_act or self.current_round is None:
            return []

        actions: List[Dict[str, Any]] = [{"type": ActionType.FOLD.value}]
        owed = max(0, self.highest_bet - seat.bet)

        if owed == 0:
            actions.append({"type": ActionType.CHECK.value})
        else:
            actions.append({"type": ActionType.CALL.value, "amount": min(owed, seat.stack)})

        all_in_total = seat.all_in_total
        if seat.can_raise and all_in_total > self.highest_bet:
            full_total = calculate_min_raise(self.highest_bet, self.min_raise)
            kind = ActionType.BET if self.highest_bet == 0 else ActionType.RAISE
            actions.append({
                "type": kind.value,
                "min": min(full_total, all_in_total),
                "max": all_in_total,
            })

        if seat.can_raise or all_in_total <= self.highest_bet:
            actions.append({"type": ActionType.ALL_IN.value, "amount": all_in_total})

        return actions

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def snapshot(self) -> TableSnapshot:
        """Immutable copy of the whole table, safe to keep."""
        actor_index = self._peek_actor_index()
        return TableSnapshot(
            seats=tuple(
                SeatSnapshot(
                    seat_id=s.seat_id,
                    index=s.index,
                    stack=s.stack,
                    hole_cards=tuple(s.hole_cards),
                    bet=s.bet,
                    total_invested=s.total_invested,
                    is_folded=s.is_folded,
                    is_all_in=s.is_all_in,
                    has_acted=s.has_acted,
                    can_raise=s.can_raise,
                    role=s.role,
                    last_action=s.last_action,
                )
                for s in self.seats
            ),
            community_cards=tuple(self.community_cards),
            current_round=self.current_round,
            current_actor_id=self.seats[actor_index].seat_id if actor_index != NO_ACTOR else None,
            current_actor_index=actor_index,
            pot=self.pot,
            highest_bet=self.highest_bet,
            min_raise=self.min_raise,
            dealer_index=self.dealer_index,
            small_blind_index=self.small_blind_index,
            big_blind_index=self.big_blind_index,
            last_aggressor_index=self.last_aggressor_index,
            preflop_raise_count=self.preflop_raise_count,
            hand_number=self.hand_number,
        )

    def restore(self, snapshot: TableSnapshot) -> None:
        """
        Load the table state from a snapshot (used for replays).

        The deck is rebuilt from the cards not visible in the snapshot, so
        later streets are dealt fresh.
        """
        if [s.seat_id for s in snapshot.seats] != [s.seat_id for s in self.seats]:
            raise ConfigurationError("Snapshot seats do not match this table")

        for seat, saved in zip(self.seats, snapshot.seats):
            seat.stack = saved.stack
            seat.hole_cards = list(saved.hole_cards)
            seat.bet = saved.bet
            seat.total_invested = saved.total_invested
            seat.is_folded = saved.is_folded
            seat.is_all_in = saved.is_all_in
            seat.has_acted = saved.has_acted
            seat.can_raise = saved.can_raise
            seat.role = saved.role
            seat.last_action = saved.last_action

        self.community_cards = list(snapshot.community_cards)
        self.current_round = snapshot.current_round
        self.current_actor_index = snapshot.current_actor_index
        self.highest_bet = snapshot.highest_bet
        self.min_raise = snapshot.min_raise
        self.dealer_index = snapshot.dealer_index
        self.small_blind_index = snapshot.small_blind_index
        self.big_blind_index = snapshot.big_blind_index
        self.last_aggressor_index = snapshot.last_aggressor_index
        self.preflop_raise_count = snapshot.preflop_raise_count
        self.hand_number = snapshot.hand_number
        self._blinds_posted = snapshot.current_round is not None

        visible = list(self.community_cards)
        for seat in self.seats:
            visible.extend(seat.hole_cards)
        self.supply = CardSupply(rng=self.rng, exclude=visible + self.config.preset_cards())

        logger.info(f"Table restored to hand #{self.hand_number} {snapshot.current_round}")

    def __repr__(self) -> str:
        rnd = self.current_round.value if self.current_round else "WAITING"
        return f"Table({len(self.seats)} seats, {rnd}, pot={self.pot}, highest={self.highest_bet})"
