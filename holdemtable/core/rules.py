"""
Texas Hold'em Rules and Constants.

This module defines the table rules the engine enforces:

1. Blinds: Small blind sits directly left of the dealer, big blind left of
   the small blind. This holds at every table size, heads-up included.

2. Action order: Preflop the seat three positions after the dealer acts
   first. Postflop the first seat left of the dealer that can still act.

3. Minimum raise: A bet or raise must increase the highest bet by at least
   the minimum raise. The minimum raise starts at the big blind every round
   and grows to the size of the last full raise.

4. All-in less than a minimum raise: A short all-in raise does not reopen
   the betting for players who have already acted; they may only call or fold.
"""

from enum import Enum
from typing import List, Optional, Tuple, Union

from holdemtable.core.errors import InvalidRoundError, UnknownActionError


class Round(Enum):
    """Betting rounds of a Texas Hold'em hand, in play order."""
    PREFLOP = "PREFLOP"
    FLOP = "FLOP"
    TURN = "TURN"
    RIVER = "RIVER"

    @classmethod
    def coerce(cls, value: Union["Round", str]) -> "Round":
        """Accept a Round or its name in any case."""
        if isinstance(value, Round):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        raise InvalidRoundError(f"Invalid round: {value!r}")

    @property
    def next_round(self) -> Optional["Round"]:
        """The round that follows this one, or None after the river."""
        order = list(Round)
        idx = order.index(self)
        return order[idx + 1] if idx + 1 < len(order) else None


class ActionType(Enum):
    """Possible seat actions."""
    FOLD = "FOLD"
    CHECK = "CHECK"
    CALL = "CALL"
    BET = "BET"
    RAISE = "RAISE"
    ALL_IN = "ALL_IN"

    @classmethod
    def coerce(cls, value: Union["ActionType", str]) -> "ActionType":
        """Accept an ActionType or its name in any case ("ALLIN" included)."""
        if isinstance(value, ActionType):
            return value
        if isinstance(value, str):
            name = value.strip().upper()
            if name == "ALLIN":
                name = "ALL_IN"
            try:
                return cls(name)
            except ValueError:
                pass
        raise UnknownActionError(f"Unknown action: {value!r}")


# Default table settings
DEFAULT_SEAT_COUNT = 8
DEFAULT_SMALL_BLIND = 50
DEFAULT_BIG_BLIND = 100
DEFAULT_STARTING_STACK = 2000
MIN_SEATS = 2
MAX_SEATS = 9

# Sentinel for "no seat is expected to act"
NO_ACTOR = -1

# Cards per street
HOLE_CARDS = 2
FLOP_CARDS = 3
TURN_CARDS = 1
RIVER_CARDS = 1
TOTAL_COMMUNITY_CARDS = 5

# Board size expected before each street is dealt
BOARD_SIZE_BEFORE = {
    Round.FLOP: 0,
    Round.TURN: 3,
    Round.RIVER: 4,
}


# Roles listed from the small blind clockwise to the button
ROLE_ORDERS = {
    2: ["SB", "BTN"],
    3: ["SB", "BB", "BTN"],
    4: ["SB", "BB", "CO", "BTN"],
    5: ["SB", "BB", "UTG", "CO", "BTN"],
    6: ["SB", "BB", "UTG", "HJ", "CO", "BTN"],
    7: ["SB", "BB", "UTG", "LJ", "HJ", "CO", "BTN"],
    8: ["SB", "BB", "UTG", "UTG+1", "LJ", "HJ", "CO", "BTN"],
    9: ["SB", "BB", "UTG", "UTG+1", "UTG+2", "LJ", "HJ", "CO", "BTN"],
}


def get_role_order(num_seats: int) -> List[str]:
    """
    Get the positional role names for a table size.

    Roles are listed starting from the seat left of the dealer, so
    ``roles[i]`` belongs to seat ``(dealer + 1 + i) % num_seats``.
    """
    if num_seats not in ROLE_ORDERS:
        raise ValueError(f"Seat count must be {MIN_SEATS}-{MAX_SEATS}, got {num_seats}")
    return list(ROLE_ORDERS[num_seats])


def dealer_index_for_role(num_seats: int, role: str, seat_index: int = 0) -> Optional[int]:
    """
    Dealer position that gives ``seat_index`` the requested role.

    Returns None if the role does not exist at this table size.
    """
    roles = get_role_order(num_seats)
    if role not in roles:
        return None
    return (seat_index - roles.index(role) - 1) % num_seats


def get_blind_positions(num_seats: int, dealer_position: int) -> Tuple[int, int]:
    """
    Calculate small blind and big blind positions.

    Args:
        num_seats: Number of seats at the table
        dealer_position: Position of the dealer (0-indexed)

    Returns:
        Tuple of (small_blind_position, big_blind_position)
    """
    if num_seats < MIN_SEATS:
        raise ValueError("Need at least 2 seats")
    return (dealer_position + 1) % num_seats, (dealer_position + 2) % num_seats


def get_first_to_act_preflop(num_seats: int, dealer_position: int) -> int:
    """Seat three positions after the dealer (left of the big blind)."""
    return (dealer_position + 3) % num_seats


def calculate_min_raise(highest_bet: int, min_raise: int) -> int:
    """
    Calculate the minimum legal total for a bet or raise.

    Args:
        highest_bet: Current highest bet in the round
        min_raise: Minimum raise increment (big blind or last full raise)

    Returns:
        Minimum total bet amount
    """
    return highest_bet + min_raise


def is_full_raise(target: int, highest_bet: int, min_raise: int) -> bool:
    """
    Check if raising to ``target`` is a full raise.

    A full raise reopens the betting for every player. An all-in for less
    does not reopen it for players who have already acted.
    """
    return target - highest_bet >= min_raise
