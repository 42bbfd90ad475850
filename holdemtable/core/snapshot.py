"""
Immutable table snapshots.

Snapshots are what the table hands to decision sources, suggestion sources
and UIs. They share no mutable state with the table: every field is a
frozen dataclass, a tuple, an int/str/bool or an immutable ``Card``.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from holdemtable.core.card import Card
from holdemtable.core.rules import Round


@dataclass(frozen=True)
class SeatSnapshot:
    """Read-only copy of one seat."""
    seat_id: str
    index: int
    stack: int
    hole_cards: Tuple[Card, ...]
    bet: int
    total_invested: int
    is_folded: bool
    is_all_in: bool
    has_acted: bool
    can_raise: bool
    role: Optional[str]
    last_action: Optional[str]

    @property
    def id(self) -> str:
        return self.seat_id

    @property
    def can_act(self) -> bool:
        return not self.is_folded and not self.is_all_in

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.seat_id,
            "index": self.index,
            "stack": self.stack,
            "hole_cards": [card.short_str for card in self.hole_cards],
            "bet": self.bet,
            "total_invested": self.total_invested,
            "is_folded": self.is_folded,
            "is_all_in": self.is_all_in,
            "has_acted": self.has_acted,
            "can_raise": self.can_raise,
            "role": self.role,
            "last_action": self.last_action,
        }


@dataclass(frozen=True)
class TableSnapshot:
    """Read-only copy of the whole table."""
    seats: Tuple[SeatSnapshot, ...]
    community_cards: Tuple[Card, ...]
    current_round: Optional[Round]
    current_actor_id: Optional[str]
    current_actor_index: int
    pot: int
    highest_bet: int
    min_raise: int
    dealer_index: int
    small_blind_index: int
    big_blind_index: int
    last_aggressor_index: int
    preflop_raise_count: int
    hand_number: int

    def seat(self, seat_id: str) -> SeatSnapshot:
        """Look up a seat by id."""
        for seat in self.seats:
            if seat.seat_id == seat_id:
                return seat
        raise KeyError(seat_id)

    def to_call(self, seat_id: str) -> int:
        """Chips the seat still owes to match the highest bet."""
        return max(0, self.highest_bet - self.seat(seat_id).bet)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a fresh JSON-friendly dictionary."""
        return {
            "seats": [seat.to_dict() for seat in self.seats],
            "community_cards": [card.short_str for card in self.community_cards],
            "current_round": self.current_round.value if self.current_round else None,
            "current_actor_id": self.current_actor_id,
            "current_actor_index": self.current_actor_index,
            "pot": self.pot,
            "highest_bet": self.highest_bet,
            "min_raise": self.min_raise,
            "dealer_index": self.dealer_index,
            "small_blind_index": self.small_blind_index,
            "big_blind_index": self.big_blind_index,
            "last_aggressor_index": self.last_aggressor_index,
            "preflop_raise_count": self.preflop_raise_count,
            "hand_number": self.hand_number,
        }
