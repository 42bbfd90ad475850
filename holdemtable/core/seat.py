"""
Seat class for the table.

Manages one seat's state within a hand:
- Stack (chip count)
- Hole cards
- Bet in the current round and total invested this hand
- Folded / all-in flags and the acted-this-round marker
"""

from __future__ import annotations
from typing import List, Optional, Dict, Any
from dataclasses import dataclass, field

from holdemtable.core.card import Card


@dataclass
class Seat:
    """
    One seat at the table.

    Attributes:
        seat_id: Unique stable identifier
        index: Seat position at the table (0-indexed)
        stack: Chips available to bet
        hole_cards: The seat's private cards (0 or 2)
        bet: Amount committed in the current betting round
        total_invested: Amount committed this hand
        is_folded: Folded this hand
        is_all_in: Stack reached zero through betting this hand
        has_acted: Acted since the round started or the action was last reopened
        can_raise: False while a short all-in raise limits the seat to call or fold
        role: Positional label for this hand (SB, BB, UTG, ..., BTN)
    """
    seat_id: str
    index: int = 0
    stack: int = 0
    hole_cards: List[Card] = field(default_factory=list)
    bet: int = 0
    total_invested: int = 0
    is_folded: bool = False
    is_all_in: bool = False
    has_acted: bool = False
    can_raise: bool = True
    role: Optional[str] = None
    last_action: Optional[str] = None

    @property
    def id(self) -> str:
        return self.seat_id

    def reset_for_new_hand(self, stack: int) -> None:
        """Reset seat state for a new hand."""
        self.stack = stack
        self.hole_cards = []
        self.bet = 0
        self.total_invested = 0
        self.is_folded = False
        self.is_all_in = False
        self.has_acted = False
        self.can_raise = True
        self.role = None
        self.last_action = None

    def reset_for_new_round(self) -> None:
        """Reset per-round state; folded and all-in flags carry over."""
        self.bet = 0
        self.has_acted = False
        self.can_raise = True

    def commit(self, amount: int) -> int:
        """
        Move chips from the stack into the current bet.

        Args:
            amount: Chips to commit

        Returns:
            Actual amount committed (less than ``amount`` when the stack runs out)
        """
        if amount <= 0:
            return 0

        actual = min(amount, self.stack)
        self.stack -= actual
        self.bet += actual
        self.total_invested += actual

        if self.stack == 0:
            self.is_all_in = True

        return actual

    def fold(self) -> None:
        self.is_folded = True
        self.last_action = "FOLD"

    @property
    def can_act(self) -> bool:
        """Check if the seat can still take an action this hand."""
        return not self.is_folded and not self.is_all_in

    @property
    def is_in_hand(self) -> bool:
        return not self.is_folded

    @property
    def all_in_total(self) -> int:
        """Bet total the seat reaches by pushing its whole stack."""
        return self.stack + self.bet

    def to_dict(self, hide_cards: bool = False) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = {
            "id": self.seat_id,
            "index": self.index,
            "stack": self.stack,
            "bet": self.bet,
            "total_invested": self.total_invested,
            "is_folded": self.is_folded,
            "is_all_in": self.is_all_in,
            "has_acted": self.has_acted,
            "can_raise": self.can_raise,
            "role": self.role,
            "last_action": self.last_action,
        }
        if not hide_cards:
            result["hole_cards"] = [card.short_str for card in self.hole_cards]
        return result

    def __repr__(self) -> str:
        flags = "folded" if self.is_folded else "all-in" if self.is_all_in else "active"
        return f"Seat({self.seat_id}, stack={self.stack}, bet={self.bet}, {flags})"
