"""
Per-hand action history.

An ordered record of everything that happened in one hand: the starting
state, blinds, seat actions and dealt streets. Suggestion sources read it;
replays rebuild a hand from it.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

from holdemtable.core.card import Card
from holdemtable.core.rules import ActionType, Round
from holdemtable.core.snapshot import TableSnapshot
from holdemtable.core.table import ActionRecord, Table


INITIAL_STATE = "initial_state"
BLIND = "blind"
ACTION = "action"
DEAL = "deal"


@dataclass(frozen=True)
class HistoryEvent:
    """One entry in the hand history."""
    kind: str
    round: Optional[Round] = None
    seat_id: Optional[str] = None
    action: Optional[ActionType] = None
    amount: int = 0                   # Seat's total bet after the event
    chips: int = 0                    # Chips moved by the event
    is_all_in: bool = False
    cards: Tuple[Card, ...] = ()
    snapshot: Optional[TableSnapshot] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "type": self.kind,
            "round": self.round.value if self.round else None,
        }
        if self.kind in (BLIND, ACTION):
            result.update({
                "seat_id": self.seat_id,
                "action": self.action.value if self.action else None,
                "amount": self.amount,
                "chips": self.chips,
                "is_all_in": self.is_all_in,
            })
        if self.kind == DEAL:
            result["cards"] = [c.short_str for c in self.cards]
        if self.snapshot is not None:
            result["state"] = self.snapshot.to_dict()
        return result


class ActionHistory:
    """Ordered list of ``HistoryEvent`` for one hand."""

    def __init__(self):
        self.events: List[HistoryEvent] = []

    def record_initial_state(self, snapshot: TableSnapshot) -> None:
        self.events.append(HistoryEvent(kind=INITIAL_STATE, snapshot=snapshot))

    def record_blinds(self, table: Table) -> None:
        """Record the blinds posted at the start of preflop."""
        for idx in (table.small_blind_index, table.big_blind_index):
            seat = table.seats[idx]
            self.events.append(HistoryEvent(
                kind=BLIND,
                round=Round.PREFLOP,
                seat_id=seat.seat_id,
                action=ActionType.BET,
                amount=seat.bet,
                chips=seat.bet,
                is_all_in=seat.is_all_in,
            ))

    def record_action(self, record: ActionRecord) -> None:
        self.events.append(HistoryEvent(
            kind=ACTION,
            round=record.round,
            seat_id=record.seat_id,
            action=record.action_type,
            amount=record.total_bet,
            chips=record.chips,
            is_all_in=record.is_all_in,
        ))

    def record_deal(self, street: Round, cards: List[Card]) -> None:
        self.events.append(HistoryEvent(kind=DEAL, round=street, cards=tuple(cards)))

    def actions(self, round: Optional[Round] = None, seat_id: Optional[str] = None) -> List[HistoryEvent]:
        """Seat actions, optionally filtered by round and seat."""
        return [
            e for e in self.events
            if e.kind == ACTION
            and (round is None or e.round is round)
            and (seat_id is None or e.seat_id == seat_id)
        ]

    def for_round(self, round: Round) -> List[HistoryEvent]:
        return [e for e in self.events if e.round is round]

    def raise_count(self, round: Round) -> int:
        """Number of bets and raises made in a round."""
        return sum(
            1 for e in self.actions(round)
            if e.action in (ActionType.BET, ActionType.RAISE)
        )

    def to_list(self) -> List[Dict[str, Any]]:
        return [e.to_dict() for e in self.events]

    def __iter__(self) -> Iterator[HistoryEvent]:
        return iter(self.events)

    def __len__(self) -> int:
        return len(self.events)
