"""
Table configuration.

A ``TableConfig`` is built once and handed to the ``Table`` constructor (or
to ``Table.reset``). It is immutable, so several tables can share one config
or run with independent ones.
"""

import random
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from holdemtable.core.card import Card
from holdemtable.core.rules import (
    DEFAULT_BIG_BLIND, DEFAULT_SEAT_COUNT, DEFAULT_SMALL_BLIND,
    DEFAULT_STARTING_STACK, MAX_SEATS, MIN_SEATS, TOTAL_COMMUNITY_CARDS,
    HOLE_CARDS, get_role_order,
)


class TableConfig(BaseModel):
    """
    Settings for one table.

    Attributes:
        seat_count: Number of seats (2-9)
        small_blind: Small blind amount
        big_blind: Big blind amount, also the minimum raise at round start
        starting_stack: Stack every seat receives at reset
        min_stack / max_stack: Optional range; when set, each seat's stack is
            drawn uniformly from it instead of using ``starting_stack``
        dealer_index: Fixed dealer seat; random when neither this nor
            ``hero_role`` is set
        hero_role: Role the first seat should play (e.g. "BTN", "UTG")
        preset_hole_cards: Seat id -> two card strings dealt instead of random cards
        preset_board: Five card strings used for flop, turn and river
        seed: Seed for the table's random number generator
    """
    model_config = ConfigDict(frozen=True)

    seat_count: int = Field(default=DEFAULT_SEAT_COUNT, ge=MIN_SEATS, le=MAX_SEATS)
    small_blind: int = Field(default=DEFAULT_SMALL_BLIND, gt=0)
    big_blind: int = Field(default=DEFAULT_BIG_BLIND, gt=0)
    starting_stack: int = Field(default=DEFAULT_STARTING_STACK, gt=0)
    min_stack: Optional[int] = Field(default=None, gt=0)
    max_stack: Optional[int] = Field(default=None, gt=0)
    dealer_index: Optional[int] = Field(default=None, ge=0)
    hero_role: Optional[str] = None
    preset_hole_cards: Dict[str, Tuple[str, str]] = Field(default_factory=dict)
    preset_board: Tuple[str, ...] = ()
    seed: Optional[int] = None

    @field_validator("preset_board")
    @classmethod
    def _check_board_size(cls, board: Tuple[str, ...]) -> Tuple[str, ...]:
        if board and len(board) != TOTAL_COMMUNITY_CARDS:
            raise ValueError(f"preset_board needs {TOTAL_COMMUNITY_CARDS} cards, got {len(board)}")
        return board

    @model_validator(mode="after")
    def _check_consistency(self) -> "TableConfig":
        if self.big_blind < self.small_blind:
            raise ValueError("big_blind must be at least small_blind")
        if (self.min_stack is None) != (self.max_stack is None):
            raise ValueError("min_stack and max_stack must be set together")
        if self.min_stack is not None and self.min_stack > self.max_stack:
            raise ValueError("min_stack must not exceed max_stack")
        if self.dealer_index is not None and self.dealer_index >= self.seat_count:
            raise ValueError(f"dealer_index must be below seat_count ({self.seat_count})")
        if self.hero_role is not None and self.hero_role not in get_role_order(self.seat_count):
            raise ValueError(f"Role {self.hero_role} does not exist at a {self.seat_count}-seat table")

        # Preset cards must parse and never repeat
        seen = set()
        for card in self.preset_cards():
            if card in seen:
                raise ValueError(f"Duplicate preset card: {card.short_str}")
            seen.add(card)
        return self

    def preset_cards(self) -> List[Card]:
        """All preset cards, hole cards first."""
        cards = []
        for seat_id, hole in self.preset_hole_cards.items():
            if len(hole) != HOLE_CARDS:
                raise ValueError(f"Seat {seat_id} needs {HOLE_CARDS} preset hole cards")
            cards.extend(Card.from_string(c) for c in hole)
        cards.extend(Card.from_string(c) for c in self.preset_board)
        return cards

    @property
    def uses_stack_range(self) -> bool:
        return self.min_stack is not None

    def stack_for_seat(self, rng: random.Random) -> int:
        """Stack a seat receives at reset."""
        if self.uses_stack_range:
            return rng.randint(self.min_stack, self.max_stack)
        return self.starting_stack
