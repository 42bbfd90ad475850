"""
HoldemTable Core - Pure Python table state machine.

This module contains all betting logic without any I/O.
"""

from holdemtable.core.card import Card, Deck, CardSupply, fresh_shuffled_deck, parse_cards
from holdemtable.core.config import TableConfig
from holdemtable.core.errors import (
    TableError,
    InvalidRoundError,
    NotCurrentActorError,
    IneligibleActorError,
    UnknownActionError,
    IllegalActionError,
    IllegalCheckError,
    IllegalRaiseError,
    DeckExhaustedError,
    ConfigurationError,
)
from holdemtable.core.rules import Round, ActionType, NO_ACTOR
from holdemtable.core.seat import Seat
from holdemtable.core.snapshot import SeatSnapshot, TableSnapshot
from holdemtable.core.table import Table, ActionRecord

__all__ = [
    "Card",
    "Deck",
    "CardSupply",
    "fresh_shuffled_deck",
    "parse_cards",
    "TableConfig",
    "TableError",
    "InvalidRoundError",
    "NotCurrentActorError",
    "IneligibleActorError",
    "UnknownActionError",
    "IllegalActionError",
    "IllegalCheckError",
    "IllegalRaiseError",
    "DeckExhaustedError",
    "ConfigurationError",
    "Round",
    "ActionType",
    "NO_ACTOR",
    "Seat",
    "SeatSnapshot",
    "TableSnapshot",
    "Table",
    "ActionRecord",
]
