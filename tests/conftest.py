"""
Pytest configuration and shared fixtures for HoldemTable tests.

Seat layout used throughout (dealer fixed at index 0):
- 8 seats: P1=BTN, P2=SB, P3=BB, P4=UTG (first to act preflop)
- 3 seats: P1=BTN (first to act preflop), P2=SB, P3=BB
- 2 seats: P1=dealer/BB, P2=SB (first to act preflop)
"""

import random

import pytest

from holdemtable.core.card import Card, Deck, Rank, Suit
from holdemtable.core.config import TableConfig
from holdemtable.core.rules import Round
from holdemtable.core.table import Table


@pytest.fixture
def deck():
    """Create a fresh shuffled deck."""
    return Deck(shuffle=True, rng=random.Random(42))


@pytest.fixture
def unshuffled_deck():
    """Create a fresh unshuffled deck."""
    return Deck(shuffle=False)


@pytest.fixture
def make_table():
    """Factory for tables with the dealer fixed at seat 0."""
    def _make(seat_count=8, **kwargs):
        kwargs.setdefault("dealer_index", 0)
        kwargs.setdefault("seed", 7)
        return Table(TableConfig(seat_count=seat_count, **kwargs))
    return _make


@pytest.fixture
def table(make_table):
    """Full 8-seat table, blinds 50/100, stacks 2000."""
    return make_table()


@pytest.fixture
def three_seat_table(make_table):
    return make_table(seat_count=3)


@pytest.fixture
def heads_up_table(make_table):
    return make_table(seat_count=2)


@pytest.fixture
def preflop_table(table):
    """8-seat table with hole cards dealt and preflop started."""
    table.deal_hole_cards()
    table.start_round(Round.PREFLOP)
    return table


@pytest.fixture
def sample_cards():
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.KING, Suit.HEARTS),
        Card(Rank.TEN, Suit.DIAMONDS),
    ]
