"""
HoldemTable - No-limit Texas Hold'em table engine

A betting-round state machine for a fixed table with:
- Pure Python core (seats, blinds, turn order, round completion)
- Immutable snapshots for decision and suggestion sources
- A reference hand driver and sample agents

Usage:
    from holdemtable.core import Table, TableConfig, Round
    from holdemtable.agents import BaseAgent, RandomAgent
    from holdemtable.session import HandDriver
"""

__version__ = "0.1.0"

from holdemtable.core.config import TableConfig
from holdemtable.core.rules import Round, ActionType
from holdemtable.core.table import Table
from holdemtable.core.snapshot import TableSnapshot

__all__ = [
    "Table",
    "TableConfig",
    "TableSnapshot",
    "Round",
    "ActionType",
    "__version__",
]
