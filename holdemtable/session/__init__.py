"""
HoldemTable Session - driving hands on a table

The hand driver is the external loop around the table state machine; the
action history is the per-hand record handed to suggestion sources.
"""

from holdemtable.session.history import ActionHistory, HistoryEvent
from holdemtable.session.driver import HandDriver, HandResult

__all__ = ["ActionHistory", "HistoryEvent", "HandDriver", "HandResult"]
