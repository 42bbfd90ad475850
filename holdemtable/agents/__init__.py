"""
HoldemTable Agents - decision and suggestion sources

This module provides the agent interfaces and sample implementations used
to drive a table.
"""

from holdemtable.agents.base import (
    BaseAgent,
    Decision,
    SuggestionSource,
    NullSuggestionSource,
    CallbackSuggestionSource,
)
from holdemtable.agents.random_agent import RandomAgent, CallAgent, AggressiveAgent

__all__ = [
    "BaseAgent",
    "Decision",
    "SuggestionSource",
    "NullSuggestionSource",
    "CallbackSuggestionSource",
    "RandomAgent",
    "CallAgent",
    "AggressiveAgent",
]
