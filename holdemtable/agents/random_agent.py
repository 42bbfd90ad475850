"""
Sample decision sources.

Simple agents that pick from the legal actions. Useful for driving the
table in tests and simulations and as baselines.
"""

import random
from typing import Any, Dict, List, Optional

from holdemtable.agents.base import BaseAgent, Decision
from holdemtable.core.rules import ActionType
from holdemtable.core.snapshot import TableSnapshot


def _by_type(legal_actions: List[Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    return {a["type"]: a for a in legal_actions}


class RandomAgent(BaseAgent):
    """
    An agent that selects random legal actions.

    The agent has configurable tendencies:
    - fold_probability: How likely to fold when facing a bet
    - raise_probability: How likely to bet/raise instead of checking/calling
    """

    def __init__(
        self,
        seat_id: Optional[str] = None,
        name: Optional[str] = None,
        fold_probability: float = 0.1,
        raise_probability: float = 0.3,
        rng: Optional[random.Random] = None,
    ):
        super().__init__(seat_id, name)
        self.fold_probability = fold_probability
        self.raise_probability = raise_probability
        self.rng = rng or random.Random()

    def decide(
        self,
        snapshot: TableSnapshot,
        seat_id: str,
        legal_actions: List[Dict[str, Any]],
    ) -> Decision:
        if not legal_actions:
            return Decision(action=ActionType.FOLD)

        actions = _by_type(legal_actions)
        roll = self.rng.random()

        # Only fold when facing a bet
        if "CALL" in actions and roll < self.fold_probability:
            return Decision(action=ActionType.FOLD)

        aggressive = [actions[t] for t in ("BET", "RAISE") if t in actions]
        if aggressive and roll < self.fold_probability + self.raise_probability:
            action = aggressive[0]
            amount = self.rng.randint(action["min"], action["max"])
            return Decision(action=action["type"], amount=amount)

        if "CHECK" in actions:
            return Decision(action=ActionType.CHECK)
        if "CALL" in actions:
            return Decision(action=ActionType.CALL)
        return Decision(action=ActionType.FOLD)


class CallAgent(BaseAgent):
    """An agent that always checks or calls."""

    def decide(
        self,
        snapshot: TableSnapshot,
        seat_id: str,
        legal_actions: List[Dict[str, Any]],
    ) -> Decision:
        actions = _by_type(legal_actions)
        if "CHECK" in actions:
            return Decision(action=ActionType.CHECK)
        if "CALL" in actions:
            return Decision(action=ActionType.CALL)
        return Decision(action=ActionType.FOLD)


class AggressiveAgent(BaseAgent):
    """
    An agent that always bets or raises when possible.

    Useful for exercising raise and all-in logic.
    """

    def __init__(
        self,
        seat_id: Optional[str] = None,
        name: Optional[str] = None,
        raise_multiplier: float = 2.0,
    ):
        """
        Args:
            seat_id: Seat this agent plays
            name: Optional name
            raise_multiplier: Raise size relative to the minimum legal total
        """
        super().__init__(seat_id, name)
        self.raise_multiplier = raise_multiplier

    def decide(
        self,
        snapshot: TableSnapshot,
        seat_id: str,
        legal_actions: List[Dict[str, Any]],
    ) -> Decision:
        actions = _by_type(legal_actions)

        for kind in ("BET", "RAISE"):
            if kind in actions:
                action = actions[kind]
                amount = int(min(action["min"] * self.raise_multiplier, action["max"]))
                return Decision(action=kind, amount=max(amount, action["min"]))

        if "CHECK" in actions:
            return Decision(action=ActionType.CHECK)
        if "CALL" in actions:
            return Decision(action=ActionType.CALL)
        return Decision(action=ActionType.FOLD)
