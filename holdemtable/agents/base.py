"""
Decision and suggestion source interfaces.

A decision source (agent) picks the action for a seat. A suggestion source
offers advice for the acting seat and never touches the table. Both only
ever see immutable ``TableSnapshot`` objects; the table validates whatever
an agent returns through ``Table.apply_action``.

Usage:
    class MyAgent(BaseAgent):
        def decide(self, snapshot, seat_id, legal_actions):
            return Decision(action=ActionType.CALL)
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from holdemtable.core.rules import ActionType
from holdemtable.core.snapshot import TableSnapshot


class Decision(BaseModel):
    """An action chosen by a decision source."""
    model_config = ConfigDict(frozen=True)

    action: ActionType = Field(..., description="FOLD, CHECK, CALL, BET, RAISE or ALL_IN")
    amount: Optional[int] = Field(default=None, ge=0, description="Total bet for BET/RAISE")

    @field_validator("action", mode="before")
    @classmethod
    def _normalise_action(cls, value: Any) -> Any:
        if isinstance(value, str):
            name = value.strip().upper()
            return "ALL_IN" if name == "ALLIN" else name
        return value

    @classmethod
    def parse(cls, obj: Any) -> "Decision":
        """
        Build a Decision from what an agent returned.

        Accepts a Decision, a dict with ``action`` (or ``type``) and
        ``amount``, an ``(action, amount)`` pair, or a bare action.
        """
        if isinstance(obj, Decision):
            return obj
        if isinstance(obj, dict):
            action = obj.get("action", obj.get("type"))
            return cls(action=action, amount=obj.get("amount"))
        if isinstance(obj, (tuple, list)) and len(obj) == 2:
            return cls(action=obj[0], amount=obj[1])
        return cls(action=obj)

    def __str__(self) -> str:
        if self.amount:
            return f"{self.action.value} {self.amount}"
        return self.action.value


DecisionLike = Union[Decision, Dict[str, Any], tuple, str, ActionType]


class BaseAgent(ABC):
    """
    Abstract base class for decision sources.

    Attributes:
        seat_id: Seat this agent plays, if bound to one
        name: Human-readable name
    """

    def __init__(self, seat_id: Optional[str] = None, name: Optional[str] = None):
        self.seat_id = seat_id
        self.name = name or f"{self.__class__.__name__}-{seat_id or 'any'}"

    @abstractmethod
    def decide(
        self,
        snapshot: TableSnapshot,
        seat_id: str,
        legal_actions: List[Dict[str, Any]],
    ) -> DecisionLike:
        """
        Choose an action for ``seat_id``.

        Args:
            snapshot: Current table snapshot
            seat_id: The seat to act
            legal_actions: Action dicts from ``Table.legal_actions``, each with
                ``type`` plus ``amount`` (CALL, ALL_IN) or ``min``/``max`` (BET, RAISE)

        Returns:
            A Decision, or anything ``Decision.parse`` accepts
        """
        pass

    def reset(self) -> None:
        """Reset internal state between sessions."""
        pass

    def on_hand_start(self, hand_number: int) -> None:
        pass

    def on_hand_end(self, result: Any) -> None:
        """Called with the ``HandResult`` once a hand is over."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.seat_id}, {self.name})"


class SuggestionSource(ABC):
    """
    Read-only advice for the acting seat.

    Implementations typically call out to a recommendation service; the
    engine only passes state in and stores whatever comes back.
    """

    @abstractmethod
    def suggest(self, snapshot: TableSnapshot, seat_id: str, history: Any) -> Any:
        """
        Args:
            snapshot: Current table snapshot
            seat_id: The seat about to act
            history: The hand's ``ActionHistory`` so far

        Returns:
            Any suggestion payload, or None
        """
        pass


class NullSuggestionSource(SuggestionSource):
    """Never suggests anything."""

    def suggest(self, snapshot: TableSnapshot, seat_id: str, history: Any) -> Any:
        return None


class CallbackSuggestionSource(SuggestionSource):
    """Adapts a plain function ``fn(snapshot, seat_id, history)``."""

    def __init__(self, fn: Callable[[TableSnapshot, str, Any], Any]):
        self.fn = fn

    def suggest(self, snapshot: TableSnapshot, seat_id: str, history: Any) -> Any:
        return self.fn(snapshot, seat_id, history)
