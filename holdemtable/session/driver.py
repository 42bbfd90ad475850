"""
Hand driver.

Plays one hand on a ``Table`` through its public API only: deal, start a
round, then repeatedly ask the acting seat's agent for a decision, apply it,
advance the turn and check for round completion. Optional suggestion
sources are consulted before each decision.

The table never advances by itself; this loop is what moves it.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union
import logging

from pydantic import ValidationError

from holdemtable.agents.base import BaseAgent, Decision, SuggestionSource
from holdemtable.core.errors import ConfigurationError, TableError
from holdemtable.core.rules import ActionType, Round
from holdemtable.core.snapshot import TableSnapshot
from holdemtable.core.table import ActionRecord, Table
from holdemtable.session.history import ActionHistory


logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 2


@dataclass
class HandResult:
    """Outcome of one driven hand (no winner determination)."""
    hand_number: int
    snapshot: TableSnapshot
    history: ActionHistory
    ended_by_fold: bool
    remaining_seat_ids: List[str]
    suggestions: List[Dict[str, Any]] = field(default_factory=list)
    rejected_decisions: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hand_number": self.hand_number,
            "ended_by_fold": self.ended_by_fold,
            "remaining": list(self.remaining_seat_ids),
            "pot": self.snapshot.pot,
            "board": [c.short_str for c in self.snapshot.community_cards],
            "rejected_decisions": self.rejected_decisions,
            "history": self.history.to_list(),
        }


class HandDriver:
    """
    Drives hands on a table with one agent per seat.

    Usage:
        table = Table(TableConfig())
        driver = HandDriver(table, CallAgent())
        result = driver.play_hand()
    """

    def __init__(
        self,
        table: Table,
        agents: Union[BaseAgent, Mapping[str, BaseAgent]],
        suggestion_source: Optional[SuggestionSource] = None,
        suggest_rounds: Iterable[Round] = tuple(Round),
        max_retries: int = DEFAULT_MAX_RETRIES,
    ):
        """
        Args:
            table: The table to drive
            agents: One agent for every seat, or a seat id -> agent mapping
            suggestion_source: Optional advice source asked before each decision
            suggest_rounds: Rounds in which the suggestion source is asked
            max_retries: Re-prompts after an illegal decision before the seat is folded
        """
        self.table = table
        if isinstance(agents, BaseAgent):
            agents = {seat.seat_id: agents for seat in table.seats}
        missing = [s.seat_id for s in table.seats if s.seat_id not in agents]
        if missing:
            raise ConfigurationError(f"No agent for seats: {missing}")

        self.agents: Dict[str, BaseAgent] = dict(agents)
        self.suggestion_source = suggestion_source
        self.suggest_rounds = {Round.coerce(r) for r in suggest_rounds}
        self.max_retries = max_retries
        self._rejected = 0

    def _distinct_agents(self) -> List[BaseAgent]:
        seen: Dict[int, BaseAgent] = {}
        for agent in self.agents.values():
            seen.setdefault(id(agent), agent)
        return list(seen.values())

    def play_hand(self, dealer_index: Optional[int] = None) -> HandResult:
        """
        Reset the table and play one hand to the end of the river or until
        a single seat remains.
        """
        table = self.table
        table.reset(dealer_index=dealer_index)
        history = ActionHistory()
        suggestions: List[Dict[str, Any]] = []
        self._rejected = 0

        for agent in self._distinct_agents():
            agent.on_hand_start(table.hand_number)

        table.deal_hole_cards()
        history.record_initial_state(table.snapshot())

        table.start_round(Round.PREFLOP)
        history.record_blinds(table)

        while True:
            self._play_round(history, suggestions)

            if table.is_hand_decided():
                break
            next_round = table.current_round.next_round
            if next_round is None:
                break
            if table.num_can_act <= 1:
                logger.debug(f"No more betting possible, running out the {next_round.value.lower()}")

            cards = self._deal(next_round)
            history.record_deal(next_round, cards)
            table.start_round(next_round)

        result = HandResult(
            hand_number=table.hand_number,
            snapshot=table.snapshot(),
            history=history,
            ended_by_fold=table.is_hand_decided(),
            remaining_seat_ids=[s.seat_id for s in table.seats if s.is_in_hand],
            suggestions=suggestions,
            rejected_decisions=self._rejected,
        )
        logger.info(
            f"Hand #{result.hand_number} over: pot={result.snapshot.pot} "
            f"remaining={result.remaining_seat_ids}"
        )

        for agent in self._distinct_agents():
            agent.on_hand_end(result)
        return result

    def play_hands(self, count: int) -> List[HandResult]:
        return [self.play_hand() for _ in range(count)]

    def _deal(self, street: Round):
        if street is Round.FLOP:
            return self.table.deal_flop()
        if street is Round.TURN:
            return self.table.deal_turn()
        return self.table.deal_river()

    def _play_round(self, history: ActionHistory, suggestions: List[Dict[str, Any]]) -> None:
        table = self.table
        while not table.is_round_complete():
            seat_id = table.current_actor_id()
            if seat_id is None:
                break

            snapshot = table.snapshot()
            self._ask_suggestion(snapshot, seat_id, history, suggestions)
            record = self._act(seat_id, snapshot)
            history.record_action(record)
            table.advance_actor()

    def _ask_suggestion(
        self,
        snapshot: TableSnapshot,
        seat_id: str,
        history: ActionHistory,
        suggestions: List[Dict[str, Any]],
    ) -> None:
        if self.suggestion_source is None or snapshot.current_round not in self.suggest_rounds:
            return
        try:
            suggestion = self.suggestion_source.suggest(snapshot, seat_id, history)
        except Exception as e:
            # Advice is optional; a failing source never stops the hand
            logger.warning(f"Suggestion for {seat_id} failed: {e}")
            return
        if suggestion is not None:
            suggestions.append({
                "seat_id": seat_id,
                "round": snapshot.current_round,
                "suggestion": suggestion,
            })

    def _act(self, seat_id: str, snapshot: TableSnapshot) -> ActionRecord:
        """Ask the seat's agent for a legal action; fold the seat after too many illegal ones."""
        agent = self.agents[seat_id]
        for _ in range(self.max_retries + 1):
            raw = agent.decide(snapshot, seat_id, self.table.legal_actions(seat_id))
            try:
                decision = Decision.parse(raw)
                return self.table.apply_action(seat_id, decision.action, decision.amount)
            except (TableError, ValidationError) as e:
                self._rejected += 1
                logger.warning(f"{agent.name} returned an illegal action for {seat_id} ({raw!r}): {e}")

        logger.warning(f"Folding {seat_id} after {self.max_retries + 1} illegal decisions")
        return self.table.apply_action(seat_id, ActionType.FOLD)
