#!/usr/bin/env python3
"""
HoldemTable - Hand Simulation Script

Usage:
    python run.py [--hands N] [--seats N] [--blinds SB BB] [--stack N]
                  [--agent random|call|aggressive] [--seed N] [--log-level LEVEL]
"""

import argparse
import json
import logging
import random

from holdemtable.agents import AggressiveAgent, CallAgent, RandomAgent
from holdemtable.core.config import TableConfig
from holdemtable.core.rules import DEFAULT_BIG_BLIND, DEFAULT_SEAT_COUNT, DEFAULT_SMALL_BLIND, DEFAULT_STARTING_STACK
from holdemtable.core.table import Table
from holdemtable.session import HandDriver


AGENTS = {
    "random": RandomAgent,
    "call": CallAgent,
    "aggressive": AggressiveAgent,
}


def build_agents(kind, table, seed):
    agents = {}
    for seat in table.seats:
        if kind == "random":
            rng = random.Random(None if seed is None else seed + seat.index)
            agents[seat.seat_id] = RandomAgent(seat.seat_id, rng=rng)
        else:
            agents[seat.seat_id] = AGENTS[kind](seat.seat_id)
    return agents


def main():
    parser = argparse.ArgumentParser(description="HoldemTable hand simulator")
    parser.add_argument("--hands", type=int, default=1, help="Number of hands to play")
    parser.add_argument("--seats", type=int, default=DEFAULT_SEAT_COUNT, help="Seats at the table")
    parser.add_argument("--blinds", type=int, nargs=2, metavar=("SB", "BB"),
                        default=(DEFAULT_SMALL_BLIND, DEFAULT_BIG_BLIND), help="Blind sizes")
    parser.add_argument("--stack", type=int, default=DEFAULT_STARTING_STACK, help="Starting stack")
    parser.add_argument("--agent", choices=sorted(AGENTS), default="random", help="Agent for every seat")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    parser.add_argument("--json", action="store_true", help="Print each hand result as JSON")
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = TableConfig(
        seat_count=args.seats,
        small_blind=args.blinds[0],
        big_blind=args.blinds[1],
        starting_stack=args.stack,
        seed=args.seed,
    )
    table = Table(config)
    driver = HandDriver(table, build_agents(args.agent, table, args.seed))

    for result in driver.play_hands(args.hands):
        if args.json:
            print(json.dumps(result.to_dict(), ensure_ascii=False))
        else:
            board = " ".join(c.short_str for c in result.snapshot.community_cards) or "-"
            print(
                f"Hand #{result.hand_number}: pot={result.snapshot.pot} board={board} "
                f"remaining={', '.join(result.remaining_seat_ids)}"
            )


if __name__ == "__main__":
    main()
