"""Trace one agent-versus-agent battle event by event.

Usage:
    python scripts/demo_battle.py [--seed N] [--one random|heuristic] [--two random|heuristic]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from capymon.arena.events import PlayerReveal, RoundResult
from capymon.arena.host import ArenaHost, LoggedEvent
from capymon.core.rng import GameRNG
from capymon.core.rules import MOVE_NAMES
from capymon.sim.runner import AGENTS, BattleRunner, make_agent


def separator(title):
    print(f"\n{'='*60}")
    print(f"  {title}")
    print(f"{'='*60}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Trace a single simulated battle.")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--one", choices=sorted(AGENTS), default="heuristic")
    parser.add_argument("--two", choices=sorted(AGENTS), default="random")
    args = parser.parse_args()

    host = ArenaHost()
    rules = host.rules

    def trace(entry: LoggedEvent) -> None:
        event = entry.event
        if isinstance(event, PlayerReveal):
            print(f"  #{entry.seq:<4} {event.sender} reveals {MOVE_NAMES[event.move]}")
        elif isinstance(event, RoundResult):
            print(
                f"  #{entry.seq:<4} hp {event.sender}={rules.format_hp(event.attacker_hp)}"
                f" opponent={rules.format_hp(event.defender_hp)}"
            )
        else:
            print(f"  #{entry.seq:<4} {event.kind} by {event.sender}")

    host.subscribe(trace)

    rng = GameRNG(args.seed)
    agents = (
        make_agent(args.one, rng.fork("agent_one"), rules),
        make_agent(args.two, rng.fork("agent_two"), rules),
    )

    separator(f"{args.one} vs {args.two}, seed {args.seed}")
    telemetry = BattleRunner(host, agents, rng.fork("salts")).run(
        f"one:{args.one}", f"two:{args.two}"
    )

    separator("Result")
    print(f"  winner: {telemetry.winner}")
    print(f"  rounds: {telemetry.rounds}")
    for account, moves in telemetry.moves.items():
        counts = {MOVE_NAMES[m]: moves.count(m) for m in sorted(set(moves))}
        print(f"  {account}: {counts}")


if __name__ == "__main__":
    main()
