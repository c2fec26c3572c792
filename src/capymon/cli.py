"""Command line front end.

Usage:
    capymon rules
    capymon play --one alice --two bob
    capymon fight --player alice
    capymon simulate --games 200 --seed 0 --one heuristic --two random

Everything runs against an in-memory ``ArenaHost`` inside this process;
``play`` is a hot-seat game where both players share the terminal.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Callable, Sequence

from capymon.arena.bot import BOT_ACCOUNT
from capymon.arena.commitment import CommitmentBook
from capymon.arena.host import ArenaHost
from capymon.arena.models import Arena
from capymon.core.entities import Player
from capymon.core.rules import DEFAULT_RULES, MOVE_NAMES, ElementType, RuleSet
from capymon.errors import ArenaError
from capymon.sim.runner import AGENTS, BatchRunner

logger = logging.getLogger(__name__)

Prompt = Callable[[str], str]


# ---------------------------------------------------------------------------
# Output helpers
# ---------------------------------------------------------------------------

def _print_table(rows: list[dict[str, object]]) -> None:
    if not rows:
        return
    headers = list(rows[0])
    widths = {h: max(len(h), *(len(str(r.get(h, ""))) for r in rows)) for h in headers}
    print("  ".join(h.ljust(widths[h]) for h in headers))
    print("  ".join("-" * widths[h] for h in headers))
    for row in rows:
        print("  ".join(str(row.get(h, "")).ljust(widths[h]) for h in headers))


def _stats_row(name: str, player: Player, rules: RuleSet) -> dict[str, object]:
    stats = player.stats
    return {
        "name": name,
        "HP": rules.format_hp(stats.hp),
        "type": MOVE_NAMES[stats.element],
        "attack": stats.attack,
        "defence": stats.defence,
        "sp.atk": stats.special_attack,
        "sp.def": stats.special_defence,
        "speed": stats.speed,
        "level": stats.level,
    }


def _print_rules(rules: RuleSet) -> None:
    rows = []
    for move, name in enumerate(MOVE_NAMES):
        row: dict[str, object] = {"move": f"{move} {name}", "power": rules.move_power(move)}
        for defender in ElementType:
            row[f"vs {MOVE_NAMES[defender]}"] = (
                f"{rules.effectiveness[move][defender] / rules.effectiveness_scaling:.1f}x"
            )
        rows.append(row)
    _print_table(rows)
    print(f"Same-type bonus: {rules.stab_bonus / rules.effectiveness_scaling:.1f}x")


def _choose_move(prompt: Prompt, who: str, rules: RuleSet) -> int:
    menu = "  ".join(f"[{i}] {name}" for i, name in enumerate(MOVE_NAMES))
    while True:
        answer = prompt(f"> {who}, choose your move {menu}: ").strip()
        if answer.isdigit() and rules.is_valid_move(int(answer)):
            return int(answer)
        lowered = [name.lower() for name in MOVE_NAMES]
        if answer.lower() in lowered:
            return lowered.index(answer.lower())
        print(f"Unknown move {answer!r}")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def cmd_rules(args: argparse.Namespace, prompt: Prompt) -> int:
    _print_rules(DEFAULT_RULES)
    return 0


def cmd_play(args: argparse.Namespace, prompt: Prompt) -> int:
    """Hot-seat PvP: both players commit, then both reveal, every round."""
    host = ArenaHost()
    rules = host.rules
    arena = host.create(args.one)
    print(f"Arena created: {arena.id}")
    arena = host.join(arena.id, args.two)
    print(f"{args.two} joined! Starting the battle!")
    _print_table([_stats_row(args.one, arena.player_one, rules),
                  _stats_row(args.two, arena.opponent, rules)])

    accounts = (args.one, args.two)
    books = {account: CommitmentBook() for account in accounts}

    while arena.winner is None:
        print(f"[ROUND {arena.round + 1}]")
        for account in accounts:
            move = _choose_move(prompt, account, rules)
            sealed = books[account].seal(move)
            arena = host.commit(arena.id, account, sealed.digest)
            print(f"{account}: commitment submitted")

        for account in accounts:
            sealed = books[account].opened()
            arena = host.reveal(arena.id, account, sealed.move, sealed.salt)
            print(f"{account} used {MOVE_NAMES[sealed.move]}")
            if arena.winner is not None:
                break
        _print_hp(arena, rules)

    print(f"{arena.winner} wins!")
    return 0


def _print_hp(arena: Arena, rules: RuleSet) -> None:
    _print_table([
        {"name": p.account, "HP": rules.format_hp(p.hp)} for p in arena.players
    ])


def cmd_fight(args: argparse.Namespace, prompt: Prompt) -> int:
    """Play against the house bot."""
    host = ArenaHost()
    rules = host.rules
    arena = host.create_bot_arena(args.player)
    print(f"Arena created: {arena.id}")
    _print_table([_stats_row("Player", arena.player, rules), _stats_row("Bot", arena.bot, rules)])
    print("- Fire is strong against water")
    print("- Earth is strong against fire")
    print("- Water is strong against earth")

    while arena.winner is None:
        move = _choose_move(prompt, args.player, rules)
        arena = host.attack_bot(arena.id, args.player, move)
        result = host.events(arena.id)[-1].event
        bot_move = "-" if result.bot_move is None else MOVE_NAMES[result.bot_move]
        print(f"You used {MOVE_NAMES[move]}; bot used {bot_move}")
        _print_table([
            {"name": "Player", "HP": rules.format_hp(arena.player.hp)},
            {"name": "Bot", "HP": rules.format_hp(arena.bot.hp)},
        ])

    print("You won!" if arena.winner != BOT_ACCOUNT else "You lost!")
    return 0


def cmd_simulate(args: argparse.Namespace, prompt: Prompt) -> int:
    runner = BatchRunner(args.one, args.two, max_rounds=args.max_rounds)
    summary = runner.run_batch(args.games, base_seed=args.seed)
    _print_table([
        {"side": f"player one ({args.one})", "wins": summary.player_one_wins},
        {"side": f"player two ({args.two})", "wins": summary.player_two_wins},
        {"side": "unfinished", "wins": summary.unfinished},
    ])
    print(f"Mean rounds: {summary.mean_rounds:.1f}")
    return 0


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="capymon", description="Commit-reveal creature battles."
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("CAPYMON_LOG_LEVEL", "WARNING"),
        help="Logging level (default: $CAPYMON_LOG_LEVEL or WARNING)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("rules", help="Print moves and type effectiveness")
    p.set_defaults(func=cmd_rules)

    default_identity = os.environ.get("CAPYMON_IDENTITY", "player")

    p = sub.add_parser("play", help="Hot-seat game between two players")
    p.add_argument("--one", default=default_identity, help="Identity of the arena creator")
    p.add_argument("--two", default="opponent", help="Identity of the joining player")
    p.set_defaults(func=cmd_play)

    p = sub.add_parser("fight", help="Fight against the house bot")
    p.add_argument("--player", default=default_identity, help="Your identity")
    p.set_defaults(func=cmd_fight)

    p = sub.add_parser("simulate", help="Run many agent-versus-agent battles")
    p.add_argument("--games", type=int, default=100, help="Number of battles")
    p.add_argument("--seed", type=int, default=0, help="Base seed")
    p.add_argument("--one", choices=sorted(AGENTS), default="random", help="Player one agent")
    p.add_argument("--two", choices=sorted(AGENTS), default="random", help="Player two agent")
    p.add_argument("--max-rounds", type=int, default=200, help="Round limit per battle")
    p.set_defaults(func=cmd_simulate)

    return parser


def main(argv: Sequence[str] | None = None, prompt: Prompt = input) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.debug("Running command %s", args.command)
    try:
        return args.func(args, prompt)
    except ArenaError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except (KeyboardInterrupt, EOFError):
        print()
        return 130


if __name__ == "__main__":
    sys.exit(main())
