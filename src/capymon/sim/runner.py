"""Battle simulation runner -- drives two agents through the full protocol.

Provides two classes:

- **BattleRunner**: plays one arena to completion through an
  ``ArenaHost``, with real commit-reveal rounds.
- **BatchRunner**: plays many seeded battles and summarises them.

Both sides commit before either reveals.  The side that reveals first
alternates every round so neither seat always strikes first.
"""

from __future__ import annotations

import logging
from typing import Callable

from capymon.arena.commitment import CommitmentBook
from capymon.arena.host import ArenaHost
from capymon.arena.models import Arena
from capymon.core.rng import GameRNG
from capymon.core.rules import DEFAULT_RULES, RuleSet
from capymon.play_agents.base import PlayAgent
from capymon.play_agents.heuristic_agent import HeuristicAgent
from capymon.play_agents.random_agent import RandomAgent
from capymon.sim.telemetry import BatchSummary, BattleTelemetry

logger = logging.getLogger(__name__)

_MAX_ROUNDS = 200
_SALT_SIZE = 16

AgentFactory = Callable[[GameRNG, RuleSet], PlayAgent]

AGENTS: dict[str, AgentFactory] = {
    "random": lambda rng, rules: RandomAgent(rng, rules),
    "heuristic": lambda rng, rules: HeuristicAgent(rules),
}


def make_agent(name: str, rng: GameRNG, rules: RuleSet = DEFAULT_RULES) -> PlayAgent:
    try:
        factory = AGENTS[name]
    except KeyError:
        raise ValueError(f"Unknown agent {name!r}; choose from {sorted(AGENTS)}") from None
    return factory(rng, rules)


class BattleRunner:
    """Runs a single PvP battle between two agents.

    Parameters
    ----------
    host:
        Host that owns the arena.
    agents:
        ``(player_one_agent, player_two_agent)``.
    rng:
        Source of the salts both sides commit with.
    max_rounds:
        Stop (without a winner) once the arena reaches this round.
    """

    def __init__(
        self,
        host: ArenaHost,
        agents: tuple[PlayAgent, PlayAgent],
        rng: GameRNG,
        max_rounds: int = _MAX_ROUNDS,
    ) -> None:
        self._host = host
        self._agents = agents
        self._rng = rng
        self._max_rounds = max_rounds

    def run(
        self,
        player_one: str = "player_one",
        player_two: str = "player_two",
        arena_id: str | None = None,
    ) -> BattleTelemetry:
        host = self._host
        arena = host.create(player_one, arena_id)
        arena = host.join(arena.id, player_two)

        accounts = (player_one, player_two)
        books = {account: CommitmentBook(salt_size=_SALT_SIZE) for account in accounts}
        salts = {account: self._rng.fork(account) for account in accounts}

        telemetry = BattleTelemetry(
            arena_id=arena.id,
            seed=self._rng.seed,
            player_one=player_one,
            player_two=player_two,
            winner=None,
            rounds=0,
            hp_start=(arena.player_one.hp, arena.opponent.hp),
            moves={account: [] for account in accounts},
        )

        while arena.winner is None and arena.round < self._max_rounds:
            arena = self._play_round(arena, accounts, books, salts, telemetry)

        telemetry.winner = arena.winner
        telemetry.rounds = arena.round
        if arena.winner is None:
            logger.info("Arena %s stopped after %d rounds without a winner", arena.id, arena.round)
        return telemetry

    def _play_round(
        self,
        arena: Arena,
        accounts: tuple[str, str],
        books: dict[str, CommitmentBook],
        salts: dict[str, GameRNG],
        telemetry: BattleTelemetry,
    ) -> Arena:
        for account, agent in zip(accounts, self._agents):
            me = arena.player_for(account)
            opponent = arena.other_player(account)
            move = agent.choose_move(me, opponent)
            sealed = books[account].seal(move, salts[account].random_bytes(_SALT_SIZE))
            arena = self._host.commit(arena.id, account, sealed.digest)

        order = accounts if arena.round % 2 == 0 else accounts[::-1]
        for account in order:
            sealed = books[account].opened()
            arena = self._host.reveal(arena.id, account, sealed.move, sealed.salt)
            telemetry.moves[account].append(sealed.move)
            telemetry.hp_history.append((arena.player_one.hp, arena.opponent.hp))
            if arena.winner is not None:
                break
        return arena


class BatchRunner:
    """Plays many independent battles between two kinds of agent.

    Parameters
    ----------
    agent_one, agent_two:
        Agent names from ``AGENTS``.
    rules:
        Rule set for the host the battles run on.
    max_rounds:
        Per-battle round limit.
    """

    def __init__(
        self,
        agent_one: str = "random",
        agent_two: str = "random",
        rules: RuleSet = DEFAULT_RULES,
        max_rounds: int = _MAX_ROUNDS,
    ) -> None:
        self._agent_names = (agent_one, agent_two)
        self._rules = rules
        self._max_rounds = max_rounds

    def run_one(self, seed: int, host: ArenaHost | None = None) -> BattleTelemetry:
        host = host or ArenaHost(self._rules)
        rng = GameRNG(seed)
        agents = (
            make_agent(self._agent_names[0], rng.fork("agent_one"), self._rules),
            make_agent(self._agent_names[1], rng.fork("agent_two"), self._rules),
        )
        runner = BattleRunner(host, agents, rng.fork("salts"), self._max_rounds)
        return runner.run(arena_id=f"sim-{seed}")

    def run_batch(self, n_battles: int, base_seed: int = 0) -> BatchSummary:
        host = ArenaHost(self._rules)
        summary = BatchSummary()
        for i in range(n_battles):
            summary.battles.append(self.run_one(base_seed + i, host))
        logger.info(
            "Batch of %d: %d/%d wins, %d unfinished",
            n_battles, summary.player_one_wins, summary.player_two_wins, summary.unfinished,
        )
        return summary
