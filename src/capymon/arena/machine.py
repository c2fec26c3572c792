"""The arena state machine: ``create``, ``join``, ``commit`` and ``reveal``.

Every operation is a pure transition ``(arena, operation) -> Transition``.
The input arena is never mutated: preconditions are checked first, then
the work happens on a deep copy that is returned alongside the emitted
events.  A rejected operation raises one of the ``capymon.errors``
exceptions and leaves nothing behind.

Lifecycle::

    WAITING_FOR_PLAYER_TWO --join--> IN_PROGRESS --reveal (hp 0)--> FINISHED

Rounds:
    Each player commits a digest, then reveals ``move`` and ``salt``.  A
    reveal resolves that player's attack immediately.  The shared
    ``round`` counter advances only when the reveal completing the pair
    runs, i.e. when the defender has already revealed this round.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from capymon.arena.commitment import verify_commitment
from capymon.arena.events import (
    ArenaCreated,
    ArenaEvent,
    PlayerCommit,
    PlayerJoined,
    PlayerReveal,
    RoundResult,
)
from capymon.arena.models import Arena, ArenaStatus, Decided, Seated
from capymon.core.damage import attack
from capymon.core.entities import Committed, NoCommitment, Player
from capymon.core.rng import DIGEST_SIZE, arena_seed, derive, round_byte
from capymon.core.rules import DEFAULT_RULES, RuleSet
from capymon.core.stats import generate_stats
from capymon.errors import (
    AuthorizationError,
    IntegrityError,
    PreconditionError,
    SequencingError,
)

logger = logging.getLogger(__name__)

StateT = TypeVar("StateT")

PLAYER_ONE_TAG = 0
PLAYER_TWO_TAG = 1
ROUND_RANDOMNESS_TAG = 2


@dataclass
class Transition(Generic[StateT]):
    """The new arena state plus the events the operation emitted."""

    arena: StateT
    events: list[ArenaEvent] = field(default_factory=list)


# ---------------------------------------------------------------------------
# create / join
# ---------------------------------------------------------------------------

def create(
    initiator: str,
    arena_id: str | None = None,
    rules: RuleSet = DEFAULT_RULES,
) -> Transition[Arena]:
    """Open a new arena with *initiator* as player one.

    The arena's seed comes from its own id; *arena_id* may be fixed by the
    caller (tests, replays) and otherwise is a fresh random hex id.
    """
    arena_id = arena_id or uuid.uuid4().hex
    seed = arena_seed(arena_id)
    stats = generate_stats(derive(seed, PLAYER_ONE_TAG), rules)

    arena = Arena(
        id=arena_id,
        seed=seed,
        player_one=Player.from_stats(initiator, stats),
    )
    logger.debug("Arena %s created by %s", arena_id, initiator)
    return Transition(arena, [ArenaCreated(arena_id=arena_id, sender=initiator)])


def join(arena: Arena, joiner: str, rules: RuleSet = DEFAULT_RULES) -> Transition[Arena]:
    """Seat *joiner* as player two.

    Rejoining as the already-seated player two is a no-op that returns the
    arena unchanged and emits nothing.
    """
    if joiner == arena.player_one.account:
        raise AuthorizationError("The arena's creator cannot join as player two")

    seated = arena.opponent
    if seated is not None:
        if seated.account != joiner:
            raise PreconditionError("Arena is full")
        return Transition(arena)

    stats = generate_stats(derive(arena.seed, PLAYER_TWO_TAG), rules)
    new = arena.model_copy(deep=True)
    new.player_two = Seated(player=Player.from_stats(joiner, stats))

    logger.debug("Player %s joined arena %s", joiner, arena.id)
    return Transition(new, [PlayerJoined(arena_id=arena.id, sender=joiner)])


# ---------------------------------------------------------------------------
# commit / reveal
# ---------------------------------------------------------------------------

def _require_in_progress(arena: Arena) -> None:
    status = arena.status
    if status is ArenaStatus.FINISHED:
        raise PreconditionError(f"Arena {arena.id} is finished; winner is {arena.winner}")
    if status is ArenaStatus.WAITING_FOR_PLAYER_TWO:
        raise PreconditionError(f"Arena {arena.id} is still waiting for a second player")


def _participant_index(arena: Arena, sender: str) -> int:
    """Return 0 for player one, 1 for player two."""
    for idx, player in enumerate(arena.players):
        if player.account == sender:
            return idx
    raise AuthorizationError(f"{sender} is not a player in arena {arena.id}")


def _players_of(arena: Arena, attacker_idx: int) -> tuple[Player, Player]:
    players = arena.players
    return players[attacker_idx], players[1 - attacker_idx]


def commit(arena: Arena, sender: str, digest: bytes) -> Transition[Arena]:
    """Store *sender*'s sealed move for its next round."""
    _require_in_progress(arena)
    idx = _participant_index(arena, sender)

    player = arena.players[idx]
    if player.has_commitment:
        raise SequencingError(f"{sender} already has a pending commitment")
    # A commitment for the next round would stop the opponent's reveal
    # from closing the current one.
    if player.next_round > arena.round:
        raise SequencingError(
            f"{sender} already revealed round {arena.round}; wait for the opponent"
        )
    if len(digest) != DIGEST_SIZE:
        raise PreconditionError(
            f"Commitment must be {DIGEST_SIZE} bytes, got {len(digest)}"
        )

    new = arena.model_copy(deep=True)
    new.players[idx].commitment = Committed(digest=bytes(digest))

    logger.debug("Commit from %s in arena %s", sender, arena.id)
    return Transition(new, [PlayerCommit(arena_id=arena.id, sender=sender)])


def reveal_random_byte(digest: bytes, round_: int, rules: RuleSet = DEFAULT_RULES) -> int:
    """The attack roll for a reveal, derived from its own commitment."""
    roll = round_byte(derive(digest, ROUND_RANDOMNESS_TAG), round_)
    return roll % rules.random_byte_span + rules.min_random_byte


def reveal(
    arena: Arena,
    sender: str,
    move: int,
    salt: bytes,
    rules: RuleSet = DEFAULT_RULES,
) -> Transition[Arena]:
    """Open *sender*'s commitment and resolve its attack on the other player."""
    attacker_idx = _participant_index(arena, sender)
    _require_in_progress(arena)

    attacker, defender = _players_of(arena, attacker_idx)
    stored = attacker.pending_digest
    if stored is None:
        raise SequencingError(f"{sender} has nothing to reveal")
    if attacker.next_round != arena.round:
        raise SequencingError(
            f"{sender} is on round {attacker.next_round}, arena is on round {arena.round}"
        )

    if not verify_commitment(stored, move, salt):
        raise IntegrityError("Revealed move and salt do not match the commitment")
    if not rules.is_valid_move(move):
        raise PreconditionError(f"Unknown move {move}")

    new = arena.model_copy(deep=True)
    attacker, defender = _players_of(new, attacker_idx)

    random_byte = reveal_random_byte(stored, new.round, rules)
    attack(attacker.stats, defender.stats, move, random_byte, rules)
    attacker.commitment = NoCommitment()
    attacker.next_round += 1

    events: list[ArenaEvent] = [PlayerReveal(arena_id=arena.id, sender=sender, move=move)]

    if defender.stats.is_fainted:
        new.outcome = Decided(winner=attacker.account)
        logger.debug("Arena %s won by %s", arena.id, attacker.account)

    # Second reveal of the pair bumps the shared round.
    if not defender.has_commitment and defender.next_round == new.round + 1:
        new.round += 1

    events.append(
        RoundResult(
            arena_id=arena.id,
            sender=sender,
            attacker_hp=attacker.hp,
            defender_hp=defender.hp,
        )
    )
    logger.debug(
        "Reveal from %s in arena %s: move=%d roll=%d hp %d/%d",
        sender, arena.id, move, random_byte, attacker.hp, defender.hp,
    )
    return Transition(new, events)
