"""In-memory execution host: the single writer for every arena it holds.

The state machine in ``capymon.arena.machine`` is pure and does no
locking.  ``ArenaHost`` supplies the serialization it relies on: each
arena has its own lock, every mutating operation runs under it, and the
resulting state replaces the old one in one assignment.  Events are
numbered and appended to the ordered log while the arena lock is still
held, then pushed to subscribers once it has been released.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Union

from capymon.arena import bot, machine
from capymon.arena.bot import BotArena
from capymon.arena.events import ArenaEvent
from capymon.arena.machine import Transition
from capymon.arena.models import Arena, ArenaStatus
from capymon.core.rules import DEFAULT_RULES, RuleSet
from capymon.errors import ArenaError, ArenaNotFoundError, PreconditionError

logger = logging.getLogger(__name__)

AnyArena = Union[Arena, BotArena]


@dataclass(frozen=True)
class LoggedEvent:
    """An event with its position in the host's log (starting at 1)."""

    seq: int
    event: ArenaEvent


Subscriber = Callable[[LoggedEvent], None]


class ArenaHost:
    """Holds arenas and applies operations to them one at a time.

    Parameters
    ----------
    rules:
        Rule set used for every arena on this host.
    """

    def __init__(self, rules: RuleSet = DEFAULT_RULES) -> None:
        self._rules = rules
        self._arenas: dict[str, AnyArena] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

        self._log: list[LoggedEvent] = []
        self._log_lock = threading.Lock()
        self._subscribers: list[Subscriber] = []

    @property
    def rules(self) -> RuleSet:
        return self._rules

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create(self, initiator: str, arena_id: str | None = None) -> Arena:
        """Create a PvP arena and return a snapshot of it."""
        transition = machine.create(initiator, arena_id, self._rules)
        self._register(transition)
        logger.info("Arena %s opened by %s", transition.arena.id, initiator)
        return transition.arena.model_copy(deep=True)

    def join(self, arena_id: str, joiner: str) -> Arena:
        return self._apply(arena_id, "join", lambda a: machine.join(a, joiner, self._rules))

    def commit(self, arena_id: str, sender: str, digest: bytes) -> Arena:
        return self._apply(arena_id, "commit", lambda a: machine.commit(a, sender, digest))

    def reveal(self, arena_id: str, sender: str, move: int, salt: bytes) -> Arena:
        return self._apply(
            arena_id, "reveal", lambda a: machine.reveal(a, sender, move, salt, self._rules)
        )

    def create_bot_arena(self, player: str, arena_id: str | None = None) -> BotArena:
        """Create a player-versus-bot arena and return a snapshot of it."""
        transition = bot.new_bot_arena(player, arena_id, self._rules)
        self._register(transition)
        logger.info("Bot arena %s opened by %s", transition.arena.id, player)
        return transition.arena.model_copy(deep=True)

    def attack_bot(self, arena_id: str, sender: str, move: int) -> BotArena:
        return self._apply(
            arena_id, "attack", lambda a: bot.attack(a, sender, move, self._rules), BotArena
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, arena_id: str) -> Arena:
        """Return a snapshot of the PvP arena *arena_id*."""
        arena = self._lookup(arena_id)
        if not isinstance(arena, Arena):
            raise ArenaNotFoundError(arena_id)
        return arena.model_copy(deep=True)

    def get_bot_arena(self, arena_id: str) -> BotArena:
        arena = self._lookup(arena_id)
        if not isinstance(arena, BotArena):
            raise ArenaNotFoundError(arena_id)
        return arena.model_copy(deep=True)

    def search(self, open_only: bool = True) -> list[Arena]:
        """List PvP arenas, by default only those waiting for a second player."""
        with self._registry_lock:
            arenas = [a for a in self._arenas.values() if isinstance(a, Arena)]
        if open_only:
            arenas = [a for a in arenas if a.status is ArenaStatus.WAITING_FOR_PLAYER_TWO]
        return [a.model_copy(deep=True) for a in arenas]

    def events(self, arena_id: str | None = None, after: int = 0) -> list[LoggedEvent]:
        """Return logged events with ``seq > after``, optionally for one arena."""
        with self._log_lock:
            tail = self._log[after:]
        if arena_id is None:
            return tail
        return [e for e in tail if e.event.arena_id == arena_id]

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Call *callback* for every event logged from now on.

        Returns a function that removes the subscription.
        """
        with self._log_lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._log_lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _lookup(self, arena_id: str) -> AnyArena:
        with self._registry_lock:
            try:
                return self._arenas[arena_id]
            except KeyError:
                raise ArenaNotFoundError(arena_id) from None

    def _register(self, transition: Transition) -> None:
        arena = transition.arena
        with self._registry_lock:
            if arena.id in self._arenas:
                raise PreconditionError(f"Arena {arena.id} already exists")
            self._arenas[arena.id] = arena
            self._locks[arena.id] = threading.Lock()
            logged, subscribers = self._append(transition.events)
        self._notify(logged, subscribers)

    def _apply(
        self,
        arena_id: str,
        op_name: str,
        operation: Callable[[AnyArena], Transition],
        kind: type = Arena,
    ):
        self._lookup(arena_id)
        lock = self._locks[arena_id]

        with lock:
            current = self._arenas[arena_id]
            if not isinstance(current, kind):
                raise ArenaNotFoundError(arena_id)
            try:
                transition = operation(current)
            except ArenaError as exc:
                logger.warning(
                    "Rejected %s on arena %s: %s: %s",
                    op_name, arena_id, type(exc).__name__, exc,
                )
                raise
            with self._registry_lock:
                self._arenas[arena_id] = transition.arena
            # Log order must match application order for this arena.
            logged, subscribers = self._append(transition.events)
            snapshot = transition.arena.model_copy(deep=True)

        if snapshot.winner is not None and current.winner is None:
            logger.info("Arena %s finished; winner %s", arena_id, snapshot.winner)
        self._notify(logged, subscribers)
        return snapshot

    def _append(
        self, events: list[ArenaEvent]
    ) -> tuple[list[LoggedEvent], list[Subscriber]]:
        """Number and log *events*; return them with the current subscribers."""
        if not events:
            return [], []
        with self._log_lock:
            logged = []
            for event in events:
                entry = LoggedEvent(seq=len(self._log) + 1, event=event)
                self._log.append(entry)
                logged.append(entry)
            subscribers = list(self._subscribers)
        return logged, subscribers

    @staticmethod
    def _notify(logged: list[LoggedEvent], subscribers: list[Subscriber]) -> None:
        for entry in logged:
            for callback in subscribers:
                callback(entry)
