"""Client-side polling over an ``ArenaHost``.

The host never blocks waiting for an opponent.  A client that wants to
wait (for a join, for the opponent's commit, for a round result) polls
with an ``ArenaObserver`` instead.  Only reads happen here.
"""

from __future__ import annotations

import time
from typing import Callable

from capymon.arena.host import ArenaHost, LoggedEvent
from capymon.arena.models import Arena

DEFAULT_POLL_INTERVAL = 0.5


class ArenaObserver:
    """Follows one arena's state and events.

    Parameters
    ----------
    host:
        The host holding the arena.
    arena_id:
        Arena to follow.
    interval:
        Seconds to sleep between polls.
    """

    def __init__(
        self,
        host: ArenaHost,
        arena_id: str,
        interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        self._host = host
        self._arena_id = arena_id
        self._interval = interval
        self._cursor = 0

    @property
    def arena(self) -> Arena:
        return self._host.get(self._arena_id)

    def poll(self) -> list[LoggedEvent]:
        """Return events for this arena logged since the last poll."""
        # One read: the cursor must not move past anything not returned.
        tail = self._host.events(after=self._cursor)
        if tail:
            self._cursor = tail[-1].seq
        return [e for e in tail if e.event.arena_id == self._arena_id]

    def wait_until(
        self,
        predicate: Callable[[Arena], bool],
        timeout: float | None = None,
    ) -> Arena:
        """Poll until *predicate* holds for the arena and return that snapshot.

        Raises
        ------
        TimeoutError
            If *timeout* seconds pass first.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        while True:
            arena = self.arena
            if predicate(arena):
                return arena
            if deadline is not None and time.monotonic() >= deadline:
                raise TimeoutError(
                    f"Arena {self._arena_id} did not reach the awaited state in {timeout}s"
                )
            time.sleep(self._interval)
