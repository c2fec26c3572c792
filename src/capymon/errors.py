"""Exceptions raised by arena operations.

Every rejected operation leaves the arena exactly as it was; the caller
decides whether and when to retry.
"""

from __future__ import annotations


class ArenaError(Exception):
    """Base class for every rejected arena operation."""


class PreconditionError(ArenaError):
    """The arena is not ready for the operation, or is already finished."""


class AuthorizationError(ArenaError):
    """The caller is not a participant, or tried to join its own arena."""


class SequencingError(ArenaError):
    """The operation is out of order: a double commit, or a reveal for the
    wrong round or without a pending commitment."""


class IntegrityError(ArenaError):
    """The revealed move and salt do not hash to the stored commitment."""


class ArenaNotFoundError(ArenaError, KeyError):
    """No arena with the requested id is known to the host."""

    def __str__(self) -> str:
        return f"Unknown arena: {self.args[0]!r}" if self.args else "Unknown arena"
