"""Errors raised by the Ataxx engine.

Every error derives from ``GameError`` (itself a ``ValueError``), so callers
that only care about "the request was bad" can catch a single type.
"""


class GameError(ValueError):
    """Base class for all Ataxx errors."""


class IllegalMoveError(GameError):
    """A move (or move notation) is not legal in the current position."""


class IllegalBlockError(GameError):
    """A block, or one of its reflections, would cover a non-empty square."""


class InvalidStateError(GameError):
    """An operation was attempted outside the phase that allows it."""


class UndoUnderflowError(GameError):
    """``undo()`` was called with nothing to undo."""
