"""Exception hierarchy for the rules engine."""

from __future__ import annotations


class RookeryError(Exception):
    """Base class for all errors raised by rookery."""


class MalformedImport(RookeryError, ValueError):
    """Textual position import does not match the required shape.

    Raised before any state is built, so a failed import never leaves a
    partially applied position behind.
    """


class IllegalMoveRequested(RookeryError, ValueError):
    """A caller asked to play a move outside the current legal-move set."""


class InvariantViolation(RookeryError, RuntimeError):
    """Internal consistency failure: a programming defect, not user input.

    Examples are a second king of one colour or a square index outside
    ``[0, 64)``. Callers should not try to recover from it.
    """
