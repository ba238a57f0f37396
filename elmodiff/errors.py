"""
elmodiff.errors — Exceptions raised by the search engine and the codec.

Every failure is fatal and surfaced immediately.  Emptiness of the
priority queue is NOT an error: queue operations return None instead.
"""

from typing import Any


class DiffError(Exception):
    """Base class for every elmodiff failure."""
    pass


class EmptyInputError(DiffError, ValueError):
    """A diff context was constructed with an empty source or target."""

    def __init__(self, which: str):
        self.which = which
        super().__init__(f"cannot diff an empty {which} sequence")


class InvalidTransitionError(DiffError):
    """
    Two adjacent path points are neither an insert, a delete nor a
    diagonal run.  Signals a corrupted or externally fabricated path.
    """

    def __init__(self, source_point: Any, target_point: Any):
        self.source_point = source_point
        self.target_point = target_point
        super().__init__(
            f"no transition possible from ({source_point.x}, {source_point.y}) "
            f"to ({target_point.x}, {target_point.y})"
        )


class ScriptParseError(DiffError, ValueError):
    """A script token matches none of the grammar forms."""

    def __init__(self, token: str, reason: str = "malformed token"):
        self.token = token
        self.reason = reason
        super().__init__(f"{reason}: {token!r}")


class PatchError(DiffError):
    """A well-formed token addresses a position outside the working copy."""

    def __init__(self, token: str, position: int, length: int):
        self.token = token
        self.position = position
        self.length = length
        super().__init__(
            f"token {token!r} addresses position {position} "
            f"in a sequence of length {length}"
        )


class StepLimitExceeded(DiffError):
    """The search used up its step budget before reaching the terminal node."""

    def __init__(self, steps: int):
        self.steps = steps
        super().__init__(f"terminal node not reached within {steps} steps")
