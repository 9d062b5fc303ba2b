# pathviz/core/errors.py
"""
Errors raised by the grid engine.

All of them are recoverable: the caller (usually the viewer) reports the
message and carries on. An unreachable target is not an error; it shows up
as an empty path in the search result.
"""


class PathvizError(Exception):
    """Base class for every error the engine raises."""


class InvalidPlacement(PathvizError):
    """Source/Target collide, or a position lies outside the grid."""


class OccupiedBySpecial(PathvizError):
    """Attempt to put Source on Target (or the other way round)."""


class GridLocked(PathvizError):
    """Structural edit attempted while a run's trace is active."""


class AlreadyRunning(PathvizError):
    """New run requested before the previous trace was stopped."""


class UnknownAlgorithm(PathvizError):
    """Run requested with an algorithm name the engine does not know."""
