"""Error taxonomy for brainmap."""


class BrainMapError(Exception):
    """Base class for brainmap errors."""


class SourceUnavailable(BrainMapError):
    """A word source failed: network error, non-success response or bad payload."""


class InvariantViolation(BrainMapError, AssertionError):
    """Programmer error, e.g. linking a node that is not in the graph.

    Never recovered from at runtime.
    """
