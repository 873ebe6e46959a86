class GraphAnonError(Exception):
    """Base class for all errors raised by graphanon."""


class GraphFormatError(GraphAnonError, ValueError):
    """Raised when a serialized graph cannot be parsed or is inconsistent."""


class ThresholdInfeasibleError(GraphAnonError, ValueError):
    """Raised when a privacy threshold can never be met for the given graph."""


class UnreachableTargetError(GraphAnonError, RuntimeError):
    """
    Raised when an anonymizer finishes but its privacy predicate does not hold.

    This indicates a bug, not a recoverable condition.
    """
