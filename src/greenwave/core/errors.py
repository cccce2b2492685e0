"""Common greenwave-specific exceptions."""


class GreenwaveValueError(ValueError):
    """Raised when greenwave detects invalid user-provided data."""


class InvalidGraphError(GreenwaveValueError):
    """Raised when a network violates the graph contract (cycle, neighbours, roads)."""


class InvalidParameterError(GreenwaveValueError):
    """Raised when a solver parameter cannot produce a candidate to select from."""


__all__ = ["GreenwaveValueError", "InvalidGraphError", "InvalidParameterError"]
