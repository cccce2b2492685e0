"""Core utilities shared across greenwave modules."""

from .errors import GreenwaveValueError, InvalidGraphError, InvalidParameterError
from .types import TimeUnit, Vertex, Weight

__all__ = [
    "GreenwaveValueError",
    "InvalidGraphError",
    "InvalidParameterError",
    "Vertex",
    "TimeUnit",
    "Weight",
]
