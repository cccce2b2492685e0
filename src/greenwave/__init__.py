"""greenwave: timing assignment heuristics for signalised road networks."""

__version__ = "0.1.0"
