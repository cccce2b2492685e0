from __future__ import annotations

Vertex = int  # 0..N-1
TimeUnit = int  # offset within the cycle ring [0, C)
Weight = int  # road travel time, in time units

__all__ = ["Vertex", "TimeUnit", "Weight"]
