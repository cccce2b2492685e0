"""Network loading utilities (YAML documents)."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from greenwave.core.errors import InvalidGraphError
from greenwave.network.contract import NetworkSpec
from greenwave.network.graph import TrafficGraph

__all__ = ["load_network_spec", "load_network", "dump_network_spec"]


def load_network_spec(path: str | Path) -> NetworkSpec:
    """Parse and validate a YAML network description."""
    path = Path(path)
    with path.open("r", encoding="utf-8") as handle:
        data: Any = yaml.safe_load(handle)
    if not isinstance(data, dict):
        raise InvalidGraphError(f"Network file {path} must contain a mapping at the top level")
    data.setdefault("name", path.stem)
    try:
        return NetworkSpec.model_validate(data)
    except ValidationError as exc:
        raise InvalidGraphError(f"Invalid network file {path}: {exc}") from exc


def load_network(path: str | Path) -> TrafficGraph:
    """Load a YAML network description and build its :class:`TrafficGraph`."""
    return TrafficGraph.from_spec(load_network_spec(path))


def dump_network_spec(spec: NetworkSpec, path: str | Path) -> Path:
    """Write a network description to YAML, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(spec.model_dump(), handle, sort_keys=False)
    return path
