"""Road network contract, loaders, and the reference graph implementation."""

from .contract import NetworkSpec, Road
from .graph import Graph, TrafficGraph, circular_gap
from .io import load_network, load_network_spec

__all__ = [
    "Graph",
    "TrafficGraph",
    "circular_gap",
    "NetworkSpec",
    "Road",
    "load_network",
    "load_network_spec",
]
