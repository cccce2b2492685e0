from .loaders import dump_network_spec, load_network, load_network_spec

__all__ = ["load_network_spec", "load_network", "dump_network_spec"]
