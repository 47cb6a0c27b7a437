"""Chain/DEX registry: static chain, token, contract and price data."""

from xroute.registry.document import RegistryDocument
from xroute.registry.registry import ChainRegistry, load_registry, parse_registry

__all__ = ["ChainRegistry", "RegistryDocument", "load_registry", "parse_registry"]
