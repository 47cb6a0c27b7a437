"""Chain and exchange descriptors.

Descriptors are immutable, built once from registry configuration and
shared read-only by every request.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from xroute.models.types import normalize_address


@dataclass(frozen=True)
class ExchangeDescriptor:
    """An on-chain exchange (DEX) registered on a chain."""

    name: str
    router: str
    avg_gas: int


@dataclass(frozen=True)
class ChainDescriptor:
    """Static metadata for one network.

    Attributes:
        chain_id: Numeric chain identifier (unique within a registry)
        name: Display name
        hub_capable: Whether the chain supports the fast native bridging
            protocol shared by the hub family
        native_symbol: Symbol of the native currency
        exchanges: Exchanges in registration order (order is the tie-break)
        bridge_tokens: Bridge-eligible token symbols in registry order
        tokens: Token symbol -> address
        token_decimals: Token symbol -> decimals (missing means 18)
        router_address: Cross-chain router deployed on this chain, if any
        messaging_selector: Cross-chain messaging selector, if supported
        hub_blockchain_id: Native-bridge blockchain id, if hub-capable
        rpc_url: Public RPC endpoint, if known
    """

    chain_id: int
    name: str
    hub_capable: bool
    native_symbol: str
    exchanges: tuple[ExchangeDescriptor, ...] = ()
    bridge_tokens: tuple[str, ...] = ()
    tokens: Mapping[str, str] = field(default_factory=dict)
    token_decimals: Mapping[str, int] = field(default_factory=dict)
    router_address: str | None = None
    messaging_selector: str | None = None
    hub_blockchain_id: str | None = None
    rpc_url: str | None = None

    def token_address(self, symbol: str) -> str | None:
        """Address for a token symbol on this chain, or None."""
        return self.tokens.get(symbol)

    def symbol_of(self, address: str) -> str | None:
        """Reverse lookup of a token symbol by address (case-insensitive)."""
        target = normalize_address(address)
        for symbol, token_address in self.tokens.items():
            if normalize_address(token_address) == target:
                return symbol
        return None

    def decimals_of(self, symbol: str) -> int:
        return self.token_decimals.get(symbol, 18)


@dataclass(frozen=True)
class ContractAddresses:
    """Contracts deployed on one chain. Any of them may be absent."""

    liquidity_aggregator: str | None = None
    cross_chain_router: str | None = None
    messaging_router: str | None = None
    hub_messenger: str | None = None

    @property
    def has_live_contracts(self) -> bool:
        """True if both contracts needed for live quoting are deployed."""
        return self.liquidity_aggregator is not None and self.cross_chain_router is not None


__all__ = ["ChainDescriptor", "ContractAddresses", "ExchangeDescriptor"]
