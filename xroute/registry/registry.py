"""Chain/DEX registry.

Read-only lookups over chain descriptors, deployed contracts and reference
prices. Lookups never raise for unknown chains or tokens: absence is
reported as None (or an empty result) so callers can exclude the chain from
route generation. Malformed data is rejected once, at construction.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from decimal import Decimal
from importlib import resources
from pathlib import Path
from types import MappingProxyType

import structlog
from pydantic import ValidationError

from xroute.errors import RegistryConfigError
from xroute.models.chain import ChainDescriptor, ContractAddresses, ExchangeDescriptor
from xroute.models.types import ZERO_ADDRESS, is_valid_address, normalize_address
from xroute.registry.document import ChainEntry, RegistryDocument

logger = structlog.get_logger()

DEFAULT_REGISTRY_RESOURCE = "testnet.json"


class ChainRegistry:
    """Immutable registry of supported chains.

    Safe to share across concurrent requests: nothing is mutated after
    construction.

    Usage:
        registry = load_registry(path)
        chain = registry.describe(43113)
        usdc = registry.resolve_token_address(43113, "USDC")
    """

    def __init__(
        self,
        chains: Iterable[ChainDescriptor],
        hub_chain_id: int | None = None,
        contracts: Mapping[int, ContractAddresses] | None = None,
        reference_prices: Mapping[str, Decimal] | None = None,
        token_prices: Mapping[tuple[int, str], Decimal] | None = None,
    ) -> None:
        """Initialize and validate the registry.

        Args:
            chains: Chain descriptors (ids must be unique)
            hub_chain_id: Designated hub chain for two-hop routes, if any
            contracts: Deployed contract addresses per chain id
            reference_prices: USD price per token symbol
            token_prices: USD price per (chain id, token address)

        Raises:
            RegistryConfigError: If the data is inconsistent
        """
        by_id: dict[int, ChainDescriptor] = {}
        for chain in chains:
            if chain.chain_id in by_id:
                raise RegistryConfigError(f"Duplicate chain id {chain.chain_id}")
            _validate_chain(chain)
            by_id[chain.chain_id] = chain

        if hub_chain_id is not None:
            hub = by_id.get(hub_chain_id)
            if hub is None:
                raise RegistryConfigError(f"Hub chain {hub_chain_id} is not registered")
            if not hub.hub_capable:
                raise RegistryConfigError(f"Hub chain {hub_chain_id} must be hub-capable")

        self._chains = MappingProxyType(by_id)
        self._hub_chain_id = hub_chain_id
        self._contracts = MappingProxyType(dict(contracts or {}))
        self._reference_prices = MappingProxyType(dict(reference_prices or {}))
        self._token_prices = MappingProxyType(
            {
                (chain_id, normalize_address(address)): price
                for (chain_id, address), price in (token_prices or {}).items()
            }
        )

    @classmethod
    def from_document(cls, document: RegistryDocument) -> ChainRegistry:
        """Build a registry from a validated registry document."""
        chains = [_chain_from_entry(entry) for entry in document.chains]
        contracts = {
            entry.chain_id: ContractAddresses(
                liquidity_aggregator=entry.contracts.liquidity_aggregator,
                cross_chain_router=entry.contracts.cross_chain_router,
                messaging_router=entry.contracts.messaging_router,
                hub_messenger=entry.contracts.hub_messenger,
            )
            for entry in document.chains
            if entry.contracts is not None
        }
        token_prices = {
            (price.chain_id, price.address): price.price_usd for price in document.token_prices
        }
        return cls(
            chains,
            hub_chain_id=document.hub_chain_id,
            contracts=contracts,
            reference_prices=document.reference_prices,
            token_prices=token_prices,
        )

    # --- Chain lookups ---

    def describe(self, chain_id: int) -> ChainDescriptor | None:
        """Descriptor for a chain, or None if unsupported."""
        return self._chains.get(chain_id)

    def chains(self) -> list[ChainDescriptor]:
        """All chains in registration order."""
        return list(self._chains.values())

    def chain_ids(self) -> list[int]:
        return list(self._chains)

    def is_hub_capable(self, chain_id: int) -> bool:
        """The single hub-capability predicate. Unknown chains are not hub-capable."""
        chain = self._chains.get(chain_id)
        return chain is not None and chain.hub_capable

    @property
    def hub_chain_id(self) -> int | None:
        return self._hub_chain_id

    @property
    def hub_chain(self) -> ChainDescriptor | None:
        if self._hub_chain_id is None:
            return None
        return self._chains.get(self._hub_chain_id)

    def __contains__(self, chain_id: object) -> bool:
        return chain_id in self._chains

    def __len__(self) -> int:
        return len(self._chains)

    # --- Token lookups ---

    def resolve_token_address(self, chain_id: int, symbol: str) -> str | None:
        """Address of a token symbol on a chain, or None."""
        chain = self._chains.get(chain_id)
        if chain is None:
            return None
        return chain.token_address(symbol)

    def bridge_tokens_of(self, chain_id: int) -> tuple[str, ...]:
        """Bridge-eligible symbols on a chain, in registry order (empty if unknown)."""
        chain = self._chains.get(chain_id)
        if chain is None:
            return ()
        return chain.bridge_tokens

    def symbol_of(self, chain_id: int, address: str) -> str | None:
        """Symbol of a token address on a chain, or None."""
        chain = self._chains.get(chain_id)
        if chain is None:
            return None
        return chain.symbol_of(address)

    # --- Contracts and prices ---

    def contracts_for(self, chain_id: int) -> ContractAddresses | None:
        return self._contracts.get(chain_id)

    def has_live_contracts(self, chain_id: int) -> bool:
        contracts = self._contracts.get(chain_id)
        return contracts is not None and contracts.has_live_contracts

    def reference_price(self, chain_id: int, address: str) -> Decimal | None:
        """Reference USD price of a token.

        Looks up the exact (chain, address) deployment first, then the
        per-symbol table. The zero address resolves to the chain's native
        currency.
        """
        address_norm = normalize_address(address)
        exact = self._token_prices.get((chain_id, address_norm))
        if exact is not None:
            return exact

        chain = self._chains.get(chain_id)
        if chain is None:
            return None
        symbol = chain.symbol_of(address_norm)
        if symbol is None and address_norm == ZERO_ADDRESS:
            symbol = chain.native_symbol
        if symbol is None:
            return None
        return self._reference_prices.get(symbol)

    def native_price(self, chain_id: int) -> Decimal | None:
        """Reference USD price of a chain's native currency."""
        chain = self._chains.get(chain_id)
        if chain is None:
            return None
        return self._reference_prices.get(chain.native_symbol)


def _validate_chain(chain: ChainDescriptor) -> None:
    """Reject inconsistent chain data."""
    for symbol, address in chain.tokens.items():
        if not is_valid_address(address):
            raise RegistryConfigError(
                f"Chain {chain.chain_id}: invalid address for {symbol}: {address}"
            )
    for exchange in chain.exchanges:
        if not is_valid_address(exchange.router):
            raise RegistryConfigError(
                f"Chain {chain.chain_id}: invalid router for {exchange.name}: {exchange.router}"
            )
    for symbol in chain.bridge_tokens:
        if symbol not in chain.tokens:
            raise RegistryConfigError(
                f"Chain {chain.chain_id}: bridge token {symbol} has no token address"
            )


def _chain_from_entry(entry: ChainEntry) -> ChainDescriptor:
    tokens = {token.symbol: normalize_address(token.address) for token in entry.tokens}
    decimals = {token.symbol: token.decimals for token in entry.tokens}
    return ChainDescriptor(
        chain_id=entry.chain_id,
        name=entry.name,
        hub_capable=entry.hub_capable,
        native_symbol=entry.native_symbol,
        exchanges=tuple(
            ExchangeDescriptor(name=dex.name, router=normalize_address(dex.router), avg_gas=dex.avg_gas)
            for dex in entry.exchanges
        ),
        bridge_tokens=tuple(entry.bridge_tokens),
        tokens=MappingProxyType(tokens),
        token_decimals=MappingProxyType(decimals),
        router_address=entry.router_address,
        messaging_selector=entry.messaging_selector,
        hub_blockchain_id=entry.hub_blockchain_id,
        rpc_url=entry.rpc_url,
    )


def parse_registry(data: dict) -> ChainRegistry:
    """Validate a registry document and build the registry.

    Raises:
        RegistryConfigError: If the document fails schema validation or is inconsistent
    """
    try:
        document = RegistryDocument.model_validate(data)
    except ValidationError as e:
        raise RegistryConfigError(f"Invalid registry document: {e}") from e
    registry = ChainRegistry.from_document(document)
    logger.debug(
        "registry_loaded",
        chains=len(registry),
        hub_chain_id=registry.hub_chain_id,
    )
    return registry


def load_registry(path: str | Path | None = None) -> ChainRegistry:
    """Load a registry from a JSON file.

    Args:
        path: Path to a registry document. If None, the bundled testnet
              registry is used.

    Raises:
        RegistryConfigError: If the file cannot be parsed or is inconsistent
    """
    try:
        if path is None:
            text = (
                resources.files("xroute.registry")
                .joinpath("data", DEFAULT_REGISTRY_RESOURCE)
                .read_text(encoding="utf-8")
            )
        else:
            text = Path(path).read_text(encoding="utf-8")
        data = json.loads(text)
    except (OSError, json.JSONDecodeError) as e:
        raise RegistryConfigError(f"Cannot read registry document {path}: {e}") from e
    return parse_registry(data)


__all__ = ["ChainRegistry", "load_registry", "parse_registry"]
