"""USD price oracles.

The fallback quote path converts amounts and fees with a PriceOracle. The
static implementation reads registry reference prices; a caching wrapper
can sit in front of any slower (live) oracle.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from decimal import Decimal
from typing import TYPE_CHECKING, Protocol

import structlog

from xroute.models.types import normalize_address

if TYPE_CHECKING:
    from xroute.registry.registry import ChainRegistry

logger = structlog.get_logger()


class PriceOracle(Protocol):
    """Protocol for token USD price sources."""

    def price_of(self, chain_id: int, token_address: str) -> Decimal | None:
        """USD price of one unit of a token, or None if unknown."""
        ...


class StaticPriceOracle:
    """Reference price table backed by the registry."""

    def __init__(self, registry: ChainRegistry) -> None:
        self._registry = registry

    def price_of(self, chain_id: int, token_address: str) -> Decimal | None:
        return self._registry.reference_price(chain_id, token_address)


class CachingPriceOracle:
    """TTL cache in front of another oracle.

    Entries are keyed by (chain_id, normalized token address). The cache is
    eventually consistent and only saves repeated lookups; misses (None) are
    not cached.
    """

    def __init__(
        self,
        inner: PriceOracle,
        ttl_seconds: float = 30.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the cache.

        Args:
            inner: Oracle queried on cache miss
            ttl_seconds: How long a cached price stays valid
            clock: Monotonic time source (injectable for tests)
        """
        self._inner = inner
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[tuple[int, str], tuple[float, Decimal]] = {}

    def price_of(self, chain_id: int, token_address: str) -> Decimal | None:
        key = (chain_id, normalize_address(token_address))
        now = self._clock()

        cached = self._entries.get(key)
        if cached is not None and now - cached[0] < self._ttl:
            return cached[1]

        price = self._inner.price_of(chain_id, token_address)
        if price is not None:
            self._entries[key] = (now, price)
        else:
            logger.debug("price_not_found", chain_id=chain_id, token=key[1])
        return price

    def invalidate(self) -> None:
        """Drop all cached prices."""
        self._entries.clear()


__all__ = ["CachingPriceOracle", "PriceOracle", "StaticPriceOracle"]
