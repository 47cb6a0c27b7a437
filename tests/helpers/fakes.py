"""Fake collaborators for dependency injection.

Usage:
    from tests.helpers.fakes import FakeLiveSource

    source = FakeLiveSource()                             # always succeeds
    source = FakeLiveSource(error=LiveDataError("nope"))  # always fails
    source = FakeLiveSource(delay=1.0)                    # slow (blocks)
"""

import time
from decimal import Decimal

from xroute.gateway.wallet import WalletSnapshot
from xroute.models.quote import ConfidenceLevel, QuoteRequest, SwapQuote
from xroute.models.route import RouteKind

LIVE_QUOTE = SwapQuote(
    amount_out="2490.0",
    gas_fee="$0.09",
    bridge_fee="$0.00",
    protocol_fee="$0.50",
    total_fee="$0.59",
    estimated_time="30s - 2min",
    confidence=ConfidenceLevel.HIGH,
    confidence_score=90,
    route=RouteKind.SAME_CHAIN,
    price_impact="0.10%",
    is_real_data=True,
)


class FakeLiveSource:
    """Live source returning a fixed quote or raising a fixed error."""

    def __init__(
        self,
        quote: SwapQuote = LIVE_QUOTE,
        error: Exception | None = None,
        delay: float = 0.0,
    ) -> None:
        self.quote = quote
        self.error = error
        self.delay = delay
        self.calls: list[tuple[QuoteRequest, WalletSnapshot]] = []

    def fetch_quote(self, request: QuoteRequest, snapshot: WalletSnapshot) -> SwapQuote:
        self.calls.append((request, snapshot))
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.quote


class CountingPriceOracle:
    """Price oracle with a fixed table that records every lookup."""

    def __init__(self, prices: dict[tuple[int, str], Decimal]) -> None:
        self.prices = prices
        self.calls: list[tuple[int, str]] = []

    def price_of(self, chain_id: int, token_address: str) -> Decimal | None:
        self.calls.append((chain_id, token_address))
        return self.prices.get((chain_id, token_address.lower()))


def usd(value: str) -> Decimal:
    """Parse a "$x.xx" fee string."""
    assert value.startswith("$")
    return Decimal(value[1:])


__all__ = ["CountingPriceOracle", "FakeLiveSource", "LIVE_QUOTE", "usd"]
