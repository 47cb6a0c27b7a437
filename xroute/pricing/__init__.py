"""Token price sources."""

from xroute.pricing.oracle import CachingPriceOracle, PriceOracle, StaticPriceOracle

__all__ = ["CachingPriceOracle", "PriceOracle", "StaticPriceOracle"]
