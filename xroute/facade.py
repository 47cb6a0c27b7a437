"""Quote facade: the single entry point consumed by UI and API callers.

Each request moves through validate -> live attempt -> fallback estimate.
This is the only layer that recovers from failures: live-data errors and
timeouts turn into a fallback, while anything unexpected propagates.
"""

from __future__ import annotations

import asyncio
import random
from decimal import ROUND_DOWN, Decimal

import structlog

from xroute.config import DEFAULT_CONFIG, OptimizerConfig
from xroute.constants import QUOTE_DEBOUNCE_SECONDS
from xroute.errors import EstimationError, LiveDataError, QuoteError, QuoteResult
from xroute.gateway.live import LiveQuoteSource
from xroute.gateway.wallet import WalletState
from xroute.models.quote import (
    QuoteRequest,
    SwapQuote,
    confidence_level,
    format_percent,
    format_usd,
    quantize,
)
from xroute.models.route import ChainPath, RouteQuote
from xroute.models.types import ZERO_ADDRESS, is_valid_address, normalize_address, parse_amount
from xroute.pricing.oracle import PriceOracle, StaticPriceOracle
from xroute.registry.registry import ChainRegistry
from xroute.routing.optimizer import RouteOptimizer

logger = structlog.get_logger()

# Displayed precision for estimated output amounts
MAX_DISPLAY_DECIMALS = 6


def time_band(seconds: int) -> str:
    """Human readable time range for a total route duration."""
    if seconds < 60:
        return "30s - 2min"
    if seconds <= 180:
        return "2-5min"
    if seconds <= 600:
        return "5-15min"
    return "15-30min"


def estimate_slippage(
    path: ChainPath,
    rng: random.Random,
    config: OptimizerConfig = DEFAULT_CONFIG,
) -> Decimal:
    """Estimated slippage in percent for a path.

    Base slippage grows with swap steps and bridge hops. A uniform jitter
    of +/- slippage_jitter_percent is added, then the result is clamped to
    [slippage_min_percent, slippage_max_percent].
    """
    base = (
        config.slippage_base_percent
        + path.step_count * config.slippage_per_step_percent
        + len(path.hops) * config.slippage_per_hop_percent
    )
    jitter_range = float(config.slippage_jitter_percent)
    jitter = Decimal(str(round(rng.uniform(-jitter_range, jitter_range), 4)))
    return min(config.slippage_max_percent, max(config.slippage_min_percent, base + jitter))


def _format_amount(amount: Decimal, decimals: int) -> str:
    places = min(decimals, MAX_DISPLAY_DECIMALS)
    return str(quantize(amount, Decimal(1).scaleb(-places), ROUND_DOWN))


class QuoteFacade:
    """Produces swap quotes, live when possible and estimated otherwise.

    Collaborators are injected; the facade holds no global or per-request
    mutable state, so one instance serves concurrent requests.

    Args:
        registry: Chain registry
        optimizer: Route optimizer (built from registry/config by default)
        price_oracle: USD price source for the fallback path
        live_source: Live quote source; None disables the live attempt
        wallet: Wallet state read for the live attempt
        config: Optimizer configuration. With a jitter_seed, slippage jitter
            is a pure function of the seed and the request.
    """

    def __init__(
        self,
        registry: ChainRegistry,
        optimizer: RouteOptimizer | None = None,
        price_oracle: PriceOracle | None = None,
        live_source: LiveQuoteSource | None = None,
        wallet: WalletState | None = None,
        config: OptimizerConfig = DEFAULT_CONFIG,
    ) -> None:
        self.registry = registry
        self.config = config
        self.optimizer = optimizer or RouteOptimizer(registry, config=config)
        self.price_oracle = price_oracle or StaticPriceOracle(registry)
        self.live_source = live_source
        self.wallet = wallet

    async def get_swap_quote(
        self,
        from_chain_id: int,
        to_chain_id: int,
        token_in: str,
        token_out: str,
        amount_in: str,
    ) -> SwapQuote | None:
        """Quote a swap, or None when the request is invalid or cannot be priced."""
        request = QuoteRequest(
            from_chain_id=from_chain_id,
            to_chain_id=to_chain_id,
            token_in=token_in,
            token_out=token_out,
            amount_in=amount_in,
        )
        result = await self.quote(request)
        return result.quote

    async def quote(self, request: QuoteRequest) -> QuoteResult:
        """Quote a request, returning a typed outcome."""
        amount, rejection = self.validate(request)
        if rejection is not None:
            logger.debug(
                "quote_rejected",
                error=rejection.error.value if rejection.error else None,
                detail=rejection.error_detail,
            )
            return rejection

        live = await self._try_live(request)
        if live is not None:
            logger.info(
                "live_quote",
                from_chain=request.from_chain_id,
                to_chain=request.to_chain_id,
                route=live.route.value,
            )
            return QuoteResult.ok(live)

        try:
            return self.estimate(request, amount)
        except EstimationError as e:
            logger.warning(
                "estimation_failed",
                from_chain=request.from_chain_id,
                to_chain=request.to_chain_id,
                error=str(e),
            )
            return QuoteResult.with_error(QuoteError.ESTIMATION_FAILED, str(e))

    def validate(self, request: QuoteRequest) -> tuple[Decimal, QuoteResult | None]:
        """Check amount, chains and tokens before any computation.

        Returns:
            (amount, None) for a valid request, otherwise (0, error result)
        """
        amount = parse_amount(request.amount_in)
        if amount is None:
            return Decimal(0), QuoteResult.with_error(
                QuoteError.INVALID_AMOUNT, f"Enter a valid amount (got {request.amount_in!r})"
            )

        for chain_id in (request.from_chain_id, request.to_chain_id):
            if chain_id not in self.registry:
                return Decimal(0), QuoteResult.with_error(
                    QuoteError.UNSUPPORTED_CHAIN, f"Unsupported chain {chain_id}"
                )

        for chain_id, token in (
            (request.from_chain_id, request.token_in),
            (request.to_chain_id, request.token_out),
        ):
            if not self._is_known_token(chain_id, token):
                return Decimal(0), QuoteResult.with_error(
                    QuoteError.UNSUPPORTED_TOKEN, f"Unsupported token {token} on chain {chain_id}"
                )

        return amount, None

    def _is_known_token(self, chain_id: int, token: str) -> bool:
        if not is_valid_address(token):
            return False
        if normalize_address(token) == ZERO_ADDRESS:
            return True
        return self.registry.symbol_of(chain_id, token) is not None

    async def _try_live(self, request: QuoteRequest) -> SwapQuote | None:
        """Attempt a live quote; any live failure or timeout yields None."""
        if self.live_source is None or self.wallet is None:
            return None

        snapshot = self.wallet.snapshot
        loop = asyncio.get_running_loop()
        try:
            return await asyncio.wait_for(
                loop.run_in_executor(None, self.live_source.fetch_quote, request, snapshot),
                timeout=self.config.live_timeout_seconds,
            )
        except LiveDataError as e:
            logger.warning("live_quote_failed", error=str(e), chain_id=snapshot.chain_id)
        except TimeoutError:
            logger.warning(
                "live_quote_timeout",
                timeout_seconds=self.config.live_timeout_seconds,
                chain_id=snapshot.chain_id,
            )
        return None

    def estimate(self, request: QuoteRequest, amount_in: Decimal) -> QuoteResult:
        """Fallback quote from registry data and reference prices.

        Raises:
            EstimationError: If a reference price is missing
        """
        price_in = self.price_oracle.price_of(request.from_chain_id, request.token_in)
        price_out = self.price_oracle.price_of(request.to_chain_id, request.token_out)
        if price_in is None:
            raise EstimationError(
                f"No reference price for {request.token_in} on chain {request.from_chain_id}"
            )
        if price_out is None or price_out <= 0:
            raise EstimationError(
                f"No reference price for {request.token_out} on chain {request.to_chain_id}"
            )

        destination_amount = amount_in * price_in / price_out
        best = self.optimizer.find_optimal_route(
            request.from_chain_id,
            request.to_chain_id,
            request.token_in,
            request.token_out,
            destination_amount,
            request.objective,
            output_price_usd=price_out,
        )
        if best is None:
            return QuoteResult.with_error(
                QuoteError.NO_ROUTE,
                f"No route from chain {request.from_chain_id} to chain {request.to_chain_id}",
            )

        quote = self._estimated_quote(request, best)
        logger.info(
            "estimated_quote",
            from_chain=request.from_chain_id,
            to_chain=request.to_chain_id,
            route=best.route_kind.value,
            chains=best.path.chain_ids,
            confidence=best.confidence,
        )
        return QuoteResult.ok(quote, route_quote=best)

    def jitter_rng(self, request: QuoteRequest) -> random.Random:
        """Fresh jitter generator for one request.

        Seeded from (jitter_seed, request fields) so an identical request
        always gets the same jitter, whatever ran before it. Unseeded when
        the config has no jitter_seed.
        """
        if self.config.jitter_seed is None:
            return random.Random()
        key = "|".join(
            (
                str(self.config.jitter_seed),
                str(request.from_chain_id),
                str(request.to_chain_id),
                normalize_address(request.token_in),
                normalize_address(request.token_out),
                request.amount_in.strip(),
                str(int(request.objective)),
            )
        )
        return random.Random(key)

    def _estimated_quote(self, request: QuoteRequest, best: RouteQuote) -> SwapQuote:
        destination = best.path.destination
        symbol = self.registry.symbol_of(request.to_chain_id, request.token_out)
        decimals = destination.decimals_of(symbol) if symbol else 18
        protocol_fee = Decimal(0)
        slippage = estimate_slippage(best.path, self.jitter_rng(request), self.config)

        return SwapQuote(
            amount_out=_format_amount(best.expected_output, decimals),
            gas_fee=format_usd(best.gas_cost_usd),
            bridge_fee=format_usd(best.bridge_cost_usd),
            protocol_fee=format_usd(protocol_fee),
            total_fee=format_usd(best.total_cost_usd + protocol_fee),
            estimated_time=time_band(best.estimated_time_seconds),
            estimated_time_seconds=best.estimated_time_seconds,
            confidence=confidence_level(
                best.confidence,
                self.config.confidence_high_above,
                self.config.confidence_medium_above,
            ),
            confidence_score=best.confidence,
            route=best.route_kind,
            price_impact=format_percent(slippage),
            is_real_data=False,
        )


class QuoteSession:
    """Debounces rapid quote requests and keeps only the latest result.

    Each request() call supersedes the previous one: a pending debounce or
    in-flight quote is cancelled and its caller receives None.

    Usage:
        session = QuoteSession(facade)
        quote = await session.request(request)  # None if superseded
    """

    def __init__(self, facade: QuoteFacade, debounce_seconds: float = QUOTE_DEBOUNCE_SECONDS) -> None:
        self._facade = facade
        self._debounce_seconds = debounce_seconds
        self._generation = 0
        self._current: asyncio.Task[QuoteResult] | None = None
        self.latest: QuoteResult | None = None

    async def request(self, request: QuoteRequest) -> QuoteResult | None:
        """Quote after the debounce delay; None when superseded."""
        self.cancel()
        self._generation += 1
        generation = self._generation
        task = asyncio.ensure_future(self._debounced(request))
        self._current = task

        try:
            result = await task
        except asyncio.CancelledError:
            if task.cancelled() and self._current is not task:
                logger.debug("quote_superseded", generation=generation)
                return None
            raise

        if generation != self._generation:
            logger.debug("stale_quote_discarded", generation=generation)
            return None
        self.latest = result
        return result

    def cancel(self) -> None:
        """Cancel the pending request, if any."""
        if self._current is not None and not self._current.done():
            self._current.cancel()
        self._current = None

    async def _debounced(self, request: QuoteRequest) -> QuoteResult:
        await asyncio.sleep(self._debounce_seconds)
        return await self._facade.quote(request)


__all__ = ["QuoteFacade", "QuoteSession", "estimate_slippage", "time_band"]
