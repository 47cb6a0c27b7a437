"""Cross-chain route optimizer.

Composes enumeration, simulation, scoring and selection into one pure,
synchronous pipeline. Holds no mutable state, so one instance can serve
concurrent requests.
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from xroute.config import DEFAULT_CONFIG, OptimizerConfig
from xroute.models.route import Objective, RouteQuote
from xroute.registry.registry import ChainRegistry
from xroute.routing.pathfinding import PathEnumerator
from xroute.routing.scoring import RouteScorer
from xroute.routing.selection import select_best_route
from xroute.routing.simulator import ExchangeQuoter, SwapStepSimulator

logger = structlog.get_logger()


class RouteOptimizer:
    """Finds the best route for a cross-chain swap.

    Args:
        registry: Chain registry
        config: Optimizer configuration
        quoter: Per-exchange quoter for the simulator (flat fee by default)
    """

    def __init__(
        self,
        registry: ChainRegistry,
        config: OptimizerConfig = DEFAULT_CONFIG,
        quoter: ExchangeQuoter | None = None,
    ) -> None:
        self.registry = registry
        self.config = config
        self.simulator = SwapStepSimulator(registry, quoter=quoter, config=config)
        self.enumerator = PathEnumerator(registry, self.simulator, config=config)
        self.scorer = RouteScorer(registry, config=config)

    def score_all(
        self,
        from_chain: int,
        to_chain: int,
        token_in: str,
        token_out: str,
        amount_in: Decimal,
        objective: Objective = Objective.MAX_NET_VALUE,
        output_price_usd: Decimal = Decimal(1),
    ) -> list[RouteQuote]:
        """Score every candidate path, in enumeration order."""
        paths = self.enumerator.enumerate(from_chain, to_chain, token_in, token_out)
        return [
            self.scorer.score(path, amount_in, objective, output_price_usd=output_price_usd)
            for path in paths
        ]

    def find_optimal_route(
        self,
        from_chain: int,
        to_chain: int,
        token_in: str,
        token_out: str,
        amount_in: Decimal,
        objective: Objective = Objective.MAX_NET_VALUE,
        output_price_usd: Decimal = Decimal(1),
    ) -> RouteQuote | None:
        """Best route under the objective, or None when no route exists."""
        quotes = self.score_all(
            from_chain,
            to_chain,
            token_in,
            token_out,
            amount_in,
            objective,
            output_price_usd=output_price_usd,
        )
        best = select_best_route(quotes, objective)
        if best is None:
            logger.debug("no_viable_route", from_chain=from_chain, to_chain=to_chain)
            return None

        logger.debug(
            "route_selected",
            chains=best.path.chain_ids,
            steps=best.path.step_count,
            objective=objective.name.lower(),
            candidates=len(quotes),
        )
        return best


__all__ = ["RouteOptimizer"]
