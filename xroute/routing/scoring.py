"""Route scoring.

Turns a ChainPath and an input amount into a RouteQuote: expected output
after compounding swap fees, total gas, total time, a confidence score and
USD costs netted against the output value.

Bridging is lossless in token amount; its cost is accounted in USD only.
Hop costs depend on hub capability of the two chains bridged, looked up
through the registry predicate.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

import structlog

from xroute.config import DEFAULT_CONFIG, OptimizerConfig
from xroute.constants import GAS_UNIT_BATCH
from xroute.models.route import ChainPath, HopKind, Objective, RouteKind, RouteQuote

if TYPE_CHECKING:
    from xroute.registry.registry import ChainRegistry

logger = structlog.get_logger()


def classify_route(registry: ChainRegistry, from_chain: int, to_chain: int) -> RouteKind:
    """Route label from the hub capability of source and destination.

    - Same chain: SAME_CHAIN
    - Both hub-capable: DIRECT_BRIDGE (native bridging protocol)
    - Hub-capable -> non-hub-capable: HYBRID_FROM_HUB ("bridge-then-hub")
    - Non-hub-capable -> hub-capable: HYBRID_TO_HUB ("hub-then-bridge")
    - Neither: HUB_BRIDGE (cross-chain messaging)
    """
    if from_chain == to_chain:
        return RouteKind.SAME_CHAIN

    from_hub = registry.is_hub_capable(from_chain)
    to_hub = registry.is_hub_capable(to_chain)
    if from_hub and to_hub:
        return RouteKind.DIRECT_BRIDGE
    if from_hub:
        return RouteKind.HYBRID_FROM_HUB
    if to_hub:
        return RouteKind.HYBRID_TO_HUB
    return RouteKind.HUB_BRIDGE


class RouteScorer:
    """Scores candidate paths.

    Usage:
        scorer = RouteScorer(registry)
        quote = scorer.score(path, Decimal("100"), Objective.MAX_NET_VALUE)
    """

    def __init__(self, registry: ChainRegistry, config: OptimizerConfig = DEFAULT_CONFIG) -> None:
        self._registry = registry
        self._config = config

    def classify_hop(self, from_chain: int, to_chain: int) -> HopKind:
        """Hub protocol between two hub-capable chains, messaging otherwise."""
        if self._registry.is_hub_capable(from_chain) and self._registry.is_hub_capable(to_chain):
            return HopKind.HUB_PROTOCOL
        return HopKind.MESSAGING

    def hop_kinds(self, path: ChainPath) -> tuple[HopKind, ...]:
        return tuple(self.classify_hop(a.chain_id, b.chain_id) for a, b in path.hops)

    def expected_output(self, path: ChainPath, amount_in: Decimal) -> Decimal:
        """Apply the swap fee factor once per step across all chains."""
        amount = amount_in
        for steps in path.steps_per_chain:
            for _step in steps:
                amount = amount * self._config.swap_fee_factor
        return amount

    def total_gas(self, path: ChainPath, hops: tuple[HopKind, ...]) -> int:
        gas = sum(step.estimated_gas for steps in path.steps_per_chain for step in steps)
        for hop in hops:
            gas += (
                self._config.hub_protocol_gas
                if hop is HopKind.HUB_PROTOCOL
                else self._config.messaging_gas
            )
        return gas

    def total_time(self, path: ChainPath, hops: tuple[HopKind, ...]) -> int:
        seconds = path.step_count * self._config.step_seconds
        for hop in hops:
            seconds += (
                self._config.hub_protocol_seconds
                if hop is HopKind.HUB_PROTOCOL
                else self._config.messaging_seconds
            )
        return seconds

    def confidence(self, path: ChainPath) -> int:
        """Start high, lose points per extra chain and per swap step, with a floor."""
        score = (
            self._config.confidence_start
            - (path.chain_count - 1) * self._config.confidence_chain_penalty
            - path.step_count * self._config.confidence_step_penalty
        )
        return max(self._config.confidence_floor, score)

    def gas_cost_usd(self, total_gas: int) -> Decimal:
        return Decimal(total_gas) / GAS_UNIT_BATCH * self._config.usd_per_100k_gas

    def bridge_cost_usd(self, hops: tuple[HopKind, ...]) -> Decimal:
        total = Decimal(0)
        for hop in hops:
            total += (
                self._config.hub_protocol_cost_usd
                if hop is HopKind.HUB_PROTOCOL
                else self._config.messaging_cost_usd
            )
        return total

    def score(
        self,
        path: ChainPath,
        amount_in: Decimal,
        objective: Objective = Objective.MAX_NET_VALUE,
        output_price_usd: Decimal = Decimal(1),
    ) -> RouteQuote:
        """Score one path.

        Args:
            path: Candidate path
            amount_in: Input amount, expressed in destination token units
            objective: Objective the quote will be ranked under
            output_price_usd: USD value of one output unit. The simplified
                model values output 1:1.

        Returns:
            RouteQuote with net_value_usd clamped at zero
        """
        hops = self.hop_kinds(path)
        expected = self.expected_output(path, amount_in)
        gas = self.total_gas(path, hops)
        gas_usd = self.gas_cost_usd(gas)
        bridge_usd = self.bridge_cost_usd(hops)
        net_value = max(Decimal(0), expected * output_price_usd - gas_usd - bridge_usd)

        return RouteQuote(
            expected_output=expected,
            estimated_gas=gas,
            estimated_time_seconds=self.total_time(path, hops),
            confidence=self.confidence(path),
            path=path,
            net_value_usd=net_value,
            objective=objective,
            gas_cost_usd=gas_usd,
            bridge_cost_usd=bridge_usd,
            route_kind=classify_route(self._registry, path.source.chain_id, path.destination.chain_id),
            hops=hops,
        )


__all__ = ["RouteScorer", "classify_route"]
