"""Tests for route scoring and classification."""

from decimal import Decimal

import pytest

from xroute.config import OptimizerConfig
from xroute.models.route import ChainPath, HopKind, Objective, RouteKind, SwapStep
from xroute.registry.registry import ChainRegistry
from xroute.routing.scoring import RouteScorer, classify_route
from tests.helpers.constants import (
    EDGE_A,
    EDGE_B,
    HUB_CHAIN,
    HUB_DEX_ONE,
    HUB_USDC,
    NATIVE,
    PEER_CHAIN,
    UNKNOWN_CHAIN,
)


def make_step(gas: int = 100_000) -> SwapStep:
    return SwapStep(
        dex_router=HUB_DEX_ONE,
        token_in=NATIVE,
        token_out=HUB_USDC,
        expected_amount_out="997",
        estimated_gas=gas,
    )


def make_path(registry: ChainRegistry, chain_ids: list[int], steps: list[int]) -> ChainPath:
    chains = []
    for chain_id in chain_ids:
        chain = registry.describe(chain_id)
        assert chain is not None
        chains.append(chain)
    return ChainPath(
        chains=tuple(chains),
        steps_per_chain=tuple(tuple(make_step() for _ in range(n)) for n in steps),
    )


class TestClassifyRoute:
    @pytest.mark.parametrize(
        "from_chain,to_chain,expected",
        [
            (HUB_CHAIN, HUB_CHAIN, RouteKind.SAME_CHAIN),
            (EDGE_A, EDGE_A, RouteKind.SAME_CHAIN),
            (HUB_CHAIN, PEER_CHAIN, RouteKind.DIRECT_BRIDGE),
            (HUB_CHAIN, EDGE_A, RouteKind.HYBRID_FROM_HUB),
            (EDGE_A, HUB_CHAIN, RouteKind.HYBRID_TO_HUB),
            (EDGE_A, EDGE_B, RouteKind.HUB_BRIDGE),
            (EDGE_A, UNKNOWN_CHAIN, RouteKind.HUB_BRIDGE),
        ],
    )
    def test_labels(
        self, registry: ChainRegistry, from_chain: int, to_chain: int, expected: RouteKind
    ) -> None:
        assert classify_route(registry, from_chain, to_chain) is expected

    def test_label_values(self) -> None:
        assert RouteKind.HYBRID_FROM_HUB.value == "bridge-then-hub"
        assert RouteKind.HYBRID_TO_HUB.value == "hub-then-bridge"


class TestHopCosts:
    def test_hop_kinds(self, registry: ChainRegistry) -> None:
        scorer = RouteScorer(registry)
        assert scorer.classify_hop(HUB_CHAIN, PEER_CHAIN) is HopKind.HUB_PROTOCOL
        assert scorer.classify_hop(HUB_CHAIN, EDGE_A) is HopKind.MESSAGING
        assert scorer.classify_hop(EDGE_A, EDGE_B) is HopKind.MESSAGING

    def test_hub_protocol_hop(self, registry: ChainRegistry) -> None:
        quote = RouteScorer(registry).score(make_path(registry, [HUB_CHAIN, PEER_CHAIN], [0, 0]), Decimal(100))

        assert quote.hops == (HopKind.HUB_PROTOCOL,)
        assert quote.estimated_gas == 200_000
        assert quote.estimated_time_seconds == 60
        assert quote.bridge_cost_usd == Decimal("0.50")
        assert quote.gas_cost_usd == Decimal("1.00")

    def test_messaging_hops(self, registry: ChainRegistry) -> None:
        path = make_path(registry, [EDGE_A, HUB_CHAIN, EDGE_B], [1, 0, 1])
        quote = RouteScorer(registry).score(path, Decimal(100))

        assert quote.hops == (HopKind.MESSAGING, HopKind.MESSAGING)
        assert quote.estimated_gas == 2 * 100_000 + 2 * 300_000
        assert quote.estimated_time_seconds == 2 * 15 + 2 * 300
        assert quote.bridge_cost_usd == Decimal("10.00")
        assert quote.route_kind is RouteKind.HUB_BRIDGE


class TestScore:
    def test_same_chain_single_step(self, registry: ChainRegistry) -> None:
        quote = RouteScorer(registry).score(make_path(registry, [HUB_CHAIN], [1]), Decimal(100))

        assert quote.expected_output == Decimal("99.700")
        assert quote.estimated_gas == 100_000
        assert quote.estimated_time_seconds == 15
        assert quote.confidence == 95
        assert quote.gas_cost_usd == Decimal("0.50")
        assert quote.bridge_cost_usd == Decimal(0)
        assert quote.net_value_usd == Decimal("99.2")
        assert quote.route_kind is RouteKind.SAME_CHAIN
        assert quote.objective is Objective.MAX_NET_VALUE

    def test_fee_compounds_per_step(self, registry: ChainRegistry) -> None:
        path = make_path(registry, [EDGE_A, HUB_CHAIN, EDGE_B], [1, 1, 1])
        quote = RouteScorer(registry).score(path, Decimal(1000))
        assert quote.expected_output == Decimal(1000) * Decimal("0.997") ** 3

    def test_output_price_scales_net_value(self, registry: ChainRegistry) -> None:
        path = make_path(registry, [HUB_CHAIN], [0])
        quote = RouteScorer(registry).score(path, Decimal(10), output_price_usd=Decimal(2000))
        assert quote.net_value_usd == Decimal(20000)

    def test_net_value_never_negative(self, registry: ChainRegistry) -> None:
        path = make_path(registry, [EDGE_A, HUB_CHAIN, EDGE_B], [1, 1, 1])
        quote = RouteScorer(registry).score(path, Decimal("0.000001"))
        assert quote.net_value_usd == Decimal(0)

    def test_objective_is_recorded(self, registry: ChainRegistry) -> None:
        quote = RouteScorer(registry).score(
            make_path(registry, [HUB_CHAIN], [0]), Decimal(1), Objective.FASTEST_TIME
        )
        assert quote.objective is Objective.FASTEST_TIME

    def test_total_cost(self, registry: ChainRegistry) -> None:
        quote = RouteScorer(registry).score(make_path(registry, [HUB_CHAIN, EDGE_A], [1, 0]), Decimal(100))
        assert quote.total_cost_usd == quote.gas_cost_usd + quote.bridge_cost_usd

    def test_custom_config(self, registry: ChainRegistry) -> None:
        config = OptimizerConfig(hub_protocol_gas=1, hub_protocol_seconds=2, hub_protocol_cost_usd=Decimal(3))
        quote = RouteScorer(registry, config).score(
            make_path(registry, [HUB_CHAIN, PEER_CHAIN], [0, 0]), Decimal(100)
        )
        assert quote.estimated_gas == 1
        assert quote.estimated_time_seconds == 2
        assert quote.bridge_cost_usd == Decimal(3)


class TestConfidence:
    def test_penalties(self, registry: ChainRegistry) -> None:
        scorer = RouteScorer(registry)
        assert scorer.confidence(make_path(registry, [HUB_CHAIN], [0])) == 100
        assert scorer.confidence(make_path(registry, [HUB_CHAIN, EDGE_A], [1, 1])) == 80
        assert scorer.confidence(make_path(registry, [EDGE_A, HUB_CHAIN, EDGE_B], [1, 1, 1])) == 65

    def test_floor(self, registry: ChainRegistry) -> None:
        path = make_path(registry, [EDGE_A, HUB_CHAIN, EDGE_B], [3, 3, 3])
        assert RouteScorer(registry).confidence(path) == 60

    def test_monotone_in_chain_count(self, registry: ChainRegistry) -> None:
        scorer = RouteScorer(registry)
        one = scorer.confidence(make_path(registry, [EDGE_A], [1]))
        two = scorer.confidence(make_path(registry, [EDGE_A, EDGE_B], [1, 0]))
        three = scorer.confidence(make_path(registry, [EDGE_A, HUB_CHAIN, EDGE_B], [1, 0, 0]))
        assert three <= two <= one

    def test_monotone_in_step_count(self, registry: ChainRegistry) -> None:
        scorer = RouteScorer(registry)
        scores = [scorer.confidence(make_path(registry, [EDGE_A, EDGE_B], [n, 0])) for n in range(6)]
        assert scores == sorted(scores, reverse=True)
