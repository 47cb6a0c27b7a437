"""Tests for candidate path enumeration."""

import pytest

from xroute.config import OptimizerConfig
from xroute.registry.registry import ChainRegistry
from xroute.routing.pathfinding import PathEnumerator
from xroute.routing.simulator import SwapStepSimulator
from tests.helpers import make_registry, make_registry_document
from tests.helpers.constants import (
    EDGE_A,
    EDGE_A_DAI,
    EDGE_A_USDC,
    EDGE_B,
    EDGE_B_USDC,
    EDGE_WETH,
    HUB_CHAIN,
    HUB_USDC,
    HUB_WETH,
    NATIVE,
    PEER_CHAIN,
    PEER_USDC,
)


def make_enumerator(registry: ChainRegistry, config: OptimizerConfig | None = None) -> PathEnumerator:
    config = config or OptimizerConfig()
    return PathEnumerator(registry, SwapStepSimulator(registry, config=config), config=config)


class TestSameChain:
    @pytest.mark.parametrize("chain_id", [HUB_CHAIN, PEER_CHAIN, EDGE_A, EDGE_B, EDGE_WETH])
    def test_exactly_one_single_chain_path(self, registry: ChainRegistry, chain_id: int) -> None:
        chain = registry.describe(chain_id)
        assert chain is not None
        token_out = chain.token_address(chain.bridge_tokens[0])
        assert token_out is not None

        paths = make_enumerator(registry).enumerate(chain_id, chain_id, NATIVE, token_out)

        assert len(paths) == 1
        assert paths[0].chain_ids == [chain_id]
        assert paths[0].step_count == 1

    def test_same_token_has_no_steps(self, registry: ChainRegistry) -> None:
        paths = make_enumerator(registry).enumerate(HUB_CHAIN, HUB_CHAIN, HUB_USDC, HUB_USDC)
        assert len(paths) == 1
        assert paths[0].step_count == 0


class TestDirectPath:
    def test_hub_capable_pair_only_direct(self, registry: ChainRegistry) -> None:
        paths = make_enumerator(registry).enumerate(HUB_CHAIN, PEER_CHAIN, HUB_USDC, PEER_USDC)

        assert [path.chain_ids for path in paths] == [[HUB_CHAIN, PEER_CHAIN]]
        assert paths[0].step_count == 0

    def test_conversion_steps_on_both_sides(self, registry: ChainRegistry) -> None:
        paths = make_enumerator(registry).enumerate(HUB_CHAIN, EDGE_A, NATIVE, EDGE_A_DAI)

        direct = paths[0]
        assert direct.chain_ids == [HUB_CHAIN, EDGE_A]
        source_steps, destination_steps = direct.steps_per_chain
        assert [(s.token_in, s.token_out) for s in source_steps] == [(NATIVE, HUB_USDC)]
        assert [(s.token_in, s.token_out) for s in destination_steps] == [(EDGE_A_USDC, EDGE_A_DAI)]

    def test_no_shared_bridge_token(self, registry: ChainRegistry) -> None:
        # EDGE_WETH bridges only WETH, EDGE_A only USDC; both non-hub -> hub path only
        paths = make_enumerator(registry).enumerate(EDGE_WETH, EDGE_A, NATIVE, EDGE_A_USDC)
        assert [path.chain_ids for path in paths] == [[EDGE_WETH, HUB_CHAIN, EDGE_A]]

    def test_failed_conversion_drops_candidate(self) -> None:
        document = make_registry_document()
        document["chains"][2]["exchanges"] = []
        registry = make_registry(document)

        # EDGE_A cannot convert USDC -> DAI, so neither direct nor hub path works
        paths = make_enumerator(registry).enumerate(EDGE_B, EDGE_A, EDGE_B_USDC, EDGE_A_DAI)
        assert paths == []


class TestHubPath:
    def test_non_hub_pair_gets_direct_and_hub(self, registry: ChainRegistry) -> None:
        paths = make_enumerator(registry).enumerate(EDGE_A, EDGE_B, EDGE_A_USDC, EDGE_B_USDC)

        assert [path.chain_ids for path in paths] == [
            [EDGE_A, EDGE_B],
            [EDGE_A, HUB_CHAIN, EDGE_B],
        ]
        # Both legs bridge USDC: no in-hub conversion
        assert paths[1].steps_per_chain[1] == ()

    def test_in_hub_conversion_when_bridge_tokens_differ(self, registry: ChainRegistry) -> None:
        paths = make_enumerator(registry).enumerate(EDGE_WETH, EDGE_A, NATIVE, EDGE_A_USDC)
        hub_path = paths[0]

        hub_steps = hub_path.steps_per_chain[1]
        assert [(s.token_in, s.token_out) for s in hub_steps] == [(HUB_WETH, HUB_USDC)]
        # ETH -> WETH on the source, nothing on the destination
        assert len(hub_path.steps_per_chain[0]) == 1
        assert hub_path.steps_per_chain[2] == ()

    def test_hub_endpoint_gets_no_hub_path(self, registry: ChainRegistry) -> None:
        paths = make_enumerator(registry).enumerate(HUB_CHAIN, EDGE_A, HUB_USDC, EDGE_A_USDC)
        assert [path.chain_ids for path in paths] == [[HUB_CHAIN, EDGE_A]]

    def test_no_hub_designated(self) -> None:
        document = make_registry_document()
        document["hubChainId"] = None
        registry = make_registry(document)

        paths = make_enumerator(registry).enumerate(EDGE_WETH, EDGE_A, NATIVE, EDGE_A_USDC)
        assert paths == []

    def test_no_adjacent_duplicate_chains(self, registry: ChainRegistry) -> None:
        enumerator = make_enumerator(registry)
        for from_chain in registry.chain_ids():
            for to_chain in registry.chain_ids():
                for path in enumerator.enumerate(from_chain, to_chain, NATIVE, NATIVE):
                    ids = path.chain_ids
                    assert all(a != b for a, b in zip(ids, ids[1:], strict=False))
                    assert len(path.steps_per_chain) == len(path.chains)


class TestCommonBridgeToken:
    def test_prefers_usdc(self, registry: ChainRegistry) -> None:
        assert make_enumerator(registry).find_common_bridge_token(HUB_CHAIN, EDGE_A) == "USDC"

    def test_first_shared_symbol_otherwise(self, registry: ChainRegistry) -> None:
        assert make_enumerator(registry).find_common_bridge_token(HUB_CHAIN, EDGE_WETH) == "WETH"

    def test_configured_preference(self, registry: ChainRegistry) -> None:
        enumerator = make_enumerator(registry, OptimizerConfig(preferred_bridge_symbol="WETH"))
        assert enumerator.find_common_bridge_token(HUB_CHAIN, HUB_CHAIN) == "WETH"

    def test_none_shared(self, registry: ChainRegistry) -> None:
        assert make_enumerator(registry).find_common_bridge_token(EDGE_A, EDGE_WETH) is None
