"""Candidate path enumeration across chains.

Produces the structurally distinct ways to move a token from one chain to
another over a small chain topology:

- Same chain: one chain, at most one swap step
- Direct: source -> destination over a shared bridge token
- Hub: source -> hub -> destination, when neither endpoint is hub-capable

Each chain in a path carries the swap steps needed to convert into or out of
the bridge token. Candidates that cannot be built (no shared bridge token,
no exchange able to convert) are dropped; an empty list means no route.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from xroute.config import DEFAULT_CONFIG, OptimizerConfig
from xroute.models.route import ChainPath, SwapStep
from xroute.models.types import normalize_address

if TYPE_CHECKING:
    from xroute.registry.registry import ChainRegistry
    from xroute.routing.simulator import SwapStepSimulator

logger = structlog.get_logger()


class PathEnumerator:
    """Enumerates candidate ChainPaths for a swap.

    Usage:
        enumerator = PathEnumerator(registry, simulator)
        paths = enumerator.enumerate(421614, 80002, token_in, token_out)
    """

    def __init__(
        self,
        registry: ChainRegistry,
        simulator: SwapStepSimulator,
        config: OptimizerConfig = DEFAULT_CONFIG,
    ) -> None:
        self._registry = registry
        self._simulator = simulator
        self._preferred_symbol = config.preferred_bridge_symbol

    def enumerate(
        self,
        from_chain: int,
        to_chain: int,
        token_in: str,
        token_out: str,
    ) -> list[ChainPath]:
        """Enumerate candidate paths in order: same-chain, direct, hub.

        Args:
            from_chain: Source chain id
            to_chain: Destination chain id
            token_in: Input token address on the source chain
            token_out: Output token address on the destination chain

        Returns:
            Candidate paths. Empty list if no path can be built.
        """
        if from_chain == to_chain:
            local = self._local_path(from_chain, token_in, token_out)
            return [local] if local is not None else []

        candidates: list[ChainPath] = []

        direct = self._direct_path(from_chain, to_chain, token_in, token_out)
        if direct is not None:
            candidates.append(direct)

        if not self._registry.is_hub_capable(from_chain) and not self._registry.is_hub_capable(
            to_chain
        ):
            hub_path = self._hub_path(from_chain, to_chain, token_in, token_out)
            if hub_path is not None:
                candidates.append(hub_path)

        logger.debug(
            "paths_enumerated",
            from_chain=from_chain,
            to_chain=to_chain,
            candidates=[path.chain_ids for path in candidates],
        )
        return candidates

    def find_common_bridge_token(self, chain_a: int, chain_b: int) -> str | None:
        """Bridge token symbol shared by two chains.

        Prefers the configured stablecoin symbol when several are shared,
        otherwise the first shared symbol in chain_a's registry order.
        """
        bridge_b = self._registry.bridge_tokens_of(chain_b)
        common = [symbol for symbol in self._registry.bridge_tokens_of(chain_a) if symbol in bridge_b]
        if not common:
            return None
        if self._preferred_symbol in common:
            return self._preferred_symbol
        return common[0]

    def _local_path(self, chain_id: int, token_in: str, token_out: str) -> ChainPath | None:
        chain = self._registry.describe(chain_id)
        if chain is None:
            return None
        steps = self._conversion_steps(chain_id, token_in, token_out)
        if steps is None:
            return None
        return ChainPath(chains=(chain,), steps_per_chain=(steps,))

    def _direct_path(
        self,
        from_chain: int,
        to_chain: int,
        token_in: str,
        token_out: str,
    ) -> ChainPath | None:
        source = self._registry.describe(from_chain)
        destination = self._registry.describe(to_chain)
        if source is None or destination is None:
            return None

        symbol = self.find_common_bridge_token(from_chain, to_chain)
        if symbol is None:
            return None

        bridge_in = source.token_address(symbol)
        bridge_out = destination.token_address(symbol)
        if bridge_in is None or bridge_out is None:
            return None

        source_steps = self._conversion_steps(from_chain, token_in, bridge_in)
        destination_steps = self._conversion_steps(to_chain, bridge_out, token_out)
        if source_steps is None or destination_steps is None:
            return None

        return ChainPath(
            chains=(source, destination),
            steps_per_chain=(source_steps, destination_steps),
        )

    def _hub_path(
        self,
        from_chain: int,
        to_chain: int,
        token_in: str,
        token_out: str,
    ) -> ChainPath | None:
        hub = self._registry.hub_chain
        if hub is None or hub.chain_id in (from_chain, to_chain):
            return None

        symbol_in = self.find_common_bridge_token(from_chain, hub.chain_id)
        symbol_out = self.find_common_bridge_token(hub.chain_id, to_chain)
        if symbol_in is None or symbol_out is None:
            return None

        hub_token_in = hub.token_address(symbol_in)
        hub_token_out = hub.token_address(symbol_out)
        if hub_token_in is None or hub_token_out is None:
            return None

        inbound = self._direct_path(from_chain, hub.chain_id, token_in, hub_token_in)
        outbound = self._direct_path(hub.chain_id, to_chain, hub_token_out, token_out)
        if inbound is None or outbound is None:
            return None

        # Extra in-hub conversion only when the two legs bridge different tokens
        hub_steps: tuple[SwapStep, ...] = ()
        if symbol_in != symbol_out:
            converted = self._conversion_steps(hub.chain_id, hub_token_in, hub_token_out)
            if converted is None:
                return None
            hub_steps = converted

        return ChainPath(
            chains=(inbound.chains[0], hub, outbound.chains[1]),
            steps_per_chain=(inbound.steps_per_chain[0], hub_steps, outbound.steps_per_chain[1]),
        )

    def _conversion_steps(
        self,
        chain_id: int,
        token_in: str,
        token_out: str,
    ) -> tuple[SwapStep, ...] | None:
        """Steps converting token_in to token_out on a chain.

        Returns an empty tuple when no conversion is needed and None when a
        conversion is needed but no exchange can perform it.
        """
        if normalize_address(token_in) == normalize_address(token_out):
            return ()
        step = self._simulator.simulate_step(chain_id, token_in, token_out)
        if step is None:
            return None
        return (step,)


__all__ = ["PathEnumerator"]
