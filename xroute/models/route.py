"""Route data model: swap steps, chain paths and scored route quotes."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum, IntEnum

from xroute.models.chain import ChainDescriptor


class Objective(IntEnum):
    """Objective used to rank candidate routes.

    Integer values are part of the signed quote encoding (uint8).
    """

    MAX_NET_VALUE = 0
    FASTEST_TIME = 1


class HopKind(str, Enum):
    """How one bridge hop between two adjacent chains is performed."""

    # Both chains hub-capable: native bridging protocol
    HUB_PROTOCOL = "hub-protocol"
    # Any hop touching a non-hub-capable chain: cross-chain messaging
    MESSAGING = "messaging"


class RouteKind(str, Enum):
    """Closed set of route labels, derived from source/destination hub capability."""

    SAME_CHAIN = "same-chain"
    DIRECT_BRIDGE = "direct-bridge"
    HUB_BRIDGE = "hub-bridge"
    HYBRID_FROM_HUB = "bridge-then-hub"
    HYBRID_TO_HUB = "hub-then-bridge"


@dataclass(frozen=True)
class SwapStep:
    """One in-chain conversion through an exchange router.

    expected_amount_out is a decimal string so no precision is lost.
    """

    dex_router: str
    token_in: str
    token_out: str
    expected_amount_out: str
    estimated_gas: int
    extra_data: str = "0x"


@dataclass(frozen=True)
class ChainPath:
    """Candidate end-to-end route.

    chains has length 1 (same chain), 2 (direct bridge) or 3 (hub route);
    steps_per_chain holds the swap steps executed on the chain at the same
    index (possibly none).
    """

    chains: tuple[ChainDescriptor, ...]
    steps_per_chain: tuple[tuple[SwapStep, ...], ...]

    def __post_init__(self) -> None:
        if not self.chains:
            raise ValueError("ChainPath needs at least one chain")
        if len(self.steps_per_chain) != len(self.chains):
            raise ValueError(
                f"steps_per_chain has {len(self.steps_per_chain)} entries "
                f"for {len(self.chains)} chains"
            )
        for prev, current in zip(self.chains, self.chains[1:], strict=False):
            if prev.chain_id == current.chain_id:
                raise ValueError(f"Adjacent duplicate chain {current.chain_id} in path")

    @property
    def source(self) -> ChainDescriptor:
        return self.chains[0]

    @property
    def destination(self) -> ChainDescriptor:
        return self.chains[-1]

    @property
    def chain_count(self) -> int:
        return len(self.chains)

    @property
    def step_count(self) -> int:
        """Total number of swap steps across all chains."""
        return sum(len(steps) for steps in self.steps_per_chain)

    @property
    def hops(self) -> list[tuple[ChainDescriptor, ChainDescriptor]]:
        """Adjacent (from, to) chain pairs bridged along the path."""
        return list(zip(self.chains, self.chains[1:], strict=False))

    @property
    def chain_ids(self) -> list[int]:
        return [chain.chain_id for chain in self.chains]


@dataclass(frozen=True)
class RouteQuote:
    """Scored result for one ChainPath.

    Amounts are in the destination token's unit; *_usd fields are USD.
    """

    expected_output: Decimal
    estimated_gas: int
    estimated_time_seconds: int
    confidence: int
    path: ChainPath
    net_value_usd: Decimal
    objective: Objective
    gas_cost_usd: Decimal
    bridge_cost_usd: Decimal
    route_kind: RouteKind
    hops: tuple[HopKind, ...] = ()

    @property
    def total_cost_usd(self) -> Decimal:
        return self.gas_cost_usd + self.bridge_cost_usd


__all__ = [
    "ChainPath",
    "HopKind",
    "Objective",
    "RouteKind",
    "RouteQuote",
    "SwapStep",
]
