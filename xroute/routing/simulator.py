"""Swap-step simulation.

Picks, for one chain and token pair, the exchange expected to return the
most output for a fixed reference input. The per-exchange output comes from
an ExchangeQuoter: the default FlatFeeQuoter is a deterministic placeholder
(flat fee factor); Web3ExchangeQuoter asks the router on-chain. Swapping the
quoter never changes the selection policy: highest output wins, ties go to
the earliest-registered exchange.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import TYPE_CHECKING, Protocol

import structlog
from web3 import Web3

from xroute.config import DEFAULT_CONFIG, OptimizerConfig
from xroute.models.route import SwapStep
from xroute.models.types import normalize_address

if TYPE_CHECKING:
    from xroute.models.chain import ChainDescriptor, ExchangeDescriptor
    from xroute.registry.registry import ChainRegistry

logger = structlog.get_logger()


class ExchangeQuoter(Protocol):
    """Protocol for per-exchange output estimation.

    This allows swapping between the flat-fee placeholder and a live
    router call without touching step selection.
    """

    def quote(
        self,
        chain: ChainDescriptor,
        exchange: ExchangeDescriptor,
        token_in: str,
        token_out: str,
        amount_in: Decimal,
    ) -> Decimal | None:
        """Expected output for amount_in, or None if the exchange cannot quote."""
        ...


class FlatFeeQuoter:
    """Deterministic quoter applying a flat fee factor to every exchange."""

    def __init__(self, fee_factor: Decimal = DEFAULT_CONFIG.swap_fee_factor) -> None:
        self.fee_factor = fee_factor

    def quote(
        self,
        chain: ChainDescriptor,
        exchange: ExchangeDescriptor,
        token_in: str,
        token_out: str,
        amount_in: Decimal,
    ) -> Decimal | None:
        return amount_in * self.fee_factor


# UniswapV2-style router ABI - minimal, just the quote function
V2_ROUTER_ABI = [
    {
        "name": "getAmountsOut",
        "type": "function",
        "stateMutability": "view",
        "inputs": [
            {"name": "amountIn", "type": "uint256"},
            {"name": "path", "type": "address[]"},
        ],
        "outputs": [{"name": "amounts", "type": "uint256[]"}],
    },
]


class Web3ExchangeQuoter:
    """Quoter that calls ``getAmountsOut`` on each exchange router via RPC.

    Failures are logged and reported as None, which excludes that exchange
    from selection.
    """

    def __init__(self, providers: Mapping[int, Web3]) -> None:
        """Initialize with one Web3 instance per chain id.

        Args:
            providers: chain id -> connected Web3 instance
        """
        self._providers = providers

    @classmethod
    def from_registry(cls, registry: ChainRegistry) -> Web3ExchangeQuoter:
        """Create HTTP providers for every registry chain that has an RPC URL."""
        providers = {
            chain.chain_id: Web3(Web3.HTTPProvider(chain.rpc_url))
            for chain in registry.chains()
            if chain.rpc_url
        }
        return cls(providers)

    def quote(
        self,
        chain: ChainDescriptor,
        exchange: ExchangeDescriptor,
        token_in: str,
        token_out: str,
        amount_in: Decimal,
    ) -> Decimal | None:
        w3 = self._providers.get(chain.chain_id)
        if w3 is None:
            return None

        decimals_in = _decimals_for(chain, token_in)
        decimals_out = _decimals_for(chain, token_out)
        try:
            router = w3.eth.contract(
                address=Web3.to_checksum_address(exchange.router),
                abi=V2_ROUTER_ABI,
            )
            amounts = router.functions.getAmountsOut(
                int(amount_in * (Decimal(10) ** decimals_in)),
                [Web3.to_checksum_address(token_in), Web3.to_checksum_address(token_out)],
            ).call()
            return Decimal(int(amounts[-1])) / (Decimal(10) ** decimals_out)
        except Exception as e:
            logger.warning(
                "exchange_quote_failed",
                chain_id=chain.chain_id,
                exchange=exchange.name,
                token_in=token_in,
                token_out=token_out,
                error=str(e),
            )
            return None


def _decimals_for(chain: ChainDescriptor, address: str) -> int:
    symbol = chain.symbol_of(address)
    return chain.decimals_of(symbol) if symbol is not None else 18


class SwapStepSimulator:
    """Selects the best exchange for an in-chain conversion.

    Pure function of registry data and the injected quoter.

    Usage:
        simulator = SwapStepSimulator(registry)
        step = simulator.simulate_step(43113, token_in, token_out)
    """

    def __init__(
        self,
        registry: ChainRegistry,
        quoter: ExchangeQuoter | None = None,
        config: OptimizerConfig = DEFAULT_CONFIG,
    ) -> None:
        """Initialize the simulator.

        Args:
            registry: Chain registry with exchange data
            quoter: Per-exchange quoter. Defaults to a FlatFeeQuoter using
                    the configured fee factor.
            config: Optimizer configuration (reference amount, fee factor)
        """
        self._registry = registry
        self._quoter = quoter if quoter is not None else FlatFeeQuoter(config.swap_fee_factor)
        self._reference_amount = config.reference_amount

    def simulate_step(self, chain_id: int, token_in: str, token_out: str) -> SwapStep | None:
        """Build the swap step converting token_in to token_out on a chain.

        Returns:
            SwapStep through the best exchange, or None when the tokens are
            equal, the chain is unknown, it has no exchanges, or no exchange
            can quote the pair
        """
        if normalize_address(token_in) == normalize_address(token_out):
            return None

        chain = self._registry.describe(chain_id)
        if chain is None or not chain.exchanges:
            return None

        best_exchange: ExchangeDescriptor | None = None
        best_output: Decimal | None = None
        for exchange in chain.exchanges:
            output = self._quoter.quote(chain, exchange, token_in, token_out, self._reference_amount)
            if output is None:
                continue
            # Strict comparison keeps the earliest exchange on ties
            if best_output is None or output > best_output:
                best_exchange = exchange
                best_output = output

        if best_exchange is None or best_output is None:
            logger.debug("no_exchange_quote", chain_id=chain_id, token_in=token_in, token_out=token_out)
            return None

        return SwapStep(
            dex_router=best_exchange.router,
            token_in=token_in,
            token_out=token_out,
            expected_amount_out=str(best_output),
            estimated_gas=best_exchange.avg_gas,
        )


__all__ = [
    "ExchangeQuoter",
    "FlatFeeQuoter",
    "SwapStepSimulator",
    "V2_ROUTER_ABI",
    "Web3ExchangeQuoter",
]
