"""Live on-chain quotes from the deployed aggregator and cross-chain router.

Live quotes are only served on the designated pricing chain, for a connected
account. Every failure along the way surfaces as LiveDataError, which the
quote facade turns into a fallback estimate.

The web3 calls here are blocking; the facade runs fetch_quote in an
executor and bounds it with a timeout.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Protocol

import structlog
from web3 import Web3
from web3.exceptions import ContractLogicError

from xroute.config import DEFAULT_CONFIG, OptimizerConfig
from xroute.errors import LiveDataError
from xroute.gateway.abi import CROSS_CHAIN_SWAP_ROUTER_ABI, LIQUIDITY_AGGREGATOR_ABI
from xroute.models.quote import (
    ConfidenceLevel,
    QuoteRequest,
    SwapQuote,
    confidence_level,
    format_percent,
    format_usd,
)
from xroute.models.types import parse_amount
from xroute.routing.scoring import classify_route

if TYPE_CHECKING:
    from xroute.gateway.wallet import WalletSnapshot
    from xroute.models.chain import ContractAddresses
    from xroute.registry.registry import ChainRegistry

logger = structlog.get_logger()

GWEI = Decimal(10) ** 9

SAME_CHAIN_TIME = "30s - 2min"
CROSS_CHAIN_TIME = "5-15min"
CROSS_CHAIN_PRICE_IMPACT = "< 0.5%"

# Index of each field in the findBestRoute result tuple
_ROUTE_PATH = 0
_ROUTE_DEX_ROUTERS = 1
_ROUTE_EXPECTED_OUTPUT = 2
_ROUTE_ESTIMATED_GAS = 3
_ROUTE_PRICE_IMPACT = 5
_ROUTE_CONFIDENCE = 7


class LiveQuoteSource(Protocol):
    """Protocol for live quote providers.

    Implementations must raise only LiveDataError for any condition that
    prevents a live quote (wrong network, missing contracts, reverted calls,
    transport errors). The facade falls back on LiveDataError and timeouts;
    any other exception is treated as a bug and propagates.
    """

    def fetch_quote(self, request: QuoteRequest, snapshot: WalletSnapshot) -> SwapQuote:
        """Fetch a live quote for a request."""
        ...


class Web3LiveQuoteSource:
    """Live quotes via read-only calls on the pricing chain.

    Args:
        w3: Web3 instance connected to the pricing chain
        registry: Chain registry (contracts, messaging selectors, prices)
        config: Optimizer configuration (pricing chain, gas price, fees)
    """

    def __init__(
        self,
        w3: Web3,
        registry: ChainRegistry,
        config: OptimizerConfig = DEFAULT_CONFIG,
    ) -> None:
        self._w3 = w3
        self._registry = registry
        self._config = config

    @classmethod
    def from_registry(
        cls,
        registry: ChainRegistry,
        config: OptimizerConfig = DEFAULT_CONFIG,
    ) -> Web3LiveQuoteSource | None:
        """HTTP provider for the pricing chain, or None if it has no RPC URL.

        Each RPC request is bounded by the live timeout so a hung node does
        not hold an executor thread past the abandoned attempt.
        """
        chain = registry.describe(config.pricing_chain_id)
        if chain is None or not chain.rpc_url:
            return None
        provider = Web3.HTTPProvider(
            chain.rpc_url,
            request_kwargs={"timeout": config.live_timeout_seconds},
        )
        return cls(Web3(provider), registry, config)

    def fetch_quote(self, request: QuoteRequest, snapshot: WalletSnapshot) -> SwapQuote:
        pricing_chain = self._config.pricing_chain_id
        if not snapshot.is_connected:
            raise LiveDataError("No connected account")
        if snapshot.chain_id != pricing_chain:
            raise LiveDataError(
                f"Wallet on chain {snapshot.chain_id}, live quotes need chain {pricing_chain}"
            )

        contracts = self._registry.contracts_for(pricing_chain)
        if contracts is None or not contracts.has_live_contracts:
            raise LiveDataError(f"No deployed contracts on chain {pricing_chain}")

        amount_in = parse_amount(request.amount_in)
        if amount_in is None:
            raise LiveDataError(f"Invalid amount: {request.amount_in!r}")

        native_price = self._registry.native_price(pricing_chain)
        if native_price is None:
            raise LiveDataError(f"No native price for chain {pricing_chain}")

        input_price = self._registry.reference_price(request.from_chain_id, request.token_in)
        if input_price is None:
            raise LiveDataError(f"No reference price for {request.token_in}")
        amount_in_usd = amount_in * input_price

        try:
            if request.from_chain_id == request.to_chain_id:
                if request.from_chain_id != pricing_chain:
                    raise LiveDataError(
                        f"Same-chain live quotes only on chain {pricing_chain}"
                    )
                return self._same_chain_quote(
                    request, contracts, amount_in, amount_in_usd, native_price
                )
            return self._cross_chain_quote(
                request, contracts, amount_in, amount_in_usd, native_price
            )
        except LiveDataError:
            raise
        except ContractLogicError as e:
            raise LiveDataError(f"Contract call reverted: {e}") from e
        except Exception as e:
            raise LiveDataError(f"Contract error: {e}") from e

    def _same_chain_quote(
        self,
        request: QuoteRequest,
        contracts: ContractAddresses,
        amount_in: Decimal,
        amount_in_usd: Decimal,
        native_price: Decimal,
    ) -> SwapQuote:
        chain_id = request.from_chain_id
        aggregator = self._w3.eth.contract(
            address=Web3.to_checksum_address(contracts.liquidity_aggregator),
            abi=LIQUIDITY_AGGREGATOR_ABI,
        )
        token_in = Web3.to_checksum_address(request.token_in)
        token_out = Web3.to_checksum_address(request.token_out)
        amount_wei = Web3.to_wei(amount_in, "ether")

        route = aggregator.functions.findBestRoute(
            chain_id, token_in, token_out, amount_wei
        ).call()

        active = aggregator.functions.getActiveDEXs(chain_id).call()
        if not active:
            raise LiveDataError(f"No active exchanges on chain {chain_id}")

        efficiency, _net_value = aggregator.functions.getRouteEfficiency(
            chain_id,
            token_in,
            token_out,
            amount_wei,
            route[_ROUTE_PATH],
            route[_ROUTE_DEX_ROUTERS],
        ).call()
        if efficiency == 0:
            raise LiveDataError("No on-chain liquidity data for this pair")

        amount_out = Decimal(Web3.from_wei(route[_ROUTE_EXPECTED_OUTPUT], "ether"))
        gas_native = (
            Decimal(route[_ROUTE_ESTIMATED_GAS]) * self._config.live_gas_price_gwei / GWEI
        )
        gas_fee = gas_native * native_price
        protocol_fee = amount_in_usd * self._config.live_same_chain_protocol_fee
        score = int(route[_ROUTE_CONFIDENCE])

        logger.debug(
            "live_same_chain_quote",
            chain_id=chain_id,
            active_dexs=len(active),
            efficiency=efficiency,
        )
        return SwapQuote(
            amount_out=str(amount_out),
            gas_fee=format_usd(gas_fee),
            bridge_fee=format_usd(Decimal(0)),
            protocol_fee=format_usd(protocol_fee),
            total_fee=format_usd(gas_fee + protocol_fee),
            estimated_time=SAME_CHAIN_TIME,
            confidence=confidence_level(
                score,
                self._config.confidence_high_above,
                self._config.confidence_medium_above,
            ),
            confidence_score=min(max(score, 0), 100),
            route=classify_route(self._registry, chain_id, chain_id),
            price_impact=format_percent(Decimal(route[_ROUTE_PRICE_IMPACT]) / 100),
            is_real_data=True,
        )

    def _cross_chain_quote(
        self,
        request: QuoteRequest,
        contracts: ContractAddresses,
        amount_in: Decimal,
        amount_in_usd: Decimal,
        native_price: Decimal,
    ) -> SwapQuote:
        destination = self._registry.describe(request.to_chain_id)
        if destination is None or destination.messaging_selector is None:
            raise LiveDataError(
                f"Chain {request.to_chain_id} not reachable by cross-chain messaging"
            )

        router = self._w3.eth.contract(
            address=Web3.to_checksum_address(contracts.cross_chain_router),
            abi=CROSS_CHAIN_SWAP_ROUTER_ABI,
        )
        if router.functions.paused().call():
            raise LiveDataError("Cross-chain router is paused")

        dex_router = router.functions.getRouter().call()
        if not router.functions.supportedDEXs(dex_router).call():
            raise LiveDataError(f"Exchange router {dex_router} not supported")

        token_in = Web3.to_checksum_address(request.token_in)
        token_out = Web3.to_checksum_address(request.token_out)
        expected = router.functions.getExpectedOutput(
            token_in,
            token_out,
            Web3.to_wei(amount_in, "ether"),
            dex_router,
            [token_in, token_out],
        ).call()

        amount_out = Decimal(Web3.from_wei(expected, "ether"))
        gas_fee = self._config.live_cross_chain_gas_native * native_price
        bridge_fee = self._config.live_cross_chain_bridge_native * native_price
        protocol_fee = amount_in_usd * self._config.live_cross_chain_protocol_fee

        logger.debug(
            "live_cross_chain_quote",
            from_chain=request.from_chain_id,
            to_chain=request.to_chain_id,
            dex_router=dex_router,
        )
        return SwapQuote(
            amount_out=str(amount_out),
            gas_fee=format_usd(gas_fee),
            bridge_fee=format_usd(bridge_fee),
            protocol_fee=format_usd(protocol_fee),
            total_fee=format_usd(gas_fee + bridge_fee + protocol_fee),
            estimated_time=CROSS_CHAIN_TIME,
            confidence=ConfidenceLevel.MEDIUM,
            route=classify_route(self._registry, request.from_chain_id, request.to_chain_id),
            price_impact=CROSS_CHAIN_PRICE_IMPACT,
            is_real_data=True,
        )


__all__ = ["LiveQuoteSource", "Web3LiveQuoteSource"]
