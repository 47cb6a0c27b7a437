"""Optimizer configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from decimal import Decimal

from xroute import constants


@dataclass(frozen=True)
class OptimizerConfig:
    """Centralized configuration for route estimation and quoting.

    This dataclass holds every tunable constant, making it easy to test with
    different configurations and keeping the simulator, scorer and facade
    consistent with each other.

    Attributes:
        swap_fee_factor: Output multiplier per swap step (0.997 = 0.3% fee)
        reference_amount: Input used to rank exchanges in the simulator
        step_seconds: Time estimate per swap step
        hub_protocol_gas / hub_protocol_seconds / hub_protocol_cost_usd:
            Per-hop costs between two hub-capable chains
        messaging_gas / messaging_seconds / messaging_cost_usd:
            Per-hop costs for hops touching a non-hub-capable chain
        usd_per_100k_gas: Reference USD rate per 100k gas units
        pricing_chain_id: The one network whose contracts serve live quotes
        live_timeout_seconds: Upper bound for the whole live attempt
        jitter_seed: Seed for slippage jitter; None means unseeded
    """

    swap_fee_factor: Decimal = constants.SWAP_FEE_FACTOR
    reference_amount: Decimal = constants.REFERENCE_SIMULATION_AMOUNT
    step_seconds: int = constants.SWAP_STEP_SECONDS

    hub_protocol_gas: int = constants.HUB_PROTOCOL_GAS
    hub_protocol_seconds: int = constants.HUB_PROTOCOL_SECONDS
    hub_protocol_cost_usd: Decimal = constants.HUB_PROTOCOL_COST_USD
    messaging_gas: int = constants.MESSAGING_GAS
    messaging_seconds: int = constants.MESSAGING_SECONDS
    messaging_cost_usd: Decimal = constants.MESSAGING_COST_USD

    usd_per_100k_gas: Decimal = constants.USD_PER_100K_GAS

    confidence_start: int = constants.CONFIDENCE_START
    confidence_chain_penalty: int = constants.CONFIDENCE_CHAIN_PENALTY
    confidence_step_penalty: int = constants.CONFIDENCE_STEP_PENALTY
    confidence_floor: int = constants.CONFIDENCE_FLOOR
    confidence_high_above: int = constants.CONFIDENCE_HIGH_ABOVE
    confidence_medium_above: int = constants.CONFIDENCE_MEDIUM_ABOVE

    slippage_min_percent: Decimal = constants.SLIPPAGE_MIN_PERCENT
    slippage_max_percent: Decimal = constants.SLIPPAGE_MAX_PERCENT
    slippage_jitter_percent: Decimal = constants.SLIPPAGE_JITTER_PERCENT
    slippage_base_percent: Decimal = constants.SLIPPAGE_BASE_PERCENT
    slippage_per_step_percent: Decimal = constants.SLIPPAGE_PER_STEP_PERCENT
    slippage_per_hop_percent: Decimal = constants.SLIPPAGE_PER_HOP_PERCENT

    preferred_bridge_symbol: str = constants.PREFERRED_BRIDGE_SYMBOL

    pricing_chain_id: int = 43113
    live_timeout_seconds: float = constants.LIVE_CALL_TIMEOUT_SECONDS
    live_gas_price_gwei: int = constants.LIVE_GAS_PRICE_GWEI
    live_cross_chain_gas_native: Decimal = constants.LIVE_CROSS_CHAIN_GAS_NATIVE
    live_cross_chain_bridge_native: Decimal = constants.LIVE_CROSS_CHAIN_BRIDGE_NATIVE
    live_same_chain_protocol_fee: Decimal = constants.LIVE_SAME_CHAIN_PROTOCOL_FEE
    live_cross_chain_protocol_fee: Decimal = constants.LIVE_CROSS_CHAIN_PROTOCOL_FEE

    jitter_seed: int | None = None

    @classmethod
    def from_env(cls, base: OptimizerConfig | None = None) -> OptimizerConfig:
        """Build a config from ``XROUTE_*`` environment variables.

        Recognized variables:
        - XROUTE_PRICING_CHAIN_ID: chain id used for live quotes
        - XROUTE_LIVE_TIMEOUT: live attempt timeout in seconds
        - XROUTE_JITTER_SEED: integer seed for slippage jitter
        """
        config = base or cls()
        overrides: dict[str, object] = {}

        if "XROUTE_PRICING_CHAIN_ID" in os.environ:
            overrides["pricing_chain_id"] = int(os.environ["XROUTE_PRICING_CHAIN_ID"])
        if "XROUTE_LIVE_TIMEOUT" in os.environ:
            overrides["live_timeout_seconds"] = float(os.environ["XROUTE_LIVE_TIMEOUT"])
        if "XROUTE_JITTER_SEED" in os.environ:
            overrides["jitter_seed"] = int(os.environ["XROUTE_JITTER_SEED"])

        return replace(config, **overrides) if overrides else config


# Default configuration instance
DEFAULT_CONFIG = OptimizerConfig()
