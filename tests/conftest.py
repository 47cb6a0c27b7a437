"""Pytest configuration and fixtures."""

import pytest

from xroute.config import OptimizerConfig
from xroute.facade import QuoteFacade
from xroute.gateway.wallet import WalletSnapshot, WalletState
from xroute.registry.registry import ChainRegistry, load_registry
from xroute.routing.optimizer import RouteOptimizer
from tests.helpers import HUB_CHAIN, make_registry
from tests.helpers.fakes import FakeLiveSource

WALLET_ACCOUNT = "0x00000000000000000000000000000000000000aa"


@pytest.fixture
def registry() -> ChainRegistry:
    """Registry for the five-chain test topology."""
    return make_registry()


@pytest.fixture
def testnet_registry() -> ChainRegistry:
    """The bundled testnet registry."""
    return load_registry()


@pytest.fixture
def config() -> OptimizerConfig:
    """Default configuration priced on the hub, with a fixed jitter seed."""
    return OptimizerConfig(pricing_chain_id=HUB_CHAIN, jitter_seed=7)


@pytest.fixture
def optimizer(registry: ChainRegistry, config: OptimizerConfig) -> RouteOptimizer:
    return RouteOptimizer(registry, config=config)


@pytest.fixture
def facade(registry: ChainRegistry, config: OptimizerConfig) -> QuoteFacade:
    """Fallback-only facade (no live source)."""
    return QuoteFacade(registry, config=config)


@pytest.fixture
def connected_wallet() -> WalletState:
    """Wallet connected to the hub (pricing) chain."""
    return WalletState(WalletSnapshot(account=WALLET_ACCOUNT, chain_id=HUB_CHAIN))


@pytest.fixture
def fake_live_source() -> FakeLiveSource:
    """Live source that always succeeds."""
    return FakeLiveSource()
