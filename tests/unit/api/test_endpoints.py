"""Tests for quote endpoint timeouts and facade construction."""

import asyncio
from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from xroute.api import endpoints
from xroute.api.endpoints import get_default_facade, get_facade
from xroute.api.main import app
from xroute.errors import QuoteResult
from xroute.gateway.live import Web3LiveQuoteSource
from tests.helpers import HUB_CHAIN, HUB_USDC, NATIVE
from tests.helpers.fakes import LIVE_QUOTE


def make_payload() -> dict:
    return {
        "fromChainId": HUB_CHAIN,
        "toChainId": HUB_CHAIN,
        "tokenIn": NATIVE,
        "tokenOut": HUB_USDC,
        "amountIn": "1",
    }


class SlowFacade:
    """Facade whose quote takes longer than the request timeout."""

    def __init__(self, delay: float) -> None:
        self.delay = delay
        self.calls = 0

    async def quote(self, request) -> QuoteResult:
        self.calls += 1
        await asyncio.sleep(self.delay)
        return QuoteResult.ok(LIVE_QUOTE)


@pytest.fixture
def default_facade_cache() -> Iterator[None]:
    get_default_facade.cache_clear()
    yield
    get_default_facade.cache_clear()


class TestQuoteTimeout:
    def test_slow_quote_returns_504(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(endpoints, "QUOTE_TIMEOUT_SECONDS", 0.05)
        facade = SlowFacade(delay=1.0)
        app.dependency_overrides[get_facade] = lambda: facade

        try:
            response = TestClient(app).post("/quote", json=make_payload())
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 504
        assert facade.calls == 1

    def test_fast_quote_within_timeout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(endpoints, "QUOTE_TIMEOUT_SECONDS", 5.0)
        app.dependency_overrides[get_facade] = lambda: SlowFacade(delay=0.0)

        try:
            response = TestClient(app).post("/quote", json=make_payload())
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 200
        assert response.json()["quote"]["isRealData"] is True


class TestDefaultFacade:
    def test_fallback_only_without_live_account(
        self, monkeypatch: pytest.MonkeyPatch, default_facade_cache: None
    ) -> None:
        monkeypatch.delenv("XROUTE_LIVE_ACCOUNT", raising=False)
        monkeypatch.delenv("XROUTE_REGISTRY_PATH", raising=False)

        facade = get_default_facade()

        assert facade.live_source is None
        assert facade.wallet is None
        assert 43113 in facade.registry
        assert get_default_facade() is facade

    def test_live_account_enables_live_source(
        self, monkeypatch: pytest.MonkeyPatch, default_facade_cache: None
    ) -> None:
        account = "0x00000000000000000000000000000000000000aa"
        monkeypatch.setenv("XROUTE_LIVE_ACCOUNT", account)
        monkeypatch.delenv("XROUTE_REGISTRY_PATH", raising=False)
        monkeypatch.delenv("XROUTE_PRICING_CHAIN_ID", raising=False)

        facade = get_default_facade()

        assert isinstance(facade.live_source, Web3LiveQuoteSource)
        assert facade.wallet.snapshot.account == account
        assert facade.wallet.snapshot.chain_id == 43113
