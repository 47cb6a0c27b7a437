"""API endpoints for the route optimizer."""

import asyncio
import os
from functools import lru_cache

import structlog
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from xroute.config import OptimizerConfig
from xroute.facade import QuoteFacade
from xroute.gateway.live import Web3LiveQuoteSource
from xroute.gateway.wallet import WalletSnapshot, WalletState
from xroute.models.quote import QuoteRequest, SwapQuote
from xroute.registry.registry import load_registry

logger = structlog.get_logger()

router = APIRouter()

# Upper bound for one quote request, live attempt included
QUOTE_TIMEOUT_SECONDS = float(os.environ.get("XROUTE_QUOTE_TIMEOUT", "10"))


class QuoteResponse(BaseModel):
    """Response body for POST /quote."""

    quote: SwapQuote | None = None
    error: str | None = None
    detail: str | None = None


class ChainSummary(BaseModel):
    """One registry chain as listed by GET /chains."""

    chain_id: int
    name: str
    hub_capable: bool
    native_symbol: str
    bridge_tokens: list[str]
    exchanges: list[str]
    has_live_contracts: bool


@lru_cache(maxsize=1)
def get_default_facade() -> QuoteFacade:
    """Build the process-wide facade from environment configuration.

    - XROUTE_REGISTRY_PATH: registry JSON (default: bundled testnet data)
    - XROUTE_LIVE_ACCOUNT: account used for live read calls on the pricing
      chain; live quotes are disabled when unset
    """
    config = OptimizerConfig.from_env()
    registry = load_registry(os.environ.get("XROUTE_REGISTRY_PATH"))

    live_source = None
    wallet = None
    account = os.environ.get("XROUTE_LIVE_ACCOUNT")
    if account:
        live_source = Web3LiveQuoteSource.from_registry(registry, config)
        wallet = WalletState(WalletSnapshot(account=account, chain_id=config.pricing_chain_id))

    logger.info(
        "facade_created",
        chains=len(registry),
        hub_chain_id=registry.hub_chain_id,
        live_enabled=live_source is not None,
    )
    return QuoteFacade(registry, live_source=live_source, wallet=wallet, config=config)


def get_facade() -> QuoteFacade:
    """Dependency provider for the quote facade.

    Override this in tests to inject a facade built on a test registry:
        app.dependency_overrides[get_facade] = lambda: facade

    Returns:
        The facade instance used to serve quotes.
    """
    return get_default_facade()


@router.get("/chains")
async def list_chains(facade: QuoteFacade = Depends(get_facade)) -> list[ChainSummary]:
    """List registry chains with their hub capability and bridge tokens."""
    registry = facade.registry
    return [
        ChainSummary(
            chain_id=chain.chain_id,
            name=chain.name,
            hub_capable=registry.is_hub_capable(chain.chain_id),
            native_symbol=chain.native_symbol,
            bridge_tokens=list(chain.bridge_tokens),
            exchanges=[exchange.name for exchange in chain.exchanges],
            has_live_contracts=registry.has_live_contracts(chain.chain_id),
        )
        for chain in registry.chains()
    ]


@router.post("/quote", response_model_by_alias=True)
async def quote(
    request: QuoteRequest,
    facade: QuoteFacade = Depends(get_facade),
) -> QuoteResponse:
    """Quote a swap.

    Error Handling:
        - Invalid amount, chain or token: 200 with ``error`` set
        - No route / estimation failure: 200 with ``error`` set
        - Request timeout: 504
        - Unexpected exception: logged, 500
    """
    logger.info(
        "received_quote_request",
        from_chain=request.from_chain_id,
        to_chain=request.to_chain_id,
        objective=request.objective.name.lower(),
    )

    try:
        result = await asyncio.wait_for(facade.quote(request), timeout=QUOTE_TIMEOUT_SECONDS)
    except TimeoutError:
        logger.warning("quote_timeout", timeout_seconds=QUOTE_TIMEOUT_SECONDS)
        raise HTTPException(status_code=504, detail="Quote timed out") from None
    except Exception:
        logger.exception(
            "quote_error",
            from_chain=request.from_chain_id,
            to_chain=request.to_chain_id,
        )
        raise HTTPException(status_code=500, detail="Internal error") from None

    if result.is_error:
        return QuoteResponse(
            error=result.error.value if result.error else None,
            detail=result.error_detail,
        )
    return QuoteResponse(quote=result.quote)
