"""Pydantic schema for registry configuration documents.

A registry document is supplied externally (JSON) and describes chains,
their exchanges and tokens, deployed contracts and reference USD prices.
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from xroute.models.types import Address


class ExchangeEntry(BaseModel):
    """An exchange router on a chain."""

    name: str
    router: Address
    avg_gas: int = Field(alias="avgGas", gt=0)

    model_config = {"populate_by_name": True}


class TokenEntry(BaseModel):
    """A token listed on a chain."""

    symbol: str
    address: Address
    decimals: int = Field(default=18, ge=0, le=77)
    is_native: bool = Field(default=False, alias="isNative")

    model_config = {"populate_by_name": True}


class ContractsEntry(BaseModel):
    """Contracts deployed on a chain."""

    liquidity_aggregator: Address | None = Field(default=None, alias="liquidityAggregator")
    cross_chain_router: Address | None = Field(default=None, alias="crossChainSwapRouter")
    messaging_router: Address | None = Field(default=None, alias="messagingRouter")
    hub_messenger: Address | None = Field(default=None, alias="hubMessenger")

    model_config = {"populate_by_name": True}


class ChainEntry(BaseModel):
    """One chain in the registry document."""

    chain_id: int = Field(alias="chainId", gt=0)
    name: str
    hub_capable: bool = Field(default=False, alias="hubCapable")
    native_symbol: str = Field(alias="nativeSymbol")
    rpc_url: str | None = Field(default=None, alias="rpcUrl")
    router_address: Address | None = Field(default=None, alias="routerAddress")
    messaging_selector: str | None = Field(default=None, alias="messagingSelector")
    hub_blockchain_id: str | None = Field(default=None, alias="hubBlockchainId")
    bridge_tokens: list[str] = Field(default_factory=list, alias="bridgeTokens")
    exchanges: list[ExchangeEntry] = Field(default_factory=list)
    tokens: list[TokenEntry] = Field(default_factory=list)
    contracts: ContractsEntry | None = None

    model_config = {"populate_by_name": True}


class TokenPriceEntry(BaseModel):
    """USD price for a specific token deployment."""

    chain_id: int = Field(alias="chainId")
    address: Address
    price_usd: Decimal = Field(alias="priceUsd", ge=0)

    model_config = {"populate_by_name": True}


class RegistryDocument(BaseModel):
    """Top-level registry document."""

    hub_chain_id: int | None = Field(default=None, alias="hubChainId")
    chains: list[ChainEntry]
    reference_prices: dict[str, Decimal] = Field(
        default_factory=dict,
        alias="referencePrices",
        description="USD price per token symbol",
    )
    token_prices: list[TokenPriceEntry] = Field(default_factory=list, alias="tokenPrices")

    model_config = {"populate_by_name": True}


__all__ = [
    "ChainEntry",
    "ContractsEntry",
    "ExchangeEntry",
    "RegistryDocument",
    "TokenEntry",
    "TokenPriceEntry",
]
