"""Pydantic models for the externally visible swap quote."""

from decimal import ROUND_HALF_UP, Decimal, localcontext
from enum import Enum

from pydantic import BaseModel, Field

from xroute import constants
from xroute.models.route import Objective, RouteKind

CENT = Decimal("0.01")


def quantize(value: Decimal, exponent: Decimal, rounding: str = ROUND_HALF_UP) -> Decimal:
    """Quantize ``value`` to ``exponent`` whatever its magnitude.

    The working precision is raised so values with more integer digits than
    the default context allows do not raise InvalidOperation.
    """
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() - exponent.adjusted() + 2)
        return value.quantize(exponent, rounding=rounding)


def format_usd(amount: Decimal) -> str:
    """Format a USD amount as a currency string, e.g. ``$1.50``."""
    return f"${quantize(amount, CENT)}"


def format_percent(value: Decimal) -> str:
    """Format a percentage with two decimals, e.g. ``0.53%``."""
    return f"{quantize(value, CENT)}%"


class ConfidenceLevel(str, Enum):
    """Coarse confidence bucket shown to users."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


def confidence_level(
    score: int,
    high_above: int = constants.CONFIDENCE_HIGH_ABOVE,
    medium_above: int = constants.CONFIDENCE_MEDIUM_ABOVE,
) -> ConfidenceLevel:
    """Bucket a 0-100 confidence score. Thresholds are strictly greater than."""
    if score > high_above:
        return ConfidenceLevel.HIGH
    if score > medium_above:
        return ConfidenceLevel.MEDIUM
    return ConfidenceLevel.LOW


class QuoteRequest(BaseModel):
    """Inbound request for a swap quote.

    Amount and addresses are kept as raw strings: invalid values produce a
    typed "invalid request" outcome rather than a schema error.
    """

    from_chain_id: int = Field(alias="fromChainId")
    to_chain_id: int = Field(alias="toChainId")
    token_in: str = Field(alias="tokenIn", description="Input token address")
    token_out: str = Field(alias="tokenOut", description="Output token address")
    amount_in: str = Field(alias="amountIn", description="Input amount as decimal string")
    objective: Objective = Objective.MAX_NET_VALUE

    model_config = {"populate_by_name": True, "frozen": True}


class SwapQuote(BaseModel):
    """Quote returned to UI/CLI consumers.

    Fee fields are currency-formatted strings. ``is_real_data`` is True only
    when the quote came from live on-chain reads.
    """

    amount_out: str = Field(alias="amountOut", description="Output in destination token units")
    gas_fee: str = Field(alias="gasFee")
    bridge_fee: str = Field(alias="bridgeFee")
    protocol_fee: str = Field(alias="protocolFee")
    total_fee: str = Field(alias="totalFee")
    estimated_time: str = Field(alias="estimatedTime", description="Human readable time range")
    estimated_time_seconds: int | None = Field(default=None, alias="estimatedTimeSeconds")
    confidence: ConfidenceLevel
    confidence_score: int | None = Field(default=None, alias="confidenceScore", ge=0, le=100)
    route: RouteKind
    price_impact: str | None = Field(default=None, alias="priceImpact")
    is_real_data: bool = Field(alias="isRealData")

    model_config = {"populate_by_name": True, "frozen": True}


__all__ = [
    "ConfidenceLevel",
    "QuoteRequest",
    "SwapQuote",
    "confidence_level",
    "format_percent",
    "format_usd",
    "quantize",
]
