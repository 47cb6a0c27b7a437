"""Error taxonomy and typed quote outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from xroute.models.quote import SwapQuote
    from xroute.models.route import RouteQuote


class XRouteError(Exception):
    """Base class for xroute errors."""


class RegistryConfigError(XRouteError):
    """Registry data is malformed. Fatal: indicates a configuration bug."""


class LiveDataError(XRouteError):
    """Live on-chain quoting failed (wrong network, revert, timeout, ...).

    Only the quote facade catches this, converting it into a fallback.
    """


class EstimationError(XRouteError):
    """The fallback estimation pipeline could not price a request."""


class SigningError(XRouteError):
    """A quote could not be encoded or signed."""


class QuoteError(Enum):
    """Types of quote request failures."""

    INVALID_AMOUNT = "invalid_amount"
    UNSUPPORTED_CHAIN = "unsupported_chain"
    UNSUPPORTED_TOKEN = "unsupported_token"
    NO_ROUTE = "no_route"
    ESTIMATION_FAILED = "estimation_failed"

    @property
    def is_input_error(self) -> bool:
        """True for errors caused by the request itself."""
        return self in (
            QuoteError.INVALID_AMOUNT,
            QuoteError.UNSUPPORTED_CHAIN,
            QuoteError.UNSUPPORTED_TOKEN,
        )


@dataclass(frozen=True)
class QuoteResult:
    """Result of a quote request.

    Provides explicit success/failure handling, so "no route" and
    "estimation failed" stay distinguishable from invalid input.

    Attributes:
        quote: The quote, or None on failure
        error: Failure type, or None on success
        error_detail: Optional human-readable detail
        route_quote: Scored route behind an estimated quote (None for live data)

    Examples:
        result = QuoteResult.ok(quote)
        assert result.is_valid

        result = QuoteResult.with_error(QuoteError.NO_ROUTE)
        assert result.quote is None
    """

    quote: SwapQuote | None
    error: QuoteError | None = None
    error_detail: str | None = None
    route_quote: RouteQuote | None = None

    @property
    def is_valid(self) -> bool:
        return self.error is None and self.quote is not None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @classmethod
    def ok(cls, quote: SwapQuote, route_quote: RouteQuote | None = None) -> QuoteResult:
        return cls(quote=quote, route_quote=route_quote)

    @classmethod
    def with_error(cls, error: QuoteError, detail: str | None = None) -> QuoteResult:
        return cls(quote=None, error=error, error_detail=detail)


__all__ = [
    "EstimationError",
    "LiveDataError",
    "QuoteError",
    "QuoteResult",
    "RegistryConfigError",
    "SigningError",
    "XRouteError",
]
