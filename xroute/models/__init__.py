"""Data model for chains, routes and quotes."""

from xroute.models.chain import ChainDescriptor, ContractAddresses, ExchangeDescriptor
from xroute.models.quote import ConfidenceLevel, QuoteRequest, SwapQuote
from xroute.models.route import ChainPath, HopKind, Objective, RouteKind, RouteQuote, SwapStep
from xroute.models.types import Address, normalize_address

__all__ = [
    # Types
    "Address",
    "normalize_address",
    # Registry data
    "ChainDescriptor",
    "ContractAddresses",
    "ExchangeDescriptor",
    # Routes
    "ChainPath",
    "HopKind",
    "Objective",
    "RouteKind",
    "RouteQuote",
    "SwapStep",
    # Quotes
    "ConfidenceLevel",
    "QuoteRequest",
    "SwapQuote",
]
