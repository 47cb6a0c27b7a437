"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Chain ids, token and router addresses of the test topology
- factories: Registry, request and route quote factory functions
"""

from tests.helpers.constants import (
    EDGE_A,
    EDGE_A_USDC,
    EDGE_B,
    EDGE_B_USDC,
    EDGE_WETH,
    HUB_CHAIN,
    HUB_USDC,
    HUB_WETH,
    NATIVE,
    PEER_CHAIN,
    PEER_USDC,
)
from tests.helpers.factories import (
    make_chain,
    make_registry,
    make_registry_document,
    make_request,
    make_route_quote,
)

__all__ = [
    # Constants
    "HUB_CHAIN",
    "PEER_CHAIN",
    "EDGE_A",
    "EDGE_B",
    "EDGE_WETH",
    "NATIVE",
    "HUB_USDC",
    "HUB_WETH",
    "PEER_USDC",
    "EDGE_A_USDC",
    "EDGE_B_USDC",
    # Factories
    "make_chain",
    "make_registry",
    "make_registry_document",
    "make_request",
    "make_route_quote",
]
