"""Shared type definitions for xroute models.

These types are used across registry, routing and quote models.
"""

from decimal import Decimal, InvalidOperation
from typing import Annotated

from pydantic import Field

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Largest accepted order of magnitude: uint256 holds about 1.2e59 whole
# tokens at 18 decimals
MAX_AMOUNT_EXPONENT = 59


# EVM address (40 hex chars after 0x prefix)
Address = Annotated[str, Field(pattern=r"^0x[a-fA-F0-9]{40}$")]


def parse_amount(amount: str | None) -> Decimal | None:
    """Parse a user-entered amount into a strictly positive Decimal.

    Returns:
        The parsed amount, or None when the input is empty, not numeric,
        not finite, not greater than zero, or beyond MAX_AMOUNT_EXPONENT
    """
    if amount is None:
        return None
    text = amount.strip()
    if not text:
        return None
    try:
        value = Decimal(text)
    except InvalidOperation:
        return None
    if not value.is_finite() or value <= 0:
        return None
    if value.adjusted() > MAX_AMOUNT_EXPONENT:
        return None
    return value


def normalize_address(address: str) -> str:
    """Lowercase an EVM address, adding the 0x prefix if missing."""
    addr = address.lower()
    if not addr.startswith("0x"):
        addr = "0x" + addr

    return addr


def is_valid_address(address: str) -> bool:
    """Check if a string is a valid EVM address.

    Args:
        address: String to validate

    Returns:
        True if valid address format
    """
    if not isinstance(address, str):
        return False
    if not address.startswith("0x"):
        return False
    if len(address) != 42:
        return False
    try:
        int(address, 16)
        return True
    except ValueError:
        return False
