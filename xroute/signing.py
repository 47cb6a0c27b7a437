"""Quote signing for off-chain verification.

A signed quote commits to (expectedOutput, estimatedGasCost,
estimatedTimeSeconds, timestamp, model). The fields are ABI-encoded as
``(string, string, string, uint256, uint8)``, hashed with keccak-256 and
the 32-byte hash is signed as an EIP-191 personal message, so an on-chain
verifier can recover the signer with ``ecrecover``.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal

import structlog
from eth_abi import encode
from eth_account import Account
from eth_account.messages import encode_defunct
from eth_utils import keccak

from xroute.errors import SigningError
from xroute.models.route import Objective, RouteQuote

logger = structlog.get_logger()

QUOTE_ABI_TYPES = ["string", "string", "string", "uint256", "uint8"]


@dataclass(frozen=True)
class SignedQuote:
    """Signature over a quote.

    Attributes:
        signature: 65-byte signature as 0x-prefixed hex
        message_hash: keccak-256 of the encoded fields, 0x-prefixed hex
        timestamp: Unix timestamp committed to by the signature
        signer: Checksummed signer address
    """

    signature: str
    message_hash: str
    timestamp: int
    signer: str


def quote_fields(quote: RouteQuote) -> tuple[str, str, str, Objective]:
    """The signed fields of a route quote, in encoding order (minus timestamp)."""
    return (
        str(quote.expected_output),
        str(quote.estimated_gas),
        str(quote.estimated_time_seconds),
        quote.objective,
    )


def quote_message_hash(
    expected_output: str | Decimal,
    estimated_gas_cost: str | int,
    estimated_time_seconds: str | int,
    timestamp: int,
    model: int,
) -> bytes:
    """keccak-256 of the ABI-encoded quote fields.

    Raises:
        SigningError: If the fields cannot be encoded
    """
    try:
        encoded = encode(
            QUOTE_ABI_TYPES,
            [
                str(expected_output),
                str(estimated_gas_cost),
                str(estimated_time_seconds),
                int(timestamp),
                int(model),
            ],
        )
    except Exception as e:
        raise SigningError(f"Cannot encode quote: {e}") from e
    return keccak(primitive=encoded)


def _hash_for(quote: RouteQuote, timestamp: int) -> bytes:
    expected_output, gas, seconds, objective = quote_fields(quote)
    return quote_message_hash(expected_output, gas, seconds, timestamp, int(objective))


def recover_signer(message_hash: bytes, signature: str | bytes) -> str:
    """Address that produced a signature over a quote hash.

    Raises:
        SigningError: If the signature is malformed
    """
    try:
        return Account.recover_message(
            encode_defunct(primitive=message_hash), signature=signature
        )
    except Exception as e:
        raise SigningError(f"Cannot recover signer: {e}") from e


class QuoteSigner:
    """Signs route quotes with a private key.

    Args:
        private_key: Hex private key of the quote signer
        clock: Returns the current Unix time (injectable for tests)
    """

    def __init__(self, private_key: str | bytes, clock: Callable[[], float] = time.time) -> None:
        try:
            self._account = Account.from_key(private_key)
        except Exception as e:
            raise SigningError(f"Invalid signing key: {e}") from e
        self._clock = clock

    @property
    def address(self) -> str:
        return self._account.address

    def sign(self, quote: RouteQuote, timestamp: int | None = None) -> SignedQuote:
        """Sign a quote at ``timestamp`` (defaults to now).

        Raises:
            SigningError: If the quote cannot be encoded or signed
        """
        ts = int(self._clock()) if timestamp is None else timestamp
        message_hash = _hash_for(quote, ts)
        try:
            signed = self._account.sign_message(encode_defunct(primitive=message_hash))
        except Exception as e:
            raise SigningError(f"Cannot sign quote: {e}") from e

        logger.debug("quote_signed", signer=self.address, timestamp=ts)
        return SignedQuote(
            signature="0x" + bytes(signed.signature).hex(),
            message_hash="0x" + message_hash.hex(),
            timestamp=ts,
            signer=self.address,
        )


def verify_quote_signature(
    quote: RouteQuote,
    signed: SignedQuote,
    expected_signer: str,
    max_age_seconds: int | None = None,
    now: float | None = None,
) -> bool:
    """Check a signature against a quote recomputed by the verifier.

    Args:
        quote: Quote whose fields the verifier reconstructs
        signed: Signature and timestamp to check
        expected_signer: Known signer address
        max_age_seconds: Reject signatures older than this (None: no window)
        now: Current Unix time (defaults to time.time())

    Returns:
        True when the recomputed hash was signed by expected_signer within
        the accepted window
    """
    if max_age_seconds is not None:
        current = time.time() if now is None else now
        age = current - signed.timestamp
        if age < 0 or age > max_age_seconds:
            logger.debug("quote_signature_expired", age=age, max_age=max_age_seconds)
            return False

    message_hash = _hash_for(quote, signed.timestamp)
    if "0x" + message_hash.hex() != signed.message_hash.lower():
        return False

    recovered = recover_signer(message_hash, signed.signature)
    return recovered.lower() == expected_signer.lower()


__all__ = [
    "QuoteSigner",
    "SignedQuote",
    "quote_fields",
    "quote_message_hash",
    "recover_signer",
    "verify_quote_signature",
]
