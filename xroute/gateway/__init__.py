"""Live quote gateway and wallet context."""

from xroute.gateway.live import LiveQuoteSource, Web3LiveQuoteSource
from xroute.gateway.wallet import WalletSnapshot, WalletState

__all__ = [
    "LiveQuoteSource",
    "WalletSnapshot",
    "WalletState",
    "Web3LiveQuoteSource",
]
