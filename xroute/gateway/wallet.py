"""Wallet/account context supplied by the (external) wallet collaborator.

The quote facade never reaches into a global wallet manager. It reads the
latest WalletSnapshot from an injected WalletState, which the wallet
integration updates on connect, disconnect, account or chain changes.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import structlog

logger = structlog.get_logger()


@dataclass(frozen=True)
class WalletSnapshot:
    """Current account address and chain id, if any."""

    account: str | None = None
    chain_id: int | None = None

    @property
    def is_connected(self) -> bool:
        return self.account is not None and self.chain_id is not None

    @classmethod
    def disconnected(cls) -> WalletSnapshot:
        return cls()


WalletListener = Callable[[WalletSnapshot], None]


class WalletState:
    """Holds the latest wallet snapshot and notifies subscribers of changes."""

    def __init__(self, snapshot: WalletSnapshot | None = None) -> None:
        self._snapshot = snapshot or WalletSnapshot.disconnected()
        self._listeners: list[WalletListener] = []

    @property
    def snapshot(self) -> WalletSnapshot:
        return self._snapshot

    def update(self, snapshot: WalletSnapshot) -> None:
        """Replace the snapshot and notify subscribers."""
        if snapshot == self._snapshot:
            return
        self._snapshot = snapshot
        logger.debug(
            "wallet_changed",
            connected=snapshot.is_connected,
            chain_id=snapshot.chain_id,
        )
        for listener in list(self._listeners):
            listener(snapshot)

    def subscribe(self, listener: WalletListener) -> Callable[[], None]:
        """Register a listener. Returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe


__all__ = ["WalletListener", "WalletSnapshot", "WalletState"]
