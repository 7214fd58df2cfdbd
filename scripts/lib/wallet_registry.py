"""
Wallet registry: merges configured wallets with detected adapters.

The configured list supplies UI metadata (icon, download page); detection
supplies the adapter objects. A wallet is available once an adapter with the
same name has been detected.
"""

from dataclasses import replace
from typing import Callable, List, Optional, Sequence

from .models import AvailableWallets, WalletDescriptor
from .wallet_adapter import BaseWalletAdapter


# Default configured wallets, shown even before they are detected
DEFAULT_WALLETS = [
    WalletDescriptor(
        name="Suiet",
        download_url=(
            "https://chrome.google.com/webstore/detail/suiet-sui-wallet/"
            "khpkpbbcccdmmclmpigdgddabeilkdpd"
        ),
    ),
    WalletDescriptor(
        name="Sui Wallet",
        download_url=(
            "https://chrome.google.com/webstore/detail/sui-wallet/"
            "opcgpfmipidbgpenhmajoajpbobppdil"
        ),
    ),
    WalletDescriptor(
        name="Ethos Wallet",
        download_url=(
            "https://chrome.google.com/webstore/detail/ethos-wallet/"
            "mcbigmjiafegjnnogedioegffbooigli"
        ),
    ),
]


def build_available_wallets(
    configured: Sequence[WalletDescriptor],
    detected: Sequence[BaseWalletAdapter],
) -> AvailableWallets:
    """
    Merge configured wallets with detected adapters.

    Args:
        configured: Statically configured wallets, in display order
        detected: Adapters currently visible in the host environment

    Returns:
        AvailableWallets with the configured view, the detected-only view and
        the installed wallets in configured-then-detection order

    Examples:
        configured=[A, B], detected=[adapter_a]
        -> configured_wallets=[A (installed), B], detected_wallets=[],
           all_available_wallets=[A]
    """
    if not configured:
        configured_wallets: List[WalletDescriptor] = []
    elif not detected:
        configured_wallets = [
            replace(wallet, adapter=None, installed=False) for wallet in configured
        ]
    else:
        configured_wallets = []
        for wallet in configured:
            found = next((a for a in detected if a.name == wallet.name), None)
            configured_wallets.append(
                replace(wallet, adapter=found, installed=found is not None)
            )

    configured_names = {wallet.name for wallet in configured}
    detected_wallets = [
        WalletDescriptor(
            name=adapter.name,
            icon_url=adapter.icon,
            download_url="",  # Already installed, no need to know
            installed=True,
            adapter=adapter,
        )
        for adapter in detected
        if adapter.name not in configured_names
    ]

    all_available_wallets = [
        wallet for wallet in configured_wallets + detected_wallets if wallet.installed
    ]

    return AvailableWallets(
        configured_wallets=configured_wallets,
        detected_wallets=detected_wallets,
        all_available_wallets=all_available_wallets,
    )


class WalletDetector:
    """
    Live source of the adapters visible in the host environment.

    Wallets register themselves as they are injected; listeners are told
    whenever the set changes.
    """

    def __init__(self, adapters: Optional[Sequence[BaseWalletAdapter]] = None):
        self._adapters: List[BaseWalletAdapter] = list(adapters or [])
        self._listeners: List[Callable[[List[BaseWalletAdapter]], None]] = []

    @property
    def adapters(self) -> List[BaseWalletAdapter]:
        """Snapshot of the currently detected adapters, in registration order."""
        return list(self._adapters)

    def register(self, adapter: BaseWalletAdapter) -> Callable[[], None]:
        """
        Register a detected adapter.

        Args:
            adapter: Adapter that became visible

        Returns:
            Callable that unregisters the adapter again
        """
        self._adapters.append(adapter)
        self._notify()

        def unregister() -> None:
            if adapter in self._adapters:
                self._adapters.remove(adapter)
                self._notify()

        return unregister

    def on_change(
        self, callback: Callable[[List[BaseWalletAdapter]], None]
    ) -> Callable[[], None]:
        """Subscribe to detection changes. Returns an unsubscribe callable."""
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self.adapters
        for listener in list(self._listeners):
            listener(snapshot)


class WalletRegistry:
    """
    Available wallets from configuration and live detection.

    The merged result is cached and rebuilt only after the detector reports
    a change or the configured list is replaced. The cached AvailableWallets
    is shared between callers and must be treated as read-only.
    """

    def __init__(
        self,
        configured: Optional[Sequence[WalletDescriptor]] = None,
        detector: Optional[WalletDetector] = None,
    ):
        self._configured: List[WalletDescriptor] = list(
            DEFAULT_WALLETS if configured is None else configured
        )
        self._available: Optional[AvailableWallets] = None
        self.detector = detector if detector is not None else WalletDetector()
        self.detector.on_change(self._on_detection_change)

    @property
    def configured(self) -> List[WalletDescriptor]:
        """Copy of the configured wallet list; assign to replace it."""
        return list(self._configured)

    @configured.setter
    def configured(self, wallets: Sequence[WalletDescriptor]) -> None:
        self._configured = list(wallets)
        self._available = None

    def _on_detection_change(self, adapters: List[BaseWalletAdapter]) -> None:
        self._available = None

    def available(self) -> AvailableWallets:
        """Merge the configured list with the detected adapters."""
        if self._available is None:
            self._available = build_available_wallets(self._configured, self.detector.adapters)
        return self._available

    def find_available(self, wallet_name: str) -> Optional[WalletDescriptor]:
        """Find an installed wallet by name (first match wins)."""
        for wallet in self.available().all_available_wallets:
            if wallet.name == wallet_name:
                return wallet
        return None
