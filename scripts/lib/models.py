"""
Data models for the wallet connection kit.

This module defines the records shared by the registry, the connection
orchestrator and the account query layer, plus the asset model used for
CSV output.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from .wallet_adapter import BaseWalletAdapter


# CSV column order for output
CSV_COLUMNS = [
    "network",
    "kind",
    "object_id",
    "object_type",
    "name",
    "quantity",
]


class ConnectionStatus(Enum):
    """Connection status of the wallet session."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"


@dataclass
class WalletAccount:
    """An account exposed by a connected wallet."""

    address: str
    public_key: bytes


@dataclass
class WalletDescriptor:
    """
    UI-facing record describing a wallet.

    Configured wallets may lack an adapter until one is detected; detected
    wallets always carry one. A wallet is installed exactly when it has an
    adapter.
    """

    name: str
    icon_url: str = ""
    download_url: str = ""  # Browser extension page, empty for detected wallets
    installed: bool = False
    adapter: Optional["BaseWalletAdapter"] = None

    def __post_init__(self):
        if self.installed != (self.adapter is not None):
            raise ValueError(
                f"Wallet {self.name}: installed={self.installed} "
                f"does not match adapter presence"
            )


@dataclass
class AvailableWallets:
    """Result of merging configured wallets with detected adapters."""

    configured_wallets: List[WalletDescriptor] = field(default_factory=list)
    detected_wallets: List[WalletDescriptor] = field(default_factory=list)
    all_available_wallets: List[WalletDescriptor] = field(default_factory=list)

    @property
    def available_names(self) -> List[str]:
        return [wallet.name for wallet in self.all_available_wallets]


@dataclass(frozen=True)
class Session:
    """
    Connection status and active adapter, always replaced together.

    The adapter is set only once a connect has succeeded, so it is present
    exactly when the status is CONNECTED.
    """

    status: ConnectionStatus = ConnectionStatus.DISCONNECTED
    adapter: Optional["BaseWalletAdapter"] = None

    def __post_init__(self):
        if (self.adapter is not None) != (self.status is ConnectionStatus.CONNECTED):
            raise ValueError(f"Inconsistent session: status={self.status.value}")


@dataclass
class OwnedAsset:
    """
    Asset model for CSV output.

    Represents the SUI balance, NFTs and other objects owned by an address.
    """

    network: str
    kind: str  # COIN, NFT or OBJECT
    object_id: str  # Coin type for balances
    object_type: str
    name: str  # Empty string if unavailable
    quantity: str  # Full precision for coins, "1" for objects

    def to_csv_row(self) -> List[str]:
        """Convert asset to a CSV row (list of strings)."""
        return [
            self.network,
            self.kind,
            self.object_id,
            self.object_type,
            self.name,
            self.quantity,
        ]
