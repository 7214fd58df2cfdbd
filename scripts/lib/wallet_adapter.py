"""
Wallet adapter contract.

An adapter is one wallet implementation's entry point: a fixed required
interface (identity, accounts, connect) plus a closed set of optional
features it advertises by identifier. Callers check ``has_feature`` before
invoking any optional capability.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, FrozenSet, Iterable, List, Optional

from .errors import FeatureNotSupportedError
from .models import WalletAccount


class FeatureName(str, Enum):
    """Wallet-standard feature identifiers."""

    STANDARD__CONNECT = "standard:connect"
    STANDARD__DISCONNECT = "standard:disconnect"
    STANDARD__EVENTS = "standard:events"
    SUI__SIGN_AND_EXECUTE_TRANSACTION = "sui:signAndExecuteTransaction"
    SUI__SIGN_MESSAGE = "sui:signMessage"


def feature_id(feature: str) -> str:
    """Normalize a FeatureName member or raw string to its identifier."""
    return feature.value if isinstance(feature, FeatureName) else feature


class BaseWalletAdapter(ABC):
    """
    Abstract base class for wallet adapters.

    Concrete adapters implement ``connect`` and override the optional
    capabilities matching the features they advertise. The kit invokes
    adapters but never mutates them.
    """

    def __init__(
        self,
        name: str,
        features: Iterable[str] = (),
        icon: str = "",
        accounts: Optional[List[WalletAccount]] = None,
    ):
        """
        Initialize the adapter.

        Args:
            name: Wallet name, the key used to match configured wallets
            features: Optional feature identifiers this adapter implements
            icon: Icon URL or data URI
            accounts: Accounts exposed once connected
        """
        self.name = name
        self.icon = icon
        self.features: FrozenSet[str] = frozenset(
            [FeatureName.STANDARD__CONNECT.value, *(feature_id(f) for f in features)]
        )
        self.accounts: List[WalletAccount] = accounts if accounts is not None else []

    def has_feature(self, feature: str) -> bool:
        """Check whether the adapter advertises a feature."""
        return feature_id(feature) in self.features

    @abstractmethod
    async def connect(self, options: Optional[Any] = None) -> Any:
        """
        Ask the wallet to connect.

        Args:
            options: Wallet-specific connect options

        Returns:
            The wallet's connect result
        """
        pass

    async def disconnect(self) -> None:
        raise FeatureNotSupportedError(FeatureName.STANDARD__DISCONNECT.value, self.name)

    async def sign_message(self, account: WalletAccount, message: bytes) -> Any:
        raise FeatureNotSupportedError(FeatureName.SUI__SIGN_MESSAGE.value, self.name)

    async def sign_and_execute_transaction(self, transaction_input: Any) -> Any:
        raise FeatureNotSupportedError(
            FeatureName.SUI__SIGN_AND_EXECUTE_TRANSACTION.value, self.name
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
