"""
Exceptions raised by the wallet connection kit.

Adapter failures are never wrapped: they reach the caller unchanged. The
classes here cover the failures the kit itself detects.
"""

from typing import List


class KitError(Exception):
    """Base class for errors raised by the wallet kit."""

    pass


class InvalidArgumentError(KitError):
    """Exception raised when a required parameter is missing."""

    pass


class NotConnectedError(KitError):
    """Exception raised when a guarded operation runs without a connected wallet."""

    def __init__(self, message: str = "Failed to call function, wallet not connected"):
        super().__init__(message)


class NoActiveAccountError(KitError):
    """Exception raised when the connected wallet exposes no account."""

    def __init__(self, message: str = "no active account"):
        super().__init__(message)


class FeatureNotSupportedError(KitError):
    """Exception raised when an adapter lacks an optional feature."""

    def __init__(self, feature: str, wallet_name: str = ""):
        owner = f"Wallet {wallet_name}" if wallet_name else "Wallet"
        super().__init__(f"{owner} does not support feature {feature}")
        self.feature = feature
        self.wallet_name = wallet_name


class ConnectionInProgressError(KitError):
    """Exception raised when a connect is attempted while another is in flight."""

    pass


class WalletNotAvailableError(KitError):
    """Exception raised when selecting a wallet that is not installed."""

    def __init__(self, wallet_name: str, available_names: List[str]):
        super().__init__(
            f"select failed: wallet {wallet_name} is not available, "
            f"all wallets are listed here: [{', '.join(available_names)}]"
        )
        self.wallet_name = wallet_name
        self.available_names = list(available_names)
