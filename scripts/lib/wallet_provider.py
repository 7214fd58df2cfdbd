"""
Wallet connection orchestrator.

WalletProvider owns the single connection session, drives the
DISCONNECTED -> CONNECTING -> CONNECTED state machine, and exposes the
account and signing operations that require a connected wallet. Every
adapter-dependent operation passes through one guard, ``_ensure_callable``.
"""

import warnings
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List, Optional, Sequence

from .errors import (
    ConnectionInProgressError,
    FeatureNotSupportedError,
    InvalidArgumentError,
    NoActiveAccountError,
    NotConnectedError,
    WalletNotAvailableError,
)
from .models import ConnectionStatus, Session, WalletAccount, WalletDescriptor
from .wallet_adapter import BaseWalletAdapter, FeatureName, feature_id
from .wallet_registry import WalletDetector, WalletRegistry


def is_callable(session: Session) -> bool:
    """Check whether adapter-dependent operations may run on a session."""
    return session.adapter is not None and session.status is ConnectionStatus.CONNECTED


@dataclass
class WalletContext:
    """
    Snapshot of the provider state handed to the UI layer.

    Values are captured when the snapshot is taken; the operations are bound
    to the provider and always act on its current session.
    """

    all_available_wallets: List[WalletDescriptor]
    configured_wallets: List[WalletDescriptor]
    detected_wallets: List[WalletDescriptor]
    wallet: Optional[BaseWalletAdapter]
    status: ConnectionStatus
    connecting: bool
    connected: bool
    account: Optional[WalletAccount]
    address: Optional[str]
    supported_wallets: List[Any]
    select: Callable[[str], Awaitable[None]]
    disconnect: Callable[[], Awaitable[None]]
    get_accounts: Callable[[], List[WalletAccount]]
    sign_and_execute_transaction: Callable[[Any], Awaitable[Any]]
    sign_message: Callable[[bytes], Awaitable[Any]]
    execute_move_call: Callable[[Any], Awaitable[Any]]
    get_public_key: Callable[[], Awaitable[bytes]]


class WalletProvider:
    """
    Connection state machine and operation facade for one wallet session.

    Each provider owns an independent session, so several providers can
    coexist (e.g. in tests).
    """

    def __init__(
        self,
        default_wallets: Optional[Sequence[WalletDescriptor]] = None,
        detector: Optional[WalletDetector] = None,
        supported_wallets: Optional[List[Any]] = None,
    ):
        """
        Initialize the provider with an empty (disconnected) session.

        Args:
            default_wallets: Configured wallet list (DEFAULT_WALLETS if None)
            detector: Source of detected adapters
            supported_wallets: Deprecated, use default_wallets instead
        """
        self.registry = WalletRegistry(default_wallets, detector)
        self._session = Session()
        self._disconnecting: Optional[BaseWalletAdapter] = None
        self._supported_wallets = supported_wallets

        if supported_wallets is not None:
            warnings.warn(
                "supported_wallets is deprecated, use default_wallets to customize wallet list",
                DeprecationWarning,
                stacklevel=2,
            )

    # Session state

    @property
    def session(self) -> Session:
        return self._session

    @property
    def status(self) -> ConnectionStatus:
        return self._session.status

    @property
    def wallet(self) -> Optional[BaseWalletAdapter]:
        return self._session.adapter

    @property
    def connecting(self) -> bool:
        return self._session.status is ConnectionStatus.CONNECTING

    @property
    def connected(self) -> bool:
        return self._session.status is ConnectionStatus.CONNECTED

    @property
    def account(self) -> Optional[WalletAccount]:
        """First account of the connected wallet, the active one by policy."""
        if not is_callable(self._session):
            return None
        accounts = self._session.adapter.accounts
        return accounts[0] if accounts else None

    @property
    def address(self) -> Optional[str]:
        account = self.account
        return account.address if account else None

    @property
    def supported_wallets(self) -> List[Any]:
        return self._supported_wallets or []

    # Wallet lists

    @property
    def all_available_wallets(self) -> List[WalletDescriptor]:
        return self.registry.available().all_available_wallets

    @property
    def configured_wallets(self) -> List[WalletDescriptor]:
        return self.registry.available().configured_wallets

    @property
    def detected_wallets(self) -> List[WalletDescriptor]:
        return self.registry.available().detected_wallets

    def context(self) -> WalletContext:
        """Take a snapshot of the provider for the UI layer."""
        available = self.registry.available()
        account = self.account
        return WalletContext(
            all_available_wallets=available.all_available_wallets,
            configured_wallets=available.configured_wallets,
            detected_wallets=available.detected_wallets,
            wallet=self.wallet,
            status=self.status,
            connecting=self.connecting,
            connected=self.connected,
            account=account,
            address=account.address if account else None,
            supported_wallets=self.supported_wallets,
            select=self.select,
            disconnect=self.disconnect,
            get_accounts=self.get_accounts,
            sign_and_execute_transaction=self.sign_and_execute_transaction,
            sign_message=self.sign_message,
            execute_move_call=self.execute_move_call,
            get_public_key=self.get_public_key,
        )

    # Guards

    def _ensure_callable(self) -> BaseWalletAdapter:
        """
        Fail unless a wallet is connected.

        Returns:
            The connected adapter

        Raises:
            NotConnectedError: If the session is not callable
        """
        if not is_callable(self._session):
            raise NotConnectedError()
        return self._session.adapter

    def _ensure_feature(self, adapter: BaseWalletAdapter, feature: FeatureName) -> None:
        if not adapter.has_feature(feature):
            raise FeatureNotSupportedError(feature_id(feature), adapter.name)

    def _ensure_account(self) -> WalletAccount:
        account = self.account
        if account is None:
            raise NoActiveAccountError()
        return account

    # State machine

    async def connect(self, adapter: BaseWalletAdapter, options: Optional[Any] = None) -> Any:
        """
        Connect to a wallet adapter.

        Args:
            adapter: Adapter to connect
            options: Passed through to the adapter's connect

        Returns:
            The adapter's connect result

        Raises:
            InvalidArgumentError: If adapter is None
            ConnectionInProgressError: If another connect or a disconnect is in flight
        """
        if adapter is None:
            raise InvalidArgumentError("param adapter is missing")
        if (
            self._session.status is ConnectionStatus.CONNECTING
            or self._disconnecting is not None
        ):
            raise ConnectionInProgressError(
                f"cannot connect to {adapter.name}, another connection is in progress"
            )

        self._session = Session(ConnectionStatus.CONNECTING)
        try:
            result = await adapter.connect(options)
        except BaseException:
            # Includes cancellation: status must not stay CONNECTING
            self._session = Session()
            raise

        self._session = Session(ConnectionStatus.CONNECTED, adapter)
        return result

    async def disconnect(self) -> None:
        """
        Disconnect the current wallet.

        The session is reset even when the adapter's disconnect fails; the
        adapter's exception is then re-raised. Only one disconnect runs at a
        time; a concurrent call is rejected rather than disconnecting twice.

        Raises:
            NotConnectedError: If no wallet is connected
            ConnectionInProgressError: If a disconnect is already in flight
        """
        adapter = self._ensure_callable()
        if self._disconnecting is not None:
            raise ConnectionInProgressError(
                f"cannot disconnect {adapter.name}, a disconnect is already in progress"
            )

        self._disconnecting = adapter
        try:
            # Disconnect is optional for wallets
            if adapter.has_feature(FeatureName.STANDARD__DISCONNECT):
                await adapter.disconnect()
        finally:
            self._disconnecting = None
            # Never reset a session another call has replaced meanwhile
            if self._session.adapter is adapter:
                self._session = Session()

    async def select(self, wallet_name: str) -> None:
        """
        Connect to an available wallet by name, disconnecting any other first.

        Selecting the wallet that is already connected does nothing.

        Raises:
            WalletNotAvailableError: If the wallet is not installed
            ConnectionInProgressError: If another select is still switching wallets
        """
        if is_callable(self._session):
            if wallet_name == self._session.adapter.name:
                return
            await self.disconnect()

        wallet = self.registry.find_available(wallet_name)
        if wallet is None:
            available_names = self.registry.available().available_names
            raise WalletNotAvailableError(wallet_name, available_names)

        await self.connect(wallet.adapter)

    # Operations

    def get_accounts(self) -> List[WalletAccount]:
        """Return the connected adapter's live account list."""
        adapter = self._ensure_callable()
        return adapter.accounts

    async def sign_message(self, message: bytes) -> Any:
        """
        Sign a message with the active account.

        Raises:
            NotConnectedError: If no wallet is connected
            NoActiveAccountError: If the wallet exposes no account
            FeatureNotSupportedError: If the wallet cannot sign messages
        """
        adapter = self._ensure_callable()
        account = self._ensure_account()
        self._ensure_feature(adapter, FeatureName.SUI__SIGN_MESSAGE)
        return await adapter.sign_message(account=account, message=message)

    async def sign_and_execute_transaction(self, transaction_input: Any) -> Any:
        """Hand a transaction to the wallet as-is for signing and execution."""
        adapter = self._ensure_callable()
        self._ensure_feature(adapter, FeatureName.SUI__SIGN_AND_EXECUTE_TRANSACTION)
        return await adapter.sign_and_execute_transaction(transaction_input)

    async def execute_move_call(self, data: Any) -> Any:
        """Deprecated: wrap a move call in the transaction input shape and execute it."""
        self._ensure_callable()
        warnings.warn(
            "execute_move_call is deprecated, use sign_and_execute_transaction",
            DeprecationWarning,
            stacklevel=2,
        )
        return await self.sign_and_execute_transaction(
            {"transaction": {"kind": "moveCall", "data": data}}
        )

    async def get_public_key(self) -> bytes:
        self._ensure_callable()
        return self._ensure_account().public_key
