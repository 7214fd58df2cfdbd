"""
Pytest configuration and shared fixtures for wallet kit tests.
"""

import asyncio

import pytest

from scripts.lib.models import WalletAccount, WalletDescriptor
from scripts.lib.wallet_adapter import BaseWalletAdapter, FeatureName
from scripts.lib.wallet_provider import WalletProvider
from scripts.lib.wallet_registry import WalletDetector


ALL_FEATURES = [
    FeatureName.STANDARD__DISCONNECT,
    FeatureName.SUI__SIGN_MESSAGE,
    FeatureName.SUI__SIGN_AND_EXECUTE_TRANSACTION,
]


class FakeWalletAdapter(BaseWalletAdapter):
    """Adapter double that records every call into a shared log."""

    def __init__(
        self,
        name,
        call_log,
        features=ALL_FEATURES,
        accounts=None,
        connect_error=None,
        disconnect_error=None,
        connect_gate=None,
        disconnect_gate=None,
    ):
        super().__init__(name, features=features, icon=f"data:{name}", accounts=accounts)
        self.call_log = call_log
        self.connect_error = connect_error
        self.disconnect_error = disconnect_error
        self.connect_gate = connect_gate
        self.disconnect_gate = disconnect_gate

    async def connect(self, options=None):
        self.call_log.append((self.name, "connect"))
        if self.connect_gate is not None:
            await self.connect_gate.wait()
        if self.connect_error is not None:
            raise self.connect_error
        return {"accounts": self.accounts, "options": options}

    async def disconnect(self):
        self.call_log.append((self.name, "disconnect"))
        if self.disconnect_gate is not None:
            await self.disconnect_gate.wait()
        if self.disconnect_error is not None:
            raise self.disconnect_error

    async def sign_message(self, account, message):
        self.call_log.append((self.name, "sign_message"))
        return {"signature": b"sig:" + message, "address": account.address}

    async def sign_and_execute_transaction(self, transaction_input):
        self.call_log.append((self.name, "sign_and_execute_transaction"))
        return {"digest": "0xdigest", "input": transaction_input}


@pytest.fixture
def sample_address():
    """Sample Sui address for testing."""
    return "0x02a212de6a9dfa3a69e22387acfbafbb1a9e591bd9d636e7895dcfc8de05f331"


@pytest.fixture
def sample_account(sample_address):
    """Account with a 32-byte public key."""
    return WalletAccount(address=sample_address, public_key=bytes(range(32)))


@pytest.fixture
def call_log():
    """Ordered record of (wallet name, method) adapter calls."""
    return []


@pytest.fixture
def make_adapter(call_log, sample_account):
    """Factory for FakeWalletAdapter instances sharing one call log."""

    def factory(name, accounts=None, **kwargs):
        if accounts is None:
            accounts = [sample_account]
        return FakeWalletAdapter(name, call_log, accounts=accounts, **kwargs)

    return factory


@pytest.fixture
def connect_gate():
    """Event that holds a gated adapter's connect until set."""
    return asyncio.Event()


@pytest.fixture
def disconnect_gate():
    """Event that holds a gated adapter's disconnect until set."""
    return asyncio.Event()


@pytest.fixture
def configured_wallets():
    """Configured wallets A and B with UI metadata."""
    return [
        WalletDescriptor(name="A", icon_url="icon-a", download_url="https://example.com/a"),
        WalletDescriptor(name="B", icon_url="icon-b", download_url="https://example.com/b"),
    ]


@pytest.fixture
def adapter_a(make_adapter):
    return make_adapter("A")


@pytest.fixture
def adapter_b(make_adapter):
    return make_adapter("B")


@pytest.fixture
def detector(adapter_a, adapter_b):
    """Detector that sees both configured wallets."""
    return WalletDetector([adapter_a, adapter_b])


@pytest.fixture
def provider(configured_wallets, detector):
    """Disconnected provider over wallets A and B."""
    return WalletProvider(default_wallets=configured_wallets, detector=detector)


@pytest.fixture
def rpc_url():
    """Fullnode URL carrying an access token in its path."""
    return "https://fullnode.example.com/rpc-token-12345"
