"""
Account queries for the connected wallet.

Fetches the balance, owned objects and NFTs of the provider's active
address. Nothing is fetched while no wallet is connected, and RPC failures
are reported on the result instead of being raised.

Queries make blocking HTTP calls. Synchronous callers use them directly;
coroutines must not call them on the event loop and go through
``AccountQueries.run_in_thread`` instead.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .formatters import format_quantity
from .sui_client import SUI_COIN_TYPE, SUI_DECIMALS, SuiClient, SuiRPCError
from .wallet_provider import WalletProvider


@dataclass
class QueryResult:
    """Outcome of one account query."""

    data: Any
    error: Optional[str] = None  # Error message if the query failed

    @property
    def ok(self) -> bool:
        return self.error is None


class AccountQueries:
    """
    Query helpers bound to a wallet provider.

    Each query reads the provider's ``connected`` and ``address`` at call
    time, so it follows wallet switches without re-binding.
    """

    def __init__(self, provider: WalletProvider, client: SuiClient):
        self.provider = provider
        self.client = client

    def _address(self) -> Optional[str]:
        if not self.provider.connected:
            return None
        return self.provider.address

    def _run(self, fetch: Callable[[str], Any], empty: Any) -> QueryResult:
        address = self._address()
        if not address:
            return QueryResult(data=empty)
        try:
            return QueryResult(data=fetch(address))
        except SuiRPCError as e:
            return QueryResult(
                data=empty,
                error=f"fetch failed for {address} on {self.client.network}: {e}",
            )

    def account_balance(self, coin_type: str = SUI_COIN_TYPE) -> QueryResult:
        """
        Get the active account's balance, formatted in whole SUI.

        Returns:
            QueryResult whose data is the balance string ("0" when not connected)
        """
        if coin_type != SUI_COIN_TYPE:
            return QueryResult(data="0", error=f"Unexpected coin type: {coin_type}")

        return self._run(
            lambda address: format_quantity(
                self.client.get_balance(address, coin_type).total_balance, SUI_DECIMALS
            ),
            "0",
        )

    def owned_objects(self) -> QueryResult:
        """Get the objects owned by the active account."""
        return self._run(self.client.get_owned_objects, [])

    def owned_nfts(self) -> QueryResult:
        """Get the NFTs owned by the active account."""
        return self._run(self.client.get_owned_nfts, [])

    async def run_in_thread(self, query: Callable[..., QueryResult], *args: Any) -> QueryResult:
        """
        Run a blocking query in a worker thread.

        Args:
            query: One of this object's query methods
            *args: Passed through to the query

        Returns:
            The query's QueryResult
        """
        return await asyncio.to_thread(query, *args)
