"""
Sui JSON-RPC client with automatic rate limit handling and retry logic.

This module provides the query side used once a wallet is connected:
balances, owned objects and NFTs of an address. It handles network-specific
endpoints, cursor pagination, and 429/5xx retries.
"""

import random
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

import requests


# Network configuration mapping
NETWORK_ENDPOINTS = {
    "mainnet": "https://fullnode.mainnet.sui.io:443",
    "testnet": "https://fullnode.testnet.sui.io:443",
    "devnet": "https://fullnode.devnet.sui.io:443",
    "localnet": "http://127.0.0.1:9000",
}

DEFAULT_NETWORK = "devnet"

SUI_COIN_TYPE = "0x2::sui::SUI"
SUI_DECIMALS = 9
COIN_OBJECT_PREFIX = "0x2::coin::Coin<"

# Page size for suix_getOwnedObjects (node maximum is 50)
OWNED_OBJECTS_PAGE_SIZE = 50

# Retry configuration
DEFAULT_INITIAL_DELAY = 1.0  # seconds
DEFAULT_BACKOFF_MULTIPLIER = 2.0
DEFAULT_MAX_RETRIES = 5
DEFAULT_MAX_DELAY = 32.0  # seconds
DEFAULT_JITTER = 0.1  # ±10%


@dataclass
class CoinBalance:
    """Represents the total balance of one coin type."""

    coin_type: str
    coin_object_count: int
    total_balance: int  # Smallest unit (MIST for SUI)


@dataclass
class SuiObject:
    """Represents an object owned by an address."""

    object_id: str
    version: str
    digest: str
    object_type: str
    display: Dict[str, Any]  # Empty when the type has no Display


@dataclass
class NftObject:
    """Represents an owned object with Display metadata."""

    object_id: str
    object_type: str
    name: Optional[str]
    description: Optional[str]
    image_url: Optional[str]


class SuiRPCError(Exception):
    """Exception raised for Sui RPC errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class SuiRateLimitError(SuiRPCError):
    """Exception raised when rate limit is exceeded and retries are exhausted."""

    pass


class SuiClient:
    """
    Sui JSON-RPC client with automatic 429 retry handling.

    All query interactions go through this class, which handles:
    - Network-specific fullnode URLs
    - HTTP 429 rate limit retries with exponential backoff
    - Request/response serialization
    - Cursor pagination for owned objects
    """

    def __init__(
        self,
        network: str = DEFAULT_NETWORK,
        rpc_url: Optional[str] = None,
        initial_delay: float = DEFAULT_INITIAL_DELAY,
        backoff_multiplier: float = DEFAULT_BACKOFF_MULTIPLIER,
        max_retries: int = DEFAULT_MAX_RETRIES,
        max_delay: float = DEFAULT_MAX_DELAY,
        jitter: float = DEFAULT_JITTER,
    ):
        """
        Initialize the Sui client.

        Args:
            network: Network name (mainnet, testnet, devnet, localnet)
            rpc_url: Explicit fullnode URL, overrides the network endpoint
            initial_delay: Initial delay in seconds for retry backoff
            backoff_multiplier: Multiplier for exponential backoff
            max_retries: Maximum number of retry attempts
            max_delay: Maximum delay cap in seconds
            jitter: Jitter factor (±percentage) to randomize delays
        """
        if rpc_url is None and network not in NETWORK_ENDPOINTS:
            raise ValueError(f"Unsupported network: {network}")
        self.network = network
        self.rpc_url = rpc_url or NETWORK_ENDPOINTS[network]
        self.initial_delay = initial_delay
        self.backoff_multiplier = backoff_multiplier
        self.max_retries = max_retries
        self.max_delay = max_delay
        self.jitter = jitter
        self.session = requests.Session()

    def _sanitize_error_message(self, message: str) -> str:
        """Remove the RPC URL from error messages, it may embed an access token."""
        return message.replace(self.rpc_url, "[RPC_URL]")

    def _apply_jitter(self, delay: float) -> float:
        """Apply random jitter to a delay value."""
        jitter_range = delay * self.jitter
        return delay + random.uniform(-jitter_range, jitter_range)

    def _execute_with_retry(
        self,
        request_func: Callable[[], requests.Response],
    ) -> requests.Response:
        """
        Execute a request function with retry logic for rate limits and server errors.

        Args:
            request_func: A callable that returns a requests.Response

        Returns:
            The successful response

        Raises:
            SuiRPCError: For RPC errors after retries exhausted
            SuiRateLimitError: When rate limit retries are exhausted
        """
        delay = self.initial_delay

        for attempt in range(self.max_retries + 1):
            try:
                response = request_func()

                if response.status_code == 429:
                    if attempt < self.max_retries:
                        time.sleep(self._apply_jitter(min(delay, self.max_delay)))
                        delay *= self.backoff_multiplier
                        continue
                    raise SuiRateLimitError(
                        "Rate limit exceeded and max retries reached",
                        status_code=429,
                    )

                if response.status_code >= 500:
                    if attempt < self.max_retries:
                        time.sleep(self._apply_jitter(min(delay, self.max_delay)))
                        delay *= self.backoff_multiplier
                        continue
                    raise SuiRPCError(
                        f"Server error: {response.status_code}",
                        status_code=response.status_code,
                    )

                if response.status_code >= 400:
                    raise SuiRPCError(
                        f"Client error: {response.status_code}",
                        status_code=response.status_code,
                    )

                return response

            except requests.RequestException as e:
                if attempt < self.max_retries:
                    time.sleep(self._apply_jitter(min(delay, self.max_delay)))
                    delay *= self.backoff_multiplier
                    continue
                sanitized_msg = self._sanitize_error_message(str(e))
                raise SuiRPCError(f"Request failed: {sanitized_msg}") from e

        raise SuiRPCError("Max retries exceeded")

    def _request(self, method: str, params: List[Any], request_id: int = 1) -> Any:
        """
        Make a JSON-RPC request with automatic 429 retry and exponential backoff.

        Args:
            method: JSON-RPC method name
            params: Positional method parameters
            request_id: JSON-RPC request ID

        Returns:
            The 'result' field from the JSON-RPC response

        Raises:
            SuiRPCError: For RPC errors
            SuiRateLimitError: When rate limit retries are exhausted
        """
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params,
            "id": request_id,
        }

        response = self._execute_with_retry(
            lambda: self.session.post(self.rpc_url, json=payload)
        )
        try:
            data = response.json()
        except ValueError as e:
            raise SuiRPCError("Invalid JSON response", status_code=response.status_code) from e
        if not isinstance(data, dict):
            raise SuiRPCError("Invalid JSON response", status_code=response.status_code)

        if "error" in data:
            error = data["error"]
            raise SuiRPCError(
                f"RPC error: {error.get('message', str(error))}",
                status_code=error.get("code"),
            )

        # A null result means nothing to report
        return data.get("result") or {}

    def get_balance(self, address: str, coin_type: str = SUI_COIN_TYPE) -> CoinBalance:
        """
        Get the total balance of one coin type for an address.

        Args:
            address: Sui address (0x...)
            coin_type: Fully qualified coin type, SUI by default

        Returns:
            CoinBalance with the balance in the coin's smallest unit
        """
        result = self._request("suix_getBalance", [address, coin_type])
        return CoinBalance(
            coin_type=result.get("coinType", coin_type),
            coin_object_count=int(result.get("coinObjectCount", 0)),
            total_balance=int(result.get("totalBalance", "0")),
        )

    def get_owned_objects(self, address: str) -> List[SuiObject]:
        """
        Get all objects owned by an address.

        Automatically paginates through all results.

        Args:
            address: Sui address (0x...)

        Returns:
            List of SuiObject objects
        """
        all_objects: List[SuiObject] = []
        cursor: Optional[str] = None
        query = {
            "options": {
                "showType": True,
                "showContent": True,
                "showDisplay": True,
            },
        }

        while True:
            result = self._request(
                "suix_getOwnedObjects",
                [address, query, cursor, OWNED_OBJECTS_PAGE_SIZE],
            )

            for item in result.get("data") or []:
                obj = item.get("data") or {}
                display = obj.get("display") or {}
                all_objects.append(
                    SuiObject(
                        object_id=obj.get("objectId", ""),
                        version=str(obj.get("version", "")),
                        digest=obj.get("digest", ""),
                        object_type=obj.get("type", ""),
                        display=display.get("data") or {},
                    )
                )

            cursor = result.get("nextCursor")
            if not result.get("hasNextPage") or not cursor:
                break

        return all_objects

    def get_owned_nfts(self, address: str) -> List[NftObject]:
        """
        Get the NFTs owned by an address.

        An NFT is any owned object, other than a coin, whose type declares
        Display metadata.

        Args:
            address: Sui address (0x...)

        Returns:
            List of NftObject objects
        """
        return [
            NftObject(
                object_id=obj.object_id,
                object_type=obj.object_type,
                name=obj.display.get("name"),
                description=obj.display.get("description"),
                image_url=obj.display.get("image_url"),
            )
            for obj in self.get_owned_objects(address)
            if obj.display and not obj.object_type.startswith(COIN_OBJECT_PREFIX)
        ]
