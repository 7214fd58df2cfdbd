#!/usr/bin/env python3
"""
Show the assets owned by a Sui address.

This script queries a Sui fullnode for an address's SUI balance and owned
objects and generates a CSV report of the balance, NFTs and other objects.
"""

import argparse
import sys
from typing import List, Optional

from scripts.lib.formatters import build_assets, format_quantity, write_csv
from scripts.lib.models import OwnedAsset
from scripts.lib.sui_client import (
    DEFAULT_NETWORK,
    NETWORK_ENDPOINTS,
    SUI_DECIMALS,
    SuiClient,
    SuiRPCError,
)


SUPPORTED_NETWORKS = list(NETWORK_ENDPOINTS)


def log(network: str, message: str) -> None:
    """Log a message with network prefix."""
    print(f"[{network}] {message}", file=sys.stderr)


def validate_network(network: str) -> str:
    """
    Validate and normalize a network name.

    Raises:
        ValueError: If the network is not supported
    """
    network_lower = network.lower()
    if network_lower not in SUPPORTED_NETWORKS:
        raise ValueError(
            f"Unsupported network: {network}. Supported: {', '.join(SUPPORTED_NETWORKS)}"
        )
    return network_lower


def scan_address(client: SuiClient, address: str) -> List[OwnedAsset]:
    """
    Fetch and convert the holdings of an address.

    Args:
        client: SuiClient instance
        address: Sui address

    Returns:
        Report rows for the address

    Raises:
        SuiRPCError: If a query fails
    """
    network = client.network
    log(network, "Starting address scan...")

    balance = client.get_balance(address)
    log(network, f"Balance: {format_quantity(balance.total_balance, SUI_DECIMALS)} SUI")

    objects = client.get_owned_objects(address)
    assets = build_assets(network, balance, objects)

    nft_count = sum(1 for asset in assets if asset.kind == "NFT")
    log(network, f"Found {len(objects)} owned objects ({nft_count} NFTs)")

    return assets


def main(args: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        args: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = argparse.ArgumentParser(
        description="Query the holdings of a Sui address and generate a CSV report.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Query devnet, output to stdout
  %(prog)s --address 0x...

  # Query mainnet, save to file
  %(prog)s --address 0x... --network mainnet --output assets.csv
        """,
    )

    parser.add_argument(
        "--address",
        required=True,
        help="Sui address to query",
    )
    parser.add_argument(
        "--network",
        default=DEFAULT_NETWORK,
        help=f"Network to query. Supported: {', '.join(SUPPORTED_NETWORKS)}",
    )
    parser.add_argument(
        "--rpc-url",
        help="Fullnode URL, overrides the network's default endpoint",
    )
    parser.add_argument(
        "--output",
        help="Output file path (timestamp auto-appended). If not specified, outputs to stdout.",
    )

    parsed_args = parser.parse_args(args)

    try:
        network = validate_network(parsed_args.network)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    client = SuiClient(network, rpc_url=parsed_args.rpc_url)

    try:
        assets = scan_address(client, parsed_args.address)
    except SuiRPCError as e:
        log(network, f"ERROR: {e}")
        return 1

    output_file = write_csv(assets, parsed_args.output)
    if output_file:
        print(f"\nResults written to: {output_file}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
