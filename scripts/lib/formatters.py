"""
Output formatters for account asset reports.

This module handles balance formatting, conversion of query results to the
OwnedAsset model, and CSV file generation with timestamp-based filenames.
"""

import csv
import sys
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import List, Optional, TextIO

from .models import CSV_COLUMNS, OwnedAsset
from .sui_client import COIN_OBJECT_PREFIX, SUI_DECIMALS, CoinBalance, SuiObject


def format_quantity(raw_balance: int, decimals: int) -> str:
    """
    Format balance with full precision, trimming trailing zeros.

    Args:
        raw_balance: Raw balance value (in smallest unit)
        decimals: Number of decimal places

    Returns:
        Formatted balance string with trailing zeros trimmed

    Examples:
        format_quantity(1000000000, 9) -> "1"
        format_quantity(1500000000, 9) -> "1.5"
        format_quantity(1, 9) -> "0.000000001"
    """
    if raw_balance == 0:
        return "0"

    if decimals == 0:
        return str(raw_balance)

    # Use Decimal for precise arithmetic
    balance = Decimal(raw_balance) / Decimal(10**decimals)
    formatted = format(balance, "f")

    if "." in formatted:
        formatted = formatted.rstrip("0").rstrip(".")

    return formatted


def generate_timestamp() -> str:
    """
    Generate a timestamp string for filenames.

    Returns:
        Timestamp in YYYYMMDD_HHMMSS format
    """
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def generate_filename(base_path: str, timestamp: Optional[str] = None) -> str:
    """
    Generate a timestamped filename for the CSV report.

    Examples:
        generate_filename("assets.csv", "20241214_153022")
        -> "assets_20241214_153022.csv"
    """
    if timestamp is None:
        timestamp = generate_timestamp()

    path = Path(base_path)
    suffix = path.suffix or ".csv"
    return str(path.parent / f"{path.stem}_{timestamp}{suffix}")


def build_assets(
    network: str,
    balance: Optional[CoinBalance],
    objects: List[SuiObject],
) -> List[OwnedAsset]:
    """
    Convert query results into report rows.

    Coin objects are left out: the balance row already accounts for them.

    Args:
        network: Network the data was fetched from
        balance: SUI balance, or None if it was not fetched
        objects: Objects owned by the address

    Returns:
        Balance row first, then one row per non-coin object
    """
    assets: List[OwnedAsset] = []

    if balance is not None:
        assets.append(
            OwnedAsset(
                network=network,
                kind="COIN",
                object_id=balance.coin_type,
                object_type=balance.coin_type,
                name="SUI",
                quantity=format_quantity(balance.total_balance, SUI_DECIMALS),
            )
        )

    for obj in objects:
        if obj.object_type.startswith(COIN_OBJECT_PREFIX):
            continue
        assets.append(
            OwnedAsset(
                network=network,
                kind="NFT" if obj.display else "OBJECT",
                object_id=obj.object_id,
                object_type=obj.object_type,
                name=obj.display.get("name") or "",
                quantity="1",
            )
        )

    return assets


def write_csv_to_stream(assets: List[OwnedAsset], stream: TextIO) -> None:
    """
    Write assets to a CSV stream.

    Args:
        assets: List of OwnedAsset objects to write
        stream: File-like object to write to
    """
    writer = csv.writer(stream)
    writer.writerow(CSV_COLUMNS)

    for asset in assets:
        writer.writerow(asset.to_csv_row())


def write_csv(assets: List[OwnedAsset], output_path: Optional[str] = None) -> Optional[str]:
    """
    Write assets to a CSV file or stdout.

    Args:
        assets: Assets to write
        output_path: Base output path. If None, writes to stdout.

    Returns:
        The written file path if output_path was provided, otherwise None
    """
    if output_path is None:
        write_csv_to_stream(assets, sys.stdout)
        return None

    output_file = generate_filename(output_path)
    with open(output_file, "w", newline="", encoding="utf-8") as f:
        write_csv_to_stream(assets, f)

    return output_file
