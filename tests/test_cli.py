"""
Unit tests for the CLI module.

Tests follow the Given/When/Then pattern for clarity.
"""

import pytest
import responses

from scripts.lib.models import CSV_COLUMNS
from scripts.show_account_assets import SUPPORTED_NETWORKS, main, validate_network


class TestValidateNetwork:
    """Tests for validate_network function."""

    def test_normalizes_network_name_to_lowercase(self):
        assert validate_network("MainNet") == "mainnet"

    def test_raises_error_for_unsupported_network(self):
        """
        Given an unsupported network
        When validating it
        Then a ValueError should be raised
        """
        # When / Then
        with pytest.raises(ValueError, match="Unsupported network: ethereum"):
            validate_network("ethereum")

    def test_accepts_all_supported_networks(self):
        # When / Then
        for network in SUPPORTED_NETWORKS:
            assert validate_network(network) == network


class TestMain:
    """Tests for the CLI entry point."""

    def test_invalid_network_returns_error_code(self, sample_address, capsys):
        # When
        exit_code = main(["--address", sample_address, "--network", "ethereum"])

        # Then
        assert exit_code == 1
        assert "Unsupported network" in capsys.readouterr().err

    @responses.activate
    def test_writes_report_to_stdout(self, sample_address, rpc_url, capsys):
        """
        Given a node returning a balance and one NFT
        When running the CLI without an output path
        Then the CSV report should be printed to stdout
        """
        # Given
        responses.add(
            responses.POST,
            rpc_url,
            json={
                "jsonrpc": "2.0",
                "id": 1,
                "result": {
                    "coinType": "0x2::sui::SUI",
                    "coinObjectCount": 1,
                    "totalBalance": "2000000000",
                },
            },
        )
        responses.add(
            responses.POST,
            rpc_url,
            json={
                "jsonrpc": "2.0",
                "id": 1,
                "result": {
                    "data": [
                        {
                            "data": {
                                "objectId": "0xn",
                                "version": "1",
                                "digest": "d",
                                "type": "0x2::devnet_nft::DevNetNFT",
                                "display": {"data": {"name": "Example NFT"}, "error": None},
                            }
                        }
                    ],
                    "nextCursor": None,
                    "hasNextPage": False,
                },
            },
        )

        # When
        exit_code = main(["--address", sample_address, "--rpc-url", rpc_url])

        # Then
        captured = capsys.readouterr()
        lines = captured.out.strip().splitlines()
        assert exit_code == 0
        assert lines[0] == ",".join(CSV_COLUMNS)
        assert lines[1] == "devnet,COIN,0x2::sui::SUI,0x2::sui::SUI,SUI,2"
        assert lines[2] == "devnet,NFT,0xn,0x2::devnet_nft::DevNetNFT,Example NFT,1"
        assert "[devnet] Found 1 owned objects (1 NFTs)" in captured.err

    @responses.activate
    def test_rpc_failure_returns_error_code(self, sample_address, rpc_url, capsys):
        # Given
        responses.add(
            responses.POST,
            rpc_url,
            json={
                "jsonrpc": "2.0",
                "id": 1,
                "error": {"code": -32602, "message": "Invalid params"},
            },
        )

        # When
        exit_code = main(["--address", sample_address, "--rpc-url", rpc_url])

        # Then
        assert exit_code == 1
        assert "[devnet] ERROR: RPC error: Invalid params" in capsys.readouterr().err
