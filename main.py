"""Main application entry point: fetch one Ethereum block and print it"""

import argparse
import asyncio
import json
import sys
from typing import List, Optional

import structlog
from dotenv import load_dotenv
from pydantic import ValidationError
from web3 import Web3

from swapscan.chains.connector import EthereumConnector
from swapscan.config.models import Settings
from swapscan.detectors.arbitrage_flagger import ArbitrageFlagger
from swapscan.detectors.reference_data import ReferenceData
from swapscan.detectors.swap_classifier import SwapClassifier
from swapscan.monitoring.metrics import start_metrics_server
from swapscan.monitors.block_scanner import BlockScanner, BlockScanResult
from swapscan.utils.logging import setup_logging

# Load environment variables
load_dotenv()

setup_logging()

logger = structlog.get_logger()


def format_block(block) -> str:
    """Render a web3 block as indented JSON"""
    return json.dumps(json.loads(Web3.to_json(block)), indent=2)


def format_scan_result(result: BlockScanResult, receipts: Optional[dict] = None) -> str:
    """Render classified swaps and flags as human-readable lines"""
    receipts = receipts or {}
    lines = [
        f"Swaps in block {result.block_number}: {len(result.swaps)} "
        f"of {result.transaction_count} transactions"
    ]

    for swap in result.swaps:
        receipt = receipts.get(swap.transaction.hash)
        if receipt is None:
            status = ""
        else:
            status = " [success]" if receipt.get("status") == 1 else " [reverted]"
        lines.append(
            f"  {swap.transaction.hash} {swap.transaction.sender} "
            f"{swap.exchange} {swap.direction.value}{status}"
        )

    lines.append(f"Arbitrage flags: {len(result.flags)}")
    for arbitrage_flag in result.flags:
        profit = (
            "n/a" if arbitrage_flag.estimated_profit is None else str(arbitrage_flag.estimated_profit)
        )
        sender = arbitrage_flag.sender or "-"
        notes = []
        if arbitrage_flag.fabricated:
            notes.append("placeholder")
        if arbitrage_flag.known_searcher:
            notes.append("known searcher")
        suffix = f" ({', '.join(notes)})" if notes else ""
        lines.append(f"  {sender} token={arbitrage_flag.token} profit={profit}{suffix}")

    return "\n".join(lines)


class Application:
    """Main application orchestrator"""

    def __init__(
        self,
        block_number: Optional[int] = None,
        latest: bool = False,
        analyze: bool = False,
        legacy_placeholders: Optional[bool] = None,
        fetch_receipts: bool = False,
    ):
        self.block_number = block_number
        self.latest = latest
        self.analyze = analyze
        self.legacy_placeholders = legacy_placeholders
        self.fetch_receipts = fetch_receipts

        self.settings: Optional[Settings] = None
        self.connector: Optional[EthereumConnector] = None
        self.scanner: Optional[BlockScanner] = None

        self._logger = logger.bind(component="application")

    def initialize(self) -> None:
        """Load settings and build the connector and analysis pipeline"""
        self._logger.info("application_initializing")

        self.settings = Settings()
        setup_logging(self.settings.log_level)

        if self.block_number is None:
            self.block_number = self.settings.block_number
        if self.legacy_placeholders is None:
            self.legacy_placeholders = self.settings.legacy_placeholders

        if self.settings.prometheus_port:
            self._logger.info("starting_metrics_server", port=self.settings.prometheus_port)
            start_metrics_server(port=self.settings.prometheus_port)

        chain_config = self.settings.get_ethereum_config()
        self.connector = EthereumConnector(chain_config)

        reference_data = ReferenceData.from_chain_config(chain_config)
        self.scanner = BlockScanner(
            chain_connector=self.connector,
            swap_classifier=SwapClassifier(reference_data, chain_name=chain_config.name),
            arbitrage_flagger=ArbitrageFlagger(
                reference_data,
                chain_name=chain_config.name,
                legacy_placeholders=self.legacy_placeholders,
            ),
        )

        self._logger.info(
            "application_initialized",
            log_level=self.settings.log_level,
            legacy_placeholders=self.legacy_placeholders,
        )

    async def run(self) -> None:
        """Fetch the configured block, print it and optionally analyze it"""
        if self.latest:
            self.block_number = await self.connector.get_latest_block()

        result = await self.scanner.scan_block(self.block_number)

        if result is None:
            print(f"Block {self.block_number} not found")
            return

        print(f"Block {self.block_number}:\n{format_block(result.block)}")

        if self.analyze:
            receipts = None
            if self.fetch_receipts:
                receipts = await self.scanner.fetch_receipts(result.swaps)
            print(format_scan_result(result, receipts))


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Fetch an Ethereum block and classify its DEX swaps"
    )
    parser.add_argument(
        "--block",
        type=int,
        default=None,
        help="Block number to fetch (default: BLOCK_NUMBER or 17000000)",
    )
    parser.add_argument(
        "--latest",
        action="store_true",
        help="Fetch the latest block instead of a fixed number",
    )
    parser.add_argument(
        "--analyze",
        action="store_true",
        help="Classify swaps and flag round-trip senders",
    )
    parser.add_argument(
        "--legacy-placeholders",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Emit legacy placeholder profit values and the fabricated flag "
        "(default: LEGACY_PLACEHOLDERS or off)",
    )
    parser.add_argument(
        "--receipts",
        action="store_true",
        help="Fetch receipts for classified swaps and show their status",
    )
    return parser.parse_args(argv)


async def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point"""
    args = parse_args(argv)
    app = Application(
        block_number=args.block,
        latest=args.latest,
        analyze=args.analyze,
        legacy_placeholders=args.legacy_placeholders,
        fetch_receipts=args.receipts,
    )

    try:
        app.initialize()
    except ValidationError as e:
        logger.error(
            "configuration_error",
            error=str(e),
            error_type=type(e).__name__,
        )
        return 1
    except Exception as e:
        logger.error(
            "application_initialization_failed",
            error=str(e),
            error_type=type(e).__name__,
        )
        return 1

    try:
        await app.run()
    except Exception as e:
        logger.error(
            "application_error",
            error=str(e),
            error_type=type(e).__name__,
        )
        return 1

    return 0


def cli() -> None:
    """Console script entry point"""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("application_terminated")
        sys.exit(130)


if __name__ == "__main__":
    cli()
