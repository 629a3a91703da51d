"""Block scanner that runs one block through swap classification and arbitrage flagging"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

import structlog

from swapscan.chains.connector import EthereumConnector
from swapscan.detectors.arbitrage_flagger import ArbitrageFlag, ArbitrageFlagger
from swapscan.detectors.swap_classifier import ClassifiedSwap, SwapClassifier, Transaction
from swapscan.monitoring import metrics

logger = structlog.get_logger()


@dataclass
class BlockScanResult:
    """Classified swaps and flags for one block"""

    block_number: int
    transaction_count: int
    swaps: List[ClassifiedSwap] = field(default_factory=list)
    flags: List[ArbitrageFlag] = field(default_factory=list)
    block: Optional[Any] = None


class BlockScanner:
    """
    Fetches a block and passes its transactions through the classifier and flagger.

    Provider errors are not caught here; they propagate to the caller.
    """

    def __init__(
        self,
        chain_connector: EthereumConnector,
        swap_classifier: SwapClassifier,
        arbitrage_flagger: ArbitrageFlagger,
    ):
        self.chain_connector = chain_connector
        self.swap_classifier = swap_classifier
        self.arbitrage_flagger = arbitrage_flagger

        self.chain_name = chain_connector.chain_name

        self._logger = logger.bind(
            component="block_scanner",
            chain=self.chain_name,
        )

    def analyze_transactions(
        self, block_number: int, transactions: Iterable[dict]
    ) -> BlockScanResult:
        """
        Classify and flag an already fetched list of web3 transactions

        Transaction hashes (as returned when a block is fetched without full
        transactions) are skipped.

        Args:
            block_number: Number of the block the transactions belong to
            transactions: web3 TxData mappings

        Returns:
            BlockScanResult for the batch
        """
        batch = [Transaction.from_web3(tx) for tx in transactions if not isinstance(tx, (bytes, str))]

        swaps = self.swap_classifier.classify_batch(batch)
        flags = self.arbitrage_flagger.flag(swaps)

        metrics.blocks_scanned.labels(chain=self.chain_name).inc()
        self._logger.info(
            "block_scanned",
            block_number=block_number,
            transaction_count=len(batch),
            swap_count=len(swaps),
            flag_count=len(flags),
        )

        return BlockScanResult(
            block_number=block_number,
            transaction_count=len(batch),
            swaps=swaps,
            flags=flags,
        )

    async def scan_block(self, block_number: int) -> Optional[BlockScanResult]:
        """
        Fetch a block with full transactions and analyze it

        Args:
            block_number: Block number to scan

        Returns:
            BlockScanResult carrying the fetched block, or None if the block was not found
        """
        block = await self.chain_connector.get_block(block_number, full_transactions=True)
        if block is None:
            self._logger.info("block_scan_skipped_not_found", block_number=block_number)
            return None

        result = self.analyze_transactions(block_number, block.get("transactions", []))
        result.block = block
        return result

    async def fetch_receipts(self, swaps: Iterable[ClassifiedSwap]) -> Dict[str, Optional[dict]]:
        """
        Fetch receipts for classified swaps, keyed by transaction hash

        Swaps without a hash are skipped. Unknown transactions map to None.
        """
        receipts = {}
        for swap in swaps:
            tx_hash = swap.transaction.hash
            if not tx_hash or tx_hash in receipts:
                continue
            receipts[tx_hash] = await self.chain_connector.get_transaction_receipt(tx_hash)

        self._logger.debug("swap_receipts_fetched", receipt_count=len(receipts))
        return receipts
