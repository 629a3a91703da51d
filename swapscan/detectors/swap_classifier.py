"""Swap classifier for transactions addressed to known DEX routers"""

from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional

import structlog
from web3 import Web3

from swapscan.detectors.reference_data import (
    METHOD_SIGNATURE_LENGTH,
    ReferenceData,
    SwapDirection,
)
from swapscan.monitoring import metrics

logger = structlog.get_logger()


@dataclass(frozen=True)
class Transaction:
    """Immutable view of the transaction fields used for classification"""

    sender: str
    to: Optional[str]
    input: bytes = b""
    value: int = 0
    hash: Optional[str] = None

    @classmethod
    def from_web3(cls, tx: Mapping) -> "Transaction":
        """
        Build a Transaction from a web3 TxData mapping

        Accepts call data as bytes/HexBytes or a hex string. A missing or
        None "to" field denotes contract creation.

        Args:
            tx: Transaction data as returned by eth.get_block(..., full_transactions=True)

        Returns:
            Transaction with checksum addresses
        """
        to_address = tx.get("to")
        if to_address:
            to_address = Web3.to_checksum_address(to_address)
        else:
            to_address = None

        input_data = tx.get("input", b"")
        if isinstance(input_data, str):
            input_data = Web3.to_bytes(hexstr=input_data)

        tx_hash = tx.get("hash")
        if isinstance(tx_hash, bytes):
            tx_hash = Web3.to_hex(tx_hash)

        return cls(
            sender=Web3.to_checksum_address(tx["from"]),
            to=to_address,
            input=bytes(input_data or b""),
            value=int(tx.get("value", 0) or 0),
            hash=tx_hash,
        )


@dataclass(frozen=True)
class ClassifiedSwap:
    """A transaction matched to a known router with its swap direction"""

    transaction: Transaction
    exchange: str
    direction: SwapDirection


class SwapClassifier:
    """Classifies transactions as DEX swaps by router address and method selector"""

    def __init__(self, reference_data: ReferenceData, chain_name: str = "Ethereum"):
        """
        Initialize swap classifier

        Args:
            reference_data: Router and method signature tables
            chain_name: Name of the blockchain, used in logs and metrics
        """
        self.reference_data = reference_data
        self.chain_name = chain_name

    def classify(self, transaction: Transaction) -> Optional[ClassifiedSwap]:
        """
        Classify a single transaction

        A transaction is a swap if it has a recipient, the recipient is a known
        router and its call data holds at least a 4-byte method selector. A
        known router with an unrecognized selector yields an Unknown Swap.

        Args:
            transaction: Transaction to classify

        Returns:
            ClassifiedSwap, or None if the transaction is excluded
        """
        if transaction.to is None:
            return None

        exchange = self.reference_data.exchange_name_for(transaction.to)
        if exchange is None:
            return None

        if len(transaction.input) < METHOD_SIGNATURE_LENGTH:
            logger.debug(
                "swap_excluded_short_input",
                chain=self.chain_name,
                tx_hash=transaction.hash,
                router=transaction.to,
                input_length=len(transaction.input),
            )
            return None

        direction = self.reference_data.swap_direction_for(transaction.input)

        logger.debug(
            "swap_classified",
            chain=self.chain_name,
            tx_hash=transaction.hash,
            sender=transaction.sender,
            exchange=exchange,
            direction=direction.value,
            method=transaction.input[:METHOD_SIGNATURE_LENGTH].hex(),
        )

        return ClassifiedSwap(transaction=transaction, exchange=exchange, direction=direction)

    def classify_batch(self, transactions: Iterable[Transaction]) -> List[ClassifiedSwap]:
        """
        Classify a batch of transactions, preserving input order

        Args:
            transactions: Transactions to classify, e.g. all transactions in one block

        Returns:
            ClassifiedSwap records for the matching transactions
        """
        swaps = []
        total = 0

        for transaction in transactions:
            total += 1
            swap = self.classify(transaction)
            if swap is None:
                continue

            swaps.append(swap)
            metrics.swaps_classified.labels(
                chain=self.chain_name,
                exchange=swap.exchange,
                direction=swap.direction.value,
            ).inc()

        logger.debug(
            "swap_batch_classified",
            chain=self.chain_name,
            transaction_count=total,
            swap_count=len(swaps),
        )

        return swaps
