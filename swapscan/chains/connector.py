"""Ethereum chain connector over a single JSON-RPC endpoint"""

import time
from typing import Any, Callable, Dict, Optional

import structlog
from web3 import Web3
from web3.exceptions import BlockNotFound, TransactionNotFound
from web3.types import BlockData, TxReceipt

from swapscan.config.models import ChainConfig
from swapscan.monitoring import metrics

logger = structlog.get_logger()


class EthereumConnector:
    """
    Blockchain data provider backed by web3's HTTP provider.

    Calls are made once: there is no retry or failover, and any provider
    error propagates to the caller. Missing blocks and receipts are
    returned as None.
    """

    def __init__(self, config: ChainConfig):
        self.config = config
        self.chain_name = config.name
        self.chain_id = config.chain_id
        self.rpc_url = config.rpc_urls[0]

        self.w3: Optional[Web3] = None
        self._connect()

    def _connect(self) -> None:
        """Establish connection to RPC endpoint"""
        try:
            self.w3 = Web3(Web3.HTTPProvider(self.rpc_url))
            if self.w3.is_connected():
                logger.info(
                    "rpc_connected",
                    chain=self.chain_name,
                    rpc_url=self.rpc_url,
                )
            else:
                raise ConnectionError(f"Failed to connect to {self.rpc_url}")
        except Exception as e:
            logger.error(
                "rpc_connection_failed",
                chain=self.chain_name,
                rpc_url=self.rpc_url,
                error=str(e),
            )
            raise

    async def _call(self, operation: str, func: Callable[[], Any]) -> Any:
        """Execute a provider call once, recording latency and errors"""
        start_time = time.time()
        try:
            result = func()
        except (BlockNotFound, TransactionNotFound):
            raise
        except Exception as e:
            metrics.chain_rpc_errors.labels(
                chain=self.chain_name,
                error_type=type(e).__name__,
            ).inc()
            logger.error(
                "rpc_operation_failed",
                chain=self.chain_name,
                operation=operation,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise

        metrics.chain_rpc_latency.labels(
            chain=self.chain_name,
            method=operation,
        ).observe(time.time() - start_time)
        return result

    async def get_latest_block(self) -> int:
        """Get latest block number from chain"""
        return await self._call(
            "get_latest_block",
            lambda: self.w3.eth.block_number,
        )

    async def get_block(
        self, block_number: int, full_transactions: bool = True
    ) -> Optional[BlockData]:
        """Get block data by block number, or None if the block does not exist"""
        try:
            block = await self._call(
                "get_block",
                lambda: self.w3.eth.get_block(block_number, full_transactions=full_transactions),
            )
        except BlockNotFound:
            logger.info("block_not_found", chain=self.chain_name, block_number=block_number)
            return None

        if block is None:
            logger.info("block_not_found", chain=self.chain_name, block_number=block_number)
        return block

    async def get_transaction_receipt(self, tx_hash: str) -> Optional[TxReceipt]:
        """Get transaction receipt by hash, or None if the transaction is unknown"""
        try:
            return await self._call(
                "get_transaction_receipt",
                lambda: self.w3.eth.get_transaction_receipt(tx_hash),
            )
        except TransactionNotFound:
            logger.info("receipt_not_found", chain=self.chain_name, tx_hash=tx_hash)
            return None


    def get_dex_routers(self) -> Dict[str, str]:
        """Get DEX router addresses for this chain"""
        return self.config.dex_routers

    def is_dex_router(self, address: str) -> bool:
        """Check if address is a known DEX router"""
        normalized_address = Web3.to_checksum_address(address)
        return normalized_address in self.config.dex_routers.values()
