"""Block scanning pipeline"""

from swapscan.monitors.block_scanner import BlockScanner, BlockScanResult

__all__ = ["BlockScanner", "BlockScanResult"]
