"""Swap classification and naive round-trip arbitrage flagging for Ethereum blocks"""

__version__ = "0.1.0"
