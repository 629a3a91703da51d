"""Blockchain interaction layer"""

from swapscan.chains.connector import EthereumConnector

__all__ = ["EthereumConnector"]
