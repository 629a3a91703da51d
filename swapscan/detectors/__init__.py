"""Detectors module for swap classification and round-trip arbitrage flagging"""

from swapscan.detectors.arbitrage_flagger import ArbitrageFlag, ArbitrageFlagger
from swapscan.detectors.reference_data import ReferenceData, SwapDirection, default_reference_data
from swapscan.detectors.swap_classifier import ClassifiedSwap, SwapClassifier, Transaction

__all__ = [
    "ArbitrageFlag",
    "ArbitrageFlagger",
    "ClassifiedSwap",
    "ReferenceData",
    "SwapClassifier",
    "SwapDirection",
    "Transaction",
    "default_reference_data",
]
