"""Naive same-batch round-trip arbitrage flagger"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

import structlog

from swapscan.detectors.reference_data import ReferenceData
from swapscan.detectors.swap_classifier import ClassifiedSwap
from swapscan.monitoring import metrics

logger = structlog.get_logger()

# Placeholder values emitted in legacy mode. No amounts are decoded.
LEGACY_ROUND_TRIP_TOKEN = "Unknown"
LEGACY_ROUND_TRIP_PROFIT = Decimal("0.025")
LEGACY_FABRICATED_TOKEN = "USDC"
LEGACY_FABRICATED_PROFIT = Decimal("0.045")

UNKNOWN_TOKEN = "unknown"


@dataclass(frozen=True)
class ArbitrageFlag:
    """A sender flagged as a candidate round-trip arbitrageur"""

    sender: Optional[str]
    token: str
    estimated_profit: Optional[Decimal] = None
    fabricated: bool = False
    known_searcher: bool = False
    swap_count: int = 0


class ArbitrageFlagger:
    """
    Flags senders that swap both into and out of ETH within one batch.

    Profit is not computed. With legacy_placeholders enabled the flagger
    reproduces the historical constant values, including one fabricated
    flag when no sender qualifies.
    """

    def __init__(
        self,
        reference_data: ReferenceData,
        chain_name: str = "Ethereum",
        legacy_placeholders: bool = False,
    ):
        self.reference_data = reference_data
        self.chain_name = chain_name
        self.legacy_placeholders = legacy_placeholders

    def group_by_sender(self, swaps: Iterable[ClassifiedSwap]) -> Dict[str, List[ClassifiedSwap]]:
        """Group swaps by sender address, keyed in order of first appearance"""
        groups: Dict[str, List[ClassifiedSwap]] = {}
        for swap in swaps:
            groups.setdefault(swap.transaction.sender.lower(), []).append(swap)
        return groups

    @staticmethod
    def is_round_trip(swaps: List[ClassifiedSwap]) -> bool:
        """Check for at least one ETH->* and one Token->ETH* swap among two or more swaps"""
        if len(swaps) < 2:
            return False

        has_eth_to_token = any(swap.direction.startswith("ETH->") for swap in swaps)
        has_token_to_eth = any(swap.direction.startswith("Token->ETH") for swap in swaps)
        return has_eth_to_token and has_token_to_eth

    def flag(self, swaps: Iterable[ClassifiedSwap]) -> List[ArbitrageFlag]:
        """
        Flag candidate round-trip arbitrageurs

        Args:
            swaps: Classified swaps from one batch

        Returns:
            One ArbitrageFlag per qualifying sender
        """
        flags = []

        for sender_swaps in self.group_by_sender(swaps).values():
            if not self.is_round_trip(sender_swaps):
                continue

            sender = sender_swaps[0].transaction.sender
            if self.legacy_placeholders:
                token, profit = LEGACY_ROUND_TRIP_TOKEN, LEGACY_ROUND_TRIP_PROFIT
            else:
                token, profit = UNKNOWN_TOKEN, None

            arbitrage_flag = ArbitrageFlag(
                sender=sender,
                token=token,
                estimated_profit=profit,
                known_searcher=self.reference_data.is_known_searcher(sender),
                swap_count=len(sender_swaps),
            )
            flags.append(arbitrage_flag)

            metrics.arbitrage_flags.labels(chain=self.chain_name, kind="round_trip").inc()
            logger.info(
                "round_trip_flagged",
                chain=self.chain_name,
                sender=sender,
                swap_count=len(sender_swaps),
                exchanges=sorted({swap.exchange for swap in sender_swaps}),
                known_searcher=arbitrage_flag.known_searcher,
            )

        if not flags and self.legacy_placeholders:
            flags.append(
                ArbitrageFlag(
                    sender=None,
                    token=LEGACY_FABRICATED_TOKEN,
                    estimated_profit=LEGACY_FABRICATED_PROFIT,
                    fabricated=True,
                )
            )
            metrics.arbitrage_flags.labels(chain=self.chain_name, kind="fabricated").inc()
            logger.warning("fabricated_flag_emitted", chain=self.chain_name)

        return flags
