"""Static reference tables for DEX routers, swap method selectors and known searchers"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional

from swapscan.config.models import ETHEREUM_DEX_ROUTERS, ETHEREUM_MEV_SEARCHERS, ChainConfig

# Uniswap V2 style router selectors (first 4 bytes of keccak of the signature)
SWAP_EXACT_ETH_FOR_TOKENS = bytes.fromhex("7ff36ab5")  # swapExactETHForTokens
SWAP_ETH_FOR_EXACT_TOKENS = bytes.fromhex("fb3bdb41")  # swapETHForExactTokens
SWAP_EXACT_TOKENS_FOR_ETH = bytes.fromhex("18cbafe5")  # swapExactTokensForETH
SWAP_TOKENS_FOR_EXACT_ETH = bytes.fromhex("4a25d94a")  # swapTokensForExactETH

METHOD_SIGNATURE_LENGTH = 4


class SwapDirection(str, Enum):
    """Swap direction labels"""

    ETH_TO_TOKEN = "ETH->Token"
    TOKEN_TO_ETH = "Token->ETH"
    ETH_TO_TOKEN_EXACT = "ETH->Token(Exact)"
    TOKEN_TO_ETH_EXACT = "Token->ETH(Exact)"
    UNKNOWN = "Unknown Swap"

    def __str__(self) -> str:
        return self.value


DEFAULT_METHOD_SIGNATURES = {
    SWAP_EXACT_ETH_FOR_TOKENS: SwapDirection.ETH_TO_TOKEN,
    SWAP_EXACT_TOKENS_FOR_ETH: SwapDirection.TOKEN_TO_ETH,
    SWAP_ETH_FOR_EXACT_TOKENS: SwapDirection.ETH_TO_TOKEN_EXACT,
    SWAP_TOKENS_FOR_EXACT_ETH: SwapDirection.TOKEN_TO_ETH_EXACT,
}


def _normalize_address(address) -> Optional[str]:
    if not isinstance(address, str) or not address:
        return None
    return address.lower()


@dataclass(frozen=True)
class ReferenceData:
    """
    Read-only lookup tables used by the swap classifier and arbitrage flagger.

    Addresses are compared case-insensitively, so checksum and lowercase
    forms resolve to the same entry.
    """

    routers: Mapping[str, str] = field(default_factory=dict)
    method_signatures: Mapping[bytes, SwapDirection] = field(default_factory=dict)
    mev_searchers: FrozenSet[str] = frozenset()

    def __post_init__(self):
        routers = {}
        for address, name in self.routers.items():
            normalized = _normalize_address(address)
            if normalized is None:
                raise ValueError(f"Invalid router address: {address!r}")
            routers[normalized] = name

        signatures = {}
        for selector, direction in self.method_signatures.items():
            if len(selector) != METHOD_SIGNATURE_LENGTH:
                raise ValueError(
                    f"Method signature must be {METHOD_SIGNATURE_LENGTH} bytes, got {len(selector)}"
                )
            signatures[bytes(selector)] = SwapDirection(direction)

        searchers = set()
        for address in self.mev_searchers:
            normalized = _normalize_address(address)
            if normalized is None:
                raise ValueError(f"Invalid searcher address: {address!r}")
            searchers.add(normalized)

        object.__setattr__(self, "routers", MappingProxyType(routers))
        object.__setattr__(self, "method_signatures", MappingProxyType(signatures))
        object.__setattr__(self, "mev_searchers", frozenset(searchers))

    @classmethod
    def from_chain_config(cls, config: ChainConfig) -> "ReferenceData":
        """
        Build reference data from a chain configuration

        Args:
            config: Chain configuration with name -> address router and searcher tables

        Returns:
            ReferenceData using the default method signature table
        """
        return cls(
            routers={address: name for name, address in config.dex_routers.items()},
            method_signatures=DEFAULT_METHOD_SIGNATURES,
            mev_searchers=frozenset(config.mev_searchers.values()),
        )

    def exchange_name_for(self, address) -> Optional[str]:
        """Return the exchange name for a router address, or None if unknown"""
        normalized = _normalize_address(address)
        if normalized is None:
            return None
        return self.routers.get(normalized)

    def swap_direction_for(self, call_data: bytes) -> SwapDirection:
        """Return the swap direction for the leading 4-byte selector of call data"""
        selector = bytes(call_data[:METHOD_SIGNATURE_LENGTH])
        return self.method_signatures.get(selector, SwapDirection.UNKNOWN)

    def is_known_searcher(self, address) -> bool:
        """Check if address belongs to the known MEV searcher set"""
        normalized = _normalize_address(address)
        return normalized is not None and normalized in self.mev_searchers


def default_reference_data() -> ReferenceData:
    """Reference tables for Ethereum mainnet"""
    return ReferenceData(
        routers={address: name for name, address in ETHEREUM_DEX_ROUTERS.items()},
        method_signatures=DEFAULT_METHOD_SIGNATURES,
        mev_searchers=frozenset(ETHEREUM_MEV_SEARCHERS.values()),
    )
