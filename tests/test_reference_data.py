"""Tests for DEX reference data lookups"""

from dataclasses import FrozenInstanceError

import pytest

from swapscan.config.models import ChainConfig
from swapscan.detectors.reference_data import (
    SWAP_EXACT_ETH_FOR_TOKENS,
    SWAP_EXACT_TOKENS_FOR_ETH,
    ReferenceData,
    SwapDirection,
    default_reference_data,
)

UNISWAP_V2_ROUTER = "0x7a250d5630B4cF539739dF2C5dAcb4c659F2488D"
SUSHISWAP_ROUTER = "0xd9e1cE17f2641f24aE83637ab66a2cca9C378B9F"
UNISWAP_V3_ROUTER = "0xE592427A0AEce92De3Edee1F18E0157C05861564"


@pytest.fixture
def reference_data():
    """Ethereum mainnet reference data"""
    return default_reference_data()


class TestExchangeLookup:
    """Test router address to exchange name lookups"""

    def test_known_routers_resolve(self, reference_data):
        """Test the three mainnet routers resolve to their exchange names"""
        assert reference_data.exchange_name_for(UNISWAP_V2_ROUTER) == "Uniswap V2"
        assert reference_data.exchange_name_for(SUSHISWAP_ROUTER) == "Sushiswap"
        assert reference_data.exchange_name_for(UNISWAP_V3_ROUTER) == "Uniswap V3"

    def test_lookup_is_case_insensitive(self, reference_data):
        """Test lowercase and uppercase address forms resolve like checksum form"""
        assert reference_data.exchange_name_for(UNISWAP_V2_ROUTER.lower()) == "Uniswap V2"
        assert reference_data.exchange_name_for("0x" + SUSHISWAP_ROUTER[2:].upper()) == "Sushiswap"

    def test_unknown_address_returns_none(self, reference_data):
        """Test an unknown address is reported as not found"""
        assert reference_data.exchange_name_for("0x" + "ab" * 20) is None

    def test_missing_or_malformed_address_returns_none(self, reference_data):
        """Test None, empty and non-string input never raise"""
        assert reference_data.exchange_name_for(None) is None
        assert reference_data.exchange_name_for("") is None
        assert reference_data.exchange_name_for(12345) is None
        assert reference_data.exchange_name_for("not-an-address") is None


class TestSwapDirectionLookup:
    """Test method selector to swap direction lookups"""

    @pytest.mark.parametrize(
        "selector,expected",
        [
            ("7ff36ab5", SwapDirection.ETH_TO_TOKEN),
            ("18cbafe5", SwapDirection.TOKEN_TO_ETH),
            ("fb3bdb41", SwapDirection.ETH_TO_TOKEN_EXACT),
            ("4a25d94a", SwapDirection.TOKEN_TO_ETH_EXACT),
        ],
    )
    def test_known_selectors(self, reference_data, selector, expected):
        """Test each recognized selector maps to its direction label"""
        assert reference_data.swap_direction_for(bytes.fromhex(selector)) == expected

    def test_only_first_four_bytes_are_considered(self, reference_data):
        """Test full call data is matched on its leading selector"""
        call_data = SWAP_EXACT_TOKENS_FOR_ETH + b"\x00" * 160
        assert reference_data.swap_direction_for(call_data) == SwapDirection.TOKEN_TO_ETH

    def test_unrecognized_selector_is_unknown_swap(self, reference_data):
        """Test an unmatched selector falls through to Unknown Swap"""
        # swapExactTokensForTokens is a router method but not a tracked direction
        assert reference_data.swap_direction_for(bytes.fromhex("38ed1739")) == SwapDirection.UNKNOWN

    def test_direction_labels(self):
        """Test direction label strings"""
        assert SwapDirection.ETH_TO_TOKEN.value == "ETH->Token"
        assert SwapDirection.TOKEN_TO_ETH.value == "Token->ETH"
        assert SwapDirection.ETH_TO_TOKEN_EXACT.value == "ETH->Token(Exact)"
        assert SwapDirection.TOKEN_TO_ETH_EXACT.value == "Token->ETH(Exact)"
        assert SwapDirection.UNKNOWN.value == "Unknown Swap"
        assert str(SwapDirection.ETH_TO_TOKEN) == "ETH->Token"


class TestSearchers:
    """Test known MEV searcher lookups"""

    def test_known_searchers(self, reference_data):
        """Test the configured searcher addresses are recognized in any case"""
        assert reference_data.is_known_searcher("0x000000000000084e91743124a982076C59f10084")
        assert reference_data.is_known_searcher("0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2")

    def test_unknown_searcher(self, reference_data):
        """Test ordinary addresses are not searchers"""
        assert reference_data.is_known_searcher("0x" + "11" * 20) is False
        assert reference_data.is_known_searcher(None) is False


class TestConstruction:
    """Test reference data construction and immutability"""

    def test_tables_are_read_only(self, reference_data):
        """Test lookup tables cannot be mutated after construction"""
        with pytest.raises(TypeError):
            reference_data.routers["0x" + "00" * 20] = "Fake DEX"

        with pytest.raises(TypeError):
            reference_data.method_signatures[b"\x00\x00\x00\x00"] = SwapDirection.ETH_TO_TOKEN

    def test_frozen_fields(self, reference_data):
        """Test fields cannot be reassigned"""
        with pytest.raises(FrozenInstanceError):
            reference_data.routers = {}

    def test_caller_dict_changes_do_not_leak(self):
        """Test later changes to the source dict do not affect reference data"""
        routers = {UNISWAP_V2_ROUTER: "Uniswap V2"}
        data = ReferenceData(
            routers=routers,
            method_signatures={SWAP_EXACT_ETH_FOR_TOKENS: SwapDirection.ETH_TO_TOKEN},
        )

        routers[SUSHISWAP_ROUTER] = "Sushiswap"

        assert data.exchange_name_for(SUSHISWAP_ROUTER) is None

    def test_invalid_selector_length_rejected(self):
        """Test method signatures must be exactly 4 bytes"""
        with pytest.raises(ValueError):
            ReferenceData(method_signatures={b"\x7f\xf3\x6a": SwapDirection.ETH_TO_TOKEN})

    @pytest.mark.parametrize("address", ["", None])
    def test_invalid_router_address_rejected(self, address):
        """Test empty or missing router addresses are rejected"""
        with pytest.raises(ValueError):
            ReferenceData(routers={address: "Broken DEX"})

    @pytest.mark.parametrize("address", ["", None])
    def test_invalid_searcher_address_rejected(self, address):
        """Test empty or missing searcher addresses are rejected like routers"""
        with pytest.raises(ValueError):
            ReferenceData(mev_searchers=frozenset({address}))

    def test_from_chain_config(self):
        """Test building reference data from a chain configuration"""
        config = ChainConfig(
            name="Ethereum",
            chain_id=1,
            rpc_urls=["https://eth.example.com"],
            dex_routers={"Sushiswap": SUSHISWAP_ROUTER},
            mev_searchers={"Searcher": "0x" + "22" * 20},
        )

        data = ReferenceData.from_chain_config(config)

        assert data.exchange_name_for(SUSHISWAP_ROUTER) == "Sushiswap"
        assert data.exchange_name_for(UNISWAP_V2_ROUTER) is None
        assert data.is_known_searcher("0x" + "22" * 20)
        assert data.swap_direction_for(SWAP_EXACT_ETH_FOR_TOKENS) == SwapDirection.ETH_TO_TOKEN
