"""Configuration models for chain settings and scanner configuration"""

from typing import Dict, List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


ETHEREUM_DEX_ROUTERS = {
    "Uniswap V2": "0x7a250d5630B4cF539739dF2C5dAcb4c659F2488D",
    "Sushiswap": "0xd9e1cE17f2641f24aE83637ab66a2cca9C378B9F",
    "Uniswap V3": "0xE592427A0AEce92De3Edee1F18E0157C05861564",
}

ETHEREUM_MEV_SEARCHERS = {
    "MEV-Share": "0x000000000000084e91743124a982076C59f10084",
    "WETH": "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",
}


class ChainConfig(BaseSettings):
    """Configuration for a blockchain network"""

    name: str
    chain_id: int
    rpc_urls: List[str]
    native_token: str = "ETH"
    dex_routers: Dict[str, str] = Field(default_factory=dict)
    mev_searchers: Dict[str, str] = Field(default_factory=dict)

    model_config = SettingsConfigDict(frozen=True)


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Ethereum RPC
    eth_rpc_url: str = Field(alias="ETH_RPC_URL")

    # Scanning
    block_number: int = Field(default=17000000, alias="BLOCK_NUMBER")
    legacy_placeholders: bool = Field(default=False, alias="LEGACY_PLACEHOLDERS")

    # Monitoring
    prometheus_port: Optional[int] = Field(default=None, alias="PROMETHEUS_PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def get_ethereum_config(self) -> ChainConfig:
        """Get Ethereum mainnet chain configuration"""
        return ChainConfig(
            name="Ethereum",
            chain_id=1,
            rpc_urls=[self.eth_rpc_url],
            native_token="ETH",
            dex_routers=dict(ETHEREUM_DEX_ROUTERS),
            mev_searchers=dict(ETHEREUM_MEV_SEARCHERS),
        )
