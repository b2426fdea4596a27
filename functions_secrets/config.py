"""Application configuration and environment settings"""
from typing import List, Optional
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Upload parameters are fixed, not configurable
SLOT_ID = 0
EXPIRATION_MINUTES = 1440

DEFAULT_ROUTER_ADDRESS = "0xb83E47C2bC239B3bf370bc41e1459A34b41238D0"
DEFAULT_DON_ID = "fun-ethereum-sepolia-1"
DEFAULT_GATEWAY_URLS = [
    "https://01.functions-gateway.testnet.chain.link/",
    "https://02.functions-gateway.testnet.chain.link/",
]

class NetworkConfig(BaseModel):
    """Functions network the secrets are uploaded to"""
    router_address: str = Field(DEFAULT_ROUTER_ADDRESS, description="Functions router contract address")
    don_id: str = Field(DEFAULT_DON_ID, description="DON identifier")
    gateway_urls: List[str] = Field(default_factory=lambda: list(DEFAULT_GATEWAY_URLS), description="DON gateway URLs")

class Settings(BaseSettings):
    """Application settings loaded from environment variables"""
    # Credentials, validated by the uploader before any network call
    PRIVATE_KEY: Optional[str] = Field(None, description="Signing private key")
    SEPOLIA_RPC_URL: Optional[str] = Field(None, description="Ethereum Sepolia RPC endpoint")

    # Secrets to encrypt
    ALPACA_API_KEY: Optional[str] = Field(None, description="Alpaca API key")
    ALPACA_SECRET_KEY: Optional[str] = Field(None, description="Alpaca API secret")

    # Network settings
    FUNCTIONS_ROUTER_ADDRESS: str = Field(DEFAULT_ROUTER_ADDRESS, description="Functions router contract address")
    DON_ID: str = Field(DEFAULT_DON_ID, description="DON identifier")
    GATEWAY_URLS: List[str] = Field(default_factory=lambda: list(DEFAULT_GATEWAY_URLS), description="DON gateway URLs (JSON list)")

    # Functions toolkit bridge
    NODE_BINARY: str = Field("node", description="Node.js executable used to run the Functions toolkit")
    FUNCTIONS_TOOLKIT_NODE_PATH: Optional[str] = Field(None, description="NODE_PATH where @chainlink/functions-toolkit and ethers are installed")

    @property
    def network(self) -> NetworkConfig:
        """Get network settings as a separate model"""
        return NetworkConfig(
            router_address=self.FUNCTIONS_ROUTER_ADDRESS,
            don_id=self.DON_ID,
            gateway_urls=self.GATEWAY_URLS
        )

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=True,
        extra='ignore'
    )
