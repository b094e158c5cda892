"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # OpenAI Configuration
    openai_api_key: SecretStr = Field(..., description="OpenAI API key")
    openai_strategy_model: str = Field(
        default="gpt-5-mini", description="Model that derives keyword strategies"
    )
    openai_selection_model: str = Field(
        default="gpt-4o-mini", description="Model that picks the best GIF"
    )
    openai_max_completion_tokens: int = Field(default=4000, ge=100, le=16000)
    # Reasoning models reject anything but their default temperature
    openai_temperature: float | None = Field(default=None, ge=0.0, le=2.0)

    # Giphy API
    giphy_api_key: SecretStr | None = Field(default=None, description="Giphy API key")
    giphy_base_url: str = Field(default="https://api.giphy.com/v1/gifs")
    giphy_rating: str = Field(default="pg-13")
    giphy_lang: str = Field(default="en")

    # Generation
    generation_mode: Literal["single", "perspectives"] = Field(
        default="perspectives",
        description="'single' returns one GIF, 'perspectives' one per perspective",
    )
    single_search_limit: int = Field(default=10, ge=1, le=50)
    perspective_search_limit: int = Field(default=5, ge=1, le=50)

    # Thirdweb / x402 payment
    thirdweb_secret_key: SecretStr = Field(..., description="Thirdweb secret key")
    thirdweb_server_wallet_address: str = Field(
        ..., description="Wallet that receives payments"
    )
    thirdweb_client_id: str | None = Field(
        default=None, description="Public client id handed to the browser UI"
    )
    facilitator_base_url: str = Field(default="https://api.thirdweb.com/v1/payments/x402")
    payment_price: str = Field(default="$0.01", description="Price per generation in USD")
    payment_network: str = Field(default="eip155:143", description="Monad mainnet")
    payment_asset_address: str = Field(
        default="0x754704Bc059F8C67012fEd69BC8A327a5aafb603", description="USDC on Monad"
    )
    payment_asset_name: str = Field(default="USD Coin")
    payment_asset_version: str = Field(default="2")
    payment_asset_decimals: int = Field(default=6, ge=0, le=18)
    payment_max_timeout_seconds: int = Field(default=300, ge=10, le=3600)

    # API Settings
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8000, ge=1, le=65535)
    debug: bool = Field(default=False)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    log_format: Literal["json", "pretty", "console"] = Field(default="json")

    # HTTP Client Settings
    http_timeout_seconds: float = Field(default=30.0, ge=5.0, le=120.0)
    http_max_attempts: int = Field(default=1, ge=1, le=10)

    @property
    def giphy_configured(self) -> bool:
        """Whether a non-empty Giphy key is set; `GIPHY_API_KEY=` counts as unset."""
        return bool(self.giphy_api_key and self.giphy_api_key.get_secret_value())


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
