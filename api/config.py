"""
API Configuration

Centralized settings for the FastAPI application.
API metadata is hardcoded, while environment-specific settings load from .env file.
There are no credential fallbacks: a missing BlockFrost key or wallet key
fails settings validation and therefore application startup.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from api.enums import NetworkType


# Get the project root directory (one level up from api/)
PROJECT_ROOT = Path(__file__).parent.parent

# ============================================================================
# API Metadata (hardcoded - versioned with code)
# ============================================================================

API_TITLE = "Car Inspection NFT API"
API_DESCRIPTION = (
    "Mints vehicle inspection records as CIP-25 NFTs on the Cardano blockchain "
    "and retrieves their on-chain metadata."
)
API_VERSION = "1.0.0"
API_PREFIX = "/api"


class Settings(BaseSettings):
    """
    Environment settings for the Car Inspection NFT API

    Loaded from the environment and the project .env file.
    """

    environment: str = "development"  # development, staging, production
    api_port: int = 8000
    log_level: str = "INFO"

    # Chain access
    network: NetworkType = NetworkType.TESTNET
    blockfrost_api_key: str = Field(min_length=1)  # No default - must be set

    # Signing wallet: exactly one source
    wallet_mnemonic: str | None = None
    wallet_skey_path: Path | None = None

    # Minting
    request_timeout_seconds: float = Field(default=120.0, gt=0)
    mint_output_lovelace: int = Field(default=1_500_000, gt=0)
    min_fee_lovelace: int = Field(default=200_000, ge=0)
    reject_duplicate_mints: bool = True

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"), env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @model_validator(mode="after")
    def check_wallet_source(self) -> "Settings":
        """Require exactly one wallet key source"""
        if bool(self.wallet_mnemonic) == bool(self.wallet_skey_path):
            raise ValueError("Set exactly one of wallet_mnemonic or wallet_skey_path")
        if self.wallet_skey_path and not self.wallet_skey_path.is_file():
            raise ValueError(f"wallet_skey_path does not exist: {self.wallet_skey_path}")
        return self


@lru_cache
def get_settings() -> Settings:
    """Load settings once per process"""
    return Settings()  # type: ignore[call-arg]  # Pydantic settings loads from env
