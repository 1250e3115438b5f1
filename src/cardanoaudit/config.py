import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from cardanoaudit.exceptions import ConfigurationError

# Blockfrost v0 base URL per network
NETWORK_URLS: dict[str, str] = {
    "mainnet": "https://cardano-mainnet.blockfrost.io/api/v0",
    "preprod": "https://cardano-preprod.blockfrost.io/api/v0",
    "preview": "https://cardano-preview.blockfrost.io/api/v0",
}


class Settings(BaseSettings):
    blockfrost_project_id: str = ""
    blockfrost_network: str = "mainnet"
    blockfrost_base_url: str = ""  # overrides the network URL when set
    page_size: int = Field(default=100, ge=1, le=100)  # Blockfrost max count per page
    request_timeout: float = 20.0
    request_pause_seconds: float = 0.2  # fixed pause after every call
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level {value!r}")
        return level

    @property
    def base_url(self) -> str:
        if self.blockfrost_base_url:
            return self.blockfrost_base_url.rstrip("/")
        if self.blockfrost_network not in NETWORK_URLS:
            raise ConfigurationError(
                f"Unknown Blockfrost network {self.blockfrost_network!r}, "
                f"expected one of: {', '.join(NETWORK_URLS)}"
            )
        return NETWORK_URLS[self.blockfrost_network]

    @property
    def auth_headers(self) -> dict[str, str]:
        return {"project_id": self.blockfrost_project_id}

    def validate_for_run(self) -> None:
        """Fail fast on settings a run cannot do without."""
        if not self.blockfrost_project_id:
            raise ConfigurationError("set BLOCKFROST_PROJECT_ID in your environment or .env file")
        # resolves the network, raising on an unknown one
        _ = self.base_url

    class Config:
        env_file = ".env"
        extra = "ignore"
