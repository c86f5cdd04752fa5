"""Configuration management for WIT."""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class PrintConfig(BaseModel):
    """Print host settings."""

    # Pause between finishing the document and invoking print, so the
    # isolated context can lay out before the print dialog appears
    settle_delay_ms: int = Field(default=250, ge=0)
    # Command used by CommandPrintHost, e.g. ["lp", "-d", "office"]
    command: list[str] | None = None
    output_dir: Path = Path("./labels")

    @property
    def settle_delay(self) -> float:
        """Settle delay in seconds."""
        return self.settle_delay_ms / 1000


class AppConfig(BaseModel):
    """Application configuration loaded from config.yaml."""

    # Public base URL encoded into QR codes
    app_url: str = "http://localhost:3000"
    database_url: str = "sqlite+aiosqlite:///./wit.db"
    seed_on_startup: bool = True
    qr_size: int = Field(default=200, ge=100, le=500)
    max_batch_size: int = Field(default=100, ge=1)
    # Base URL of the auth API used by the reset-password page (unset = disabled)
    auth_api_url: str | None = None
    print: PrintConfig = Field(default_factory=PrintConfig)


class Settings(BaseSettings):
    """Environment-based settings."""

    model_config = SettingsConfigDict(
        env_prefix="WIT_",
        env_file=".env",
        extra="ignore",
    )

    config_file: Path = Path("config.yaml")
    host: str = "0.0.0.0"
    port: int = 3000
    debug: bool = False


def load_config(config_path: Path) -> AppConfig:
    """Load application configuration from YAML file."""
    if not config_path.exists():
        logger.info(f"No config file at {config_path}, using defaults")
        return AppConfig()

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    # YAML returns None for empty keys; let the model defaults apply instead
    data = {key: value for key, value in data.items() if value is not None}
    if isinstance(data.get("print"), dict):
        data["print"] = {key: value for key, value in data["print"].items() if value is not None}

    return AppConfig.model_validate(data)


# Global settings instance
settings = Settings()
