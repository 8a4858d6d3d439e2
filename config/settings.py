"""CLI configuration stored in a TOML file under ~/.config.

Only the RPC endpoint is configurable. Environment variables are not read.
"""

import json
import tomllib
from pathlib import Path

from loguru import logger
from pydantic import Field, ValidationError
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

APP_NAME = "solana_token_cli"
CONFIG_FILE = Path.home() / ".config" / APP_NAME / "default-config.toml"
DEFAULT_RPC_URL = "https://api.mainnet-beta.solana.com"


class ConfigError(Exception):
    pass


class Settings(BaseSettings):
    model_config = SettingsConfigDict(extra="ignore", str_strip_whitespace=True)

    # Solana JSON-RPC endpoint
    rpc_url: str = Field(default=DEFAULT_RPC_URL, min_length=1)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # The TOML path is chosen per run (--config), so load_settings reads
        # the file itself and passes the values in as init kwargs.
        return (init_settings,)


def load_settings(config_file: Path = CONFIG_FILE) -> Settings:
    """Load settings from the TOML config file, creating it with defaults if absent."""
    try:
        if not config_file.exists():
            _write_defaults(config_file)
        values = TomlConfigSettingsSource(Settings, toml_file=config_file)()
        return Settings(**values)
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError, ValidationError) as e:
        raise ConfigError(f"Failed to load configuration from {config_file}: {e}") from e


def _write_defaults(config_file: Path) -> None:
    config_file.parent.mkdir(parents=True, exist_ok=True)
    # TOML basic strings share JSON's escaping rules
    config_file.write_text(f"rpc_url = {json.dumps(DEFAULT_RPC_URL)}\n", encoding="utf-8")
    logger.debug(f"[CONFIG] Wrote default configuration to {config_file}")
