"""
Client configuration management.

This module provides a typed interface to the client settings, loaded from
the [tool.adventure] table of pyproject.toml and ADVENTURE_* environment
variables.
"""

import logging
import tomllib
from typing import Optional
from pathlib import Path
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

from .game_session import INITIAL_SCREEN_ID


class ClientConfiguration(BaseSettings):
    """
    Typed configuration for the text-adventure client.

    Every field has a default so the client runs without a config file;
    from_toml() layers pyproject.toml values on top.
    """

    # Server settings
    api_base_url: str = Field(
        default="https://text-adventure.winsauce.com/api",
        description="Base URL of the game API",
    )
    initial_screen_id: str = Field(
        default=INITIAL_SCREEN_ID, description="Screen the session starts on"
    )
    request_timeout_seconds: float = Field(
        default=30.0, gt=0, description="Timeout for each HTTP request"
    )

    # File paths
    log_file: str = Field(
        default="adventure_client.log", description="Path to human-readable log file"
    )
    json_log_file: str = Field(
        default="adventure_client.jsonl", description="Path to JSON log file"
    )

    # Logging
    log_level: str = Field(default="WARNING", description="Logging level name")

    model_config = SettingsConfigDict(
        env_prefix="ADVENTURE_",
        env_file=None,
        case_sensitive=False,
        extra="forbid",  # Catch typos in config early
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)

    @classmethod
    def from_toml(cls, config_file: Optional[Path] = None) -> "ClientConfiguration":
        """
        Create ClientConfiguration by loading from pyproject.toml.

        Args:
            config_file: Path to TOML file (defaults to pyproject.toml)

        Returns:
            ClientConfiguration instance loaded from TOML

        Raises:
            FileNotFoundError: If config file doesn't exist
            KeyError: If the [tool.adventure] section is missing
        """
        # Load .env file if it exists to populate environment variables
        load_dotenv()

        config_file = config_file or Path("pyproject.toml")

        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_file}")

        with open(config_file, "rb") as f:
            toml_data = tomllib.load(f)

        try:
            adventure_config = toml_data["tool"]["adventure"]
        except KeyError:
            raise KeyError("Missing [tool.adventure] section in pyproject.toml")

        server_config = adventure_config.get("server", {})
        files_config = adventure_config.get("files", {})
        logging_config = adventure_config.get("logging", {})

        config_dict = {
            "api_base_url": server_config.get("api_base_url"),
            "initial_screen_id": server_config.get("initial_screen_id"),
            "request_timeout_seconds": server_config.get("request_timeout_seconds"),
            "log_file": files_config.get("log_file"),
            "json_log_file": files_config.get("json_log_file"),
            "log_level": logging_config.get("level"),
        }

        # Drop missing keys so field defaults and env vars still apply
        return cls(**{k: v for k, v in config_dict.items() if v is not None})
