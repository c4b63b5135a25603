import argparse
import os
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Tuple

import yaml
from pydantic import ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)


class ConfigError(Exception):
    """Raised when the configuration cannot be located or parsed."""


class Settings(BaseSettings):
    """
    Application settings.

    Values come from a YAML config file and can be overridden one by one
    with environment variables of the same (upper case) name.
    """

    # =============================================================================
    # APPLICATION
    # =============================================================================
    PROJECT_NAME: str = "Students API"
    APP_VERSION: str = "1.0.0"
    ENV: str

    # =============================================================================
    # STORAGE
    # =============================================================================
    STORAGE_PATH: str
    DB_ECHO_SQL: bool = False

    # =============================================================================
    # SERVER
    # =============================================================================
    HTTP_SERVER_ADDR: str

    @field_validator("HTTP_SERVER_ADDR")
    @classmethod
    def check_address(cls, v: str) -> str:
        """Address must look like ``host:port``."""
        host, sep, port = v.rpartition(":")
        if not sep or not host or not port.isdigit():
            raise ValueError(f"invalid address {v!r}, expected host:port")
        return v

    @property
    def host(self) -> str:
        return self.HTTP_SERVER_ADDR.rpartition(":")[0]

    @property
    def port(self) -> int:
        return int(self.HTTP_SERVER_ADDR.rpartition(":")[2])

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        # Environment first so it overrides what was read from the file
        return env_settings, init_settings

    model_config = SettingsConfigDict(
        case_sensitive=True,
        extra="ignore",
        frozen=True,
    )


# Mapping of YAML keys (dotted for nested sections) to settings fields
YAML_KEYS = {
    "env": "ENV",
    "storage_path": "STORAGE_PATH",
    "http_server.address": "HTTP_SERVER_ADDR",
    "db_echo_sql": "DB_ECHO_SQL",
}


def _flatten(data: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    flat = {}
    for key, value in data.items():
        name = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, prefix=f"{name}."))
        else:
            flat[name] = value
    return flat


def read_config_file(path: Path) -> Dict[str, Any]:
    """Read the YAML file and return its values keyed by settings field name."""
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ConfigError(f"cannot read config: {path} must contain a mapping")

    flat = _flatten(data)
    return {field: flat[key] for key, field in YAML_KEYS.items() if key in flat}


def resolve_config_path(argv: Optional[Sequence[str]] = None) -> str:
    """
    Find the config file path.

    Priority:
    1. CONFIG_PATH environment variable
    2. --config command line flag
    """
    config_path = os.environ.get("CONFIG_PATH", "")

    if not config_path:
        parser = argparse.ArgumentParser(prog="students-api")
        parser.add_argument(
            "--config",
            default="",
            help="Path to the configuration YAML file",
        )
        args, _ = parser.parse_known_args(argv)
        config_path = args.config

    if not config_path:
        raise ConfigError(
            "config path is not set: use --config flag or CONFIG_PATH env var"
        )
    return config_path


def load_settings(config_path: str) -> Settings:
    """Build the immutable settings for this process from the given file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigError(f"config file does not exist: {config_path}")

    try:
        values = read_config_file(path)
        return Settings(**values)
    except yaml.YAMLError as e:
        raise ConfigError(f"cannot read config: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"cannot read config: {e}") from e
