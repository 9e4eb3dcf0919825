"""Core configuration management for pokeduel.

This module provides the configuration classes and loading functionality
with YAML file and environment variable support.
"""

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError

from pokeduel.adapters.pokeapi.client import DEFAULT_BASE_URL
from pokeduel.core.resolution import GALLERY_SIZE
from pokeduel.core.selection import MAX_CREATURE_ID


class ConfigError(Exception):
    """Configuration-related errors."""

    pass


class PokeAPIConfig(BaseModel):
    """Upstream data source configuration."""

    base_url: str = DEFAULT_BASE_URL
    max_creature_id: int = MAX_CREATURE_ID
    request_timeout: float | None = None


class BattleConfig(BaseModel):
    """Battle flow configuration."""

    gallery_size: int = GALLERY_SIZE
    animation_step_seconds: float = 1.0
    select_on_startup: bool = True


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["json", "text"] = "json"


class WebConfig(BaseModel):
    """Web server configuration."""

    host: str = "127.0.0.1"
    port: int = 8000


class Config(BaseModel):
    """Main configuration class for pokeduel."""

    pokeapi: PokeAPIConfig = Field(default_factory=PokeAPIConfig)
    battle: BattleConfig = Field(default_factory=BattleConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    web: WebConfig = Field(default_factory=WebConfig)


def _parse_bool(value: str) -> bool:
    return value.lower() in ("true", "1", "yes", "on")


def _parse_number(env_var: str, value: str, cast: type) -> Any:
    try:
        return cast(value)
    except ValueError as e:
        raise ConfigError(f"Invalid {env_var}: {value}") from e


def load_config_from_file(config_path: Path) -> Config:
    """Load configuration from YAML file.

    Args:
        config_path: Path to configuration file

    Returns:
        Loaded configuration

    Raises:
        ConfigError: If configuration is invalid or file cannot be read
    """
    try:
        with open(config_path) as f:
            config_data = yaml.safe_load(f)

        if config_data is None:
            config_data = {}

        return Config(**config_data)

    except FileNotFoundError as e:
        raise ConfigError(f"Configuration file not found: {config_path}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in configuration file: {e}") from e
    except (TypeError, ValidationError) as e:
        raise ConfigError(f"Configuration validation failed: {e}") from e


def load_config_from_env() -> dict[str, dict[str, Any]]:
    """Collect configuration overrides from environment variables.

    Environment variables are mapped as follows:
    - POKEDUEL_API_BASE_URL: PokeAPI root URL
    - POKEDUEL_MAX_CREATURE_ID: Highest creature id drawn
    - POKEDUEL_REQUEST_TIMEOUT: Request timeout in seconds ("none" disables)
    - POKEDUEL_GALLERY_SIZE: Number of same-type creatures shown
    - POKEDUEL_ANIMATION_STEP_SECONDS: Pause between battle label steps
    - POKEDUEL_SELECT_ON_STARTUP: Load a pair when the server starts
    - POKEDUEL_LOG_LEVEL: Logging level
    - POKEDUEL_LOG_FORMAT: Logging format (json/text)
    - POKEDUEL_HOST: Web server host
    - POKEDUEL_PORT: Web server port

    Returns:
        Nested overrides, keyed by configuration section
    """
    overrides: dict[str, dict[str, Any]] = {}

    pokeapi_config: dict[str, Any] = {}
    if env_val := os.getenv("POKEDUEL_API_BASE_URL"):
        pokeapi_config["base_url"] = env_val
    if env_val := os.getenv("POKEDUEL_MAX_CREATURE_ID"):
        pokeapi_config["max_creature_id"] = _parse_number(
            "POKEDUEL_MAX_CREATURE_ID", env_val, int
        )
    if env_val := os.getenv("POKEDUEL_REQUEST_TIMEOUT"):
        pokeapi_config["request_timeout"] = (
            None
            if env_val.lower() == "none"
            else _parse_number("POKEDUEL_REQUEST_TIMEOUT", env_val, float)
        )
    if pokeapi_config:
        overrides["pokeapi"] = pokeapi_config

    battle_config: dict[str, Any] = {}
    if env_val := os.getenv("POKEDUEL_GALLERY_SIZE"):
        battle_config["gallery_size"] = _parse_number(
            "POKEDUEL_GALLERY_SIZE", env_val, int
        )
    if env_val := os.getenv("POKEDUEL_ANIMATION_STEP_SECONDS"):
        battle_config["animation_step_seconds"] = _parse_number(
            "POKEDUEL_ANIMATION_STEP_SECONDS", env_val, float
        )
    if env_val := os.getenv("POKEDUEL_SELECT_ON_STARTUP"):
        battle_config["select_on_startup"] = _parse_bool(env_val)
    if battle_config:
        overrides["battle"] = battle_config

    logging_config: dict[str, Any] = {}
    if env_val := os.getenv("POKEDUEL_LOG_LEVEL"):
        logging_config["level"] = env_val.upper()
    if env_val := os.getenv("POKEDUEL_LOG_FORMAT"):
        logging_config["format"] = env_val.lower()
    if logging_config:
        overrides["logging"] = logging_config

    web_config: dict[str, Any] = {}
    if env_val := os.getenv("POKEDUEL_HOST"):
        web_config["host"] = env_val
    if env_val := os.getenv("POKEDUEL_PORT"):
        web_config["port"] = _parse_number("POKEDUEL_PORT", env_val, int)
    if web_config:
        overrides["web"] = web_config

    return overrides


def load_config(config_path: Path | None = None) -> Config:
    """Load configuration from file and environment variables.

    Configuration is loaded in the following order (later sources override earlier):
    1. Default values
    2. Configuration file (if provided)
    3. Environment variables

    Args:
        config_path: Optional path to configuration file

    Returns:
        Merged configuration

    Raises:
        ConfigError: If any source is invalid
    """
    config_data = Config().model_dump()

    if config_path is not None:
        file_config = load_config_from_file(config_path)
        for section, values in file_config.model_dump(exclude_unset=True).items():
            config_data[section].update(values)

    for section, values in load_config_from_env().items():
        config_data[section].update(values)

    try:
        config = Config(**config_data)
    except ValidationError as e:
        raise ConfigError(f"Environment configuration validation failed: {e}") from e

    validate_config(config)
    return config


def validate_config(config: Config) -> None:
    """Validate configuration for consistency and correctness.

    Args:
        config: Configuration to validate

    Raises:
        ConfigError: If configuration is invalid
    """
    if config.pokeapi.max_creature_id < 2:
        raise ConfigError("pokeapi.max_creature_id must be at least 2")

    if not config.pokeapi.base_url.startswith(("http://", "https://")):
        raise ConfigError("pokeapi.base_url must be an http(s) URL")

    if config.pokeapi.request_timeout is not None and config.pokeapi.request_timeout <= 0:
        raise ConfigError("pokeapi.request_timeout must be positive")

    if config.battle.gallery_size < 0:
        raise ConfigError("battle.gallery_size must be non-negative")

    if config.battle.animation_step_seconds < 0:
        raise ConfigError("battle.animation_step_seconds must be non-negative")

    if config.web.port <= 0 or config.web.port > 65535:
        raise ConfigError("web.port must be between 1 and 65535")
