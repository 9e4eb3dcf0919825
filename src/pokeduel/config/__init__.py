"""Configuration management for pokeduel.

This module provides configuration loading and validation for the
data source, the battle flows, logging and the web server.
"""

from .config import (
    BattleConfig,
    Config,
    ConfigError,
    LoggingConfig,
    PokeAPIConfig,
    WebConfig,
    load_config,
    load_config_from_env,
    load_config_from_file,
    validate_config,
)

__all__ = [
    "BattleConfig",
    "Config",
    "ConfigError",
    "LoggingConfig",
    "PokeAPIConfig",
    "WebConfig",
    "load_config",
    "load_config_from_env",
    "load_config_from_file",
    "validate_config",
]
