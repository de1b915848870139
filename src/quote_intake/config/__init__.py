"""Checker configuration management."""

from quote_intake.config.checker import (
    CONFIG_ENV_VAR,
    get_checker_config,
    load_checker_config,
    reset_checker_config_cache,
)

__all__ = [
    "CONFIG_ENV_VAR",
    "get_checker_config",
    "load_checker_config",
    "reset_checker_config_cache",
]
