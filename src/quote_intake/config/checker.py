"""Checker configuration loader.

Tenants can override the completeness thresholds and rule tables with a
YAML file. The file location comes from the ``QUOTE_INTAKE_CHECKER_CONFIG``
environment variable (a ``.env`` at the project root is honored); without
it the built-in defaults apply.

Example::

    completeness_threshold: 0.8
    min_quantity: 0.1
    special_requirements:
      - label: Irrigation details
        service_keywords: [irrigation, sprinkler]
        detail_keywords: [zone, spout, turf, drip]
        questions:
          - How many irrigation zones do you need (turf zones vs drip zones)?
"""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml

from quote_intake.checker.rules import CheckerConfig
from quote_intake.startup import ensure_initialized

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "QUOTE_INTAKE_CHECKER_CONFIG"


def load_checker_config(config_path: Path) -> Optional[CheckerConfig]:
    """Load checker configuration from a YAML file.

    Args:
        config_path: Path to the YAML file.

    Returns:
        CheckerConfig if the file exists and has content, None otherwise.

    Raises:
        ValueError: If the file exists but contains invalid configuration.
    """
    if not config_path.exists():
        logger.debug(f"No checker config found at {config_path}")
        return None

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in checker config {config_path}: {e}")

    if data is None:
        logger.warning(f"Empty checker config at {config_path}")
        return None

    if not isinstance(data, dict):
        raise ValueError(f"Checker config {config_path} must be a mapping")

    try:
        config = CheckerConfig.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Failed to load checker config from {config_path}: {e}")

    logger.debug(
        f"Loaded checker config from {config_path}: "
        f"{len(config.special_requirements)} special requirements, "
        f"{len(config.unit_rules)} unit rules"
    )
    return config


# Cached checker config (loaded once per process)
_cached_config: Optional[CheckerConfig] = None


def get_checker_config(force_reload: bool = False) -> CheckerConfig:
    """Get the active checker configuration (cached).

    Args:
        force_reload: If True, reload from disk even if cached.

    Returns:
        Config from the file named by QUOTE_INTAKE_CHECKER_CONFIG, or defaults.
    """
    global _cached_config

    if force_reload or _cached_config is None:
        ensure_initialized()
        path = os.getenv(CONFIG_ENV_VAR)
        config = load_checker_config(Path(path)) if path else None
        _cached_config = config or CheckerConfig.default()

    return _cached_config


def reset_checker_config_cache() -> None:
    """Reset the checker config cache."""
    global _cached_config
    _cached_config = None
