"""Centralized initialization for quote_intake entry points.

Loads the project ``.env`` once per process so configuration such as
``QUOTE_INTAKE_CHECKER_CONFIG`` can be set there instead of the shell.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


@dataclass
class StartupState:
    """Process state after initialization."""

    project_root: Path
    env_loaded: bool = False


# Module-level state
_state: Optional[StartupState] = None


def _find_project_root(start_path: Optional[Path] = None) -> Path:
    """Find project root by looking for pyproject.toml.

    Args:
        start_path: Starting path for search. Defaults to the current directory.

    Returns:
        Project root directory.
    """
    if start_path is None:
        start_path = Path.cwd()

    for parent in [start_path] + list(start_path.parents):
        if (parent / "pyproject.toml").exists():
            return parent
    return start_path


def _load_env(project_root: Path) -> bool:
    """Load .env from the project root without overriding the environment."""
    env_path = project_root / ".env"
    if env_path.exists():
        load_dotenv(env_path, override=False)
        logger.debug(f"Loaded .env from {env_path}")
        return True
    logger.debug(f"No .env found at {env_path}")
    return False


def ensure_initialized() -> StartupState:
    """Ensure the process is initialized (idempotent).

    Returns:
        Current StartupState.
    """
    global _state

    if _state is not None:
        return _state

    project_root = _find_project_root()
    _state = StartupState(project_root=project_root, env_loaded=_load_env(project_root))
    return _state


def reset_startup_state() -> None:
    """Forget the initialization state (used by tests)."""
    global _state
    _state = None
