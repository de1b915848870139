"""Shared CLI utilities."""

import json
import logging
from pathlib import Path
from typing import Any

from rich.logging import RichHandler

from quote_intake.cli._console import console, print_err


def setup_logging(*, verbose: bool = False, quiet: bool = False) -> None:
    """Configure logging with Rich handler."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    handler = RichHandler(
        console=console,  # stderr, keeps --json stdout clean
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def load_json_file(path: Path) -> Any:
    """Read a JSON file or exit with a readable error."""
    if not path.exists():
        print_err(f"File not found: {path}")
        raise SystemExit(1)

    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        print_err(f"Invalid JSON in {path}: {e}")
        raise SystemExit(1)
