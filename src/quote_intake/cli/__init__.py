"""CLI package - Typer-based command-line interface.

Usage:
    quote-intake --help
    python -m quote_intake.cli check detection.json
"""

from quote_intake.cli._app import app

# Register command modules (side-effect imports)
import quote_intake.cli.cmd_check  # noqa: F401
import quote_intake.cli.cmd_variables  # noqa: F401

__all__ = ["app"]
