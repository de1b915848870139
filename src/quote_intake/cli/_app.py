"""Root Typer application: global output options and --version."""

from typing import Optional

import typer

from quote_intake import __version__

app = typer.Typer(
    name="quote-intake",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=False,
)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(f"quote-intake {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug-level logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Warnings and errors only"),
    json_output: bool = typer.Option(False, "--json", help="Print results as JSON on stdout"),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=_print_version, is_eager=True, help="Show version and exit"
    ),
):
    """Check detected quote requests for missing details and validate pricing variables."""
    ctx.obj = {"verbose": verbose, "quiet": quiet, "json": json_output}
