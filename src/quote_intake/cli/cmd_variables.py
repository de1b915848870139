"""Variables command - validate a pricing-variables configuration file."""

from dataclasses import asdict
from pathlib import Path

import typer

from quote_intake.cli._app import app
from quote_intake.cli._common import load_json_file, setup_logging
from quote_intake.cli._console import console, output_json
from quote_intake.variables import format_validation_result, validate_variables_config


@app.command("variables", help="Validate a variables_config JSON file.")
def variables_cmd(
    ctx: typer.Context,
    config_file: Path = typer.Argument(..., help="variables_config JSON file"),
):
    """Validate a variables configuration and report errors and warnings."""
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    config = load_json_file(config_file)
    result = validate_variables_config(config)

    if ctx.obj["json"]:
        output_json(asdict(result))
    elif not ctx.obj["quiet"] or not result.valid:
        console.print(format_validation_result(result), markup=False)

    if not result.valid:
        raise SystemExit(1)
