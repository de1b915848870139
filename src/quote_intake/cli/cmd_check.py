"""Check command - run the completeness checker on a detection result."""

from pathlib import Path
from typing import Dict, List, Optional

import typer

from quote_intake.checker import CompletenessChecker, validate_business_rules
from quote_intake.cli._app import app
from quote_intake.cli._common import load_json_file, setup_logging
from quote_intake.cli._console import (
    console,
    output_json,
    output_services_table,
    print_err,
    print_ok,
    print_warn,
)
from quote_intake.config import get_checker_config, load_checker_config

SERVICE_COLUMNS = ["service", "quantity", "unit", "confidence", "complete", "missing"]


@app.command("check", help="Check detected services for completeness.")
def check_cmd(
    ctx: typer.Context,
    detection_file: Path = typer.Argument(
        ..., help="Detection result JSON with 'services' and 'inputAnalysis'"
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Checker config YAML (overrides QUOTE_INTAKE_CHECKER_CONFIG)"
    ),
    business_rules: bool = typer.Option(
        False, "--business-rules", help="Also report business-rule warnings for complete services"
    ),
):
    """Validate one detection result and print the clarification decision."""
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    detected = load_json_file(detection_file)

    if config is not None:
        try:
            checker_config = load_checker_config(config)
        except ValueError as e:
            print_err(str(e))
            raise SystemExit(1)
        if checker_config is None:
            print_err(f"Checker config not found or empty: {config}")
            raise SystemExit(1)
    else:
        checker_config = get_checker_config()

    checker = CompletenessChecker(checker_config)
    result = checker.check(detected)
    summary = checker.get_completeness_summary(result.data)

    violations: Dict[str, List[str]] = {}
    if business_rules:
        for service in result.data.complete_services:
            service_violations = validate_business_rules(service)
            if service_violations:
                violations[service.name] = service_violations

    if ctx.obj["json"]:
        payload = result.model_dump(mode="json", by_alias=True)
        payload["summary"] = summary
        if business_rules:
            payload["businessRules"] = violations
        output_json(payload)
    elif not ctx.obj["quiet"]:
        if not result.success:
            print_err(f"Validation failed: {result.error}")
        else:
            services = result.data.complete_services + result.data.incomplete_services
            output_services_table(
                [
                    {
                        "service": s.name or "(unnamed)",
                        "quantity": "" if s.quantity is None else f"{s.quantity:g}",
                        "unit": s.unit or "",
                        "confidence": f"{s.confidence:.2f}",
                        "complete": "yes" if s.is_complete else "no",
                        "missing": ", ".join(s.missing_info),
                    }
                    for s in services
                ],
                title="Detected services",
                columns=SERVICE_COLUMNS,
            )

            if result.data.clarification_questions:
                console.print("\n[bold]Clarification questions[/bold]")
                for index, question in enumerate(result.data.clarification_questions, start=1):
                    console.print(f"  {index}. {question}")

            for name, service_violations in violations.items():
                for violation in service_violations:
                    print_warn(f"{name}: {violation}")

            if result.data.ready_for_mapping:
                print_ok(summary)
            else:
                print_warn(summary)

    if not result.success:
        raise SystemExit(1)
