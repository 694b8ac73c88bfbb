"""
Validate CLI command.

Fetches menus from the configured endpoint (or reads them from a local
JSON file), classifies every root-to-leaf path and prints the report.
"""

import json
import sys
from typing import Optional

import click

from menu_validator.api_client import ApiError, ConnectionError as MenuConnectionError
from menu_validator.config import ConfigError, ValidatorConfig
from menu_validator.parser import MenuParseError
from menu_validator.report import to_json, write_report
from menu_validator.report_renderer import ReportRenderer, build_report_context
from menu_validator.validator import run_validation, setup_logging


def _fail(message: str) -> None:
    click.echo(click.style("Error: ", fg="red", bold=True) + message, err=True)
    sys.exit(1)


@click.command("validate")
@click.option(
    "--url",
    "-u",
    default=None,
    help="Menu endpoint URL (defaults to the configured api_url).",
)
@click.option(
    "--input",
    "-i",
    "input_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="Read page documents from a local JSON file instead of the endpoint.",
)
@click.option(
    "--output",
    "-o",
    default=None,
    type=click.Path(dir_okay=False),
    help="Write the JSON report to this file instead of stdout.",
)
@click.option(
    "--html",
    "html_path",
    default=None,
    type=click.Path(dir_okay=False),
    help="Also render an HTML report to this path.",
)
@click.option(
    "--per-branch-validity/--shared-sibling-validity",
    default=None,
    help="Scope invalidation to the offending branch only "
         "(default: an invalid child also invalidates its later siblings).",
)
@click.option(
    "--indent",
    default=2,
    type=click.IntRange(min=0),
    show_default=True,
    help="JSON indentation.",
)
@click.option(
    "--summary",
    is_flag=True,
    default=False,
    help="Print counts instead of the JSON report.",
)
@click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(dir_okay=False),
    help="Path to an alternative configuration file.",
)
def validate(
    url: Optional[str],
    input_path: Optional[str],
    output: Optional[str],
    html_path: Optional[str],
    per_branch_validity: Optional[bool],
    indent: int,
    summary: bool,
    config_path: Optional[str],
) -> None:
    """Validate menus and report valid and invalid paths.

    \b
    Examples:
        menu-validator validate
        menu-validator validate --url "https://example.com/challenges.json?id=2"
        menu-validator validate --input menus.json --output report.json
        menu-validator validate --html report.html --summary
    """
    # --- Step 1: Load config ---
    try:
        config = ValidatorConfig(config_path=config_path)
    except ConfigError as e:
        _fail(f"Failed to load config: {e}")

    setup_logging(config.log_level)

    if url and input_path:
        _fail("--url and --input cannot be used together.")

    if per_branch_validity is None:
        per_branch_validity = config.per_branch_validity

    endpoint = url or config.api_url
    if not input_path and not endpoint:
        _fail("No menu endpoint configured. Pass --url or set api_url.")

    # --- Step 2: Load and classify ---
    try:
        if input_path:
            run = run_validation(
                input_path=input_path,
                per_branch_validity=per_branch_validity,
            )
        else:
            run = run_validation(
                url=endpoint,
                timeout=config.timeout_seconds,
                per_branch_validity=per_branch_validity,
            )
    except MenuConnectionError as e:
        _fail(f"Could not reach menu endpoint: {e}")
    except ApiError as e:
        _fail(str(e))
    except MenuParseError as e:
        _fail(f"Invalid menu data: {e}")

    result = run.result

    # --- Step 3: Report ---
    try:
        if output:
            write_report(result, output, indent=indent)
            click.echo(click.style("Report written: ", fg="green") + output, err=True)

        if html_path:
            renderer = ReportRenderer()
            renderer.render_report(build_report_context(result, run.source), html_path)
            click.echo(click.style("HTML report written: ", fg="green") + html_path, err=True)
    except OSError as e:
        _fail(f"Failed to write report: {e}")

    if summary:
        roots = result.roots()
        click.echo(json.dumps({
            "source": run.source,
            "menus": len(run.collection.records),
            "valid_paths": result.valid_count,
            "invalid_paths": result.invalid_count,
            "valid_roots": roots["valid_roots"],
            "invalid_roots": roots["invalid_roots"],
        }, indent=indent))
    elif not output:
        click.echo(to_json(result, indent=indent))
