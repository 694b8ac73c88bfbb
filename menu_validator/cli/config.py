"""
Config CLI commands.

Show and change the stored validator configuration.
"""

import json
from typing import Optional

import click

from menu_validator.config import ConfigError, ValidatorConfig


# ============================================================================
# Config Command Group
# ============================================================================


@click.group()
@click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(dir_okay=False),
    help="Path to an alternative configuration file.",
)
@click.pass_context
def config(ctx: click.Context, config_path: Optional[str]) -> None:
    """
    Manage validator configuration.

    Values are stored in a YAML file; MENU_VALIDATOR_API_URL and
    MENU_VALIDATOR_LOG_LEVEL override the stored values.
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


def _load(ctx: click.Context) -> ValidatorConfig:
    try:
        return ValidatorConfig(config_path=ctx.obj.get("config_path"))
    except ConfigError as e:
        click.echo(click.style("Error: ", fg="red", bold=True) + str(e), err=True)
        ctx.exit(1)


@config.command("show")
@click.option("--json", "as_json", is_flag=True, default=False, help="Output as JSON.")
@click.pass_context
def show(ctx: click.Context, as_json: bool) -> None:
    """
    Display the effective configuration.

    Example:

        menu-validator config show
    """
    validator_config = _load(ctx)
    values = validator_config.to_dict()

    if as_json:
        click.echo(json.dumps({**values, "config_path": str(validator_config.config_path)}, indent=2))
        return

    click.echo(f"Config file: {validator_config.config_path}")
    for key, value in values.items():
        click.echo(f"  {key}: {value}")


@config.command("set")
@click.argument("key")
@click.argument("value")
@click.pass_context
def set_value(ctx: click.Context, key: str, value: str) -> None:
    """
    Set a configuration value and save it.

    Example:

        menu-validator config set api_url "https://example.com/challenges.json?id=2"
    """
    validator_config = _load(ctx)
    try:
        validator_config.set_value(key, value)
        validator_config.validate()
    except ConfigError as e:
        click.echo(click.style("Error: ", fg="red", bold=True) + str(e), err=True)
        ctx.exit(1)

    validator_config.save()
    click.echo(click.style("Updated ", fg="green") + f"{key} in {validator_config.config_path}")
