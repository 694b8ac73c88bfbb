"""
Menu Validator CLI entry point.

Main command group for the menu-validator CLI.
"""

import click

from menu_validator import __version__


@click.group()
@click.version_option(version=__version__, prog_name="menu-validator")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """
    Menu Validator - detect cycles in menu hierarchies.

    Fetches every page of menus from a JSON endpoint, follows each root
    menu down to its leaves and reports which paths are valid and which
    close a cycle.

    Use 'menu-validator COMMAND --help' for more information on a command.
    """
    ctx.ensure_object(dict)


# Import and register subcommands
from menu_validator.cli.validate import validate  # noqa: E402
from menu_validator.cli.config import config  # noqa: E402

cli.add_command(validate)
cli.add_command(config)


def main() -> None:
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
