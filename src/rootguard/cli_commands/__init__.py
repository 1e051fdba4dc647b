"""CLI subcommand registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all subcommands on the CLI group."""
    from rootguard.cli_commands.access import access
    from rootguard.cli_commands.operations import operations
    from rootguard.cli_commands.roles import roles

    cli.add_command(access)
    cli.add_command(roles)
    cli.add_command(operations)
