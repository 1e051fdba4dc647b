"""``rootguard roles`` — channel-to-role resolution."""

from __future__ import annotations

import click

from rootguard.cli_commands._output import console, load_settings, print_roles_table


@click.group()
def roles() -> None:
    """Inspect channel role assignments."""


@roles.command("resolve")
@click.argument("channel")
@click.pass_context
def resolve(ctx: click.Context, channel: str) -> None:
    """Print the role assigned to CHANNEL."""
    from rootguard.access.roles import RoleResolver

    channels = load_settings(ctx).channels
    resolver = RoleResolver(channels.roles, default_role=channels.default_role)
    console.print(resolver.resolve(channel))


@roles.command("list")
@click.pass_context
def list_roles(ctx: click.Context) -> None:
    """List configured channel roles."""
    channels = load_settings(ctx).channels
    print_roles_table({c.lower(): r for c, r in channels.roles.items()}, channels.default_role)
