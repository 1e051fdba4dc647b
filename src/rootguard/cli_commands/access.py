"""``rootguard access`` — query the role-based tool filter."""

from __future__ import annotations

import json
import sys

import click

from rootguard.cli_commands._output import console, load_settings, print_patterns_table


@click.group()
def access() -> None:
    """Inspect which tools a role may use."""


@access.command("check")
@click.argument("role")
@click.argument("tool")
@click.pass_context
def check(ctx: click.Context, role: str, tool: str) -> None:
    """Check whether ROLE may use TOOL (exit code 1 when denied)."""
    from rootguard.access.filter import ToolAccessFilter
    from rootguard.access.messages import denial_message

    access_filter = ToolAccessFilter(load_settings(ctx).access)

    if access_filter.can_use_tool(role, tool):
        console.print(f"[green]allowed[/green] {role} -> {tool}")
        return

    console.print(f"[red]denied[/red] {role} -> {tool}")
    console.print(denial_message(tool, role), markup=False)
    sys.exit(1)


@access.command("patterns")
@click.argument("role")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format.",
)
@click.pass_context
def patterns(ctx: click.Context, role: str, fmt: str) -> None:
    """Show the allow and deny patterns applying to ROLE."""
    from rootguard.access.filter import ToolAccessFilter

    access_filter = ToolAccessFilter(load_settings(ctx).access)
    allowed = access_filter.get_allowed_tool_patterns(role)
    forbidden = access_filter.get_forbidden_tool_patterns(role)

    if fmt == "json":
        console.print_json(json.dumps({"role": role, "allowed": allowed, "forbidden": forbidden}))
    else:
        print_patterns_table(role, allowed, forbidden)


@access.command("filter")
@click.argument("role")
@click.argument("tools", nargs=-1, required=True)
@click.pass_context
def filter_tools(ctx: click.Context, role: str, tools: tuple[str, ...]) -> None:
    """Print which of TOOLS remain available to ROLE, in order."""
    from rootguard.access.filter import ToolAccessFilter

    access_filter = ToolAccessFilter(load_settings(ctx).access)
    for tool in access_filter.filter_tools_for_role(role, [{"name": t} for t in tools]):
        console.print(tool["name"])
