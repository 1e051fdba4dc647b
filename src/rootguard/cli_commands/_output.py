"""Shared CLI output formatters and settings helpers."""

from __future__ import annotations

import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from rootguard.config.models import RootGuardSettings
from rootguard.guard.models import CriticalOperation  # noqa: TC001

console = Console()

_DANGER_STYLES = {"medium": "yellow", "high": "red", "critical": "bold red"}


def load_settings(ctx: click.Context) -> RootGuardSettings:
    """Return settings from the group's ``--config`` file, or the defaults."""
    from rootguard.config.loader import SettingsLoader
    from rootguard.errors import ConfigError

    path: str | None = (ctx.obj or {}).get("config")
    if path is None:
        return RootGuardSettings()

    try:
        return SettingsLoader(Path(path)).load()
    except ConfigError as exc:
        console.print(f"[red]Configuration error:[/red] {escape(str(exc))}")
        sys.exit(2)


def print_patterns_table(role: str, allowed: list[str], forbidden: list[str]) -> None:
    """Pretty-print the allow/deny patterns that apply to *role*."""
    table = Table(title=f"Tool patterns for role '{role}'")
    table.add_column("Pattern", style="cyan")
    table.add_column("Effect")

    for pattern in forbidden:
        table.add_row(pattern, "[red]deny[/red]")
    for pattern in allowed:
        table.add_row(pattern, "[green]allow[/green]")

    console.print(table)


def print_roles_table(mapping: dict[str, str], default_role: str) -> None:
    table = Table(title="Channel roles")
    table.add_column("Channel", style="cyan")
    table.add_column("Role")

    for channel, role in sorted(mapping.items()):
        table.add_row(channel, role)
    table.add_row("(any other)", default_role)

    console.print(table)


def print_operations_table(operations: list[CriticalOperation] | tuple[CriticalOperation, ...]) -> None:
    """Pretty-print the critical operation registry."""
    table = Table(title="Critical Operations")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Danger")
    table.add_column("Description")

    for op in operations:
        style = _DANGER_STYLES.get(op.danger_level.value, "")
        table.add_row(
            op.id,
            op.name,
            f"[{style}]{op.danger_level.value}[/{style}]" if style else op.danger_level.value,
            _truncate(op.description),
        )

    console.print(table)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
