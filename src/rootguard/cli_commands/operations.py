"""``rootguard operations`` — critical operations and interactive approval."""

from __future__ import annotations

import asyncio
import json
import sys

import click

from rootguard.cli_commands._output import console, load_settings, print_operations_table


@click.group()
def operations() -> None:
    """Inspect critical operations that require approval."""


@operations.command("list")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format.",
)
def list_operations(fmt: str) -> None:
    """List every registered critical operation."""
    from rootguard.guard.operations import CRITICAL_OPERATIONS

    if fmt == "json":
        console.print_json(json.dumps([op.model_dump(mode="json") for op in CRITICAL_OPERATIONS]))
    else:
        print_operations_table(CRITICAL_OPERATIONS)


@operations.command("show")
@click.argument("operation_id")
def show(operation_id: str) -> None:
    """Show details of OPERATION_ID."""
    from rootguard.guard.operations import get_critical_operation_info

    info = get_critical_operation_info(operation_id)
    if info is None:
        console.print(f"[yellow]Not a critical operation: {operation_id}[/yellow]")
        sys.exit(1)

    console.print(f"[bold]{info.name}[/bold] ({info.id})")
    console.print(f"  Danger level: {info.danger_level.value}")
    console.print(f"  {info.description}")


def _parse_params(pairs: tuple[str, ...]) -> dict[str, str]:
    params: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {pair!r}", param_hint="--param")
        params[key] = value
    return params


@operations.command("request")
@click.argument("operation_id")
@click.option("--param", "-p", "pairs", multiple=True, help="KEY=VALUE shown to the approver.")
@click.option("--timeout", type=float, default=None, help="Seconds to wait for an answer.")
@click.pass_context
def request(ctx: click.Context, operation_id: str, pairs: tuple[str, ...], timeout: float | None) -> None:
    """Ask for approval of OPERATION_ID at the terminal."""
    from rootguard.authorization.delivery import ConsoleDelivery
    from rootguard.authorization.queue import AuthorizationQueue
    from rootguard.errors import AuthorizationError
    from rootguard.guard.guard import RootGuard

    settings = load_settings(ctx)
    params = _parse_params(pairs)

    async def _request() -> bool:
        queue = AuthorizationQueue(settings.authorization)
        guard = RootGuard(queue, config=settings.guard)
        guard.set_strategy(ConsoleDelivery(queue))
        try:
            if not guard.is_root_operation(operation_id):
                console.print(
                    f"[yellow]{operation_id} is not a critical operation; no approval needed.[/yellow]"
                )
                return False
            await guard.require_authorization(operation_id, params, timeout)
            return True
        finally:
            queue.clear()

    try:
        needed = asyncio.run(_request())
    except AuthorizationError as exc:
        console.print(f"[red]Operation denied:[/red] {exc}")
        sys.exit(1)

    if needed:
        console.print("[green]Operation authorized.[/green]")
