"""rootguard CLI entrypoint."""

from __future__ import annotations

import logging

import click

from rootguard import __version__


@click.group()
@click.version_option(version=__version__, prog_name="rootguard")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    envvar="ROOTGUARD_CONFIG",
    help="Settings YAML file (defaults are used when omitted).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, config: str | None, verbose: bool) -> None:
    """rootguard — role-based tool filtering and human approval for critical operations."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["config"] = config


# Register subcommands
from rootguard.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
