"""
Click-based CLI for hashbuf.

Usage:
    from hashbuf.cli import cli
    cli()  # Invokes the CLI
"""

from __future__ import annotations

import click

from ..core.exceptions import HashbufException
from .context import HashbufContext

# Version is loaded from package metadata
try:
    from importlib.metadata import version

    __version__ = version("hashbuf")
except Exception:
    __version__ = "0.2.0"


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="hashbuf")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """hashbuf - BLAKE3 and SHA-256 digests over native or portable backends

    \b
    Commands:
        hashbuf hash FILE...          Print digests
        hashbuf mac --key-hex K FILE  Print keyed MACs
        hashbuf backend               Show the resolved backends

    \b
    Configuration:
        HASHBUF_BACKEND__PREFER=portable   Force the pure-Python backend
        [tool.hashbuf] in pyproject.toml   Same settings from a file
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)
    elif ctx.obj is None:
        try:
            ctx.obj = HashbufContext.create()
        except HashbufException as e:
            raise click.ClickException(str(e)) from e


def register_commands() -> None:
    """Register all CLI commands with the main group."""
    from .commands import COMMANDS

    for cmd in COMMANDS:
        cli.add_command(cmd)


register_commands()


__all__ = [
    "HashbufContext",
    "__version__",
    "cli",
    "register_commands",
]
