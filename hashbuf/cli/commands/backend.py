"""
Native Click implementation of the backend command.

Usage: hashbuf backend
"""

from __future__ import annotations

import click

from ...backends import get_selector
from ..context import HashbufContext
from ..decorators import handle_errors


@click.command("backend")
@click.pass_obj
@handle_errors
def backend(ctx: HashbufContext) -> None:
    """Show which backend each algorithm resolved to."""
    click.echo(f"Preference: {ctx.settings.backend.prefer}")
    for name in ctx.registry.available_algorithms:
        primitive = get_selector(name).resolve()
        click.echo(f"  {name:<8} {primitive.backend.value}")
