"""
Native Click implementation of the mac command.

Usage: hashbuf mac [-a ALGORITHM] --key-hex KEY [FILE]...
"""

from __future__ import annotations

import click

from ..context import HashbufContext
from ..decorators import handle_errors
from ._io import STDIN, read_path
from .hash import ALGORITHM_CHOICES


def _parse_key(key_hex: str) -> bytes:
    try:
        return bytes.fromhex(key_hex)
    except ValueError as e:
        raise click.BadParameter("key must be a hex string", param_hint="--key-hex") from e


@click.command("mac")
@click.option(
    "-a",
    "--algorithm",
    type=click.Choice(ALGORITHM_CHOICES, case_sensitive=False),
    default="blake3",
    show_default=True,
    help="blake3 (keyed hash, 32-byte key) or sha256 (HMAC, any key length)",
)
@click.option("--key-hex", required=True, help="Key as a hex string")
@click.argument("files", nargs=-1, type=click.Path(dir_okay=False, allow_dash=True))
@click.pass_obj
@handle_errors
def mac(ctx: HashbufContext, algorithm: str, key_hex: str, files: tuple[str, ...]) -> None:
    """Print the keyed MAC of each FILE (stdin when FILE is '-' or omitted).

    \b
    Examples:

        hashbuf mac --key-hex 000102...1f message.txt

        hashbuf mac -a sha256 --key-hex 4a656665 message.txt
    """
    algo = ctx.registry.require(algorithm)
    key = _parse_key(key_hex)

    for path in files or (STDIN,):
        click.echo(f"{algo.mac(key, read_path(path)).hex()}  {path}")
