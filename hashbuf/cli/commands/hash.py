"""
Native Click implementation of the hash command.

Usage: hashbuf hash [-a ALGORITHM] [--double] [FILE]...
"""

from __future__ import annotations

import click

from ..context import HashbufContext
from ..decorators import handle_errors
from ._io import STDIN, digest_path

ALGORITHM_CHOICES = ["blake3", "sha256"]


@click.command("hash")
@click.option(
    "-a",
    "--algorithm",
    type=click.Choice(ALGORITHM_CHOICES, case_sensitive=False),
    default="blake3",
    show_default=True,
    help="Hash algorithm",
)
@click.option("--double", is_flag=True, help="Print hash(hash(data)) instead of hash(data)")
@click.argument("files", nargs=-1, type=click.Path(dir_okay=False, allow_dash=True))
@click.pass_obj
@handle_errors
def hash_cmd(ctx: HashbufContext, algorithm: str, double: bool, files: tuple[str, ...]) -> None:
    """Print the digest of each FILE (stdin when FILE is '-' or omitted).

    \b
    Examples:

        hashbuf hash data.bin

        hashbuf hash -a sha256 --double header.bin

        cat data.bin | hashbuf hash
    """
    algo = ctx.registry.require(algorithm)

    for path in files or (STDIN,):
        digest = digest_path(algo, path, ctx.chunk_size)
        if double:
            digest = algo.hash(digest)
        click.echo(f"{digest.hex()}  {path}")
