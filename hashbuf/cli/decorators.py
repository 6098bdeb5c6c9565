"""
Click decorators for hashbuf CLI commands.
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any, TypeVar

import click

from ..core.exceptions import HashbufException

F = TypeVar("F", bound=Callable[..., Any])


def handle_errors(f: F) -> F:
    """Decorator turning library and I/O errors into Click errors (exit code 1).

    Usage:
        @click.command()
        @click.pass_obj
        @handle_errors
        def hash_cmd(ctx: HashbufContext, ...):
            ...
    """

    @functools.wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return f(*args, **kwargs)
        except HashbufException as e:
            raise click.ClickException(str(e)) from e
        except OSError as e:
            target = e.filename if e.filename is not None else "input"
            raise click.ClickException(f"{target}: {e.strerror or e}") from e

    return wrapper  # type: ignore[return-value]
