"""Command: list registered extensions."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from ldext.commands._base import LdextCommand

if TYPE_CHECKING:
    from ldext.commands._context import AppContext


@click.command(
    cls=LdextCommand,
    examples="""\
  ldext extensions
  ldext --json extensions""",
)
@click.pass_obj
def extensions(app: AppContext) -> None:
    """List registered extensions and their reserved keys."""
    app.emit(app.service.list_extensions())
