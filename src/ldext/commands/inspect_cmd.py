"""Command: decompose one extension from a document and show its fields."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from ldext.commands._base import LdextCommand

if TYPE_CHECKING:
    from ldext.commands._context import AppContext


@click.command(
    "inspect",
    cls=LdextCommand,
    examples="""\
  ldext inspect actor.json
  ldext inspect actor.json -e signature
  ldext --json inspect actor.json""",
)
@click.argument("path", type=click.Path(path_type=Path, dir_okay=False))
@click.option(
    "-e",
    "--extension",
    "name",
    default="public-key",
    show_default=True,
    help="Registered extension name.",
)
@click.pass_obj
def inspect_cmd(app: AppContext, path: Path, name: str) -> None:
    """Show the typed fields of an extension inside a JSON document."""
    app.emit(app.service.inspect(path, name))
