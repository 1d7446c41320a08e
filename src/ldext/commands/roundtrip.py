"""Command: verify a document survives decompose/compose unchanged."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from ldext.commands._base import LdextCommand

if TYPE_CHECKING:
    from ldext.commands._context import AppContext


@click.command(
    cls=LdextCommand,
    examples="""\
  ldext roundtrip actor.json
  ldext roundtrip actor.json -e public-key -e signature
  ldext --json roundtrip actor.json -e signature -e public-key""",
)
@click.argument("path", type=click.Path(path_type=Path, dir_okay=False))
@click.option(
    "-e",
    "--extension",
    "names",
    multiple=True,
    help="Extension to decompose; repeat to nest. Default: public-key.",
)
@click.pass_obj
def roundtrip(app: AppContext, path: Path, names: tuple[str, ...]) -> None:
    """Decompose the named extensions, recompose, and compare with the original."""
    app.emit(app.service.roundtrip(path, list(names) or ["public-key"]))
