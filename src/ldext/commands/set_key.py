"""Command: edit the publicKey block of an actor document."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from ldext.commands._base import LdextCommand

if TYPE_CHECKING:
    from ldext.commands._context import AppContext


@click.command(
    "set-key",
    cls=LdextCommand,
    examples="""\
  ldext set-key actor.json --pem "$(cat public.pem)"
  ldext set-key actor.json --key-id https://example.com/actor#main-key
  ldext set-key actor.json --pem-file public.pem -o rotated.json""",
)
@click.argument("path", type=click.Path(path_type=Path, dir_okay=False))
@click.option("--key-id", default=None, help="New key IRI.")
@click.option("--owner", default=None, help="New owner IRI.")
@click.option("--pem", default=None, help="New PEM-encoded public key.")
@click.option(
    "--pem-file",
    type=click.Path(path_type=Path, exists=True, dir_okay=False),
    default=None,
    help="Read the new PEM from a file.",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Write here instead of updating PATH in place.",
)
@click.pass_obj
def set_key(
    app: AppContext,
    path: Path,
    key_id: str | None,
    owner: str | None,
    pem: str | None,
    pem_file: Path | None,
    output: Path | None,
) -> None:
    """Update key id, owner, or PEM and write the recomposed document."""
    if pem is not None and pem_file is not None:
        raise click.UsageError("Use either --pem or --pem-file, not both.")
    if pem_file is not None:
        pem = pem_file.read_text(encoding="utf-8")
    app.emit(app.service.set_key(path, key_id=key_id, owner=owner, pem=pem, output=output))
