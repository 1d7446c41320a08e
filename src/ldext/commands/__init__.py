"""Subcommand modules for ldext.

Provides register_commands() which uses deferred imports to keep
``ldext --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from ldext.commands.extensions_cmd import extensions
    from ldext.commands.inspect_cmd import inspect_cmd
    from ldext.commands.roundtrip import roundtrip
    from ldext.commands.set_key import set_key

    cli.add_command(extensions)
    cli.add_command(inspect_cmd)
    cli.add_command(roundtrip)
    cli.add_command(set_key)
