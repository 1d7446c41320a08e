"""Pluggy hook specifications for ldext."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pluggy

if TYPE_CHECKING:
    from ldext.extensions.extended import Extended

hookspec = pluggy.HookspecMarker("ldext")


class LdextHookSpec:
    """Hook specifications for the ldext plugin system."""

    @hookspec
    def register_extensions(self) -> dict[str, type[Extended[Any, Any]]] | None:
        """Return name -> Extended subclass mappings for the extension registry."""
