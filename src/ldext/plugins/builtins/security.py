"""Built-in plugin registering the security vocabulary extensions."""

from __future__ import annotations

from typing import Any

import pluggy

from ldext.extensions.extended import Extended
from ldext.extensions.security import PublicKey, Signature

hookimpl = pluggy.HookimplMarker("ldext")


class SecurityPlugin:
    """Registers ``public-key`` and ``signature``."""

    @hookimpl
    def register_extensions(self) -> dict[str, type[Extended[Any, Any]]]:
        return {"public-key": PublicKey, "signature": Signature}
