"""Locating ``ldext.toml``.

``LDEXT_CONFIG`` names the file outright. Without it, the nearest
``ldext.toml`` in the starting directory or any ancestor wins, so a
document tree can carry its own collision policy.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "ldext.toml"
CONFIG_ENV_VAR = "LDEXT_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file that applies to *start* (default: cwd), or None.

    A ``LDEXT_CONFIG`` that names a missing file yields None rather than
    falling back to the directory search.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
