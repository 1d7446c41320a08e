"""Plugin system via pluggy.

Plugins contribute extension classes to the CLI and service layer.
Discovery: entry_points (pip-installed) in the ``ldext.plugins`` group.
INVARIANT: Plugin failures are warnings, never errors.
"""

from ldext.plugins.manager import PluginManager

__all__ = ["PluginManager"]
