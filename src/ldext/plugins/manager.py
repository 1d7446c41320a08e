"""Plugin discovery, loading, and the extension registry.

The core has no runtime registry: an extension is just an ``Extended``
subclass. The registry here only maps CLI-facing names (``public-key``)
to those classes so commands can pick extensions by name.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any

import pluggy

from ldext.extensions.extended import Extended
from ldext.plugins.builtins.security import SecurityPlugin
from ldext.plugins.hookspecs import LdextHookSpec

PROJECT_NAME = "ldext"
ENTRY_POINT_GROUP = "ldext.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and extension registration."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(LdextHookSpec)
        self._extensions: dict[str, type[Extended[Any, Any]]] = {}
        self._loaded: bool = False

    def discover_and_load(
        self,
        *,
        entry_points: bool = True,
        disabled: list[str] | None = None,
    ) -> list[str]:
        """Register built-ins, optionally load entry points, collect extensions.

        Plugins named in *disabled* are blocked before loading.
        Returns a list of loaded plugin names.
        """
        for name in disabled or []:
            self._pm.set_blocked(name)
        if not self._pm.is_blocked("security"):
            self.register_plugin(SecurityPlugin(), name="security")
        if entry_points:
            self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
            self._normalize_plugin_instances()
        for _, plugin in self._pm.list_name_plugin():
            if plugin is not None:
                self._collect_extensions(plugin)
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly (e.g. built-in plugins)."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        if self._loaded:
            self._collect_extensions(plugin)
        logger.debug("Registered plugin: %s", resolved_name)

    def register_extension(self, name: str, extension: type[Extended[Any, Any]]) -> None:
        """Add *extension* to the registry under *name*.

        Raises:
            TypeError: *extension* is not an ``Extended`` subclass.
            ValueError: *name* is blank or already taken by another class.
        """
        normalized = name.strip()
        if not normalized:
            msg = "Extension name must not be empty"
            raise ValueError(msg)
        if not (inspect.isclass(extension) and issubclass(extension, Extended)):
            msg = f"Extension {normalized!r} must be an Extended subclass"
            raise TypeError(msg)
        existing = self._extensions.get(normalized)
        if existing is not None and existing is not extension:
            msg = f"Extension {normalized!r} is already registered"
            raise ValueError(msg)
        self._extensions[normalized] = extension

    @property
    def extensions(self) -> dict[str, type[Extended[Any, Any]]]:
        """Registered extensions by name (a copy)."""
        return dict(self._extensions)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins in registration order."""
        return [name for name, plugin in self._pm.list_name_plugin() if plugin is not None]

    def _collect_extensions(self, plugin: object) -> None:
        """Register extensions exposed by a single plugin instance."""
        plugin_name = self._pm.get_name(plugin) or plugin.__class__.__name__
        hook = getattr(plugin, "register_extensions", None)
        if hook is None:
            return

        try:
            extension_map = hook()
        except Exception:
            logger.warning(
                "Failed to collect extensions from plugin %s",
                plugin_name,
                exc_info=True,
            )
            return

        if extension_map is None:
            return
        if not isinstance(extension_map, dict):
            logger.warning("Plugin %s returned non-dict extension registrations", plugin_name)
            return

        for name, extension in extension_map.items():
            try:
                self.register_extension(name, extension)
            except (TypeError, ValueError):
                logger.warning(
                    "Skipping extension registration %r from plugin %s",
                    name,
                    plugin_name,
                    exc_info=True,
                )

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly. Hook dispatch
        against class objects leaves ``self`` unbound and fails at runtime.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)

            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)
