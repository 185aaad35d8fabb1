"""Loading plugins from directories that hold a ``plugin.json`` manifest."""

from __future__ import annotations

import inspect
import os
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Union

from textforge.plugin.errors import ManifestError, PluginError, PluginLoadError
from textforge.plugin.manifest import Plugin, PluginManifest, PluginType
from textforge.plugin.sandbox import SandboxConfig

MANIFEST_NAME = "plugin.json"

PluginFactory = Callable[[Path, "PluginConfig"], Union[Plugin, Awaitable[Plugin]]]


@dataclass
class PluginConfig:
    """A plugin's manifest together with its sandbox settings."""

    manifest: PluginManifest
    sandbox: SandboxConfig = field(default_factory=SandboxConfig)

    def with_sandbox(self, config: SandboxConfig) -> PluginConfig:
        """A copy of this configuration using ``config`` as sandbox."""
        return replace(self, sandbox=config)


class PluginLoader:
    """Reads plugin manifests and builds plugins through per-type factories."""

    def __init__(self) -> None:
        self.search_paths: list[Path] = []
        self._factories: dict[PluginType, PluginFactory] = {}

    def add_search_path(self, path: str | os.PathLike[str]) -> None:
        self.search_paths.append(Path(path))

    def register_factory(self, plugin_type: PluginType, factory: PluginFactory) -> None:
        """Use ``factory(path, config)`` to build plugins of ``plugin_type``.

        The factory may return the plugin or an awaitable resolving to it.
        """
        self._factories[plugin_type] = factory

    def load_config(self, path: str | os.PathLike[str]) -> PluginConfig:
        """Read the manifest in the plugin directory ``path``."""
        manifest_path = Path(path) / MANIFEST_NAME
        if not manifest_path.exists():
            raise ManifestError(f"Missing {MANIFEST_NAME}")
        contents = manifest_path.read_text(encoding="utf-8")
        return PluginConfig(PluginManifest.from_json(contents))

    async def load(self, path: str | os.PathLike[str]) -> Plugin:
        """Load the plugin in directory ``path``."""
        directory = Path(path)
        config = self.load_config(directory)
        plugin_type = config.manifest.plugin_type
        factory = self._factories.get(plugin_type)
        if factory is None:
            raise PluginLoadError(f"no loader available for {plugin_type.value} plugins")
        plugin = factory(directory, config)
        if inspect.isawaitable(plugin):
            plugin = await plugin
        return plugin

    async def discover(self) -> list[Plugin]:
        """Load every plugin directory found in the search paths.

        Directories that fail to load are skipped.
        """
        plugins: list[Plugin] = []
        for search_path in self.search_paths:
            if not search_path.is_dir():
                continue
            for entry in sorted(search_path.iterdir()):
                if not entry.is_dir():
                    continue
                try:
                    plugins.append(await self.load(entry))
                except (PluginError, OSError):
                    continue
        return plugins