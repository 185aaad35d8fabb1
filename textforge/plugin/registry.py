"""Descriptions of plugins and a registry keyed by plugin name."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class PluginMetadata:
    """Name, version and description of a plugin."""

    name: str
    version: str
    description: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "version": self.version, "description": self.description}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PluginMetadata:
        return cls(
            name=str(data["name"]),
            version=str(data["version"]),
            description=str(data["description"]),
        )


class PluginRegistry:
    """Thread-safe mapping of plugin names to their metadata."""

    def __init__(self) -> None:
        self._plugins: dict[str, PluginMetadata] = {}
        self._lock = threading.RLock()

    def register(self, metadata: PluginMetadata) -> None:
        """Add ``metadata``, replacing any plugin registered under the same name."""
        with self._lock:
            self._plugins[metadata.name] = metadata

    def unregister(self, name: str) -> None:
        """Remove ``name``; unknown names are ignored."""
        with self._lock:
            self._plugins.pop(name, None)

    def get(self, name: str) -> PluginMetadata | None:
        with self._lock:
            return self._plugins.get(name)

    def list(self) -> list[PluginMetadata]:
        """Metadata of every registered plugin."""
        with self._lock:
            return [*self._plugins.values()]

    def is_registered(self, name: str) -> bool:
        with self._lock:
            return name in self._plugins

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._plugins

    def __len__(self) -> int:
        with self._lock:
            return len(self._plugins)

    def __iter__(self) -> Iterator[PluginMetadata]:
        return iter(self.list())