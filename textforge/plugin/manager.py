"""Plugin lifecycle management and plugin event broadcasting."""

from __future__ import annotations

import asyncio
import enum
import weakref
from dataclasses import dataclass
from typing import Any, Union

from textforge.plugin.errors import PluginExecutionError
from textforge.plugin.manifest import Plugin
from textforge.plugin.registry import PluginMetadata

EVENT_QUEUE_SIZE = 100


class PluginState(enum.Enum):
    """Where a plugin is in its lifecycle."""

    LOADED = "Loaded"
    RUNNING = "Running"
    DISABLED = "Disabled"
    ERROR = "Error"


@dataclass(frozen=True)
class PluginLoaded:
    """A plugin was registered."""

    metadata: PluginMetadata


@dataclass(frozen=True)
class PluginUnloaded:
    """A plugin was unregistered."""

    metadata: PluginMetadata


@dataclass(frozen=True)
class PluginStateChanged:
    """A plugin moved to a new state."""

    metadata: PluginMetadata
    state: PluginState


@dataclass(frozen=True)
class PluginFailed:
    """A plugin reported an error."""

    metadata: PluginMetadata
    error: str


PluginEvent = Union[PluginLoaded, PluginUnloaded, PluginStateChanged, PluginFailed]


class PluginManager:
    """Holds active plugins, tracks their states and reports changes to subscribers."""

    def __init__(self) -> None:
        self._plugins: dict[str, Plugin] = {}
        self._states: dict[str, PluginState] = {}
        self._subscribers: weakref.WeakSet[asyncio.Queue[PluginEvent]] = weakref.WeakSet()
        self._lock = asyncio.Lock()

    async def register_plugin(self, plugin: Plugin) -> None:
        """Add ``plugin`` in the loaded state, replacing one with the same name."""
        metadata = plugin.metadata
        async with self._lock:
            self._plugins[metadata.name] = plugin
            self._states[metadata.name] = PluginState.LOADED
        await self._emit(PluginLoaded(metadata))

    async def unregister_plugin(self, name: str) -> None:
        """Remove ``name``; unknown names are ignored."""
        async with self._lock:
            plugin = self._plugins.pop(name, None)
            if plugin is None:
                return
            self._states.pop(name, None)
        await self._emit(PluginUnloaded(plugin.metadata))

    async def initialize_plugin(self, name: str) -> None:
        """Initialise ``name`` and mark it running; unknown names are ignored."""
        await self._transition(name, PluginState.RUNNING)

    async def shutdown_plugin(self, name: str) -> None:
        """Shut ``name`` down and mark it disabled; unknown names are ignored."""
        await self._transition(name, PluginState.DISABLED)

    async def _transition(self, name: str, state: PluginState) -> None:
        async with self._lock:
            plugin = self._plugins.get(name)
            if plugin is None:
                return
            if state is PluginState.RUNNING:
                await plugin.initialize()
            else:
                await plugin.shutdown()
            self._states[name] = state
        await self._emit(PluginStateChanged(metadata=plugin.metadata, state=state))

    async def execute_command(self, name: str, command: str, args: Any) -> Any:
        """Run ``command`` on the plugin ``name``."""
        plugin = self._plugins.get(name)
        if plugin is None:
            raise PluginExecutionError(f"Plugin {name} not found")
        return await plugin.execute(command, args)

    async def subscribe(self) -> asyncio.Queue[PluginEvent]:
        """A queue receiving every event emitted from now on.

        Emitting waits while a subscriber's queue is full; a queue that is
        no longer referenced stops receiving events.
        """
        queue: asyncio.Queue[PluginEvent] = asyncio.Queue(maxsize=EVENT_QUEUE_SIZE)
        self._subscribers.add(queue)
        return queue

    async def _emit(self, event: PluginEvent) -> None:
        for queue in list(self._subscribers):
            await queue.put(event)

    async def get_plugin_state(self, name: str) -> PluginState | None:
        return self._states.get(name)

    async def get_plugins(self) -> list[PluginMetadata]:
        """Metadata of every registered plugin."""
        return [plugin.metadata for plugin in self._plugins.values()]