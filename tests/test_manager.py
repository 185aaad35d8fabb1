from typing import Any

import pytest

from textforge.plugin.errors import PluginExecutionError, PluginInitError
from textforge.plugin.manager import (
    PluginLoaded,
    PluginManager,
    PluginState,
    PluginStateChanged,
    PluginUnloaded,
)
from textforge.plugin.manifest import Plugin
from textforge.plugin.registry import PluginMetadata


def _metadata(name: str = "test") -> PluginMetadata:
    return PluginMetadata(name=name, version="0.1.0", description="Test plugin")


class RecordingPlugin(Plugin):
    def __init__(self, name: str = "test", fail_init: bool = False) -> None:
        self._metadata = _metadata(name)
        self.fail_init = fail_init
        self.initialize_count = 0
        self.shutdown_count = 0
        self.initialized = False
        self.history: list[tuple[str, Any]] = []

    @property
    def metadata(self) -> PluginMetadata:
        return self._metadata

    async def initialize(self) -> None:
        if self.fail_init:
            raise PluginInitError("boom")
        self.initialize_count += 1
        self.initialized = True

    async def shutdown(self) -> None:
        self.shutdown_count += 1
        self.initialized = False

    async def execute(self, command: str, args: Any) -> Any:
        self.history.append((command, args))
        return {"status": "ok", "command": command, "args": args, "initialized": self.initialized}


@pytest.mark.asyncio
async def test_plugin_lifecycle():
    manager = PluginManager()
    await manager.register_plugin(RecordingPlugin())
    assert await manager.get_plugin_state("test") == PluginState.LOADED

    await manager.initialize_plugin("test")
    assert await manager.get_plugin_state("test") == PluginState.RUNNING

    await manager.shutdown_plugin("test")
    assert await manager.get_plugin_state("test") == PluginState.DISABLED

    await manager.unregister_plugin("test")
    assert await manager.get_plugin_state("test") is None


@pytest.mark.asyncio
async def test_lifecycle_calls_plugin_hooks():
    manager = PluginManager()
    plugin = RecordingPlugin()
    await manager.register_plugin(plugin)
    assert plugin.initialize_count == 0
    await manager.initialize_plugin("test")
    assert plugin.initialize_count == 1
    assert plugin.shutdown_count == 0
    await manager.shutdown_plugin("test")
    assert plugin.shutdown_count == 1


@pytest.mark.asyncio
async def test_execute_command():
    manager = PluginManager()
    plugin = RecordingPlugin()
    await manager.register_plugin(plugin)
    result = await manager.execute_command("test", "test_command", {"arg": "value"})
    assert result["status"] == "ok"
    assert result["command"] == "test_command"
    assert result["args"]["arg"] == "value"
    assert plugin.history == [("test_command", {"arg": "value"})]


@pytest.mark.asyncio
async def test_execute_unknown_plugin_raises():
    manager = PluginManager()
    with pytest.raises(PluginExecutionError, match="Plugin missing not found"):
        await manager.execute_command("missing", "cmd", {})


@pytest.mark.asyncio
async def test_initialize_failure_propagates_and_keeps_state():
    manager = PluginManager()
    await manager.register_plugin(RecordingPlugin(fail_init=True))
    with pytest.raises(PluginInitError):
        await manager.initialize_plugin("test")
    assert await manager.get_plugin_state("test") == PluginState.LOADED


@pytest.mark.asyncio
async def test_unknown_names_are_ignored():
    manager = PluginManager()
    await manager.initialize_plugin("ghost")
    await manager.shutdown_plugin("ghost")
    await manager.unregister_plugin("ghost")
    assert await manager.get_plugin_state("ghost") is None
    assert await manager.get_plugins() == []


@pytest.mark.asyncio
async def test_subscriber_receives_events_in_order():
    manager = PluginManager()
    events = await manager.subscribe()
    await manager.register_plugin(RecordingPlugin())
    await manager.initialize_plugin("test")
    await manager.unregister_plugin("test")

    assert events.get_nowait() == PluginLoaded(_metadata())
    assert events.get_nowait() == PluginStateChanged(_metadata(), PluginState.RUNNING)
    assert events.get_nowait() == PluginUnloaded(_metadata())
    assert events.empty()


@pytest.mark.asyncio
async def test_get_plugins_lists_metadata():
    manager = PluginManager()
    await manager.register_plugin(RecordingPlugin("a"))
    await manager.register_plugin(RecordingPlugin("b"))
    names = sorted(meta.name for meta in await manager.get_plugins())
    assert names == ["a", "b"]