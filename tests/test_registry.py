from textforge.plugin.registry import PluginMetadata, PluginRegistry


def _metadata(name="test", version="0.1.0"):
    return PluginMetadata(name=name, version=version, description="Test plugin")


def test_plugin_registry():
    registry = PluginRegistry()
    registry.register(_metadata())
    assert registry.is_registered("test")

    retrieved = registry.get("test")
    assert retrieved.name == "test"
    assert retrieved.version == "0.1.0"

    registry.unregister("test")
    assert not registry.is_registered("test")


def test_get_unknown_returns_none():
    assert PluginRegistry().get("missing") is None


def test_register_replaces_same_name():
    registry = PluginRegistry()
    registry.register(_metadata(version="0.1.0"))
    registry.register(_metadata(version="0.2.0"))
    assert len(registry) == 1
    assert registry.get("test").version == "0.2.0"


def test_list_and_iteration():
    registry = PluginRegistry()
    registry.register(_metadata("a"))
    registry.register(_metadata("b"))
    names = sorted(m.name for m in registry.list())
    assert names == ["a", "b"]
    assert sorted(m.name for m in registry) == names
    assert "a" in registry
    assert "c" not in registry


def test_unregister_unknown_is_ignored():
    registry = PluginRegistry()
    registry.register(_metadata())
    registry.unregister("other")
    assert registry.is_registered("test")


def test_metadata_dict_round_trip():
    metadata = _metadata()
    assert PluginMetadata.from_dict(metadata.to_dict()) == metadata