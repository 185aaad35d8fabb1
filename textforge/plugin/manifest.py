"""The plugin interface and the manifest that describes a plugin."""

from __future__ import annotations

import abc
import enum
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

from textforge.plugin.errors import ManifestError
from textforge.plugin.registry import PluginMetadata


class Plugin(abc.ABC):
    """Interface every plugin implements."""

    @property
    @abc.abstractmethod
    def metadata(self) -> PluginMetadata:
        """The plugin's metadata."""

    @abc.abstractmethod
    async def initialize(self) -> None:
        """Prepare the plugin for use."""

    @abc.abstractmethod
    async def shutdown(self) -> None:
        """Release the plugin's resources."""

    @abc.abstractmethod
    async def execute(self, command: str, args: Any) -> Any:
        """Run ``command`` with JSON-compatible ``args`` and return a JSON-compatible result."""


class PluginType(enum.Enum):
    """How a plugin is packaged."""

    NATIVE = "Native"
    WASM = "Wasm"


@dataclass(frozen=True)
class PluginDependency:
    """Another plugin this one needs."""

    name: str
    version_req: str


@dataclass(frozen=True)
class FileSystemPermission:
    """Access to files under the given paths."""

    paths: tuple[Path, ...]
    read_only: bool

    def __post_init__(self) -> None:
        object.__setattr__(self, "paths", tuple(Path(p) for p in self.paths))


@dataclass(frozen=True)
class NetworkPermission:
    """Access to the given hosts on the given ports."""

    hosts: tuple[str, ...]
    ports: tuple[int, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "hosts", tuple(self.hosts))
        object.__setattr__(self, "ports", tuple(self.ports))
        for port in self.ports:
            if not isinstance(port, int) or isinstance(port, bool) or not 0 <= port <= 65535:
                raise ValueError(f"invalid port: {port!r}")


@dataclass(frozen=True)
class ProcessPermission:
    """Permission to run the given commands."""

    commands: tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "commands", tuple(self.commands))


Permission = Union[FileSystemPermission, NetworkPermission, ProcessPermission]


def _require(data: Any, key: str, kind: type | tuple[type, ...], where: str) -> Any:
    if not isinstance(data, dict):
        raise ManifestError(f"{where} must be an object")
    if key not in data:
        raise ManifestError(f"missing field `{key}` in {where}")
    value = data[key]
    if not isinstance(value, kind):
        raise ManifestError(f"field `{key}` in {where} has the wrong type")
    return value


def _string_list(data: Any, key: str, where: str) -> list[str]:
    values = _require(data, key, list, where)
    if not all(isinstance(v, str) for v in values):
        raise ManifestError(f"field `{key}` in {where} must hold strings")
    return values


def _permission_to_dict(permission: Permission) -> dict[str, Any]:
    match permission:
        case FileSystemPermission(paths=paths, read_only=read_only):
            return {"FileSystem": {"paths": [str(p) for p in paths], "read_only": read_only}}
        case NetworkPermission(hosts=hosts, ports=ports):
            return {"Network": {"hosts": list(hosts), "ports": list(ports)}}
        case ProcessPermission(commands=commands):
            return {"Process": {"commands": list(commands)}}
    raise ManifestError(f"unknown permission: {permission!r}")


def _permission_from_dict(data: Any) -> Permission:
    if not isinstance(data, dict) or len(data) != 1:
        raise ManifestError(f"permission must be a single-entry object, got {data!r}")
    kind, body = next(iter(data.items()))
    where = f"permission {kind}"
    if kind == "FileSystem":
        return FileSystemPermission(
            paths=tuple(_string_list(body, "paths", where)),
            read_only=_require(body, "read_only", bool, where),
        )
    if kind == "Network":
        ports = _require(body, "ports", list, where)
        try:
            return NetworkPermission(hosts=tuple(_string_list(body, "hosts", where)), ports=tuple(ports))
        except ValueError as exc:
            raise ManifestError(str(exc)) from exc
    if kind == "Process":
        return ProcessPermission(commands=tuple(_string_list(body, "commands", where)))
    raise ManifestError(f"unknown permission kind: {kind}")


@dataclass(frozen=True)
class PluginManifest:
    """The contents of a plugin's ``plugin.json``."""

    name: str
    version: str
    description: str
    author: str
    license: str
    entry_point: str
    plugin_type: PluginType
    dependencies: tuple[PluginDependency, ...] = ()
    permissions: tuple[Permission, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "dependencies", tuple(self.dependencies))
        object.__setattr__(self, "permissions", tuple(self.permissions))

    @property
    def metadata(self) -> PluginMetadata:
        """The metadata part of this manifest."""
        return PluginMetadata(name=self.name, version=self.version, description=self.description)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "description": self.description,
            "author": self.author,
            "license": self.license,
            "entry_point": self.entry_point,
            "plugin_type": self.plugin_type.value,
            "dependencies": [
                {"name": dep.name, "version_req": dep.version_req} for dep in self.dependencies
            ],
            "permissions": [_permission_to_dict(p) for p in self.permissions],
        }

    @classmethod
    def from_dict(cls, data: Any) -> PluginManifest:
        """Build a manifest; every field is required."""
        where = "manifest"
        strings = {
            key: _require(data, key, str, where)
            for key in ("name", "version", "description", "author", "license", "entry_point")
        }
        type_name = _require(data, "plugin_type", str, where)
        try:
            plugin_type = PluginType(type_name)
        except ValueError:
            raise ManifestError(f"unknown plugin type: {type_name}") from None
        dependencies = tuple(
            PluginDependency(
                name=_require(dep, "name", str, "dependency"),
                version_req=_require(dep, "version_req", str, "dependency"),
            )
            for dep in _require(data, "dependencies", list, where)
        )
        permissions = tuple(
            _permission_from_dict(p) for p in _require(data, "permissions", list, where)
        )
        return cls(
            **strings,
            plugin_type=plugin_type,
            dependencies=dependencies,
            permissions=permissions,
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: str) -> PluginManifest:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ManifestError(str(exc)) from exc
        return cls.from_dict(data)