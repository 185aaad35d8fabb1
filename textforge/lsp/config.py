"""Language server configurations and the registry keyed by language id."""

from __future__ import annotations

import threading
from dataclasses import dataclass, replace
from pathlib import PurePosixPath
from typing import Any

DEFAULT_ROOT_URI = PurePosixPath("/").as_uri()


@dataclass(frozen=True)
class LspConfig:
    """How to start and talk to the language server for one language."""

    name: str
    language_id: str
    command: str
    root_uri: str
    initialization_options: Any = None

    def with_initialization_options(self, options: Any) -> LspConfig:
        """A copy of this configuration carrying ``options``."""
        return replace(self, initialization_options=options)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "language_id": self.language_id,
            "command": self.command,
            "root_uri": self.root_uri,
            "initialization_options": self.initialization_options,
        }

    @classmethod
    def from_dict(cls, data: Any) -> LspConfig:
        if not isinstance(data, dict):
            raise ValueError(f"LSP configuration must be an object, got {data!r}")
        values = {}
        for key in ("name", "language_id", "command", "root_uri"):
            if key not in data:
                raise ValueError(f"missing field `{key}` in LSP configuration")
            if not isinstance(data[key], str):
                raise ValueError(f"field `{key}` in LSP configuration must be a string")
            values[key] = data[key]
        return cls(**values, initialization_options=data.get("initialization_options"))


_SERVERS: dict[str, LspConfig] = {}
_LOCK = threading.RLock()


def register_server(config: LspConfig) -> None:
    """Register ``config`` under its language id, replacing any earlier one."""
    with _LOCK:
        _SERVERS[config.language_id] = config


def get_server(language_id: str) -> LspConfig | None:
    """The configuration registered for ``language_id``, if any."""
    with _LOCK:
        return _SERVERS.get(language_id)


def register_default_servers() -> None:
    """Register servers for Rust, Python, TypeScript and JavaScript."""
    root_uri = DEFAULT_ROOT_URI
    register_server(
        LspConfig("rust-analyzer", "rust", "rust-analyzer", root_uri)
        .with_initialization_options({"checkOnSave": {"command": "clippy"}})
    )
    register_server(LspConfig("python-language-server", "python", "pylsp", root_uri))
    for language_id in ("typescript", "javascript"):
        register_server(
            LspConfig(
                "typescript-language-server",
                language_id,
                "typescript-language-server --stdio",
                root_uri,
            )
        )


def init() -> None:
    """Set up LSP support by registering the default language servers."""
    register_default_servers()