"""Permission checks and resource limits that isolate plugins."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path, PurePath

from textforge.plugin.errors import SandboxError
from textforge.plugin.manifest import (
    FileSystemPermission,
    NetworkPermission,
    Permission,
    ProcessPermission,
)

try:
    import resource
except ImportError:  # not available on Windows
    resource = None  # type: ignore[assignment]

logger = logging.getLogger(__name__)

FILE_SIZE_LIMIT = 10 * 1024 * 1024
OPEN_FILES_LIMIT = 50


@dataclass
class SandboxConfig:
    """What a sandboxed plugin may touch, and how much it may use."""

    allowed_paths: set[Path] = field(default_factory=set)
    allowed_hosts: set[str] = field(default_factory=set)
    allowed_ports: set[int] = field(default_factory=set)
    allowed_commands: set[str] = field(default_factory=set)
    memory_limit: int = 100 * 1024 * 1024
    cpu_limit: int = 1000

    def allow_paths(self, paths: Iterable[str | os.PathLike[str]]) -> SandboxConfig:
        self.allowed_paths.update(Path(p) for p in paths)
        return self

    def allow_hosts(self, hosts: Iterable[str]) -> SandboxConfig:
        self.allowed_hosts.update(hosts)
        return self

    def allow_ports(self, ports: Iterable[int]) -> SandboxConfig:
        ports = list(ports)
        for port in ports:
            if not 0 <= port <= 65535:
                raise ValueError(f"invalid port: {port}")
        self.allowed_ports.update(ports)
        return self

    def allow_commands(self, commands: Iterable[str]) -> SandboxConfig:
        self.allowed_commands.update(commands)
        return self

    def with_memory_limit(self, limit: int) -> SandboxConfig:
        """Set the address-space limit in bytes."""
        if limit < 0:
            raise ValueError("memory limit must not be negative")
        self.memory_limit = limit
        return self

    def with_cpu_limit(self, limit: int) -> SandboxConfig:
        """Set the CPU time limit."""
        if limit < 0:
            raise ValueError("CPU limit must not be negative")
        self.cpu_limit = limit
        return self


class Sandbox:
    """Checks plugin requests against a :class:`SandboxConfig`."""

    def __init__(self, config: SandboxConfig) -> None:
        self.config = config

    def check_fs_access(self, path: str | os.PathLike[str], read_only: bool = True) -> None:
        """Raise :class:`SandboxError` unless ``path`` lies under an allowed path."""
        target = PurePath(path)
        if not any(target.is_relative_to(allowed) for allowed in self.config.allowed_paths):
            raise SandboxError(f"Access to path {target} is not allowed")

    def check_network_access(self, host: str, port: int) -> None:
        if host not in self.config.allowed_hosts:
            raise SandboxError(f"Access to host {host} is not allowed")
        if port not in self.config.allowed_ports:
            raise SandboxError(f"Access to port {port} is not allowed")

    def check_command_execution(self, command: str) -> None:
        if command not in self.config.allowed_commands:
            raise SandboxError(f"Execution of command {command} is not allowed")

    def enforce_limits(self) -> None:
        """Apply memory, CPU, file size and open file limits to this process.

        The limits are permanent for the process. Where the platform offers
        no resource limits, a warning is logged instead.
        """
        if resource is None:
            logger.warning("Resource limits are not supported on this platform")
            return
        limits = (
            ("memory limit", resource.RLIMIT_AS, self.config.memory_limit),
            ("CPU limit", resource.RLIMIT_CPU, self.config.cpu_limit),
            ("file size limit", resource.RLIMIT_FSIZE, FILE_SIZE_LIMIT),
            ("open files limit", resource.RLIMIT_NOFILE, OPEN_FILES_LIMIT),
        )
        for label, kind, value in limits:
            try:
                resource.setrlimit(kind, (value, value))
            except (ValueError, OSError) as exc:
                raise SandboxError(f"Failed to set {label}: {exc}") from exc

    def verify_permissions(self, permissions: Sequence[Permission]) -> None:
        """Raise :class:`SandboxError` at the first permission not allowed."""
        for permission in permissions:
            match permission:
                case FileSystemPermission(paths=paths, read_only=read_only):
                    for path in paths:
                        self.check_fs_access(path, read_only)
                case NetworkPermission(hosts=hosts, ports=ports):
                    for host in hosts:
                        for port in ports:
                            self.check_network_access(host, port)
                case ProcessPermission(commands=commands):
                    for command in commands:
                        self.check_command_execution(command)
                case _:
                    raise SandboxError(f"Unknown permission: {permission!r}")