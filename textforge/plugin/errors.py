"""Exception types raised by the plugin system."""

from __future__ import annotations


class PluginError(Exception):
    """Base class for every error raised by the plugin system."""

    label = "Plugin error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.label}: {self.message}"


class PluginLoadError(PluginError):
    """A plugin could not be loaded."""

    label = "Failed to load plugin"


class PluginInitError(PluginError):
    """A plugin failed to initialise."""

    label = "Plugin initialization failed"


class PluginExecutionError(PluginError):
    """A plugin command failed or could not be run."""

    label = "Plugin execution error"


class ManifestError(PluginError):
    """A plugin manifest is missing or malformed."""

    label = "Invalid plugin manifest"


class SandboxError(PluginError):
    """A plugin asked for something its sandbox does not allow."""

    label = "Sandbox error"