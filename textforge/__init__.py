"""Text editing engine: core documents and events, syntax languages and themes, plugins and language server configuration."""

__version__ = "0.1.0"

__all__ = ["core", "syntax", "plugin", "lsp"]