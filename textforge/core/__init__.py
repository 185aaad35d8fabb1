"""Buffers, documents, the multi-document editor, text positions and events."""

__all__ = ["errors", "buffer", "document", "text", "editor", "events"]