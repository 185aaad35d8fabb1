"""Exception types raised by the core editing engine."""

from __future__ import annotations


class EditorError(Exception):
    """Base class for every error raised by the editing engine."""

    label = "Editor error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.label}: {self.message}"


class TextBufferError(EditorError):
    """A buffer operation was given an invalid offset or range."""

    label = "Buffer error"


class DocumentError(EditorError):
    """A document could not be found or manipulated."""

    label = "Document error"


class EventError(EditorError):
    """An event could not be delivered or decoded."""

    label = "Event error"