"""Text buffer holding the contents of one document."""

from __future__ import annotations

import os
from pathlib import Path

from textforge.core.errors import TextBufferError


class Buffer:
    """Mutable text with an optional backing file and a dirty flag.

    Offsets given to ``insert`` and ``delete`` are character indices.
    """

    def __init__(self, text: str = "") -> None:
        self._content = text
        self._path: Path | None = None
        self._dirty = False

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> Buffer:
        """Load a buffer from a UTF-8 file, keeping its line endings intact."""
        file_path = Path(path)
        with open(file_path, encoding="utf-8", newline="") as handle:
            buffer = cls(handle.read())
        buffer._path = file_path
        return buffer

    @property
    def text(self) -> str:
        """The current content."""
        return self._content

    @property
    def path(self) -> Path | None:
        """The file this buffer is saved to, if any."""
        return self._path

    def insert(self, offset: int, text: str) -> None:
        """Insert ``text`` before the character at ``offset``."""
        size = len(self._content)
        if not 0 <= offset <= size:
            raise TextBufferError(f"insert offset {offset} out of range 0..{size}")
        self._content = self._content[:offset] + text + self._content[offset:]
        self._dirty = True

    def delete(self, start: int, end: int) -> None:
        """Remove the characters in ``start..end``."""
        size = len(self._content)
        if not 0 <= start <= end <= size:
            raise TextBufferError(f"delete range {start}..{end} out of range 0..{size}")
        self._content = self._content[:start] + self._content[end:]
        self._dirty = True

    def __len__(self) -> int:
        """Length of the content in UTF-8 bytes."""
        return len(self._content.encode("utf-8"))

    @property
    def is_empty(self) -> bool:
        return not self._content

    @property
    def is_dirty(self) -> bool:
        """True when there are changes not yet saved."""
        return self._dirty

    def save(self) -> None:
        """Write the content to the backing file; without one, do nothing."""
        if self._path is None:
            return
        with open(self._path, "w", encoding="utf-8", newline="") as handle:
            handle.write(self._content)
        self._dirty = False


def create_buffer(text: str) -> Buffer:
    """Create a buffer holding ``text``."""
    return Buffer(text)