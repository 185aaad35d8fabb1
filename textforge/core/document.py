"""Documents: a buffer plus name, path, language and line-ending metadata."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass
from pathlib import Path

from textforge.core.buffer import Buffer


class LineEnding(enum.Enum):
    """Line ending styles."""

    UNIX = "\n"
    WINDOWS = "\r\n"
    MAC = "\r"

    @classmethod
    def detect(cls, text: str) -> LineEnding:
        """Guess the style used in ``text``; CRLF wins over the others."""
        if "\r\n" in text:
            return cls.WINDOWS
        if "\r" in text and "\n" not in text:
            return cls.MAC
        return cls.UNIX

    @classmethod
    def default(cls) -> LineEnding:
        """The platform's native style."""
        return cls.WINDOWS if os.name == "nt" else cls.UNIX

    def as_str(self) -> str:
        return self.value

    def normalize(self, text: str) -> str:
        """Rewrite every line ending in ``text`` to this style."""
        unix_text = text.replace("\r\n", "\n").replace("\r", "\n")
        if self is LineEnding.UNIX:
            return unix_text
        return unix_text.replace("\n", self.value)


@dataclass
class DocumentMetadata:
    """Descriptive data about a document."""

    name: str
    path: Path | None = None
    line_ending: LineEnding = LineEnding.UNIX
    language: str | None = None


def _extension(name: str | os.PathLike[str]) -> str | None:
    suffix = Path(name).suffix
    return suffix[1:] if suffix else None


class Document:
    """An editable document; each edit bumps its version."""

    def __init__(self, name: str) -> None:
        self._buffer = Buffer()
        self._metadata = DocumentMetadata(
            name=name,
            path=None,
            line_ending=LineEnding.default(),
            language=_extension(name),
        )
        self._version = 0

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> Document:
        """Open ``path``, detecting its line ending and language."""
        file_path = Path(path)
        buffer = Buffer.from_file(file_path)
        document = cls.__new__(cls)
        document._buffer = buffer
        document._metadata = DocumentMetadata(
            name=file_path.name or "Untitled",
            path=file_path,
            line_ending=LineEnding.detect(buffer.text),
            language=_extension(file_path),
        )
        document._version = 0
        return document

    @property
    def metadata(self) -> DocumentMetadata:
        return self._metadata

    @property
    def name(self) -> str:
        return self._metadata.name

    @property
    def path(self) -> Path | None:
        return self._metadata.path

    @property
    def language(self) -> str | None:
        return self._metadata.language

    @property
    def line_ending(self) -> LineEnding:
        return self._metadata.line_ending

    def set_line_ending(self, line_ending: LineEnding) -> None:
        """Choose the style applied on the next save."""
        self._metadata.line_ending = line_ending

    @property
    def version(self) -> int:
        """Number of edits made since the document was created or opened."""
        return self._version

    @property
    def text(self) -> str:
        return self._buffer.text

    def insert(self, position: int, text: str) -> None:
        self._buffer.insert(position, text)
        self._version += 1

    def delete(self, start: int, end: int) -> None:
        self._buffer.delete(start, end)
        self._version += 1

    def _replace_all(self, text: str) -> None:
        self._buffer.delete(0, len(self._buffer.text))
        self._buffer.insert(0, text)

    def save(self) -> None:
        """Normalise line endings and write to the document's file, if it has one."""
        if self._metadata.path is not None:
            text = self.text
            normalized = self._metadata.line_ending.normalize(text)
            if normalized != text:
                self._replace_all(normalized)
        self._buffer.save()

    def normalize_line_endings(self, line_ending: LineEnding) -> None:
        """Convert the content to ``line_ending``; a no-op when nothing changes."""
        text = self.text
        normalized = line_ending.normalize(text)
        if normalized != text:
            self._replace_all(normalized)
            self._metadata.line_ending = line_ending
            self._version += 1

    @property
    def is_dirty(self) -> bool:
        return self._buffer.is_dirty


def create_document(name: str) -> Document:
    """Create an empty document called ``name``."""
    return Document(name)