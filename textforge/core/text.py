"""Line/column positions, text operations and conversions on plain strings."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Position:
    """A zero-based line and column (columns count characters)."""

    line: int
    column: int


@dataclass(frozen=True)
class TextRange:
    start: Position
    end: Position


@dataclass(frozen=True)
class InsertOperation:
    position: Position
    text: str


@dataclass(frozen=True)
class DeleteOperation:
    range: TextRange


@dataclass(frozen=True)
class ReplaceOperation:
    range: TextRange
    text: str


TextOperation = Union[InsertOperation, DeleteOperation, ReplaceOperation]


def _lines(text: str) -> list[str]:
    """Split on ``\\n``, dropping a trailing ``\\r`` and a final empty line."""
    if not text:
        return []
    parts = text.split("\n")
    if parts[-1] == "":
        parts.pop()
    return [part[:-1] if part.endswith("\r") else part for part in parts]


def _walk(text: str) -> Iterator[tuple[int, int, int]]:
    """Yield (byte offset, line, column) before each character and at the end."""
    line = column = offset = 0
    for char in text:
        yield offset, line, column
        if char == "\n":
            line += 1
            column = 0
        else:
            column += 1
        offset += len(char.encode("utf-8"))
    yield offset, line, column


def position_to_offset(text: str, position: Position) -> int | None:
    """Byte offset of ``position`` in ``text``, or None if it does not exist."""
    for offset, line, column in _walk(text):
        if line == position.line and column == position.column:
            return offset
    return None


def offset_to_position(text: str, offset: int) -> Position | None:
    """Position at byte ``offset``, or None if it is out of range or mid-character."""
    if offset < 0 or offset > len(text.encode("utf-8")):
        return None
    for current, line, column in _walk(text):
        if current == offset:
            return Position(line, column)
    return None


def get_line(text: str, line_index: int) -> str | None:
    """The line at ``line_index`` without its terminator."""
    lines = _lines(text)
    if 0 <= line_index < len(lines):
        return lines[line_index]
    return None


def get_line_range(text: str, start: int, end: int) -> range:
    """Range of line indices covering the byte range ``start..end``."""
    start_pos = offset_to_position(text, start)
    end_pos = offset_to_position(text, end)
    first = start_pos.line if start_pos is not None else 0
    last = end_pos.line + 1 if end_pos is not None else line_count(text)
    return range(first, last)


def line_count(text: str) -> int:
    return len(_lines(text))


def line_length(text: str, line_index: int) -> int | None:
    """Number of characters in the line at ``line_index``."""
    line = get_line(text, line_index)
    return None if line is None else len(line)