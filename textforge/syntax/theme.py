"""Colours, text styles and syntax highlighting themes."""

from __future__ import annotations

import string
from dataclasses import dataclass, replace
from typing import Any

from textforge.syntax.language import ThemeError

_HEX_DIGITS = frozenset(string.hexdigits)


@dataclass(frozen=True)
class Color:
    """An RGB colour with 8-bit channels."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b):
            if not 0 <= channel <= 255:
                raise ValueError(f"colour channel out of range 0..255: {channel}")

    @classmethod
    def from_hex(cls, hex_string: str) -> Color | None:
        """Parse ``#RRGGBB`` (the ``#`` is optional); None if malformed."""
        digits = hex_string.lstrip("#")
        if len(digits) != 6 or not set(digits) <= _HEX_DIGITS:
            return None
        return cls(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))

    def to_hex(self) -> str:
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"

    def to_dict(self) -> dict[str, int]:
        return {"r": self.r, "g": self.g, "b": self.b}


@dataclass(frozen=True)
class Style:
    """How a piece of highlighted text is drawn."""

    foreground: Color | None = None
    background: Color | None = None
    bold: bool = False
    italic: bool = False
    underline: bool = False

    def with_foreground(self, color: Color) -> Style:
        return replace(self, foreground=color)

    def with_background(self, color: Color) -> Style:
        return replace(self, background=color)

    def with_bold(self, bold: bool) -> Style:
        return replace(self, bold=bold)

    def with_italic(self, italic: bool) -> Style:
        return replace(self, italic=italic)

    def with_underline(self, underline: bool) -> Style:
        return replace(self, underline=underline)

    def to_dict(self) -> dict[str, Any]:
        return {
            "foreground": None if self.foreground is None else self.foreground.to_dict(),
            "background": None if self.background is None else self.background.to_dict(),
            "bold": self.bold,
            "italic": self.italic,
            "underline": self.underline,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Style:
        def color(value: Any) -> Color | None:
            return None if value is None else Color(value["r"], value["g"], value["b"])

        return cls(
            foreground=color(data.get("foreground")),
            background=color(data.get("background")),
            bold=bool(data.get("bold", False)),
            italic=bool(data.get("italic", False)),
            underline=bool(data.get("underline", False)),
        )


def _fg(hex_string: str) -> Style:
    color = Color.from_hex(hex_string)
    assert color is not None
    return Style(foreground=color)


class Theme:
    """A named set of styles keyed by syntax element (``keyword``, ``string``...)."""

    def __init__(self, name: str, dark: bool) -> None:
        self.name = name
        self.dark = dark
        self.default_style = Style()
        self._styles: dict[str, Style] = {}

    def set_style(self, element: str, style: Style) -> None:
        self._styles[element] = style

    def get_style(self, element: str) -> Style | None:
        return self._styles.get(element)

    @property
    def elements(self) -> list[str]:
        """Names of the elements that have a style."""
        return list(self._styles)

    @classmethod
    def _build(cls, name: str, dark: bool, palette: dict[str, str]) -> Theme:
        theme = cls(name, dark)
        for element, hex_string in palette.items():
            style = _fg(hex_string)
            if element == "keyword":
                style = style.with_bold(True)
            elif element == "comment":
                style = style.with_italic(True)
            theme.set_style(element, style)
        return theme

    @classmethod
    def dark_theme(cls) -> Theme:
        return cls._build("Dark", True, {
            "keyword": "#C678DD",
            "type": "#E5C07B",
            "function": "#61AFEF",
            "variable": "#ABB2BF",
            "string": "#98C379",
            "number": "#D19A66",
            "comment": "#5C6370",
            "operator": "#56B6C2",
        })

    @classmethod
    def light_theme(cls) -> Theme:
        return cls._build("Light", False, {
            "keyword": "#A626A4",
            "type": "#C18401",
            "function": "#4078F2",
            "variable": "#383A42",
            "string": "#50A14F",
            "number": "#986801",
            "comment": "#A0A1A7",
            "operator": "#0184BC",
        })

    @classmethod
    def default(cls) -> Theme:
        """The dark theme."""
        return cls.dark_theme()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "dark": self.dark,
            "default_style": self.default_style.to_dict(),
            "styles": {key: style.to_dict() for key, style in self._styles.items()},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Theme:
        try:
            theme = cls(str(data["name"]), bool(data["dark"]))
            theme.default_style = Style.from_dict(data["default_style"])
            for element, style in data["styles"].items():
                theme.set_style(element, Style.from_dict(style))
        except (KeyError, TypeError, AttributeError, ValueError) as exc:
            raise ThemeError(f"invalid theme data: {exc}") from exc
        return theme

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Theme):
            return NotImplemented
        return (
            self.name == other.name
            and self.dark == other.dark
            and self.default_style == other.default_style
            and self._styles == other._styles
        )

    def __repr__(self) -> str:
        return f"Theme(name={self.name!r}, dark={self.dark!r}, styles={len(self._styles)})"