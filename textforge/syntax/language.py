"""Language definitions and the registry of supported languages."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any


class SyntaxSupportError(Exception):
    """Base class for errors raised by syntax support."""

    label = "Syntax error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.label}: {self.message}"


class UnsupportedLanguageError(SyntaxSupportError):
    """No support exists for the requested language."""

    label = "Language not supported"


class ParserError(SyntaxSupportError):
    """Source text could not be parsed."""

    label = "Parser error"


class HighlightError(SyntaxSupportError):
    """Highlighting could not be carried out."""

    label = "Highlighting error"


class ThemeError(SyntaxSupportError):
    """A theme is malformed or could not be applied."""

    label = "Theme error"


@dataclass(frozen=True)
class Comments:
    """Comment tokens of a language."""

    line: str | None = None
    block_start: str | None = None
    block_end: str | None = None


@dataclass(frozen=True)
class Brackets:
    """Opening brackets paired with their closing brackets."""

    pairs: tuple[tuple[str, str], ...] = ()

    def closing_for(self, opening: str) -> str | None:
        """The closing bracket matching ``opening``, if it is one."""
        return next((close for open_, close in self.pairs if open_ == opening), None)


@dataclass(frozen=True)
class IndentationRules:
    """Patterns after which indentation increases or decreases."""

    increase_indent: tuple[str, ...] = ()
    decrease_indent: tuple[str, ...] = ()


@dataclass(frozen=True)
class LanguageConfig:
    """Everything the editor knows about a language."""

    name: str
    extensions: tuple[str, ...] = ()
    comments: Comments = field(default_factory=Comments)
    brackets: Brackets = field(default_factory=Brackets)
    indentation: IndentationRules = field(default_factory=IndentationRules)

    def to_dict(self) -> dict[str, Any]:
        """A JSON-compatible representation."""
        return {
            "name": self.name,
            "extensions": list(self.extensions),
            "comments": {
                "line": self.comments.line,
                "block_start": self.comments.block_start,
                "block_end": self.comments.block_end,
            },
            "brackets": {"pairs": [list(pair) for pair in self.brackets.pairs]},
            "indentation": {
                "increase_indent": list(self.indentation.increase_indent),
                "decrease_indent": list(self.indentation.decrease_indent),
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LanguageConfig:
        """Build a configuration from the output of :meth:`to_dict`."""
        try:
            comments = data["comments"]
            indentation = data["indentation"]
            pairs = []
            for pair in data["brackets"]["pairs"]:
                opening, closing = pair
                if not (isinstance(opening, str) and len(opening) == 1
                        and isinstance(closing, str) and len(closing) == 1):
                    raise ValueError(f"bracket pair must be two characters: {pair!r}")
                pairs.append((opening, closing))
            return cls(
                name=str(data["name"]),
                extensions=tuple(data["extensions"]),
                comments=Comments(
                    line=comments.get("line"),
                    block_start=comments.get("block_start"),
                    block_end=comments.get("block_end"),
                ),
                brackets=Brackets(tuple(pairs)),
                indentation=IndentationRules(
                    increase_indent=tuple(indentation["increase_indent"]),
                    decrease_indent=tuple(indentation["decrease_indent"]),
                ),
            )
        except (KeyError, TypeError, AttributeError) as exc:
            raise ValueError(f"invalid language configuration: {exc}") from exc


class Language:
    """A programming language known to the editor."""

    __slots__ = ("_config",)

    def __init__(self, config: LanguageConfig) -> None:
        self._config = config

    @property
    def config(self) -> LanguageConfig:
        """The language's configuration."""
        return self._config

    @property
    def name(self) -> str:
        return self._config.name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Language):
            return NotImplemented
        return self._config == other._config

    def __hash__(self) -> int:
        return hash(self._config)

    def __repr__(self) -> str:
        return f"Language({self._config!r})"


_LANGUAGES: dict[str, Language] = {}
_LOCK = threading.RLock()

_C_LIKE_INDENT = IndentationRules(
    increase_indent=("{", "(", "["),
    decrease_indent=("}", ")", "]"),
)

_DEFAULT_LANGUAGES: dict[str, LanguageConfig] = {
    "rust": LanguageConfig(
        name="Rust",
        extensions=(".rs",),
        comments=Comments(line="//", block_start="/*", block_end="*/"),
        brackets=Brackets((("(", ")"), ("[", "]"), ("{", "}"), ("<", ">"))),
        indentation=_C_LIKE_INDENT,
    ),
    "python": LanguageConfig(
        name="Python",
        extensions=(".py",),
        comments=Comments(line="#", block_start='"""', block_end='"""'),
        brackets=Brackets((("(", ")"), ("[", "]"), ("{", "}"))),
        indentation=IndentationRules(increase_indent=(":",), decrease_indent=()),
    ),
    "javascript": LanguageConfig(
        name="JavaScript",
        extensions=(".js", ".jsx"),
        comments=Comments(line="//", block_start="/*", block_end="*/"),
        brackets=Brackets((("(", ")"), ("[", "]"), ("{", "}"))),
        indentation=_C_LIKE_INDENT,
    ),
}


def register_default_languages() -> None:
    """Register Rust, Python and JavaScript, replacing earlier entries."""
    with _LOCK:
        for key, config in _DEFAULT_LANGUAGES.items():
            _LANGUAGES[key] = Language(config)


def get_language(name: str) -> Language | None:
    """The language registered under ``name``, if any."""
    with _LOCK:
        return _LANGUAGES.get(name)


def get_language_by_extension(ext: str) -> Language | None:
    """The first registered language using the file extension ``ext`` (e.g. ``.rs``)."""
    with _LOCK:
        return next(
            (lang for lang in _LANGUAGES.values() if ext in lang.config.extensions),
            None,
        )


def init() -> None:
    """Set up syntax support by registering the default languages."""
    register_default_languages()