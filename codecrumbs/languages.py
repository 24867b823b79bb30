"""Comment-line definitions for the languages codecrumbs understands."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import PurePath
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

_DOUBLE_SLASH = r"^\s*//\s?"
_HASH = r"^\s*#\s?"


@dataclass(frozen=True)
class LanguageDefinition:
    """Maps a language's file extensions to the patterns of its comment lines."""

    name: str
    extensions: Tuple[str, ...]
    patterns: Tuple[str, ...]
    _compiled: Tuple[re.Pattern[str], ...] = field(
        init=False, repr=False, compare=False, default=()
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "extensions", tuple(self.extensions))
        object.__setattr__(self, "patterns", tuple(self.patterns))
        object.__setattr__(
            self, "_compiled", tuple(re.compile(pattern) for pattern in self.patterns)
        )

    def match(self, line: str) -> Tuple[str, bool]:
        """Return the line with its comment prefix removed, and whether it is a comment."""
        for regex in self._compiled:
            if regex.search(line):
                return regex.sub("", line), True
        return "", False


def _normalise_extension(extension: str) -> str:
    extension = extension.strip().lower()
    if extension and not extension.startswith("."):
        extension = f".{extension}"
    return extension


class LanguageRegistry:
    """Read-only lookup table from file extension to language definition."""

    def __init__(self, definitions: Iterable[LanguageDefinition]) -> None:
        languages: List[LanguageDefinition] = []
        by_extension: dict[str, LanguageDefinition] = {}
        for definition in definitions:
            for extension in definition.extensions:
                key = _normalise_extension(extension)
                if key in by_extension:
                    raise ValueError(
                        f"Extension '{key}' registered by both "
                        f"{by_extension[key].name} and {definition.name}"
                    )
                by_extension[key] = definition
            languages.append(definition)
        self._languages = tuple(languages)
        self._by_extension: Mapping[str, LanguageDefinition] = MappingProxyType(by_extension)

    @property
    def languages(self) -> Tuple[LanguageDefinition, ...]:
        return self._languages

    @property
    def extensions(self) -> List[str]:
        return sorted(self._by_extension)

    def lookup(self, extension: str) -> Tuple[Optional[LanguageDefinition], bool]:
        """Resolve an extension such as ``.go`` (case-insensitive)."""
        definition = self._by_extension.get(_normalise_extension(extension))
        return definition, definition is not None

    def for_path(self, path: str | PurePath) -> Tuple[Optional[LanguageDefinition], bool]:
        suffix = PurePath(path).suffix
        if not suffix:
            return None, False
        return self.lookup(suffix)

    def __contains__(self, extension: object) -> bool:
        if not isinstance(extension, str):
            return False
        return _normalise_extension(extension) in self._by_extension

    def __len__(self) -> int:
        return len(self._languages)


DEFAULT_LANGUAGES: Sequence[LanguageDefinition] = (
    LanguageDefinition("Go", (".go",), (_DOUBLE_SLASH,)),
    LanguageDefinition("Javascript", (".js", ".jsx"), (_DOUBLE_SLASH,)),
    LanguageDefinition("Typescript", (".ts", ".tsx"), (_DOUBLE_SLASH,)),
    LanguageDefinition("PHP", (".php",), (_DOUBLE_SLASH,)),
    LanguageDefinition("Python", (".py",), (_HASH,)),
    LanguageDefinition("Java", (".java",), (_DOUBLE_SLASH,)),
    LanguageDefinition(
        "C/C++",
        (".c", ".h", ".cpp", ".cxx", ".objc", ".m"),
        (_DOUBLE_SLASH,),
    ),
    LanguageDefinition("Rust", (".rs",), (_DOUBLE_SLASH,)),
    LanguageDefinition("Kotlin", (".kt", ".kts"), (_DOUBLE_SLASH,)),
    LanguageDefinition("Swift", (".swift",), (_DOUBLE_SLASH,)),
    LanguageDefinition("C#", (".cs",), (_DOUBLE_SLASH,)),
    LanguageDefinition("Scala", (".scala",), (_DOUBLE_SLASH,)),
    LanguageDefinition("Ruby", (".rb",), (_HASH,)),
    LanguageDefinition("Shell", (".sh", ".bash"), (_HASH,)),
)


def default_registry() -> LanguageRegistry:
    """Return a registry holding every built-in language."""
    return LanguageRegistry(DEFAULT_LANGUAGES)


__all__ = [
    "DEFAULT_LANGUAGES",
    "LanguageDefinition",
    "LanguageRegistry",
    "default_registry",
]
