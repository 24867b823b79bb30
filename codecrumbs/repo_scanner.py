"""Project walking utilities that feed source files to the comment scanner."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List, Sequence

from .languages import LanguageDefinition, LanguageRegistry, default_registry

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "node_modules",
    "__pycache__",
    ".pytest_cache",
    ".mypy_cache",
    ".idea",
}

INCLUDE_EVERYTHING = "..."


@dataclass
class IgnoreRule:
    """Represents an ignore rule parsed from .gitignore."""

    pattern: str
    directory_only: bool
    anchored: bool
    negate: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if not self.pattern:
            return False
        if self.directory_only and not is_dir:
            return False

        if self.anchored or self.has_slash:
            if fnmatchcase(rel_path, self.pattern):
                return True
            if self.directory_only and rel_path.startswith(f"{self.pattern}/"):
                return True
            return False

        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def _build_ignore_rule(pattern: str, negate: bool = False) -> IgnoreRule | None:
    pattern = pattern.strip()
    if not pattern:
        return None

    directory_only = pattern.endswith("/")
    if directory_only:
        pattern = pattern[:-1]

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern[1:]

    return IgnoreRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        negate=negate,
        has_slash="/" in pattern,
    )


def _parse_gitignore(path: Path) -> List[IgnoreRule]:
    if not path.exists():
        return []

    rules: List[IgnoreRule] = []
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        negate = line.startswith("!")
        if negate:
            line = line[1:]
        rule = _build_ignore_rule(line, negate=negate)
        if rule is not None:
            rules.append(rule)
    return rules


def _should_ignore(rel_path: str, is_dir: bool, rules: Sequence[IgnoreRule]) -> bool:
    ignored = False
    for rule in rules:
        if rule.matches(rel_path, is_dir):
            ignored = not rule.negate
    return ignored


def compile_patterns(patterns: Sequence[str]) -> List[re.Pattern[str]]:
    """Compile exclude expressions, naming the offending one on failure."""
    compiled: List[re.Pattern[str]] = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as exc:
            raise ValueError(f"failed to parse regexp: {pattern} error: {exc}") from exc
    return compiled


def _is_excluded(rel_path: str, patterns: Sequence[re.Pattern[str]]) -> bool:
    return any(pattern.search(rel_path) for pattern in patterns)


def _is_included(rel_path: str, prefixes: Sequence[str]) -> bool:
    if not prefixes:
        return True
    for prefix in prefixes:
        if prefix == INCLUDE_EVERYTHING or rel_path.startswith(prefix):
            return True
    return False


@dataclass(frozen=True)
class SourceFile:
    """A file eligible for scanning together with its resolved language."""

    path: Path
    rel_path: str
    language: LanguageDefinition


class RepoScanner:
    """Walks a project directory and yields files with a known comment syntax."""

    def __init__(self, registry: LanguageRegistry | None = None) -> None:
        self.registry = registry or default_registry()

    def iter_sources(
        self,
        root: str | Path,
        *,
        include: Sequence[str] = (),
        exclude: Sequence[str] = (),
    ) -> Iterator[SourceFile]:
        """Yield eligible files in lexicographic order of their relative path."""
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Project path not found: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Project path is not a directory: {root}")

        rules = _parse_gitignore(root_path / ".gitignore")
        exclude_rxs = compile_patterns(exclude)

        files = sorted(
            (path.relative_to(root_path).as_posix(), path)
            for path in self._iter_files(root_path, rules, exclude_rxs)
        )
        for rel_path, path in files:
            if not _is_included(rel_path, include):
                continue
            language, ok = self.registry.for_path(path)
            if not ok or language is None:
                continue
            yield SourceFile(path=path, rel_path=rel_path, language=language)

    def scan(
        self,
        root: str | Path,
        *,
        include: Sequence[str] = (),
        exclude: Sequence[str] = (),
    ) -> List[SourceFile]:
        return list(self.iter_sources(root, include=include, exclude=exclude))

    @staticmethod
    def _iter_files(
        root: Path,
        rules: Sequence[IgnoreRule],
        exclude_rxs: Sequence[re.Pattern[str]],
    ) -> Iterator[Path]:
        for dirpath, dirnames, filenames in os.walk(root):
            current_dir = Path(dirpath)
            rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

            kept_dirs = []
            for name in sorted(dirnames):
                if name in _EXCLUDED_DIRS:
                    continue
                rel_path = f"{rel_dir}/{name}" if rel_dir else name
                if _should_ignore(rel_path, True, rules) or _is_excluded(rel_path, exclude_rxs):
                    continue
                kept_dirs.append(name)
            dirnames[:] = kept_dirs

            for filename in sorted(filenames):
                rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
                if _should_ignore(rel_path, False, rules) or _is_excluded(rel_path, exclude_rxs):
                    continue
                yield current_dir / filename


__all__ = ["IgnoreRule", "RepoScanner", "SourceFile", "compile_patterns"]
