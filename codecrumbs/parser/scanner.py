"""Comment scanner that extracts crumbs from a single source file."""

from __future__ import annotations

import re
import uuid
from pathlib import Path
from typing import Iterable, List, Optional

from ..languages import LanguageDefinition
from ..logging import get_logger
from ..models import Crumb
from .marker import parse_marker

DEFAULT_MARKER = "cc:"


class DuplicateMarkerError(ValueError):
    """Raised when one uninterrupted comment block holds more than one marker."""

    def __init__(self, source_path: str, line: int, first_line: int) -> None:
        self.source_path = source_path
        self.line = line
        self.first_line = first_line
        super().__init__(
            f"{source_path}:{line}: cannot place a marker in the same comment block "
            f"multiple times (first marker on line {first_line})"
        )


def _compile_marker(marker: str) -> re.Pattern[str]:
    return re.compile(rf"\s?{re.escape(marker)}\s?", re.IGNORECASE)


class CommentScanner:
    """Turns the lines of one file into crumbs, in source order.

    The scanner walks the file once, tracking whether it is inside a run of
    comment lines and whether that run has already opened a crumb. A crumb is
    finalized when its comment run ends (or the file ends). Crumbs asking for
    peek lines capture the raw lines that follow their marker line, whether
    those lines are comments or code.
    """

    def __init__(self, marker: str = DEFAULT_MARKER) -> None:
        if not marker.strip():
            raise ValueError("Marker sigil must not be empty")
        self.marker = marker
        self._marker_rx = _compile_marker(marker.strip())
        self.logger = get_logger("scanner")

    def scan_lines(
        self,
        source_path: str,
        language: LanguageDefinition,
        lines: Iterable[str],
    ) -> List[Crumb]:
        """Return the crumbs found in ``lines``.

        Raises :class:`DuplicateMarkerError` when a comment block holds two
        markers; nothing is returned for the file in that case.
        """
        in_comment_block = False
        current: Optional[Crumb] = None
        crumbs: List[Crumb] = []
        capturing: List[Crumb] = []

        line_number = 0
        for raw_line in lines:
            line_number += 1
            line = raw_line.rstrip("\r\n")
            opened: Optional[Crumb] = None

            clean, is_comment = language.match(line)
            if is_comment:
                in_comment_block = True
                found = self._marker_rx.search(clean)
                if found is not None:
                    if current is not None:
                        raise DuplicateMarkerError(
                            source_path, line_number, current.source_line
                        )
                    current = self._open_crumb(
                        source_path, language, line_number, clean[found.end():]
                    )
                    opened = current
                elif current is not None:
                    current.desc_lines.append(clean)
            elif in_comment_block:
                in_comment_block = False
                if current is not None:
                    crumbs.append(current)
                    current = None

            for crumb in capturing:
                if crumb.peek_num > 0:
                    crumb.peek_num -= 1
                    crumb.peeked_lines.append(line)
            capturing = [crumb for crumb in capturing if crumb.peek_num > 0]
            if opened is not None and opened.peek_num > 0:
                capturing.append(opened)

        if current is not None:
            crumbs.append(current)
        return crumbs

    def scan_file(
        self,
        path: Path,
        source_path: str,
        language: LanguageDefinition,
        *,
        encoding: str = "utf-8",
    ) -> List[Crumb]:
        """Read ``path`` and scan it, reporting crumbs under ``source_path``."""
        with path.open("r", encoding=encoding, newline="") as handle:
            return self.scan_lines(source_path, language, handle)

    def _open_crumb(
        self,
        source_path: str,
        language: LanguageDefinition,
        line_number: int,
        payload: str,
    ) -> Crumb:
        crumb = Crumb(
            id=str(uuid.uuid4()),
            source_path=source_path,
            source_line=line_number,
            language_name=language.name,
        )
        parsed = parse_marker(payload)
        for outcome in parsed.degraded:
            self.logger.debug(
                "%s:%d: marker field '%s' %s",
                source_path,
                line_number,
                outcome.field,
                outcome.detail,
            )
        return parsed.apply(crumb)


def collect_crumbs(
    source_path: str,
    language: LanguageDefinition,
    lines: Iterable[str],
    *,
    marker: str = DEFAULT_MARKER,
) -> List[Crumb]:
    """Scan ``lines`` with a one-off :class:`CommentScanner`."""
    return CommentScanner(marker).scan_lines(source_path, language, lines)


__all__ = [
    "CommentScanner",
    "DEFAULT_MARKER",
    "DuplicateMarkerError",
    "collect_crumbs",
]
