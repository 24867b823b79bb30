"""Parsing of the payload that follows a ``cc:`` marker.

The payload is a semicolon separated list of fields::

    [<trail>#<step>;] <title> [; <peek lines>] [; <description>]

Parsing is positional and tolerant: missing fields fall back to defaults and
malformed ones are reported through :class:`FieldOutcome` records instead of
raising, so a bad marker never aborts the scan of its file.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional

from ..models import Crumb

FIELD_SEPARATOR = ";"
TRAIL_SEPARATOR = "#"

_INTEGER_RX = re.compile(r"[+-]?[0-9]+")

PARSED = "parsed"
DEFAULTED = "defaulted"
INVALID = "invalid"


@dataclass(frozen=True)
class FieldOutcome:
    """How a single payload field was interpreted."""

    field: str
    status: str
    detail: str = ""


@dataclass
class MarkerParse:
    """Structured result of parsing one marker payload."""

    trail_id: str = ""
    trail_step: int = 0
    title: str = ""
    peek_num: int = 0
    description: Optional[str] = None
    outcomes: List[FieldOutcome] = field(default_factory=list)

    @property
    def degraded(self) -> List[FieldOutcome]:
        """Outcomes for fields that could not be read as written."""
        return [outcome for outcome in self.outcomes if outcome.status == INVALID]

    def apply(self, crumb: Crumb) -> Crumb:
        crumb.trail_id = self.trail_id
        crumb.trail_step = self.trail_step
        crumb.title = self.title
        crumb.peek_num = self.peek_num
        if self.description is not None:
            crumb.desc_lines.append(self.description)
        return crumb


def _parse_int(text: str) -> Optional[int]:
    # Optional sign followed by ASCII digits.
    text = text.strip()
    if _INTEGER_RX.fullmatch(text) is None:
        return None
    return int(text)


def parse_marker(payload: str) -> MarkerParse:
    """Parse the text following the marker sigil."""
    result = MarkerParse()
    parts = payload.split(FIELD_SEPARATOR)
    index = 0

    if TRAIL_SEPARATOR in parts[0]:
        trail_id, raw_step = parts[0].split(TRAIL_SEPARATOR, 1)
        result.trail_id = trail_id.strip()
        result.outcomes.append(FieldOutcome("trail", PARSED, result.trail_id))
        step = _parse_int(raw_step)
        if step is None:
            result.outcomes.append(
                FieldOutcome("step", INVALID, f"not an integer: {raw_step.strip()!r}")
            )
        else:
            result.trail_step = step
            result.outcomes.append(FieldOutcome("step", PARSED, str(step)))
        index += 1
    else:
        result.outcomes.append(FieldOutcome("trail", DEFAULTED, "remark"))

    if index >= len(parts):
        result.outcomes.append(FieldOutcome("title", DEFAULTED))
        result.outcomes.append(FieldOutcome("peek", DEFAULTED))
        result.outcomes.append(FieldOutcome("description", DEFAULTED))
        return result
    result.title = parts[index].strip()
    result.outcomes.append(FieldOutcome("title", PARSED, result.title))
    index += 1

    if index >= len(parts):
        result.outcomes.append(FieldOutcome("peek", DEFAULTED))
        result.outcomes.append(FieldOutcome("description", DEFAULTED))
        return result
    peek_num = _parse_int(parts[index])
    if peek_num is not None and peek_num > 0:
        result.peek_num = peek_num
        result.outcomes.append(FieldOutcome("peek", PARSED, str(peek_num)))
        index += 1
    else:
        result.outcomes.append(FieldOutcome("peek", DEFAULTED))

    if index < len(parts):
        result.description = parts[index].strip()
        result.outcomes.append(FieldOutcome("description", PARSED))
    else:
        result.outcomes.append(FieldOutcome("description", DEFAULTED))
    return result


__all__ = [
    "DEFAULTED",
    "FIELD_SEPARATOR",
    "FieldOutcome",
    "INVALID",
    "MarkerParse",
    "PARSED",
    "TRAIL_SEPARATOR",
    "parse_marker",
]
