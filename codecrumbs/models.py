"""Core data models shared across codecrumbs components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class Crumb:
    """A single annotation extracted from a marked comment block."""

    id: str
    source_path: str
    source_line: int
    language_name: str
    title: str = ""
    trail_id: str = ""
    trail_step: int = 0
    desc_lines: List[str] = field(default_factory=list)
    peek_num: int = 0
    peeked_lines: List[str] = field(default_factory=list)

    @property
    def is_remark(self) -> bool:
        return not self.trail_id

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"id": self.id, "title": self.title}
        if self.trail_id:
            payload["trail_id"] = self.trail_id
        if self.trail_step:
            payload["trail_step"] = self.trail_step
        payload.update(
            {
                "desc_lines": list(self.desc_lines),
                "source_path": self.source_path,
                "source_line": self.source_line,
                "peeked_lines": list(self.peeked_lines),
                "lang_name": self.language_name,
            }
        )
        return payload


@dataclass
class CrumbStats:
    """Counters reported alongside a grouped document."""

    main: int
    side: int
    remarks: int
    total: int


@dataclass
class GroupedCrumbs:
    """Trails and remarks assembled from every scanned file."""

    main_trails: Dict[str, List[Crumb]] = field(default_factory=dict)
    side_trails: Dict[str, List[Crumb]] = field(default_factory=dict)
    remarks: List[Crumb] = field(default_factory=list)

    def stats(self) -> CrumbStats:
        total = sum(len(trail) for trail in self.main_trails.values())
        total += sum(len(trail) for trail in self.side_trails.values())
        total += len(self.remarks)
        return CrumbStats(
            main=len(self.main_trails),
            side=len(self.side_trails),
            remarks=len(self.remarks),
            total=total,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "main_trails": {
                name: [crumb.to_dict() for crumb in trail]
                for name, trail in self.main_trails.items()
            },
            "side_trails": {
                name: [crumb.to_dict() for crumb in trail]
                for name, trail in self.side_trails.items()
            },
            "remarks": [crumb.to_dict() for crumb in self.remarks],
        }
