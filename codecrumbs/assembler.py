"""Regrouping of per-file crumbs into trails and remarks."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from .models import Crumb, GroupedCrumbs


class TrailAssembler:
    """Merges crumb sequences, fed in file order, into a grouped document.

    A trail is promoted to the main trails as soon as one of its crumbs is
    found in the entry point file; everything collected for it so far as a
    side trail moves along with it.
    """

    def __init__(self, entry_point: Optional[str]) -> None:
        self.entry_point = entry_point or ""
        self._main: Dict[str, List[Crumb]] = {}
        self._side: Dict[str, List[Crumb]] = {}
        self._remarks: List[Crumb] = []

    def is_entry_point(self, source_path: str) -> bool:
        return bool(self.entry_point) and source_path.endswith(self.entry_point)

    def add(self, crumbs: Iterable[Crumb]) -> None:
        """Take ownership of one file's crumbs, in scan order."""
        for crumb in crumbs:
            self._place(crumb)

    def add_all(self, crumb_lists: Iterable[Iterable[Crumb]]) -> None:
        for crumbs in crumb_lists:
            self.add(crumbs)

    def _place(self, crumb: Crumb) -> None:
        if crumb.is_remark:
            self._remarks.append(crumb)
            return
        trail_id = crumb.trail_id
        if trail_id in self._main:
            self._main[trail_id].append(crumb)
        elif self.is_entry_point(crumb.source_path):
            trail = self._side.pop(trail_id, [])
            trail.append(crumb)
            self._main[trail_id] = trail
        else:
            self._side.setdefault(trail_id, []).append(crumb)

    def build(self) -> GroupedCrumbs:
        """Return the sorted document; trails by step, remarks by path then line."""
        return GroupedCrumbs(
            main_trails={name: _by_step(trail) for name, trail in self._main.items()},
            side_trails={name: _by_step(trail) for name, trail in self._side.items()},
            remarks=sorted(
                self._remarks, key=lambda crumb: (crumb.source_path, crumb.source_line)
            ),
        )


def _by_step(trail: List[Crumb]) -> List[Crumb]:
    return sorted(trail, key=lambda crumb: crumb.trail_step)


def regroup_crumbs(
    entry_point: Optional[str], crumb_lists: Iterable[Iterable[Crumb]]
) -> GroupedCrumbs:
    """Assemble ``crumb_lists`` in the order given."""
    assembler = TrailAssembler(entry_point)
    assembler.add_all(crumb_lists)
    return assembler.build()


__all__ = ["TrailAssembler", "regroup_crumbs"]
