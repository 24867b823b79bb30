"""Markdown document generation for grouped crumbs."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Sequence

from jinja2 import Environment, FileSystemLoader

from ..models import Crumb, GroupedCrumbs
from .text import anchor, dedent_lines, join_prefix_path, title_case
from .tree import render_trail_tree

_TEMPLATE_NAME = "document.md.j2"


@dataclass
class CrumbView:
    """Template-ready rendering of one crumb."""

    step: int
    title: str
    heading: str
    anchor: str
    desc_lines: List[str]
    source_path: str
    source_line: int
    link: str
    fence: str
    peeked_lines: List[str]


@dataclass
class TrailView:
    """Template-ready rendering of one trail."""

    name: str
    title: str
    anchor: str
    tree: str
    crumbs: List[CrumbView]


class MarkdownGenerator:
    """Renders trails and remarks into a single Markdown document."""

    def __init__(
        self,
        project_name: str,
        project_entry: str = "",
        source_prefix: str = "",
        *,
        templates_dir: Path | None = None,
    ) -> None:
        self.project_name = project_name
        self.project_entry = project_entry
        self.source_prefix = source_prefix
        self.templates_dir = templates_dir or Path(__file__).with_name("templates")
        self._env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render_document(self, grouped: GroupedCrumbs) -> str:
        template = self._env.get_template(_TEMPLATE_NAME)
        return template.render(
            project_title=title_case(self.project_name),
            project_name=self.project_name,
            stats=grouped.stats(),
            main_trails=self._trail_views(grouped.main_trails),
            side_trails=self._trail_views(grouped.side_trails),
            remarks=self._remark_views(grouped.remarks),
        )

    def _trail_views(self, trails: Mapping[str, Sequence[Crumb]]) -> List[TrailView]:
        views: List[TrailView] = []
        for name in sorted(trails):
            trail = trails[name]
            views.append(
                TrailView(
                    name=name,
                    title=title_case(name),
                    anchor=anchor(name),
                    tree=render_trail_tree(trail),
                    crumbs=[self._crumb_view(crumb, heading="", anchor_text="") for crumb in trail],
                )
            )
        return views

    def _remark_views(self, remarks: Sequence[Crumb]) -> List[CrumbView]:
        seen: Dict[str, int] = {}
        views: List[CrumbView] = []
        for crumb in remarks:
            if crumb.title:
                heading = f"L{crumb.source_line}: {title_case(crumb.title)}"
            else:
                heading = f"L{crumb.source_line}"
            anchor_text = anchor(heading)
            times = seen.get(anchor_text, 0)
            seen[anchor_text] = times + 1
            if times:
                anchor_text = f"{anchor_text}-{times}"
            views.append(self._crumb_view(crumb, heading=heading, anchor_text=anchor_text))
        return views

    def _crumb_view(self, crumb: Crumb, *, heading: str, anchor_text: str) -> CrumbView:
        return CrumbView(
            step=crumb.trail_step,
            title=title_case(crumb.title),
            heading=heading,
            anchor=anchor_text,
            desc_lines=list(crumb.desc_lines),
            source_path=crumb.source_path,
            source_line=crumb.source_line,
            link=join_prefix_path(self.source_prefix, crumb.source_path),
            fence=crumb.language_name.lower(),
            peeked_lines=dedent_lines(crumb.peeked_lines),
        )


__all__ = ["MarkdownGenerator"]
