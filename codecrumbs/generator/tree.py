"""ASCII file trees showing how a trail moves between source files."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ..models import Crumb
from .text import title_case

_BRANCH = "├── "
_LAST_BRANCH = "└── "
_INDENT = "│   "
_LAST_INDENT = "    "


@dataclass
class TreeNode:
    """A labelled node; file branches hold step nodes and nested files."""

    label: str
    children: List["TreeNode"] = field(default_factory=list)

    def add(self, label: str) -> "TreeNode":
        node = TreeNode(label)
        self.children.append(node)
        return node

    def render(self) -> str:
        lines: List[str] = []
        self._render_children(lines, "")
        return "".join(f"{line}\n" for line in lines)

    def _render_children(self, lines: List[str], prefix: str) -> None:
        for index, child in enumerate(self.children):
            last = index == len(self.children) - 1
            lines.append(f"{prefix}{_LAST_BRANCH if last else _BRANCH}{child.label}")
            child._render_children(lines, prefix + (_LAST_INDENT if last else _INDENT))


def _step_label(crumb: Crumb) -> str:
    return f"[#{crumb.trail_step}]  {title_case(crumb.title)}"


def render_trail_tree(trail: Sequence[Crumb]) -> str:
    """Render the files a trail visits, nesting each newly seen file under the previous one."""
    root = TreeNode(".")
    branches: Dict[str, TreeNode] = {}
    current: Optional[str] = None

    for crumb in trail:
        branch = branches.get(crumb.source_path)
        if branch is None:
            parent = root if current is None else branches[current]
            branch = parent.add(posixpath.basename(crumb.source_path))
            branches[crumb.source_path] = branch
        branch.add(_step_label(crumb))
        current = crumb.source_path

    return root.render()


__all__ = ["TreeNode", "render_trail_tree"]
