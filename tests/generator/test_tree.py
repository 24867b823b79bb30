"""Tests for codecrumbs.generator.tree."""

from __future__ import annotations

from codecrumbs.generator.tree import render_trail_tree
from codecrumbs.models import Crumb


def _crumb(path: str, step: int, title: str) -> Crumb:
    return Crumb(
        id=f"{path}-{step}",
        source_path=path,
        source_line=step,
        language_name="Go",
        title=title,
        trail_id="flow",
        trail_step=step,
    )


def test_tree_nests_files_in_visiting_order() -> None:
    trail = [
        _crumb("cmd/main.go", 1, "start"),
        _crumb("cmd/main.go", 2, "next"),
        _crumb("lib/db.go", 3, "query"),
        _crumb("cmd/main.go", 4, "end"),
    ]
    assert render_trail_tree(trail) == (
        "└── main.go\n"
        "    ├── [#1]  Start\n"
        "    ├── [#2]  Next\n"
        "    ├── db.go\n"
        "    │   └── [#3]  Query\n"
        "    └── [#4]  End\n"
    )


def test_tree_reuses_known_file_branch() -> None:
    trail = [
        _crumb("a.go", 1, "one"),
        _crumb("b.go", 2, "two"),
        _crumb("a.go", 3, "three"),
    ]
    rendered = render_trail_tree(trail)
    assert rendered.count("a.go") == 1
    assert rendered.count("b.go") == 1
    assert rendered.splitlines()[-1] == "    └── [#3]  Three"


def test_empty_trail_renders_nothing() -> None:
    assert render_trail_tree([]) == ""
