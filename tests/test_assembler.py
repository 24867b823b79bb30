"""Tests for codecrumbs.assembler."""

from __future__ import annotations

import itertools
from typing import List

from codecrumbs.assembler import TrailAssembler, regroup_crumbs
from codecrumbs.models import Crumb

_ids = itertools.count()


def _crumb(path: str, line: int, trail: str = "", step: int = 0, title: str = "") -> Crumb:
    return Crumb(
        id=f"c{next(_ids)}",
        source_path=path,
        source_line=line,
        language_name="Go",
        title=title,
        trail_id=trail,
        trail_step=step,
    )


def _steps(trail: List[Crumb]) -> List[int]:
    return [crumb.trail_step for crumb in trail]


def test_entry_point_promotes_earlier_side_trail() -> None:
    helper = _crumb("pkg/helpers.go", 10, "checkout", 2)
    entry = _crumb("cmd/main.go", 5, "checkout", 1)

    grouped = regroup_crumbs("main.go", [[helper], [entry]])

    assert "checkout" not in grouped.side_trails
    assert grouped.main_trails["checkout"] == [entry, helper]


def test_promoted_trail_collects_later_crumbs() -> None:
    entry = _crumb("main.go", 1, "flow", 1)
    later = _crumb("lib/a.go", 3, "flow", 3)
    middle = _crumb("lib/b.go", 7, "flow", 2)

    grouped = regroup_crumbs("main.go", [[entry], [later], [middle]])

    assert grouped.side_trails == {}
    assert _steps(grouped.main_trails["flow"]) == [1, 2, 3]


def test_trails_without_entry_point_stay_side_trails() -> None:
    a = _crumb("lib/a.go", 1, "aux", 2)
    b = _crumb("lib/b.go", 1, "aux", 1)

    grouped = regroup_crumbs("main.go", [[a], [b]])

    assert grouped.main_trails == {}
    assert grouped.side_trails["aux"] == [b, a]


def test_empty_entry_point_never_promotes() -> None:
    crumb = _crumb("main.go", 1, "flow", 1)
    for entry_point in ("", None):
        grouped = regroup_crumbs(entry_point, [[crumb]])
        assert grouped.main_trails == {}
        assert list(grouped.side_trails) == ["flow"]


def test_sort_is_stable_for_equal_steps() -> None:
    first = _crumb("lib/a.go", 1, "t", 1, title="first")
    second = _crumb("lib/a.go", 9, "t", 1, title="second")
    zero = _crumb("lib/b.go", 2, "t", 0, title="zero")

    grouped = regroup_crumbs(None, [[first, second], [zero]])

    assert [crumb.title for crumb in grouped.side_trails["t"]] == ["zero", "first", "second"]


def test_remarks_sorted_by_path_then_line() -> None:
    remarks = [
        _crumb("b.go", 1),
        _crumb("a.go", 30),
        _crumb("a.go", 4),
        _crumb("c.go", 2),
        _crumb("b.go", 0),
    ]

    grouped = regroup_crumbs("main.go", [remarks[:2], remarks[2:]])

    assert [(crumb.source_path, crumb.source_line) for crumb in grouped.remarks] == [
        ("a.go", 4),
        ("a.go", 30),
        ("b.go", 0),
        ("b.go", 1),
        ("c.go", 2),
    ]


def test_trail_names_unique_across_main_and_side() -> None:
    lists = [
        [_crumb("x.go", 1, "one", 1), _crumb("x.go", 5, "two", 1)],
        [_crumb("main.go", 1, "one", 2)],
        [_crumb("y.go", 1, "two", 2), _crumb("y.go", 3, "one", 3)],
    ]

    grouped = regroup_crumbs("main.go", lists)

    assert set(grouped.main_trails) == {"one"}
    assert set(grouped.side_trails) == {"two"}
    assert _steps(grouped.main_trails["one"]) == [1, 2, 3]
    assert _steps(grouped.side_trails["two"]) == [1, 2]


def test_build_returns_independent_collections() -> None:
    assembler = TrailAssembler("main.go")
    assembler.add([_crumb("main.go", 1, "flow", 1)])
    first = assembler.build()

    assembler.add([_crumb("lib.go", 1, "flow", 2), _crumb("lib.go", 4)])
    second = assembler.build()

    assert len(first.main_trails["flow"]) == 1
    assert first.remarks == []
    assert len(second.main_trails["flow"]) == 2
    assert len(second.remarks) == 1


def test_stats_count_trails_and_crumbs() -> None:
    grouped = regroup_crumbs(
        "main.go",
        [[_crumb("main.go", 1, "a", 1), _crumb("main.go", 2, "a", 2), _crumb("main.go", 3)],
         [_crumb("lib.go", 1, "b", 1)]],
    )
    stats = grouped.stats()
    assert (stats.main, stats.side, stats.remarks, stats.total) == (1, 1, 1, 4)
