"""Tests for codecrumbs.parser.marker."""

from __future__ import annotations

from codecrumbs.models import Crumb
from codecrumbs.parser.marker import DEFAULTED, INVALID, PARSED, parse_marker


def _statuses(result) -> dict[str, str]:
    return {outcome.field: outcome.status for outcome in result.outcomes}


def test_trail_title_and_description() -> None:
    result = parse_marker("checkout#1; Start; Begin checkout flow")
    assert result.trail_id == "checkout"
    assert result.trail_step == 1
    assert result.title == "Start"
    assert result.peek_num == 0
    assert result.description == "Begin checkout flow"
    assert result.degraded == []


def test_remark_with_peek_count() -> None:
    result = parse_marker("Validate input; 2; trims whitespace")
    assert result.trail_id == ""
    assert result.title == "Validate input"
    assert result.peek_num == 2
    assert result.description == "trims whitespace"
    assert _statuses(result)["trail"] == DEFAULTED
    assert _statuses(result)["peek"] == PARSED


def test_trail_with_all_fields() -> None:
    result = parse_marker(" api # 3 ; Handle request ; 4 ; Dispatches to the router")
    assert result.trail_id == "api"
    assert result.trail_step == 3
    assert result.title == "Handle request"
    assert result.peek_num == 4
    assert result.description == "Dispatches to the router"


def test_unparsable_step_defaults_to_zero() -> None:
    result = parse_marker("checkout#first; Start")
    assert result.trail_id == "checkout"
    assert result.trail_step == 0
    assert result.title == "Start"
    assert [outcome.field for outcome in result.degraded] == ["step"]
    assert result.degraded[0].status == INVALID


def test_non_positive_peek_is_kept_as_description() -> None:
    result = parse_marker("Title; 0")
    assert result.peek_num == 0
    assert result.description == "0"

    negative = parse_marker("Title; -3")
    assert negative.peek_num == 0
    assert negative.description == "-3"


def test_trail_only_defaults_title() -> None:
    result = parse_marker("flow#2")
    assert result.trail_id == "flow"
    assert result.trail_step == 2
    assert result.title == ""
    assert result.description is None
    assert _statuses(result)["title"] == DEFAULTED


def test_empty_payload_is_an_untitled_remark() -> None:
    result = parse_marker("")
    assert result.trail_id == ""
    assert result.title == ""
    assert result.peek_num == 0
    assert result.description is None


def test_trail_separator_splits_once() -> None:
    result = parse_marker("a#1#2; T")
    assert result.trail_id == "a"
    assert result.trail_step == 0
    assert result.title == "T"


def test_fields_after_description_are_ignored() -> None:
    result = parse_marker("T; 1; first; second")
    assert result.peek_num == 1
    assert result.description == "first"


def test_empty_description_field_is_kept() -> None:
    result = parse_marker("Title;")
    assert result.title == "Title"
    assert result.description == ""

    after_peek = parse_marker(" Title; 2; ")
    assert after_peek.peek_num == 2
    assert after_peek.description == ""

    crumb = Crumb(id="x", source_path="a.go", source_line=1, language_name="Go")
    after_peek.apply(crumb)
    assert crumb.desc_lines == [""]


def test_numbers_accept_only_ascii_digits() -> None:
    underscored = parse_marker("t#1_0; T; 1_0")
    assert underscored.trail_step == 0
    assert underscored.degraded[0].field == "step"
    assert underscored.peek_num == 0
    assert underscored.description == "1_0"

    arabic_indic = parse_marker("t#\u0663; T")
    assert arabic_indic.trail_step == 0

    signed = parse_marker("t#+4; T; +2")
    assert signed.trail_step == 4
    assert signed.peek_num == 2


def test_apply_copies_fields_onto_crumb() -> None:
    crumb = Crumb(id="x", source_path="a.go", source_line=4, language_name="Go")
    parse_marker("t#5; Title; 2; Desc").apply(crumb)
    assert (crumb.trail_id, crumb.trail_step, crumb.title, crumb.peek_num) == ("t", 5, "Title", 2)
    assert crumb.desc_lines == ["Desc"]
    assert crumb.source_line == 4
