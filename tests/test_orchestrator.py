"""Tests for codecrumbs.orchestrator."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from codecrumbs.orchestrator import Orchestrator, RunOptions


def _seed_sample_repo(repo_builder) -> None:
    repo_builder.write(
        {
            "cmd/main.go": """
                package main

                // cc: checkout#1; Start; Begin checkout flow
                func main() {
                    run()
                }
            """,
            "lib/helpers.go": """
                package lib

                // cc: checkout#2; Charge card; 2
                // Talks to the payment gateway.
                func charge() {}

                // cc: Validate input; 1; trims whitespace
                func validate() {}
            """,
            "tools/gen.py": """
                # cc: codegen#1; Generate stubs
                def main():
                    pass
            """,
            "notes.txt": "cc: ignored\n",
        }
    )


def test_collect_groups_trails_and_remarks(repo_builder) -> None:
    _seed_sample_repo(repo_builder)

    grouped = Orchestrator().collect(repo_builder.path(), entry="main.go")

    assert list(grouped.main_trails) == ["checkout"]
    checkout = grouped.main_trails["checkout"]
    assert [(crumb.source_path, crumb.trail_step) for crumb in checkout] == [
        ("cmd/main.go", 1),
        ("lib/helpers.go", 2),
    ]
    assert checkout[1].desc_lines == ["Talks to the payment gateway."]
    assert checkout[1].peeked_lines == ["// Talks to the payment gateway.", "func charge() {}"]
    assert list(grouped.side_trails) == ["codegen"]
    assert [crumb.title for crumb in grouped.remarks] == ["Validate input"]
    assert grouped.remarks[0].peeked_lines == ["func validate() {}"]


def test_duplicate_marker_skips_only_that_file(repo_builder) -> None:
    repo_builder.write(
        {
            "bad.go": "// cc: One\n// cc: Two\nfunc f() {}\n",
            "good.go": "// cc: Fine\nfunc g() {}\n",
        }
    )
    orchestrator = Orchestrator()

    grouped = orchestrator.collect(repo_builder.path())

    assert [crumb.source_path for crumb in grouped.remarks] == ["good.go"]
    assert [fault.path for fault in orchestrator.faults] == ["bad.go"]
    assert "multiple times" in orchestrator.faults[0].reason


def test_undecodable_file_is_skipped(repo_builder) -> None:
    repo_builder.write({"good.go": "// cc: Fine\nx()\n"})
    (repo_builder.path() / "broken.go").write_bytes(b"// cc: \xff\xfe\n")

    orchestrator = Orchestrator()
    grouped = orchestrator.collect(repo_builder.path())

    assert [crumb.source_path for crumb in grouped.remarks] == ["good.go"]
    assert [fault.path for fault in orchestrator.faults] == ["broken.go"]


def test_run_renders_markdown_by_default(repo_builder) -> None:
    _seed_sample_repo(repo_builder)

    result = Orchestrator().run(
        str(repo_builder.path()), RunOptions(project="demo", entry="main.go")
    )

    assert result.format == "markdown"
    assert result.output is None
    assert result.document.startswith("# Demo\n")
    assert "### Checkout" in result.document
    assert "### L7: Validate Input" in result.document


def test_run_uses_config_file_and_writes_output(repo_builder) -> None:
    _seed_sample_repo(repo_builder)
    repo_builder.write(
        {
            ".codecrumbs.yml": """
                entry: cmd/main.go
                format: json
                output: docs/crumbs.json
                exclude: ["^tools"]
            """
        }
    )

    result = Orchestrator().run(repo_builder.path())

    output = repo_builder.path().resolve() / "docs" / "crumbs.json"
    assert result.output == output
    payload = json.loads(output.read_text(encoding="utf-8"))
    assert list(payload["main_trails"]) == ["checkout"]
    assert payload["side_trails"] == {}


def test_explicit_options_override_config(repo_builder) -> None:
    _seed_sample_repo(repo_builder)
    repo_builder.write({".codecrumbs.yml": "entry: nothing.go\nformat: json\n"})

    result = Orchestrator().run(repo_builder.path(), RunOptions(entry="main.go"))

    assert result.format == "json"
    assert "checkout" in result.grouped.main_trails


def test_run_rejects_unknown_format(repo_builder) -> None:
    with pytest.raises(ValueError):
        Orchestrator().run(repo_builder.path(), RunOptions(format="pdf"))


def test_run_rejects_missing_path(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        Orchestrator().run(tmp_path / "missing")


def test_run_rejects_file_path(tmp_path: Path) -> None:
    source = tmp_path / "main.go"
    source.write_text("// cc: Note\n", encoding="utf-8")
    with pytest.raises(NotADirectoryError):
        Orchestrator().run(source)
