from __future__ import annotations

from pathlib import Path

import pytest

from codecrumbs.languages import LanguageDefinition, default_registry
from tests._fixtures.repo_builder import RepoBuilder


@pytest.fixture
def repo_builder(tmp_path: Path) -> RepoBuilder:
    """Provide a reusable project builder rooted at the pytest tmp_path."""
    return RepoBuilder(tmp_path)


@pytest.fixture
def go_lang() -> LanguageDefinition:
    language, _ = default_registry().lookup(".go")
    assert language is not None
    return language


@pytest.fixture
def python_lang() -> LanguageDefinition:
    language, _ = default_registry().lookup(".py")
    assert language is not None
    return language
