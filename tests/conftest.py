"""Shared fixtures and helpers for tests."""

from pathlib import Path

import pytest
from tree_sitter import Parser
from tree_sitter_language_pack import get_parser

from golayout.config import LintConfig

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        if rel.parts and rel.parts[0] == "unit":
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def go_parser() -> Parser:
    """Return a tree-sitter parser for Go."""
    return get_parser("go")


@pytest.fixture
def config() -> LintConfig:
    return LintConfig()
