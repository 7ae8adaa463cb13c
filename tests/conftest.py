"""
Pytest fixtures and configuration for the test suite.

The packaged catalog is loaded once per session; tests that need a small,
hand-built catalog use the record factories below.
"""

from collections.abc import Callable
from pathlib import Path

import pytest

from mcp_modular_monolith.catalog import CatalogStore, load_catalog
from mcp_modular_monolith.models import AntiPattern, DecisionTree, Rule


@pytest.fixture(scope="session")
def catalog() -> CatalogStore:
    """The real catalog shipped with the package."""
    return load_catalog()


@pytest.fixture
def make_rule() -> Callable[..., Rule]:
    """Factory for rules with sensible defaults."""

    def _make_rule(**overrides) -> Rule:
        fields = {
            "id": "sample-rule",
            "name": "Sample Rule",
            "category": "module-structure",
            "description": "A rule used in tests.",
            "rationale": "Tests need data.",
            "tags": ("sample",),
        }
        fields.update(overrides)
        return Rule(**fields)

    return _make_rule


@pytest.fixture
def make_anti_pattern() -> Callable[..., AntiPattern]:
    """Factory for anti-patterns with sensible defaults."""

    def _make_anti_pattern(**overrides) -> AntiPattern:
        fields = {
            "id": "sample-anti-pattern",
            "name": "Sample Anti-Pattern",
            "category": "module-boundaries",
            "description": "An anti-pattern used in tests.",
            "tags": ("sample",),
        }
        fields.update(overrides)
        return AntiPattern(**fields)

    return _make_anti_pattern


@pytest.fixture
def small_catalog(make_rule, make_anti_pattern) -> CatalogStore:
    """Three rules and one anti-pattern with predictable scores."""
    rules = [
        make_rule(id="alpha", name="Alpha Rule", category="module-structure", tags=("layout",)),
        make_rule(id="beta", name="Beta Rule", category="data-isolation", tags=("database",)),
        make_rule(id="gamma", name="Gamma Rule", category="module-structure", tags=("layout", "folder")),
    ]
    anti_patterns = [make_anti_pattern(id="delta", name="Delta Smell", tags=("layout",))]
    tree = DecisionTree(
        id="tiny-tree",
        name="Tiny Tree",
        description="One question.",
        nodes=[{"id": "start", "question": "Ready?", "yes": "ANSWER: Go", "no": "ANSWER: Wait"}],
    )
    return CatalogStore(rules, anti_patterns, [tree])


@pytest.fixture
def modules_dir(tmp_path: Path) -> Path:
    """Empty ``src/modules`` directory inside a temporary project."""
    path = tmp_path / "src" / "modules"
    path.mkdir(parents=True)
    return path
