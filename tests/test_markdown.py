"""Tests for markdown rendering of catalog entries."""

import pytest

from mcp_modular_monolith.helpers.markdown import (
    CATALOG_TITLE,
    EMPTY_LIST_MESSAGE,
    format_anti_pattern_as_markdown,
    format_catalog_grouped,
    format_entry_as_markdown,
    format_rule_as_markdown,
    format_rule_list,
    truncate_description,
)
from mcp_modular_monolith.models import DecisionTree


def test_truncate_description_short_text_unchanged() -> None:
    assert truncate_description("short") == "short"
    assert truncate_description("x" * 100) == "x" * 100


def test_truncate_description_cuts_at_limit() -> None:
    text = "y" * 150
    truncated = truncate_description(text)

    assert truncated == "y" * 100 + "..."
    assert len(truncated) <= 103


def test_truncate_description_trims_trailing_space_before_ellipsis() -> None:
    assert truncate_description("abc def", max_length=4) == "abc..."


def test_format_rule_list_empty() -> None:
    assert format_rule_list([]) == EMPTY_LIST_MESSAGE


def test_format_rule_list_bullets(make_rule, make_anti_pattern) -> None:
    output = format_rule_list([make_rule(description="d" * 120), make_anti_pattern()])

    assert output.startswith("Found **2** rule(s):")
    assert f"- **Sample Rule** (`sample-rule`) — {'d' * 100}..." in output
    assert "- **Sample Anti-Pattern** (`sample-anti-pattern`)" in output


def test_format_rule_as_markdown(make_rule) -> None:
    rule = make_rule(
        category="routes-and-controllers",
        source="Some Book",
        examples=[{"label": "Good", "language": "typescript", "code": "const x = 1;"}],
        clean_code_refs=[
            {"principle_id": "do-one-thing", "relationship": "reinforces", "note": "Small handlers."}
        ],
    )
    output = format_rule_as_markdown(rule)

    assert output.startswith("## Sample Rule\n")
    assert "**Category:** Routes & Controllers" in output
    assert "**ID:** `sample-rule`" in output
    assert "**Rationale:** Tests need data." in output
    assert "```typescript\nconst x = 1;\n```" in output
    assert "- **reinforces** `do-one-thing` — Small handlers." in output
    assert "**Tags:** sample" in output
    assert output.endswith("**Source:** Some Book")


def test_format_rule_without_optional_sections(make_rule) -> None:
    output = format_rule_as_markdown(make_rule())

    assert "### Examples" not in output
    assert "### Related Clean Code Principles" not in output
    assert "**Source:**" not in output


def test_format_anti_pattern_as_markdown(make_anti_pattern) -> None:
    output = format_anti_pattern_as_markdown(make_anti_pattern())

    assert output.startswith("## ⚠ Anti-Pattern: Sample Anti-Pattern")
    assert "**Category:** Module Boundaries" in output
    assert "**Rationale:**" not in output


def test_format_entry_dispatches_on_type(make_rule, make_anti_pattern) -> None:
    assert format_entry_as_markdown(make_rule()) == format_rule_as_markdown(make_rule())
    assert format_entry_as_markdown(make_anti_pattern()).startswith("## ⚠ Anti-Pattern:")


def test_format_entry_rejects_other_records() -> None:
    tree = DecisionTree(id="t", name="T", description="", nodes=[])
    with pytest.raises(TypeError):
        format_entry_as_markdown(tree)


def test_format_catalog_grouped(small_catalog) -> None:
    output = format_catalog_grouped(small_catalog.rules_by_category())

    assert output.startswith(CATALOG_TITLE)
    assert output.index("## Module Structure") < output.index("## Data Isolation")
    assert "- **Gamma Rule** (`gamma`)" in output


def test_truncate_description_ten_chars_to_five() -> None:
    assert truncate_description("abcdefghij", 5) == "abcde..."
