"""Markdown rendering for catalog entries.

Pure string formatting, no catalog access. Detailed blocks are used for top
search hits and prompt references, bullet lists for everything else.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from ..models import AntiPattern, CatalogEntry, CleanCodeReference, CodeExample, Rule
from .categories import category_label

CATALOG_TITLE = "# Modular Monolith Architecture Rules Catalog"
EMPTY_LIST_MESSAGE = "No rules found."
DESCRIPTION_PREVIEW_LENGTH = 100


def format_rule_as_markdown(rule: Rule) -> str:
    """Render a rule as a full markdown block."""
    lines = [
        f"## {rule.name}",
        "",
        f"**Category:** {category_label(rule.category)}",
        f"**ID:** `{rule.id}`",
        "",
        rule.description,
        "",
        f"**Rationale:** {rule.rationale}",
    ]
    lines.extend(_format_entry_details(rule))
    if rule.source:
        lines.append(f"**Source:** {rule.source}")
    return "\n".join(lines)


def format_anti_pattern_as_markdown(anti_pattern: AntiPattern) -> str:
    """Render an anti-pattern as a full markdown block."""
    lines = [
        f"## ⚠ Anti-Pattern: {anti_pattern.name}",
        "",
        f"**Category:** {category_label(anti_pattern.category)}",
        f"**ID:** `{anti_pattern.id}`",
        "",
        anti_pattern.description,
    ]
    lines.extend(_format_entry_details(anti_pattern))
    return "\n".join(lines)


def format_entry_as_markdown(entry: CatalogEntry) -> str:
    """Render any catalog entry with the block matching its type."""
    if isinstance(entry, Rule):
        return format_rule_as_markdown(entry)
    if isinstance(entry, AntiPattern):
        return format_anti_pattern_as_markdown(entry)
    msg = f"Unsupported catalog entry type: {type(entry).__name__}"
    raise TypeError(msg)


def _format_entry_details(entry: CatalogEntry) -> list[str]:
    # Examples, cross-references and tags, shared by both block styles
    lines: list[str] = []
    if entry.examples:
        lines.extend(["", "### Examples"])
        for example in entry.examples:
            lines.extend(_format_example(example))

    if entry.clean_code_refs:
        lines.extend(["", "### Related Clean Code Principles"])
        for ref in entry.clean_code_refs:
            lines.extend(_format_clean_code_ref(ref))

    lines.extend(["", f"**Tags:** {', '.join(entry.tags)}"])
    return lines


def _format_example(example: CodeExample) -> list[str]:
    return ["", f"**{example.label}:**", "", f"```{example.language}", example.code, "```"]


def _format_clean_code_ref(ref: CleanCodeReference) -> list[str]:
    return [
        f"- **{ref.relationship}** `{ref.principle_id}` — {ref.note}",
        f'  _Use: search-principle "{ref.principle_id}" in clean-code-mcp_',
    ]


def truncate_description(description: str, max_length: int = DESCRIPTION_PREVIEW_LENGTH) -> str:
    """Cut a description to ``max_length`` characters, marking the cut with ``...``."""
    if len(description) <= max_length:
        return description
    return description[:max_length].rstrip() + "..."


def format_rule_list(entries: Sequence[CatalogEntry]) -> str:
    """Render entries as a compact bullet list with truncated descriptions."""
    if not entries:
        return EMPTY_LIST_MESSAGE

    lines = [f"Found **{len(entries)}** rule(s):", ""]
    for entry in entries:
        lines.append(f"- **{entry.name}** (`{entry.id}`) — {truncate_description(entry.description)}")
    return "\n".join(lines)


def format_catalog_grouped(grouped: Mapping[str, Iterable[CatalogEntry]]) -> str:
    """Render entries grouped by category, one section per category."""
    lines = [CATALOG_TITLE, ""]
    for category, entries in grouped.items():
        lines.extend([f"## {category_label(category)}", ""])
        for entry in entries:
            lines.append(f"- **{entry.name}** (`{entry.id}`)")
        lines.append("")
    return "\n".join(lines)
