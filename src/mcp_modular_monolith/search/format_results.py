"""Search result rendering.

Rules come first, then anti-patterns. The top hits are rendered as full
markdown blocks and the rest, up to the limit, as a compact bullet list.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..helpers.markdown import format_entry_as_markdown, format_rule_list
from ..models import AntiPattern, Rule

MAX_DETAILED_RESULTS = 3
MAX_TOTAL_RESULTS = 10

BLOCK_SEPARATOR = "\n\n---\n\n"


@dataclass(frozen=True)
class SearchDisplayOptions:
    """How a ranked result set is presented."""

    empty_message: str
    remaining_header: str
    max_total: int = MAX_TOTAL_RESULTS
    max_detailed: int = MAX_DETAILED_RESULTS


def format_search_results(
    ranked_rules: Sequence[Rule],
    ranked_anti_patterns: Sequence[AntiPattern],
    options: SearchDisplayOptions,
) -> str:
    """Render ranked rules and anti-patterns as markdown.

    Returns ``options.empty_message`` alone when nothing matched.
    """
    results = [*ranked_rules, *ranked_anti_patterns][: options.max_total]
    if not results:
        return options.empty_message

    detailed = results[: options.max_detailed]
    remaining = results[options.max_detailed :]

    parts = [format_entry_as_markdown(entry) for entry in detailed]
    if remaining:
        parts.append(f"\n---\n### {options.remaining_header}\n" + format_rule_list(remaining))

    return BLOCK_SEPARATOR.join(parts)
