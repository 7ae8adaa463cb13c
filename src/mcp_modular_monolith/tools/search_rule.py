"""Search rules and anti-patterns by name, keyword, tag or id."""

__all__ = ["search_rule"]

import logging

from ..catalog import CatalogStore
from ..helpers.config_loader import get_search_config
from ..search import SearchDisplayOptions, format_search_results, rank_entries, score_entry

logger = logging.getLogger(__name__)


def search_rule(query: str, catalog: CatalogStore, config: dict | None = None) -> str:
    """Rank the whole catalog against a raw query string.

    Args:
        query: Rule name, keyword, tag or id (e.g. 'thin-routes', 'boundary')
        catalog: Catalog to search
        config: Server config (search limits)

    Returns:
        Markdown with detailed blocks for the top matches and a summary list
        for the rest, or a "not found" message.

    """
    search_config = get_search_config(config)

    ranked_rules = rank_entries(catalog.rules, lambda rule: score_entry(rule, query))
    ranked_anti_patterns = rank_entries(catalog.anti_patterns, lambda ap: score_entry(ap, query))
    logger.debug(
        f"search_rule({query!r}): {len(ranked_rules)} rules, "
        f"{len(ranked_anti_patterns)} anti-patterns matched"
    )

    return format_search_results(
        ranked_rules,
        ranked_anti_patterns,
        SearchDisplayOptions(
            empty_message=f'No rules or anti-patterns found for "{query}".',
            remaining_header="Other matches",
            max_total=search_config["max_results"],
            max_detailed=search_config["max_detailed_results"],
        ),
    )
