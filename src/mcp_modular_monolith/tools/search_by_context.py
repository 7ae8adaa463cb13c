"""Find rules relevant to a natural-language description of a situation."""

__all__ = ["search_by_context"]

import logging

from ..catalog import CatalogStore
from ..helpers.config_loader import get_search_config
from ..search import (
    SearchDisplayOptions,
    detect_category_boosts,
    format_search_results,
    rank_entries,
    remove_stop_words,
    score_entry_by_tokens,
    tokenize,
)

logger = logging.getLogger(__name__)


def search_by_context(context: str, catalog: CatalogStore, config: dict | None = None) -> str:
    """Tokenize a problem description and rank the catalog against its tokens.

    Every token is scored on its own and the scores are summed, so entries
    matching several cues in the description float to the top. Tokens that
    hint at a category boost every entry of that category.

    Args:
        context: Free-form description (e.g. 'my modules import each other's internals')
        catalog: Catalog to search
        config: Server config (search limits)

    Returns:
        Markdown search results, or a "no rules found" message.

    """
    search_config = get_search_config(config)

    tokens = remove_stop_words(tokenize(context))
    category_boosts = detect_category_boosts(tokens)
    logger.debug(f"search_by_context tokens={tokens} boosts={dict(category_boosts)}")

    ranked_rules = rank_entries(
        catalog.rules, lambda rule: score_entry_by_tokens(rule, tokens, category_boosts)
    )
    ranked_anti_patterns = rank_entries(
        catalog.anti_patterns, lambda ap: score_entry_by_tokens(ap, tokens, category_boosts)
    )

    return format_search_results(
        ranked_rules,
        ranked_anti_patterns,
        SearchDisplayOptions(
            empty_message="No rules found matching that context.",
            remaining_header="Also relevant",
            max_total=search_config["max_context_results"],
            max_detailed=search_config["max_detailed_results"],
        ),
    )
