"""
Search package.
"""

from .format_results import (
    MAX_DETAILED_RESULTS,
    MAX_TOTAL_RESULTS,
    SearchDisplayOptions,
    format_search_results,
)
from .scoring import (
    ScoredEntry,
    rank_entries,
    score_entries,
    score_entry,
    score_entry_by_tokens,
)
from .tokenizer import (
    CATEGORY_KEYWORDS,
    STOP_WORDS,
    detect_category_boosts,
    remove_stop_words,
    tokenize,
)

__all__ = [
    "CATEGORY_KEYWORDS",
    "MAX_DETAILED_RESULTS",
    "MAX_TOTAL_RESULTS",
    "STOP_WORDS",
    "ScoredEntry",
    "SearchDisplayOptions",
    "detect_category_boosts",
    "format_search_results",
    "rank_entries",
    "remove_stop_words",
    "score_entries",
    "score_entry",
    "score_entry_by_tokens",
    "tokenize",
]
