"""Relevance scoring and ranking of catalog entries.

Scores are plain additive integers. An exact id hit short-circuits to the
maximum; otherwise name, tag, description and category matches add up.
Context search sums the per-token scores and adds a category boost.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Generic, TypeVar

from ..models import CatalogEntry

EXACT_ID_MATCH = 100
NAME_CONTAINS = 80
TAG_EXACT = 70
TAG_PARTIAL = 50
DESCRIPTION_CONTAINS = 30
CATEGORY_MATCH = 20

CATEGORY_BOOST_MULTIPLIER = 15

EntryT = TypeVar("EntryT", bound=CatalogEntry)


@dataclass(frozen=True, slots=True)
class ScoredEntry(Generic[EntryT]):
    """Catalog entry paired with its score for one search call."""

    entry: EntryT
    score: int


def normalize_query(query: str) -> str:
    return query.strip().lower()


def score_entry(entry: CatalogEntry, query: str) -> int:
    """Score one entry against a free-text query.

    Rules (additive, except the exact id hit which returns immediately):
    id equals query -> 100; name contains query -> +80; per tag: tag equals
    query -> +70, else tag and query contain one another -> +50; description
    contains query -> +30; category contains query -> +20.

    An empty (or whitespace-only) query scores 0.
    """
    normalized = normalize_query(query)
    if not normalized:
        return 0

    if entry.id.strip().lower() == normalized:
        return EXACT_ID_MATCH

    score = 0
    if normalized in entry.name.lower():
        score += NAME_CONTAINS

    for raw_tag in entry.tags:
        tag = raw_tag.lower()
        if tag == normalized:
            score += TAG_EXACT
        elif normalized in tag or tag in normalized:
            score += TAG_PARTIAL

    if normalized in entry.description.lower():
        score += DESCRIPTION_CONTAINS

    if normalized in entry.category:
        score += CATEGORY_MATCH

    return score


def score_entry_by_tokens(
    entry: CatalogEntry,
    tokens: Iterable[str],
    category_boosts: Mapping[str, int],
) -> int:
    """Score one entry against a token list plus per-category boosts.

    Each token is scored independently with :func:`score_entry`; the sum is
    increased by ``category_boosts[entry.category] * 15``.
    """
    score = sum(score_entry(entry, token) for token in tokens)
    return score + category_boosts.get(entry.category, 0) * CATEGORY_BOOST_MULTIPLIER


def score_entries(entries: Iterable[EntryT], score_fn: Callable[[EntryT], int]) -> list[ScoredEntry[EntryT]]:
    """Score entries and order them best first, dropping zero scores.

    Ties keep catalog order (the sort is stable).
    """
    scored = [ScoredEntry(entry, score_fn(entry)) for entry in entries]
    matches = [item for item in scored if item.score > 0]
    matches.sort(key=lambda item: -item.score)
    return matches


def rank_entries(entries: Iterable[EntryT], score_fn: Callable[[EntryT], int]) -> list[EntryT]:
    """Entries with a positive score, best first, ties in catalog order."""
    return [item.entry for item in score_entries(entries, score_fn)]
