"""Query tokenizer for context search.

Turns free text into lowercase word tokens, drops stop words, and maps
tokens to category hints through a fixed keyword table. Single-token exact
lookups only: no stemming and no phrase detection.
"""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Iterable
from types import MappingProxyType

from ..helpers.categories import RuleCategory

_NON_TOKEN_CHARS = re.compile(r"[^a-z0-9\-]+")

STOP_WORDS = frozenset(
    {
        "a", "an", "the", "is", "it", "to", "in", "of", "and", "or",
        "for", "on", "at", "by", "be", "as", "do", "if", "my", "no",
        "not", "but", "was", "are", "has", "had", "can", "how", "what", "when",
        "this", "that", "with", "from", "have", "will", "been", "they", "them", "then",
        "than", "some", "should", "would", "could", "about", "which", "there", "where", "their",
        "other", "into", "very", "just", "also", "more", "like", "want", "need", "i",
        "me", "we", "you",
    }
)  # fmt: skip

_KEYWORDS_BY_CATEGORY: dict[RuleCategory, tuple[str, ...]] = {
    "module-structure": (
        "module", "modules", "structure", "layout",
        "organize", "organization", "directory", "folder",
    ),
    "module-boundaries": (
        "boundary", "boundaries", "api", "facade",
        "encapsulation", "contract", "public", "barrel",
    ),
    "module-communication": (
        "communication", "event", "events", "messaging", "sync", "async", "event-bus",
    ),
    "data-isolation": (
        "data", "database", "schema", "isolation", "ownership",
        "table", "tables", "join", "prisma",
    ),
    "dependency-management": (
        "dependency", "dependencies", "coupling", "acyclic", "circular", "cycle", "dag",
    ),
    "routes-and-controllers": ("route", "routes", "controller", "handler", "thin", "endpoint"),
    "shared-kernel": ("shared", "kernel", "common", "duplication"),
    "testing-strategy": ("test", "testing", "tests", "mock", "contract-test"),
    "external-integrations": ("external", "client", "wrapper", "integration", "provider"),
    "migration": (
        "migration", "strangler", "extract", "legacy", "monolith", "microservice", "split",
    ),
}  # fmt: skip

CATEGORY_KEYWORDS: MappingProxyType[str, RuleCategory] = MappingProxyType(
    {
        keyword: category
        for category, keywords in _KEYWORDS_BY_CATEGORY.items()
        for keyword in keywords
    }
)


def tokenize(text: str) -> list[str]:
    """Split text into lowercase tokens of letters, digits and hyphens.

    Any other character separates tokens. Empty and single-character tokens
    are dropped.
    """
    return [token for token in _NON_TOKEN_CHARS.split(text.lower()) if len(token) > 1]


def remove_stop_words(tokens: Iterable[str]) -> list[str]:
    """Drop common English words that carry no search signal."""
    return [token for token in tokens if token not in STOP_WORDS]


def detect_category_boosts(tokens: Iterable[str]) -> Counter[RuleCategory]:
    """Count, per category, how many tokens hint at it.

    Categories without a hinting token are absent (a Counter reads them as 0).
    """
    boosts: Counter[RuleCategory] = Counter()
    for token in tokens:
        category = CATEGORY_KEYWORDS.get(token)
        if category is not None:
            boosts[category] += 1
    return boosts
