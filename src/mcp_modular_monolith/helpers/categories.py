"""Rule categories and their display labels.

Every catalog entry belongs to exactly one of these ten categories.
The tuple order is the order categories are listed to users.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Literal, get_args

RuleCategory = Literal[
    "module-structure",
    "module-boundaries",
    "module-communication",
    "data-isolation",
    "dependency-management",
    "routes-and-controllers",
    "shared-kernel",
    "testing-strategy",
    "external-integrations",
    "migration",
]

CATEGORIES: tuple[RuleCategory, ...] = get_args(RuleCategory)

CATEGORY_LABELS = MappingProxyType(
    {
        "module-structure": "Module Structure",
        "module-boundaries": "Module Boundaries",
        "module-communication": "Module Communication",
        "data-isolation": "Data Isolation",
        "dependency-management": "Dependency Management",
        "routes-and-controllers": "Routes & Controllers",
        "shared-kernel": "Shared Kernel",
        "testing-strategy": "Testing Strategy",
        "external-integrations": "External Integrations",
        "migration": "Migration & Evolution",
    }
)


def is_valid_category(value: str) -> bool:
    """Check whether a raw string names one of the known categories."""
    return value in CATEGORIES


def category_label(category: str) -> str:
    """Display label for a category (falls back to the raw value)."""
    return CATEGORY_LABELS.get(category, category)


def valid_categories_hint() -> str:
    """Comma-separated category list for user-facing messages."""
    return ", ".join(CATEGORIES)
