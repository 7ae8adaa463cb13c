"""
Catalog package.
"""

from .store import (
    CatalogStore,
    find_decision_tree_problems,
    get_catalog,
    group_by_category,
    load_catalog,
)

__all__ = [
    "CatalogStore",
    "find_decision_tree_problems",
    "get_catalog",
    "group_by_category",
    "load_catalog",
]
