"""List catalog rules, optionally filtered by category."""

__all__ = ["list_rules"]

from ..catalog import CatalogStore
from ..helpers.categories import is_valid_category, valid_categories_hint
from ..helpers.markdown import format_catalog_grouped, format_rule_list


def list_rules(category: str | None, catalog: CatalogStore) -> str:
    """List rules of one category, or the whole catalog grouped by category.

    Args:
        category: Category id to filter by (None or empty for all rules)
        catalog: Catalog to list

    Returns:
        Markdown bullet list, grouped catalog, or an "invalid category" message.

    """
    if category and not is_valid_category(category):
        return f'Invalid category "{category}". Valid categories: {valid_categories_hint()}'

    if category:
        return format_rule_list(catalog.rules_in_category(category))

    return format_catalog_grouped(catalog.rules_by_category())
