"""JSON documents served as MCP resources.

URIs:
- modular://catalog: rules grouped by category label
- modular://rule/{id}, modular://anti-pattern/{id}, modular://decision-tree/{id}

Unknown ids produce an ``{"error": ...}`` document instead of a failure.
"""

import json

from pydantic import BaseModel

from .catalog import CatalogStore
from .helpers.categories import category_label

CATALOG_URI = "modular://catalog"
RULE_URI_TEMPLATE = "modular://rule/{rule_id}"
ANTI_PATTERN_URI_TEMPLATE = "modular://anti-pattern/{anti_pattern_id}"
DECISION_TREE_URI_TEMPLATE = "modular://decision-tree/{tree_id}"


def _dump(document: object) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False)


def _record_or_error(record: BaseModel | None, not_found: str) -> str:
    if record is None:
        return json.dumps({"error": not_found}, ensure_ascii=False)
    return _dump(record.model_dump(mode="json", exclude_none=True))


def build_grouped_catalog(catalog: CatalogStore) -> dict[str, list[dict[str, str]]]:
    """Rule ids and names keyed by category label, in catalog order."""
    grouped: dict[str, list[dict[str, str]]] = {}
    for category, rules in catalog.rules_by_category().items():
        grouped[category_label(category)] = [{"id": rule.id, "name": rule.name} for rule in rules]
    return grouped


def read_catalog(catalog: CatalogStore) -> str:
    return _dump(build_grouped_catalog(catalog))


def read_rule(catalog: CatalogStore, rule_id: str) -> str:
    return _record_or_error(catalog.find_rule(rule_id), f'Rule "{rule_id}" not found')


def read_anti_pattern(catalog: CatalogStore, anti_pattern_id: str) -> str:
    return _record_or_error(
        catalog.find_anti_pattern(anti_pattern_id), f'Anti-pattern "{anti_pattern_id}" not found'
    )


def read_decision_tree(catalog: CatalogStore, tree_id: str) -> str:
    return _record_or_error(
        catalog.find_decision_tree(tree_id), f'Decision tree "{tree_id}" not found'
    )
