"""Catalog store - read-only access to rules, anti-patterns and decision trees.

The catalog is loaded from YAML once per process. Lookups return ``None``
and filters return empty lists for unknown ids or categories; nothing here
raises for a miss.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path
from types import MappingProxyType
from typing import TypeVar

import yaml
from pydantic import ValidationError

from ..models import AntiPattern, CatalogEntry, CatalogError, DecisionTree, GoTo, Rule

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"

RULES_FILE = "rules.yaml"
ANTI_PATTERNS_FILE = "anti_patterns.yaml"
DECISION_TREES_FILE = "decision_trees.yaml"

START_NODE_ID = "start"

EntryT = TypeVar("EntryT", bound=CatalogEntry)


def group_by_category(entries: Iterable[EntryT]) -> dict[str, list[EntryT]]:
    """Group entries by category.

    Categories appear in first-seen order, entries keep their relative order.
    """
    grouped: dict[str, list[EntryT]] = {}
    for entry in entries:
        grouped.setdefault(entry.category, []).append(entry)
    return grouped


def find_decision_tree_problems(tree: DecisionTree) -> list[str]:
    """Check the structural invariants of a decision tree.

    Returns a list of human-readable problems (empty if the tree is sound):
    unique node ids, a ``start`` node, edges pointing at existing nodes,
    no cycles, and every node reachable from ``start``.
    """
    problems: list[str] = []
    nodes = {}
    for node in tree.nodes:
        if node.id in nodes:
            problems.append(f"duplicate node id '{node.id}'")
        nodes[node.id] = node

    if START_NODE_ID not in nodes:
        problems.append(f"missing '{START_NODE_ID}' node")
        return problems

    for node in tree.nodes:
        for edge in (node.yes, node.no):
            if isinstance(edge, GoTo) and edge.node_id not in nodes:
                problems.append(f"node '{node.id}' points at unknown node '{edge.node_id}'")
    if problems:
        return problems

    # Depth-first walk from start; on_path holds the current recursion stack
    visited: set[str] = set()
    on_path: set[str] = set()

    def _walk(node_id: str) -> None:
        visited.add(node_id)
        on_path.add(node_id)
        node = nodes[node_id]
        for edge in (node.yes, node.no):
            if not isinstance(edge, GoTo):
                continue
            if edge.node_id in on_path:
                problems.append(f"cycle through '{node_id}' -> '{edge.node_id}'")
            elif edge.node_id not in visited:
                _walk(edge.node_id)
        on_path.discard(node_id)

    _walk(START_NODE_ID)

    unreachable = [node.id for node in tree.nodes if node.id not in visited]
    if unreachable:
        problems.append(f"unreachable nodes: {', '.join(unreachable)}")
    return problems


class CatalogStore:
    """In-memory, read-only catalog of architecture knowledge.

    Holds three parallel collections keyed by id. Iteration order is the
    order entries were declared in the data files.
    """

    def __init__(
        self,
        rules: Iterable[Rule],
        anti_patterns: Iterable[AntiPattern],
        decision_trees: Iterable[DecisionTree],
    ) -> None:
        self._rules = tuple(rules)
        self._anti_patterns = tuple(anti_patterns)
        self._decision_trees = tuple(decision_trees)

        self._rules_by_id = _index_by_id(self._rules, "rule")
        self._anti_patterns_by_id = _index_by_id(self._anti_patterns, "anti-pattern")
        self._decision_trees_by_id = _index_by_id(self._decision_trees, "decision tree")

        for tree in self._decision_trees:
            problems = find_decision_tree_problems(tree)
            if problems:
                msg = f"Decision tree '{tree.id}' is invalid: {'; '.join(problems)}"
                raise CatalogError(msg)

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    @property
    def anti_patterns(self) -> tuple[AntiPattern, ...]:
        return self._anti_patterns

    @property
    def decision_trees(self) -> tuple[DecisionTree, ...]:
        return self._decision_trees

    def find_rule(self, rule_id: str) -> Rule | None:
        return self._rules_by_id.get(rule_id)

    def find_anti_pattern(self, anti_pattern_id: str) -> AntiPattern | None:
        return self._anti_patterns_by_id.get(anti_pattern_id)

    def find_decision_tree(self, tree_id: str) -> DecisionTree | None:
        return self._decision_trees_by_id.get(tree_id)

    def rules_in_category(self, category: str) -> list[Rule]:
        return [rule for rule in self._rules if rule.category == category]

    def anti_patterns_in_category(self, category: str) -> list[AntiPattern]:
        return [ap for ap in self._anti_patterns if ap.category == category]

    def rules_by_category(self) -> dict[str, list[Rule]]:
        return group_by_category(self._rules)

    def __repr__(self) -> str:
        return (
            f"CatalogStore(rules={len(self._rules)}, anti_patterns={len(self._anti_patterns)}, "
            f"decision_trees={len(self._decision_trees)})"
        )


def _index_by_id(records: Sequence, kind: str) -> MappingProxyType:
    index = {}
    for record in records:
        if record.id in index:
            msg = f"Duplicate {kind} id '{record.id}'"
            raise CatalogError(msg)
        index[record.id] = record
    return MappingProxyType(index)


def _load_yaml_list(path: Path, key: str) -> list[dict]:
    """Load the list stored under ``key`` in a catalog YAML file."""
    try:
        with path.open(encoding="utf-8") as f:
            document = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        msg = f"Invalid YAML in catalog file {path}: {e}"
        raise CatalogError(msg) from e
    except OSError as e:
        msg = f"Failed to read catalog file {path}: {e}"
        raise CatalogError(msg) from e

    items = document.get(key) if isinstance(document, dict) else None
    if not isinstance(items, list):
        msg = f"Catalog file {path} must contain a '{key}' list"
        raise CatalogError(msg)
    return items


def _parse_records(model: type, items: list[dict], path: Path) -> list:
    records = []
    for position, item in enumerate(items):
        try:
            records.append(model.model_validate(item))
        except ValidationError as e:
            label = item.get("id", f"#{position}") if isinstance(item, dict) else f"#{position}"
            msg = f"Invalid {model.__name__} '{label}' in {path}: {e}"
            raise CatalogError(msg) from e
    return records


def load_catalog(data_dir: Path | None = None) -> CatalogStore:
    """Load the catalog from a directory of YAML files.

    Args:
        data_dir: Directory holding rules.yaml, anti_patterns.yaml and
            decision_trees.yaml (defaults to the packaged data)

    Returns:
        Populated CatalogStore

    Raises:
        CatalogError: If a file is missing, malformed or violates an invariant

    """
    data_dir = data_dir or DATA_DIR

    rules_path = data_dir / RULES_FILE
    anti_patterns_path = data_dir / ANTI_PATTERNS_FILE
    trees_path = data_dir / DECISION_TREES_FILE

    store = CatalogStore(
        rules=_parse_records(Rule, _load_yaml_list(rules_path, "rules"), rules_path),
        anti_patterns=_parse_records(
            AntiPattern, _load_yaml_list(anti_patterns_path, "anti_patterns"), anti_patterns_path
        ),
        decision_trees=_parse_records(
            DecisionTree, _load_yaml_list(trees_path, "decision_trees"), trees_path
        ),
    )
    logger.info(f"Loaded catalog from {data_dir}: {store!r}")
    return store


@functools.lru_cache(maxsize=None)
def get_catalog(data_dir: Path | None = None) -> CatalogStore:
    """Process-wide catalog, loaded on first use and cached per data directory."""
    return load_catalog(data_dir)
