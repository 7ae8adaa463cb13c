"""Prompt builders embedding catalog rules for design and review sessions."""

from __future__ import annotations

from collections.abc import Iterable

from .catalog import CatalogStore
from .helpers.categories import RuleCategory, is_valid_category
from .helpers.markdown import format_rule_as_markdown
from .search.format_results import BLOCK_SEPARATOR

DEFAULT_FOCUS_CATEGORIES: tuple[RuleCategory, ...] = (
    "module-boundaries",
    "module-communication",
    "data-isolation",
    "dependency-management",
)

DESIGN_RELEVANT_CATEGORIES: tuple[RuleCategory, ...] = (
    "module-structure",
    "module-boundaries",
    "module-communication",
    "data-isolation",
)


def parse_focus_categories(raw: str | None) -> list[str]:
    """Parse a comma-separated category list, falling back to the defaults.

    Unknown names are dropped; if none survive the defaults are used.
    """
    if not raw:
        return list(DEFAULT_FOCUS_CATEGORIES)
    parsed = [part.strip() for part in raw.split(",") if is_valid_category(part.strip())]
    return parsed or list(DEFAULT_FOCUS_CATEGORIES)


def _rules_reference(catalog: CatalogStore, categories: Iterable[str]) -> str:
    wanted = set(categories)
    return BLOCK_SEPARATOR.join(
        format_rule_as_markdown(rule) for rule in catalog.rules if rule.category in wanted
    )


def build_architecture_review_prompt(
    catalog: CatalogStore,
    code: str,
    language: str | None = None,
    focus_categories: str | None = None,
) -> str:
    """Review request for a code snippet with the focus-category rules attached."""
    categories = parse_focus_categories(focus_categories)
    language_hint = f" ({language})" if language else ""

    return f"""# Modular Monolith Architecture Review

Please review the following code{language_hint} against Modular Monolith architecture rules, focusing on these categories: **{', '.join(categories)}**.

## Code to Review

```
{code}
```

## Review Instructions

For each issue found:
1. Identify the specific architecture rule being violated (include the rule ID)
2. Explain why this matters for module boundaries and maintainability
3. Suggest a concrete improvement with a code example
4. Reference related Clean Code principles where applicable

Prioritize the most impactful architectural issues first. Be specific and actionable.

**Ecosystem tip:** For a complete review, also use the `clean-code-review` prompt from the clean-code-mcp server to check code-level quality.

## Architecture Rules Reference

{_rules_reference(catalog, categories)}"""


def build_module_design_prompt(
    catalog: CatalogStore,
    module_name: str,
    description: str,
    responsibilities: str,
) -> str:
    """Design checklist for a new module with the structural rules attached."""
    responsibility_list = "\n".join(f"- {item.strip()}" for item in responsibilities.split(","))

    return f"""# Module Design: {module_name}

## Module Description
{description}

## Responsibilities
{responsibility_list}

## Design Tasks

Please help design this module by addressing:

### 1. Structure
- What files should this module contain?
- Follow the standard module layout (rule: `standard-module-layout`)
- Ensure it's a proper vertical slice (rule: `vertical-slice-per-module`)

### 2. Public API
- What should the module's index.ts export?
- Define the DTOs that form the module's contract (rule: `dto-at-boundaries`)
- What should remain internal? (rule: `hide-implementation-details`)

### 3. Data Ownership
- What data does this module own? (rule: `data-ownership-principle`)
- What tables/collections will it need?
- Are there any data it needs from other modules? If so, how to access it? (rule: `no-cross-module-joins`)

### 4. Communication
- Which other modules will this module interact with?
- For each interaction: sync (service call) or async (events)? (rule: `sync-via-service-interface`, `async-via-events`)
- What events should this module emit?
- What events should this module listen to?

### 5. Dependencies
- Map the dependency graph, which modules does this one depend on?
- Ensure no circular dependencies (rule: `acyclic-dependency-graph`)
- Ensure dependency direction flows correctly (rule: `dependency-direction`)

## Architecture Rules Reference

{_rules_reference(catalog, DESIGN_RELEVANT_CATEGORIES)}"""
