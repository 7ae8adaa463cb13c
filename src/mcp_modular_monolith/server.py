#!/usr/bin/env python3
"""Modular Monolith Architecture MCP Server.

Exposes a static catalog of Modular Monolith architecture rules, anti-patterns
and decision trees to AI agents via MCP. All tools return markdown text.

Rule search:
- search-rule: Search rules and anti-patterns by name, keyword, tag or id
- search-by-context: Find rules relevant to a natural-language problem description

Rule catalog:
- list-rules: List rules of one category, or the whole catalog grouped by category

Module validation:
- validate-module: Check a module directory against the standard module layout
- check-imports: Detect cross-module imports that bypass a module's public API

Code templates:
- get-template: Generate scaffolding code for a module file

Resources:
- modular://catalog, modular://rule/{id}, modular://anti-pattern/{id},
  modular://decision-tree/{id}; every catalog entry is also listed by URI

Prompts:
- architecture-review: Review code against the rules of selected categories
- module-design: Design a new module with structure and boundary rules attached

Usage:
    python -m mcp_modular_monolith.server
"""

import functools
import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Annotated

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from . import __version__
from .catalog import CatalogStore, get_catalog
from .helpers.categories import valid_categories_hint
from .helpers.config_loader import (
    find_config_file,
    get_catalog_data_dir,
    get_log_level,
    load_config,
)
from .prompts import build_architecture_review_prompt, build_module_design_prompt
from .resources import (
    ANTI_PATTERN_URI_TEMPLATE,
    CATALOG_URI,
    DECISION_TREE_URI_TEMPLATE,
    RULE_URI_TEMPLATE,
    read_anti_pattern,
    read_catalog,
    read_decision_tree,
    read_rule,
)

# Import tool implementations with _impl suffix to avoid name collision
# with MCP-decorated wrapper functions defined below
from .tools.check_imports import check_imports as check_imports_impl
from .tools.get_template import TEMPLATE_NAMES, TemplateName
from .tools.get_template import get_template as get_template_impl
from .tools.list_rules import list_rules as list_rules_impl
from .tools.search_by_context import search_by_context as search_by_context_impl
from .tools.search_rule import search_rule as search_rule_impl
from .tools.validate_module import validate_module as validate_module_impl

# Tool registry for programmatic access, keyed by MCP tool name
TOOL_IMPLS: dict[str, object] = {
    "search-rule": search_rule_impl,
    "search-by-context": search_by_context_impl,
    "list-rules": list_rules_impl,
    "validate-module": validate_module_impl,
    "check-imports": check_imports_impl,
    "get-template": get_template_impl,
}

# ──────────────────────────────────────────────────────────────────────
# Early Setup: Configure logging to stderr (NEVER stdout for MCP stdio)
# ──────────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=logging.WARNING,
    format="%(name)s: %(message)s",
    stream=sys.stderr,  # Critical: MCP uses stdout for JSON-RPC
)

# Suppress noisy loggers that might write to handlers
for noisy_logger in ["asyncio", "urllib3", "httpcore", "httpx"]:
    logging.getLogger(noisy_logger).setLevel(logging.ERROR)

# Workspace root - determined from current working directory
ROOT = Path.cwd()

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────────────────────────────
# Configuration and Catalog
# ──────────────────────────────────────────────────────────────────────


def _validate_config_on_startup() -> dict:
    """Validate MCP configuration on startup.

    Loads and validates the configuration file. Logs warnings for invalid config
    but does not block startup to allow tools to work with defaults.

    Returns:
        The loaded configuration dict, or empty dict if loading fails.
    """
    try:
        config = load_config(ROOT)
    except ValueError as e:
        logger.warning(f"⚠ Configuration validation error: {e}")
        logger.warning("  Proceeding with default configuration")
        return {}

    logging.getLogger().setLevel(get_log_level(config))

    config_file = find_config_file(ROOT)
    if config_file:
        logger.info(f"✓ Configuration loaded from {config_file}")
    else:
        logger.info("  Using default configuration (no mcp_config.json found)")

    search = config["search"]
    logger.debug(
        f"  Search limits: {search['max_results']} results, "
        f"{search['max_context_results']} context results, "
        f"{search['max_detailed_results']} detailed"
    )
    return config


def _load_catalog_on_startup(config: dict) -> CatalogStore:
    """Load the catalog once; a broken catalog stops the server."""
    data_dir = get_catalog_data_dir(config, ROOT)
    try:
        catalog = get_catalog(data_dir)
    except Exception:
        logger.critical(f"Failed to load catalog from {data_dir or 'packaged data'}")
        raise
    logger.info(
        f"✓ Catalog ready: {len(catalog.rules)} rules, {len(catalog.anti_patterns)} anti-patterns, "
        f"{len(catalog.decision_trees)} decision trees"
    )
    return catalog


_config = _validate_config_on_startup()
_catalog = _load_catalog_on_startup(_config)


# Initialize MCP server
mcp = FastMCP(
    name="modular-monolith-mcp",
    instructions=(
        f"Modular Monolith architecture knowledge base (v{__version__}). "
        "Start with search-by-context to describe a situation in plain words, "
        "or search-rule for a known rule name, tag or id. "
        "list-rules shows the catalog by category. validate-module and check-imports "
        "inspect a project's module directories; get-template scaffolds module files. "
        "Rules, anti-patterns and decision trees are also available as modular:// resources."
    ),
)


# ──────────────────────────────────────────────────────────────────────
# Rule Search Tools
# ──────────────────────────────────────────────────────────────────────


@mcp.tool(name="search-rule")
def search_rule(
    query: Annotated[
        str,
        Field(
            description=(
                "Search term: rule name, keyword, tag, or ID "
                "(e.g. 'thin-routes', 'boundary', 'data-isolation')"
            )
        ),
    ],
) -> str:
    """Search Modular Monolith architecture rules by name, keyword, or ID.

    Returns detailed results for top matches and a summary list for additional matches.
    Also searches anti-patterns.
    """
    return search_rule_impl(query, _catalog, config=_config)


@mcp.tool(name="search-by-context")
def search_by_context(
    context: Annotated[
        str,
        Field(
            description=(
                "Description of the architectural situation, problem, or question "
                "in natural language"
            )
        ),
    ],
) -> str:
    """Find relevant Modular Monolith architecture rules for a given situation.

    Describe what you're dealing with in natural language
    (e.g. 'my modules are importing from each other's internal files').
    """
    return search_by_context_impl(context, _catalog, config=_config)


# ──────────────────────────────────────────────────────────────────────
# Rule Catalog Tools
# ──────────────────────────────────────────────────────────────────────


@mcp.tool(name="list-rules")
def list_rules(
    category: Annotated[
        str | None,
        Field(description=f"Category to filter by. Valid categories: {valid_categories_hint()}"),
    ] = None,
) -> str:
    """List Modular Monolith architecture rules, optionally filtered by category.

    Without a category, returns the full catalog grouped by topic.
    """
    return list_rules_impl(category, _catalog)


# ──────────────────────────────────────────────────────────────────────
# Module Validation Tools
# ──────────────────────────────────────────────────────────────────────


@mcp.tool(name="validate-module")
def validate_module(
    path: Annotated[
        str,
        Field(description="Absolute path to the module directory (e.g. '/project/src/modules/orders')"),
    ],
) -> str:
    """Validate the structure of a module directory against Modular Monolith conventions.

    Checks for required files (service, types, index.ts) and recommended files
    (repository, validation, routes).
    """
    return validate_module_impl(path)


@mcp.tool(name="check-imports")
def check_imports(
    path: Annotated[
        str,
        Field(description="Absolute path to the modules directory (e.g. '/project/src/modules')"),
    ],
) -> str:
    """Analyze imports across modules to detect boundary violations.

    Scans TypeScript files for direct imports between modules that bypass the
    public API (index.ts). Expects a modules directory containing module subdirectories.
    """
    return check_imports_impl(path, config=_config)


# ──────────────────────────────────────────────────────────────────────
# Code Template Tools
# ──────────────────────────────────────────────────────────────────────


@mcp.tool(name="get-template")
def get_template(
    template: Annotated[
        TemplateName,
        Field(description=f"Template to generate. Options: {', '.join(TEMPLATE_NAMES)}"),
    ],
    module_name: Annotated[
        str,
        Field(description="Name of the module in kebab-case (e.g. 'orders', 'user-management')"),
    ],
) -> str:
    """Get a code template for scaffolding module files.

    Returns ready-to-use TypeScript code with comments referencing architecture rules.
    """
    return get_template_impl(template, module_name)


# ──────────────────────────────────────────────────────────────────────
# Resources
# ──────────────────────────────────────────────────────────────────────


@mcp.resource(
    CATALOG_URI,
    name="catalog",
    description="Full catalog of Modular Monolith architecture rules grouped by category",
    mime_type="application/json",
)
def catalog_resource() -> str:
    return read_catalog(_catalog)


@mcp.resource(
    RULE_URI_TEMPLATE,
    name="rule",
    description="Individual architecture rule by ID",
    mime_type="application/json",
)
def rule_resource(rule_id: str) -> str:
    return read_rule(_catalog, rule_id)


@mcp.resource(
    ANTI_PATTERN_URI_TEMPLATE,
    name="anti-pattern",
    description="Individual anti-pattern by ID",
    mime_type="application/json",
)
def anti_pattern_resource(anti_pattern_id: str) -> str:
    return read_anti_pattern(_catalog, anti_pattern_id)


@mcp.resource(
    DECISION_TREE_URI_TEMPLATE,
    name="decision-tree",
    description="Architectural decision tree by ID",
    mime_type="application/json",
)
def decision_tree_resource(tree_id: str) -> str:
    return read_decision_tree(_catalog, tree_id)


def _register_entry_resource(uri: str, name: str, description: str, read: Callable[[], str]) -> None:
    @mcp.resource(uri, name=name, description=description, mime_type="application/json")
    def entry_resource() -> str:
        return read()


def _register_catalog_entries(catalog: CatalogStore) -> None:
    """List every rule, anti-pattern and decision tree as its own resource."""
    for rule in catalog.rules:
        uri = RULE_URI_TEMPLATE.format(rule_id=rule.id)
        _register_entry_resource(uri, rule.name, rule.description, functools.partial(read_rule, catalog, rule.id))
    for anti_pattern in catalog.anti_patterns:
        uri = ANTI_PATTERN_URI_TEMPLATE.format(anti_pattern_id=anti_pattern.id)
        read = functools.partial(read_anti_pattern, catalog, anti_pattern.id)
        _register_entry_resource(uri, anti_pattern.name, anti_pattern.description, read)
    for tree in catalog.decision_trees:
        uri = DECISION_TREE_URI_TEMPLATE.format(tree_id=tree.id)
        read = functools.partial(read_decision_tree, catalog, tree.id)
        _register_entry_resource(uri, tree.name, tree.description, read)


_register_catalog_entries(_catalog)


# ──────────────────────────────────────────────────────────────────────
# Prompts
# ──────────────────────────────────────────────────────────────────────


@mcp.prompt(
    name="architecture-review",
    description=(
        "Generate an architecture review prompt with relevant Modular Monolith rules embedded. "
        "Provide code to review and optionally focus on specific categories."
    ),
)
def architecture_review(
    code: Annotated[str, Field(description="The source code to review")],
    language: Annotated[
        str | None,
        Field(description="Programming language of the code (e.g. 'typescript', 'python')"),
    ] = None,
    focus_categories: Annotated[
        str | None,
        Field(description=f"Comma-separated categories to focus on. Valid: {valid_categories_hint()}"),
    ] = None,
) -> str:
    return build_architecture_review_prompt(
        _catalog, code, language=language, focus_categories=focus_categories
    )


@mcp.prompt(
    name="module-design",
    description=(
        "Generate a prompt to help design a new module with proper structure, "
        "boundaries, and communication patterns."
    ),
)
def module_design(
    module_name: Annotated[
        str,
        Field(description="Name of the module to design (e.g. 'orders', 'user-management')"),
    ],
    description: Annotated[str, Field(description="Brief description of what this module does")],
    responsibilities: Annotated[
        str,
        Field(
            description=(
                "Comma-separated list of the module's responsibilities "
                "(e.g. 'create orders, manage order status, calculate totals')"
            )
        ),
    ],
) -> str:
    return build_module_design_prompt(_catalog, module_name, description, responsibilities)


def main() -> None:
    """Run the MCP server."""
    logger.info("Modular Monolith MCP server running on stdio")
    mcp.run()


# ──────────────────────────────────────────────────────────────────────
# Main Entry Point
# ──────────────────────────────────────────────────────────────────────


if __name__ == "__main__":
    main()
