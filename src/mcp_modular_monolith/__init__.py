"""MCP Modular Monolith - Architecture rule catalog for AI agents.

This package serves a static catalog of Modular Monolith architecture rules,
anti-patterns and decision trees via MCP (Model Context Protocol).

The main entry point is the server module:
    from mcp_modular_monolith.server import main, mcp, TOOL_IMPLS

Individual tool implementations can be imported from their modules:
    from mcp_modular_monolith.tools.search_rule import search_rule
    from mcp_modular_monolith.tools.check_imports import check_imports

Note: We intentionally do NOT re-export tool functions here to avoid
namespace shadowing issues (importing `from . import X` would get the
function, not the module).
"""

__version__ = "1.0.0"
