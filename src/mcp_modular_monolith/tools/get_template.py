"""Render scaffolding templates for a module.

Templates live next to the package as ``templates/*.tmpl`` and use
``string.Template`` placeholders: ``$name`` (kebab-case), ``$pascal``,
``$camel`` and ``$flat`` (hyphens removed).
"""

__all__ = ["TEMPLATE_NAMES", "get_template", "render_template"]

import logging
from pathlib import Path
from string import Template
from typing import Literal, get_args

from ..helpers.naming import is_valid_module_name, to_camel_case, to_pascal_case

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"

TemplateName = Literal[
    "module-scaffold",
    "service",
    "repository",
    "types",
    "validation",
    "public-api",
    "route-handler",
    "integration-client",
]

TEMPLATE_NAMES: tuple[str, ...] = get_args(TemplateName)

TEMPLATE_FILES: dict[str, str] = {
    "module-scaffold": "module_scaffold.md.tmpl",
    "service": "service.ts.tmpl",
    "repository": "repository.ts.tmpl",
    "types": "types.ts.tmpl",
    "validation": "validation.ts.tmpl",
    "public-api": "public_api.ts.tmpl",
    "route-handler": "route_handler.ts.tmpl",
    "integration-client": "integration_client.ts.tmpl",
}


def render_template(template: str, module_name: str) -> str:
    """Fill a template for a (valid, kebab-case) module name.

    Raises:
        KeyError: If the template name is unknown
        OSError: If the template file cannot be read

    """
    source = (TEMPLATES_DIR / TEMPLATE_FILES[template]).read_text(encoding="utf-8")
    return Template(source).substitute(
        name=module_name,
        pascal=to_pascal_case(module_name),
        camel=to_camel_case(module_name),
        flat=module_name.replace("-", ""),
    )


def get_template(template: str, module_name: str) -> str:
    """Generate scaffolding code for one file (or the whole module).

    Args:
        template: One of TEMPLATE_NAMES
        module_name: Module name in kebab-case (e.g. 'orders', 'user-management')

    Returns:
        Ready-to-use code with comments referencing the architecture rules,
        or a message explaining why the input was rejected.

    """
    if template not in TEMPLATE_FILES:
        return f'Unknown template "{template}". Options: {", ".join(TEMPLATE_NAMES)}'

    if not is_valid_module_name(module_name):
        return (
            f'Invalid module name "{module_name}". Module names must be kebab-case: '
            "start with a lowercase letter, contain only lowercase letters, digits, and "
            "hyphens (e.g. 'orders', 'user-management')."
        )

    try:
        return render_template(template, module_name)
    except OSError as e:
        logger.warning(f"get_template: cannot read template {template!r}: {e}")
        return f'Template "{template}" is unavailable: {e}'
