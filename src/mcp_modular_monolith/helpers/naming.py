"""Module name conversions for generated code."""

import re

MODULE_NAME_RE = re.compile(r"^[a-z][a-z0-9]*(-[a-z0-9]+)*$")


def is_valid_module_name(name: str) -> bool:
    """Kebab-case: lowercase letter first, then lowercase letters, digits and single hyphens."""
    return MODULE_NAME_RE.fullmatch(name) is not None


def to_pascal_case(kebab: str) -> str:
    """'user-management' -> 'UserManagement'."""
    return "".join(word[:1].upper() + word[1:] for word in kebab.split("-"))


def to_camel_case(kebab: str) -> str:
    """'user-management' -> 'userManagement'."""
    first, *rest = kebab.split("-")
    return first + "".join(word[:1].upper() + word[1:] for word in rest)
