"""Configuration loader for the Modular Monolith MCP server.

Loads and validates configuration from the workspace with smart defaults.
"""

import copy
import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

# Default configuration
DEFAULT_CONFIG: dict[str, Any] = {
    "search": {
        "max_results": 10,
        "max_context_results": 8,
        "max_detailed_results": 3,
    },
    "catalog": {
        "data_dir": None,  # Packaged data
    },
    "validation": {
        "exclude_dirs": ["node_modules", "build"],
        "extensions": [".ts", ".tsx"],
    },
    "logging": {
        "level": "WARNING",
    },
}

_SEARCH_LIMIT_KEYS = ("max_results", "max_context_results", "max_detailed_results")
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
_VALIDATION_LIST_KEYS = ("exclude_dirs", "extensions")


def _is_string_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries.

    Override values replace base values. Lists are replaced entirely (not merged).

    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def find_config_file(workspace_root: Path) -> Path | None:
    """Find config file in workspace.

    Search order:
    1. mcp_config.json
    2. .mcp/config.json

    """
    candidates = [
        workspace_root / "mcp_config.json",
        workspace_root / ".mcp" / "config.json",
    ]

    for path in candidates:
        if path.exists():
            return path

    return None


def _load_config_file(config_path: Path) -> dict[str, Any]:
    """Load and parse config file."""
    try:
        with config_path.open(encoding="utf-8") as f:
            result = json.load(f)
    except json.JSONDecodeError as e:
        msg = f"Invalid JSON in config file {config_path}: {e}"
        raise ValueError(msg) from e
    except OSError as e:
        msg = f"Failed to read config file {config_path}: {e}"
        raise ValueError(msg) from e

    if not isinstance(result, dict):
        msg = f"Config file {config_path} must contain a JSON object"
        raise ValueError(msg)
    return result


def _validate_config(config: dict) -> list[str]:
    """Validate config against expected structure.

    Returns list of warning messages (empty if valid).

    """
    warnings = []

    # Check for unknown top-level keys
    known_keys = {"search", "catalog", "validation", "logging", "$schema"}
    unknown = set(config.keys()) - known_keys
    if unknown:
        warnings.append(f"Unknown config keys: {', '.join(sorted(unknown))}")

    for section in ("search", "catalog", "validation", "logging"):
        if section in config and not isinstance(config[section], dict):
            warnings.append(f"'{section}' must be an object")

    search = config.get("search")
    if isinstance(search, dict):
        for key in _SEARCH_LIMIT_KEYS:
            value = search.get(key)
            # bool is an int subclass; true/false are not limits
            if value is not None and (isinstance(value, bool) or not isinstance(value, int) or value < 1):
                warnings.append(f"'search.{key}' must be a positive integer")

    catalog = config.get("catalog")
    if isinstance(catalog, dict):
        data_dir = catalog.get("data_dir")
        if data_dir is not None and not isinstance(data_dir, str):
            warnings.append("'catalog.data_dir' must be a string or null")

    validation = config.get("validation")
    if isinstance(validation, dict):
        for key in _VALIDATION_LIST_KEYS:
            if key in validation and not _is_string_list(validation[key]):
                warnings.append(f"'validation.{key}' must be a list of strings")

    level = config.get("logging", {}).get("level") if isinstance(config.get("logging"), dict) else None
    if level is not None and str(level).upper() not in _LOG_LEVELS:
        warnings.append(f"'logging.level' must be one of {', '.join(sorted(_LOG_LEVELS))}")

    return warnings


def _drop_invalid_values(config: dict, warnings: list[str]) -> dict:
    # Warned-about values fall back to defaults instead of reaching the tools
    config = copy.deepcopy(config)
    for section in ("search", "catalog", "validation", "logging"):
        if section in config and not isinstance(config[section], dict):
            del config[section]
    for key in _SEARCH_LIMIT_KEYS:
        if f"'search.{key}' must be a positive integer" in warnings:
            del config["search"][key]
    if "'catalog.data_dir' must be a string or null" in warnings:
        del config["catalog"]["data_dir"]
    for key in _VALIDATION_LIST_KEYS:
        if f"'validation.{key}' must be a list of strings" in warnings:
            del config["validation"][key]
    if any(w.startswith("'logging.level'") for w in warnings):
        del config["logging"]["level"]
    return config


def load_config(workspace_root: Path | None = None) -> dict:
    """Load configuration with smart defaults.

    Args:
        workspace_root: Path to workspace root (defaults to current directory)

    Returns:
        Merged configuration dict

    Raises:
        ValueError: If config file is invalid

    """
    if workspace_root is None:
        workspace_root = Path.cwd()

    # Start with defaults
    config = copy.deepcopy(DEFAULT_CONFIG)

    # Find and load user config
    config_path = find_config_file(workspace_root)
    if config_path:
        user_config = _load_config_file(config_path)

        # Validate
        warnings = _validate_config(user_config)
        if warnings:
            logger.warning("Config warnings from %s:", config_path)
            for warning in warnings:
                logger.warning("  - %s", warning)
            user_config = _drop_invalid_values(user_config, warnings)

        # Merge with defaults
        config = _deep_merge(config, user_config)

    return config


def _section(config: dict[str, Any] | None, section: str) -> dict[str, Any]:
    """One config section merged over defaults, with invalid values dropped.

    Tools may receive a config that never went through load_config.
    """
    wrapped = {section: (config or {}).get(section, {})}
    warnings = _validate_config(wrapped)
    if warnings:
        wrapped = _drop_invalid_values(wrapped, warnings)
    return _deep_merge(DEFAULT_CONFIG[section], wrapped.get(section, {}))


def get_search_config(config: dict[str, Any] | None) -> dict[str, Any]:
    """Extract search-specific config."""
    return _section(config, "search")


def get_validation_config(config: dict[str, Any] | None) -> dict[str, Any]:
    """Extract validation-specific config."""
    return _section(config, "validation")


def get_catalog_data_dir(config: dict[str, Any] | None, workspace_root: Path) -> Path | None:
    """Resolve the configured catalog directory, relative to the workspace root."""
    raw = _section(config, "catalog").get("data_dir")
    if not raw:
        return None
    path = Path(raw)
    return path if path.is_absolute() else workspace_root / path


def get_log_level(config: dict[str, Any] | None) -> int:
    """Resolve the configured log level name to a logging constant."""
    name = str(_section(config, "logging").get("level", "WARNING")).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING
