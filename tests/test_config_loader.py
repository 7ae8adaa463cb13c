"""Tests for configuration loading."""

import json
import logging
from pathlib import Path

import pytest

from mcp_modular_monolith.helpers.config_loader import (
    DEFAULT_CONFIG,
    find_config_file,
    get_catalog_data_dir,
    get_log_level,
    get_search_config,
    get_validation_config,
    load_config,
)


@pytest.fixture
def temp_workspace(tmp_path: Path) -> Path:
    """Create temporary workspace for testing."""
    return tmp_path


def _write_config(path: Path, config: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config), encoding="utf-8")


def test_defaults_without_config_file(temp_workspace: Path) -> None:
    assert find_config_file(temp_workspace) is None
    assert load_config(temp_workspace) == DEFAULT_CONFIG


def test_load_config_does_not_share_defaults(temp_workspace: Path) -> None:
    config = load_config(temp_workspace)
    config["validation"]["extensions"].append(".js")

    assert DEFAULT_CONFIG["validation"]["extensions"] == [".ts", ".tsx"]


def test_root_config_file_wins(temp_workspace: Path) -> None:
    _write_config(temp_workspace / ".mcp" / "config.json", {"search": {"max_results": 3}})
    _write_config(temp_workspace / "mcp_config.json", {"search": {"max_results": 5}})

    assert find_config_file(temp_workspace) == temp_workspace / "mcp_config.json"
    assert load_config(temp_workspace)["search"]["max_results"] == 5


def test_dot_mcp_config_file(temp_workspace: Path) -> None:
    _write_config(temp_workspace / ".mcp" / "config.json", {"validation": {"exclude_dirs": ["dist"]}})

    config = load_config(temp_workspace)

    # Lists replace, nested dicts merge
    assert config["validation"]["exclude_dirs"] == ["dist"]
    assert config["validation"]["extensions"] == [".ts", ".tsx"]
    assert config["search"] == DEFAULT_CONFIG["search"]


def test_invalid_json_raises(temp_workspace: Path) -> None:
    (temp_workspace / "mcp_config.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(ValueError, match="Invalid JSON"):
        load_config(temp_workspace)


def test_non_object_config_raises(temp_workspace: Path) -> None:
    _write_config(temp_workspace / "mcp_config.json", [1, 2, 3])

    with pytest.raises(ValueError, match="must contain a JSON object"):
        load_config(temp_workspace)


def test_invalid_values_fall_back_to_defaults(temp_workspace: Path, caplog) -> None:
    _write_config(
        temp_workspace / "mcp_config.json",
        {
            "search": {"max_results": 0, "max_context_results": 4},
            "logging": {"level": "LOUD"},
            "catalog": "elsewhere",
            "extras": True,
        },
    )

    with caplog.at_level(logging.WARNING):
        config = load_config(temp_workspace)

    assert config["search"]["max_results"] == 10
    assert config["search"]["max_context_results"] == 4
    assert config["logging"]["level"] == "WARNING"
    assert config["catalog"] == {"data_dir": None}
    assert "Unknown config keys: extras" in caplog.text
    assert "'search.max_results' must be a positive integer" in caplog.text


def test_section_getters_fill_defaults() -> None:
    assert get_search_config(None) == DEFAULT_CONFIG["search"]
    assert get_search_config({"search": {"max_results": 2}})["max_detailed_results"] == 3
    assert get_validation_config({})["exclude_dirs"] == ["node_modules", "build"]


def test_catalog_data_dir_resolution(temp_workspace: Path) -> None:
    assert get_catalog_data_dir({}, temp_workspace) is None
    assert get_catalog_data_dir({"catalog": {"data_dir": "kb"}}, temp_workspace) == temp_workspace / "kb"
    absolute = temp_workspace / "abs"
    assert get_catalog_data_dir({"catalog": {"data_dir": str(absolute)}}, Path("/elsewhere")) == absolute


def test_log_level() -> None:
    assert get_log_level(None) == logging.WARNING
    assert get_log_level({"logging": {"level": "debug"}}) == logging.DEBUG


def test_mistyped_values_fall_back_to_defaults(temp_workspace: Path, caplog) -> None:
    _write_config(
        temp_workspace / "mcp_config.json",
        {
            "search": {"max_results": True, "max_detailed_results": 2},
            "catalog": {"data_dir": 5},
            "validation": {"extensions": 5, "exclude_dirs": "build"},
        },
    )

    with caplog.at_level(logging.WARNING):
        config = load_config(temp_workspace)

    assert config["search"]["max_results"] == 10
    assert config["search"]["max_detailed_results"] == 2
    assert config["catalog"]["data_dir"] is None
    assert config["validation"] == DEFAULT_CONFIG["validation"]
    assert "'search.max_results' must be a positive integer" in caplog.text
    assert "'catalog.data_dir' must be a string or null" in caplog.text
    assert "'validation.extensions' must be a list of strings" in caplog.text
    assert "'validation.exclude_dirs' must be a list of strings" in caplog.text


def test_section_getters_drop_mistyped_values(temp_workspace: Path) -> None:
    # Tools may be handed a config that never went through load_config
    assert get_search_config({"search": {"max_results": False}})["max_results"] == 10
    assert get_search_config({"search": "many"}) == DEFAULT_CONFIG["search"]
    validation = get_validation_config({"validation": {"extensions": 5, "exclude_dirs": ["dist", 3]}})
    assert validation == DEFAULT_CONFIG["validation"]
    assert get_validation_config({"validation": {"extensions": [".js"]}})["extensions"] == [".js"]
    assert get_catalog_data_dir({"catalog": {"data_dir": 5}}, temp_workspace) is None
    assert get_catalog_data_dir({"catalog": ["kb"]}, temp_workspace) is None
    assert get_log_level({"logging": "debug"}) == logging.WARNING
