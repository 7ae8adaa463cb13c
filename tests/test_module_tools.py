"""Tests for the validate-module and check-imports tools."""

from pathlib import Path

import pytest

from mcp_modular_monolith.tools.check_imports import (
    check_imports,
    extract_module_name,
    is_internal_import,
    iter_source_files,
)
from mcp_modular_monolith.tools.validate_module import compliance_score, validate_module


def _touch(directory: Path, *names: str) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    for name in names:
        (directory / name).write_text("", encoding="utf-8")


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


# === validate-module ===


@pytest.mark.parametrize(
    ("required", "recommended", "expected"),
    [(3, 3, 100), (3, 0, 70), (0, 3, 30), (0, 0, 0), (2, 1, 57), (1, 2, 43)],
)
def test_compliance_score(required: int, recommended: int, expected: int) -> None:
    assert compliance_score(required, recommended) == expected


def test_validate_complete_module(modules_dir: Path) -> None:
    orders = modules_dir / "orders"
    _touch(
        orders,
        "order.service.ts",
        "order.types.ts",
        "index.ts",
        "order.repository.ts",
        "order.validation.ts",
        "order.routes.ts",
    )

    output = validate_module(str(orders))

    assert output.startswith("# Module Validation: `orders`")
    assert "**Files found:** 6" in output
    assert "[FAIL]" not in output
    assert "[MISSING]" not in output
    assert "Compliance score: **100%**" in output
    assert "## Actions" not in output


def test_validate_module_missing_required_file(modules_dir: Path) -> None:
    orders = modules_dir / "orders"
    _touch(orders, "order.service.ts", "order.types.ts", "order.repository.ts")

    output = validate_module(str(orders))

    assert "- [FAIL] Public API (index.ts barrel) — rule: `define-public-api`" in output
    assert "- [PASS] Repository (data access) — rule: `vertical-slice-per-module`" in output
    assert "- [MISSING] Routes (API layer) — rule: `thin-routes`" in output
    assert "- Required: 2/3" in output
    assert "- Recommended: 1/3" in output
    assert "Compliance score: **57%**" in output
    assert "Use `get-template` to generate the missing files." in output


def test_validate_empty_module(modules_dir: Path) -> None:
    empty = modules_dir / "empty"
    empty.mkdir()

    output = validate_module(str(empty))

    assert "**Files found:** 0" in output
    assert "Compliance score: **0%**" in output


def test_validate_missing_directory(tmp_path: Path) -> None:
    missing = tmp_path / "nope"
    assert validate_module(str(missing)) == (
        f"Could not read directory: {missing}\nMake sure the path exists and is accessible."
    )


# === check-imports helpers ===


def test_extract_module_name() -> None:
    assert extract_module_name("/p/modules/orders/order.service.ts", "/p/modules") == "orders"
    assert extract_module_name("/p/modules/orders/sub/deep.ts", "/p/modules") == "orders"
    assert extract_module_name("/p/modules/loose.ts", "/p/modules") is None
    assert extract_module_name("/p/shared/util.ts", "/p/modules") is None


@pytest.mark.parametrize(
    ("import_path", "expected"),
    [
        ("../users/user.repository.js", True),
        ("../users/internal/helpers", True),
        ("../users/index.js", False),
        ("../users/index", False),
        ("../users", False),
        ("../users/", False),
        ("../billing/invoice.js", False),
    ],
)
def test_is_internal_import(import_path: str, expected: bool) -> None:
    assert is_internal_import(import_path, "users") is expected


def test_iter_source_files_filters_and_sorts(modules_dir: Path) -> None:
    _touch(modules_dir / "b", "b.service.ts", "b.view.tsx", "types.d.ts", "notes.md")
    _touch(modules_dir / "a", "a.service.ts")
    _touch(modules_dir / "a" / "node_modules" / "dep", "dep.ts")

    files = list(iter_source_files(modules_dir, [".ts", ".tsx"], ["node_modules"]))

    assert [f.relative_to(modules_dir).as_posix() for f in files] == [
        "a/a.service.ts",
        "b/b.service.ts",
        "b/b.view.tsx",
    ]


# === check-imports ===


def test_check_imports_reports_violations(modules_dir: Path) -> None:
    _write(
        modules_dir / "orders" / "order.service.ts",
        'import { UserRepository } from "../users/user.repository.js";\n'
        'import { getUser } from "../users/index.js";\n'
        'import { Order } from "./order.types.js";\n'
        'import { z } from "zod";\n',
    )
    _write(modules_dir / "users" / "index.ts", 'export * from "./user.service.js";\n')
    _write(
        modules_dir / "billing" / "invoice.service.ts",
        "\n\nexport { Order } from '../orders/order.types';\n",
    )

    output = check_imports(str(modules_dir))

    assert f"**Scanned:** 3 files in {modules_dir}" in output
    assert "## Result: 2 violation(s) found" in output
    assert "### orders → users" in output
    assert "- `orders/order.service.ts:1` imports `../users/user.repository.js`" in output
    assert "### billing → orders" in output
    assert "- `billing/invoice.service.ts:3` imports `../orders/order.types`" in output
    assert "## How to fix" in output
    assert "`no-direct-module-imports`" in output


def test_check_imports_clean_project(modules_dir: Path) -> None:
    _write(modules_dir / "orders" / "order.service.ts", 'import { getUser } from "../users";\n')
    _write(modules_dir / "users" / "index.ts", "export const getUser = () => null;\n")

    output = check_imports(str(modules_dir))

    assert "## Result: No violations found" in output
    assert "How to fix" not in output


def test_check_imports_respects_configured_extensions(modules_dir: Path) -> None:
    _write(modules_dir / "orders" / "order.service.js", 'import x from "../users/user.repository.js";\n')

    default_output = check_imports(str(modules_dir))
    js_output = check_imports(str(modules_dir), config={"validation": {"extensions": [".js"]}})

    assert "**Scanned:** 0 files" in default_output
    assert "## Result: 1 violation(s) found" in js_output


def test_check_imports_missing_directory(tmp_path: Path) -> None:
    missing = tmp_path / "nope"
    assert check_imports(str(missing)) == (
        f"Could not read directory: {missing}\n"
        "Make sure the path exists and contains module directories."
    )


def test_check_imports_ignores_mistyped_validation_config(modules_dir: Path) -> None:
    _write(modules_dir / "orders" / "order.service.ts", 'import x from "../users/user.repository.js";\n')

    numeric = check_imports(str(modules_dir), config={"validation": {"extensions": 5}})
    # A bare string would otherwise be split into single characters
    string = check_imports(str(modules_dir), config={"validation": {"extensions": ".js", "exclude_dirs": "orders"}})

    assert "**Scanned:** 1 files" in numeric
    assert "## Result: 1 violation(s) found" in numeric
    assert numeric == string
