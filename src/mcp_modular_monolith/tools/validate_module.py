"""Check a module directory against the standard module layout.

Only file names are inspected; nothing is parsed or executed.
"""

__all__ = ["validate_module"]

import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExpectedFile:
    """File name fragment a module should contain, with the rule asking for it."""

    pattern: str
    label: str
    rule: str


REQUIRED_FILES = (
    ExpectedFile(".service.", "Service (business logic)", "standard-module-layout"),
    ExpectedFile(".types.", "Types (domain models)", "standard-module-layout"),
    ExpectedFile("index.", "Public API (index.ts barrel)", "define-public-api"),
)

RECOMMENDED_FILES = (
    ExpectedFile(".repository.", "Repository (data access)", "vertical-slice-per-module"),
    ExpectedFile(".validation.", "Validation (input schemas)", "request-validation-at-edge"),
    ExpectedFile(".routes.", "Routes (API layer)", "thin-routes"),
)

REQUIRED_WEIGHT = 70
RECOMMENDED_WEIGHT = 30


def compliance_score(required_found: int, recommended_found: int) -> int:
    """Weighted percentage: required files count 70%, recommended 30%."""
    score = (required_found / len(REQUIRED_FILES)) * REQUIRED_WEIGHT + (
        recommended_found / len(RECOMMENDED_FILES)
    ) * RECOMMENDED_WEIGHT
    # Round half up, not half to even
    return int(score + 0.5)


def validate_module(path: str) -> str:
    """Validate the layout of a single module directory.

    Args:
        path: Absolute path to the module directory (e.g. '/project/src/modules/orders')

    Returns:
        Markdown report with PASS/FAIL/MISSING per expected file and a
        compliance score, or a "could not read" message.

    """
    module_dir = Path(path)
    try:
        files = [entry.name for entry in module_dir.iterdir()]
    except OSError as e:
        logger.debug(f"validate_module: cannot list {path}: {e}")
        return (
            f"Could not read directory: {path}\nMake sure the path exists and is accessible."
        )

    lines = [
        f"# Module Validation: `{module_dir.name}`",
        "",
        f"**Path:** {path}",
        f"**Files found:** {len(files)}",
        "",
        "## Required Files",
    ]

    required_found = 0
    for expected in REQUIRED_FILES:
        found = any(expected.pattern in name for name in files)
        required_found += found
        lines.append(f"- [{'PASS' if found else 'FAIL'}] {expected.label} — rule: `{expected.rule}`")

    recommended_found = 0
    lines.extend(["", "## Recommended Files"])
    for expected in RECOMMENDED_FILES:
        found = any(expected.pattern in name for name in files)
        recommended_found += found
        lines.append(
            f"- [{'PASS' if found else 'MISSING'}] {expected.label} — rule: `{expected.rule}`"
        )

    lines.extend(
        [
            "",
            "## Summary",
            f"- Required: {required_found}/{len(REQUIRED_FILES)}",
            f"- Recommended: {recommended_found}/{len(RECOMMENDED_FILES)}",
            f"- Compliance score: **{compliance_score(required_found, recommended_found)}%**",
        ]
    )

    if required_found < len(REQUIRED_FILES):
        lines.extend(
            [
                "",
                "## Actions",
                "Missing required files indicate the module may not follow the standard layout.",
                "Use `get-template` to generate the missing files.",
            ]
        )

    return "\n".join(lines)
