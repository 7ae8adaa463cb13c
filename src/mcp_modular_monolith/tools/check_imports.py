"""Detect cross-module imports that bypass a module's public API.

Scans TypeScript sources under a modules directory. A relative import from
one module into another is a violation unless it targets the other module's
``index`` barrel.
"""

__all__ = ["check_imports"]

import logging
import os
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from ..helpers.config_loader import get_validation_config

logger = logging.getLogger(__name__)

_IMPORT_RE = re.compile(r"""(?:import|from)\s+['"]([^'"]+)['"]""")

# Import path endings that still go through the public API
_BARREL_SEGMENTS = {"index.js", "index.ts", "index", ""}

RELATED_RULES = ("no-direct-module-imports", "define-public-api", "hide-implementation-details")


@dataclass(frozen=True)
class ImportViolation:
    """A relative import reaching into another module's internals."""

    file: str
    line: int
    import_path: str
    source_module: str
    target_module: str
    reason: str = "Direct import of internal file bypasses module boundary"


def iter_source_files(
    directory: Path, extensions: Iterable[str], exclude_dirs: Iterable[str]
) -> Iterator[Path]:
    """Yield source files below ``directory`` in a stable order.

    Raises:
        OSError: If ``directory`` cannot be listed

    """
    extensions = tuple(extensions)
    exclude_dirs = set(exclude_dirs)

    for entry in sorted(directory.iterdir()):
        if entry.is_dir():
            if entry.name not in exclude_dirs:
                yield from iter_source_files(entry, extensions, exclude_dirs)
        elif entry.is_file() and entry.name.endswith(extensions) and not entry.name.endswith(".d.ts"):
            yield entry


def extract_module_name(file_path: str, modules_dir: str) -> str | None:
    """Name of the module a path belongs to, or None for paths outside any module."""
    rel = os.path.relpath(file_path, modules_dir)
    if rel.startswith(".."):
        return None
    parts = Path(rel).parts
    return parts[0] if len(parts) >= 2 else None


def is_internal_import(import_path: str, target_module: str) -> bool:
    """Whether an import path reaches past the target module's barrel."""
    parts = import_path.split("/")
    if target_module not in parts:
        return False

    after_module = parts[parts.index(target_module) + 1 :]
    if not after_module:
        return False
    return not (len(after_module) == 1 and after_module[0] in _BARREL_SEGMENTS)


def find_violations(file_path: Path, content: str, modules_dir: str) -> list[ImportViolation]:
    """Find boundary-violating imports in one source file."""
    source_module = extract_module_name(str(file_path), modules_dir)
    if source_module is None:
        return []

    violations = []
    file_dir = os.path.dirname(file_path)
    for line_number, line in enumerate(content.split("\n"), start=1):
        for match in _IMPORT_RE.finditer(line):
            import_path = match.group(1)
            if not import_path.startswith("."):
                continue

            target_module = extract_module_name(
                os.path.normpath(os.path.join(file_dir, import_path)), modules_dir
            )
            if not target_module or target_module == source_module:
                continue

            if is_internal_import(import_path, target_module):
                violations.append(
                    ImportViolation(
                        file=os.path.relpath(file_path, modules_dir),
                        line=line_number,
                        import_path=import_path,
                        source_module=source_module,
                        target_module=target_module,
                    )
                )
    return violations


def check_imports(path: str, config: dict | None = None) -> str:
    """Scan a modules directory for imports that bypass module boundaries.

    Args:
        path: Absolute path to the modules directory (e.g. '/project/src/modules')
        config: Server config (scanned extensions, excluded directories)

    Returns:
        Markdown report of violations grouped by source and target module,
        or a "could not read" message.

    """
    validation = get_validation_config(config)
    modules_dir = os.path.normpath(path)

    try:
        files = list(
            iter_source_files(Path(modules_dir), validation["extensions"], validation["exclude_dirs"])
        )
    except OSError as e:
        logger.debug(f"check_imports: cannot walk {path}: {e}")
        return (
            f"Could not read directory: {path}\n"
            "Make sure the path exists and contains module directories."
        )

    violations: list[ImportViolation] = []
    for file_path in files:
        try:
            content = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"check_imports: skipping unreadable {file_path}: {e}")
            continue
        violations.extend(find_violations(file_path, content, modules_dir))

    return format_import_report(path, len(files), violations)


def format_import_report(path: str, scanned: int, violations: list[ImportViolation]) -> str:
    """Render the scan result as markdown."""
    lines = ["# Import Boundary Check", "", f"**Scanned:** {scanned} files in {path}", ""]

    if not violations:
        lines.extend(
            [
                "## Result: No violations found",
                "",
                "All cross-module imports go through the public API (index.ts).",
            ]
        )
        return "\n".join(lines)

    lines.extend(
        [
            f"## Result: {len(violations)} violation(s) found",
            "",
            "The following imports bypass module boundaries by importing internal files directly:",
            "",
        ]
    )

    grouped: dict[str, list[ImportViolation]] = {}
    for violation in violations:
        key = f"{violation.source_module} → {violation.target_module}"
        grouped.setdefault(key, []).append(violation)

    for pair, pair_violations in grouped.items():
        lines.append(f"### {pair}")
        for violation in pair_violations:
            lines.append(f"- `{violation.file}:{violation.line}` imports `{violation.import_path}`")
        lines.append("")

    lines.extend(
        [
            "## How to fix",
            "",
            "1. Each module should expose its public API via `index.ts`",
            "2. Change imports to use the module's `index.ts` barrel export",
            "3. If the needed export doesn't exist, add it to the target module's `index.ts`",
            "",
            "**Related rules:** " + ", ".join(f"`{rule}`" for rule in RELATED_RULES),
        ]
    )
    return "\n".join(lines)
