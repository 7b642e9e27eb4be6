"""Human-readable rendering of dependency violations."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Optional

from ..logging_config import get_logger
from .models import ViolationRecord

logger = get_logger(__name__)

ERROR_LOG_FILENAME = "mftf-dependency-checks"
ERROR_LOG_MESSAGE = "MFTF File Dependency Check"


def format_violations(filepath: Path, violations: Iterable[ViolationRecord]) -> str:
    """Render one file's violations as a single report block."""
    lines = [
        f'File "{Path(filepath).resolve()}"',
        "contains entity references that violate dependency constraints:",
    ]
    for violation in violations:
        owners = ", ".join(violation.offending_owner_modules)
        lines.append(f"\t {violation.entity_name} from module(s): {owners}")
    return "\n".join(lines)


def group_errors(violations: Iterable[ViolationRecord]) -> Dict[str, List[str]]:
    """Group violations by file into ``{path: [report block]}``."""
    by_file: Dict[Path, List[ViolationRecord]] = {}
    for violation in violations:
        by_file.setdefault(violation.source_file, []).append(violation)

    return {
        str(Path(path).resolve()): [format_violations(path, records)]
        for path, records in by_file.items()
    }


def write_error_report(
    errors: Dict[str, List[str]],
    filename: str = ERROR_LOG_FILENAME,
    message: str = ERROR_LOG_MESSAGE,
    output_dir: Optional[Path] = None,
) -> str:
    """Write error blocks to ``<output_dir>/<filename>.txt``.

    Returns:
        One-line summary of the run
    """
    if not errors:
        return f"{message}: No errors found."

    output_dir = Path(output_dir) if output_dir is not None else Path.cwd()
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / f"{filename}.txt"

    blocks = [block for file_errors in errors.values() for block in file_errors]
    output_path.write_text("\n\n".join(blocks) + "\n", encoding="utf-8")
    logger.info(f"Wrote {len(blocks)} error blocks to {output_path}")

    return (
        f"{message}: Errors found across {len(errors)} file(s). "
        f"Error details output to {output_path}"
    )
