"""Reference validation against declared module dependencies."""

from .check import collect_test_files, run_dependency_check
from .models import DependencyCheckResult, ViolationRecord
from .module_index import ModulePathIndex
from .report import format_violations, group_errors, write_error_report
from .validator import ReferenceValidator

__all__ = [
    "DependencyCheckResult",
    "ModulePathIndex",
    "ReferenceValidator",
    "ViolationRecord",
    "collect_test_files",
    "format_violations",
    "group_errors",
    "run_dependency_check",
    "write_error_report",
]
