"""Configuration loading and management for Module Insight.

Configuration sources are merged in priority order:
    1. Defaults (defined in ResolverConfig)
    2. Project config (./module-insight.toml)
    3. Explicit config file
    4. Environment variables (MAGENTO_BP, MODULE_WHITELIST, ...)
    5. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(code_root="/var/www/magento", force_generate=True)
    >>> config.force_generate
    True
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

from .exceptions import InvalidConfigError, ModuleInsightError

# Relative location of the acceptance test tree inside a code root
DEV_TESTS = Path("dev", "tests", "acceptance", "tests", "functional")

PROJECT_CONFIG_NAME = "module-insight.toml"

# Environment key -> ResolverConfig field
ENV_KEYS = {
    "MAGENTO_BP": "code_root",
    "TESTS_MODULE_PATH": "tests_module_path",
    "MODULE_WHITELIST": "module_whitelist",
    "CUSTOM_MODULE_PATHS": "custom_module_paths",
    "FORCE_GENERATE": "force_generate",
    "VERBOSE": "verbose",
    "MODULE_INSIGHT_OUTPUT_DIR": "output_dir",
}

_PATH_FIELDS = ("code_root", "tests_module_path", "output_dir")
_LIST_FIELDS = ("module_whitelist", "custom_module_paths")
_BOOL_FIELDS = ("force_generate", "verbose")


@dataclass(frozen=True)
class ResolverConfig:
    """Configuration for module discovery and dependency checking.

    Attributes:
        Locations:
            code_root: Base code root of the application (MAGENTO_BP)
            tests_module_path: Extra test-module root whose subdirectories are modules
            output_dir: Where the dependency check writes its error report

        Module selection:
            module_whitelist: Names enabled in addition to the remote list
            custom_module_paths: Paths included unconditionally, after block-listing
            force_generate: Skip enabled-module filtering entirely

        Output control:
            verbose: Log every included module
    """

    code_root: Optional[Path] = None
    tests_module_path: Optional[Path] = None
    output_dir: Optional[Path] = None

    module_whitelist: tuple[str, ...] = ()
    custom_module_paths: tuple[Path, ...] = ()
    force_generate: bool = False

    verbose: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        for name in self.module_whitelist:
            if not name:
                raise ValueError("module_whitelist entries must be non-empty")
        for path in self.custom_module_paths:
            if not Path(path).is_absolute():
                raise ValueError(f"custom module path must be absolute: {path}")


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> ResolverConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit TOML file
        **overrides: Direct overrides (typically from CLI flags); ``None``
            values are ignored so unset CLI options don't mask lower layers

    Returns:
        Validated ResolverConfig instance

    Raises:
        ModuleInsightError: If a config file is missing or unreadable
        InvalidConfigError: If a value fails validation
    """
    merged: dict[str, Any] = {}

    project_config = Path.cwd() / PROJECT_CONFIG_NAME
    if project_config.exists():
        try:
            merged.update(_load_toml_file(project_config))
        except ModuleInsightError:
            raise
        except Exception as e:
            raise ModuleInsightError(f"Invalid project config '{project_config}': {e}")

    if config_file is not None:
        if not config_file.exists():
            raise ModuleInsightError(f"Config file not found: {config_file}")
        try:
            merged.update(_load_toml_file(config_file))
        except ModuleInsightError:
            raise
        except Exception as e:
            raise ModuleInsightError(f"Invalid config file '{config_file}': {e}")

    merged.update(_load_env_vars())
    merged.update({k: v for k, v in overrides.items() if v is not None})

    known = {f.name for f in fields(ResolverConfig)}
    unknown = sorted(set(merged) - known)
    if unknown:
        raise InvalidConfigError(unknown[0], merged[unknown[0]], "unknown configuration key")

    normalized = {key: _coerce(key, value) for key, value in merged.items()}

    try:
        return ResolverConfig(**normalized)
    except ValueError as e:
        raise InvalidConfigError("config", normalized, str(e))


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from the recognized environment variables.

    Empty variables are treated as unset.
    """
    result: dict[str, Any] = {}
    for env_key, field_name in ENV_KEYS.items():
        value = os.environ.get(env_key)
        if value:
            result[field_name] = value
    return result


def _coerce(key: str, value: Any) -> Any:
    """Convert raw TOML/env/CLI values to the field's type."""
    if key in _PATH_FIELDS:
        return Path(value).expanduser()

    if key in _LIST_FIELDS:
        items = split_list(value) if isinstance(value, str) else [str(v).strip() for v in value]
        items = [item for item in items if item]
        if key == "custom_module_paths":
            return tuple(Path(item) for item in items)
        return tuple(items)

    if key in _BOOL_FIELDS:
        if isinstance(value, bool):
            return value
        lower = str(value).lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        if lower in ("false", "0", "no", "off"):
            return False
        raise InvalidConfigError(key, value, "expected true/false")

    return value


def split_list(value: str) -> list[str]:
    """Split a comma-separated option into trimmed entries."""
    return [part.strip() for part in value.split(",") if part.strip()]


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ModuleInsightError: If neither tomllib nor tomli is available
        Exception: If TOML parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ModuleInsightError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
