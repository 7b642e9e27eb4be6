"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..api import create_resolver
from ..config import load_config
from ..resolution.enabled import EnabledModulesFile
from ..resolution.resolver import ModuleResolver

console = Console()


def build_resolver(
    code_root: Optional[Path] = None,
    config: Optional[Path] = None,
    enabled_modules: Optional[Path] = None,
    whitelist: Optional[str] = None,
    custom_paths: Optional[str] = None,
    force: bool = False,
    verbose: bool = False,
) -> ModuleResolver:
    """Build a resolver from CLI options layered over file/env configuration."""
    overrides = {
        "code_root": code_root,
        "module_whitelist": whitelist,
        "custom_module_paths": custom_paths,
    }
    if force:
        overrides["force_generate"] = True
    if verbose:
        overrides["verbose"] = True

    settings = load_config(config_file=config, **overrides)
    enabled_source = EnabledModulesFile(enabled_modules) if enabled_modules else None
    return create_resolver(settings, enabled_source=enabled_source)
