"""Public API for Module Insight.

Builds a ModuleResolver from configuration so callers don't wire the
collaborators by hand.

Example:
    >>> from module_insight import create_resolver, run_dependency_check
    >>>
    >>> resolver = create_resolver(code_root="/var/www/magento", force_generate=True)
    >>> paths = resolver.resolve_module_paths()
    >>> result = run_dependency_check(resolver)
    >>> print(result.summary)
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .config import ResolverConfig, load_config
from .logging_config import get_logger
from .resolution.enabled import EnabledModuleSource
from .resolution.registry import ComponentRegistry, RegistrationFileRegistry
from .resolution.resolver import ModuleResolver
from .resolution.sequence import SequenceSorter

logger = get_logger(__name__)


def create_resolver(
    config: Optional[ResolverConfig] = None,
    config_file: Optional[Path] = None,
    registry: Optional[ComponentRegistry] = None,
    enabled_source: Optional[EnabledModuleSource] = None,
    sequence_sorter: Optional[SequenceSorter] = None,
    **overrides,
) -> ModuleResolver:
    """Create a resolver for one run.

    Args:
        config: Ready configuration; loaded from files/env/overrides when None
        config_file: Optional explicit TOML file
        registry: Component registry; defaults to parsing registration.php
            files under the code root
        enabled_source: Source of enabled module names; without one every
            discovered module is included
        sequence_sorter: File sequencing strategy
        **overrides: Configuration overrides (e.g., force_generate=True)

    Raises:
        ModuleInsightError: If configuration is invalid
    """
    if config is None:
        config = load_config(config_file=config_file, **overrides)

    if registry is None and config.code_root is not None:
        registry = RegistrationFileRegistry(config.code_root)

    logger.debug(f"Creating resolver for {config.code_root}")
    return ModuleResolver(
        config,
        registry=registry,
        enabled_source=enabled_source,
        sequence_sorter=sequence_sorter,
    )
