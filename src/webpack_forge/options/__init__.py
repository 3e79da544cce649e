# src/webpack_forge/options/__init__.py

"""Build option handling for webpack-forge.

This module provides option loading, parsing, validation, and flag resolution.
"""

from .options_loader import (
    find_config,
    load_and_validate_config,
    load_config,
    parse_config,
)
from .options_resolve import (
    PATH_KEYS,
    PRESETS,
    Preset,
    anchor_paths,
    apply_cli_overrides,
    get_preset,
    is_test_environment,
    normalize_filename,
    resolve_flags,
    resolve_root_options,
)
from .options_types import (
    BuildMode,
    BuildOptions,
    OutputFormat,
    PresetName,
    ResolvedFlags,
    RootOptions,
    RootOptionsResolved,
)
from .options_validate import validate_options


__all__ = [  # noqa: RUF022
    # options_loader
    "find_config",
    "load_and_validate_config",
    "load_config",
    "parse_config",
    # options_resolve
    "PATH_KEYS",
    "PRESETS",
    "Preset",
    "anchor_paths",
    "apply_cli_overrides",
    "get_preset",
    "is_test_environment",
    "normalize_filename",
    "resolve_flags",
    "resolve_root_options",
    # options_types
    "BuildMode",
    "BuildOptions",
    "OutputFormat",
    "PresetName",
    "ResolvedFlags",
    "RootOptions",
    "RootOptionsResolved",
    # options_validate
    "validate_options",
]
