# src/webpack_forge/__init__.py

"""Webpack Forge — Generate webpack configurations from a handful of build knobs.

Full developer API
==================
This package re-exports all non-private symbols from its submodules,
making it suitable for programmatic use, custom integrations, or plugins.
Anything prefixed with "_" is considered internal and may change.

Highlights:
    - main()                  → CLI entrypoint
    - get_webpack_config()    → Build one webpack configuration
    - resolve_flags()         → Derive the effective build flags
    - serialize_constants()   → Encode compile-time constants
    - render_config_module()  → Emit a webpack.config.js module
    - get_next_version()      → Version tag after a semver bump
"""

from .actions import (
    build_configs,
    get_metadata,
    render_configs,
    version_tag,
    write_output,
)
from .build import find_node_module, get_webpack_config
from .cache_dirs import CacheDirManager, CacheDirs
from .cli import main
from .constants import (
    DEFAULT_ENV_LOG_LEVEL,
    DEFAULT_ENV_NODE_ENV,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PRESET,
    DEFAULT_STRICT_CONFIG,
    LITERAL_MARKER,
)
from .define import (
    UnsupportedValueKindError,
    default_define_vars,
    literal,
    serialize_constants,
)
from .logs import getAppLogger
from .meta import (
    PROGRAM_CONFIG,
    PROGRAM_DISPLAY,
    PROGRAM_ENV,
    PROGRAM_PACKAGE,
    PROGRAM_SCRIPT,
    Metadata,
)
from .options import (
    PRESETS,
    BuildOptions,
    Preset,
    ResolvedFlags,
    RootOptions,
    RootOptionsResolved,
    find_config,
    get_preset,
    load_and_validate_config,
    load_config,
    normalize_filename,
    parse_config,
    resolve_flags,
    resolve_root_options,
    validate_options,
)
from .plugins import PluginSpec, materialize
from .render import regex_literal, render_config_json, render_config_module
from .rules import build_rules
from .versioning import (
    get_current_version,
    get_next_version,
    read_package_json,
)


__all__ = [  # noqa: RUF022
    # actions
    "build_configs",
    "get_metadata",
    "render_configs",
    "version_tag",
    "write_output",
    # build
    "find_node_module",
    "get_webpack_config",
    # cache_dirs
    "CacheDirManager",
    "CacheDirs",
    # cli
    "main",
    # constants
    "DEFAULT_ENV_LOG_LEVEL",
    "DEFAULT_ENV_NODE_ENV",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_PRESET",
    "DEFAULT_STRICT_CONFIG",
    "LITERAL_MARKER",
    # define
    "UnsupportedValueKindError",
    "default_define_vars",
    "literal",
    "serialize_constants",
    # logs
    "getAppLogger",
    # meta
    "Metadata",
    "PROGRAM_CONFIG",
    "PROGRAM_DISPLAY",
    "PROGRAM_ENV",
    "PROGRAM_PACKAGE",
    "PROGRAM_SCRIPT",
    # options
    "BuildOptions",
    "find_config",
    "get_preset",
    "load_and_validate_config",
    "load_config",
    "normalize_filename",
    "parse_config",
    "Preset",
    "PRESETS",
    "ResolvedFlags",
    "resolve_flags",
    "resolve_root_options",
    "RootOptions",
    "RootOptionsResolved",
    "validate_options",
    # plugins
    "PluginSpec",
    "materialize",
    # render
    "regex_literal",
    "render_config_json",
    "render_config_module",
    # rules
    "build_rules",
    # versioning
    "get_current_version",
    "get_next_version",
    "read_package_json",
]
