# src/webpack_forge/meta.py

"""Centralized program identity constants for Webpack Forge."""

from typing import NamedTuple


_BASE = "webpack-forge"

# CLI script name (the executable or `poetry run` entrypoint)
PROGRAM_SCRIPT = _BASE

# Human-readable name for banners, help text, etc.
PROGRAM_DISPLAY = _BASE.replace("-", " ").title()

# Python package / import name
PROGRAM_PACKAGE = _BASE.replace("-", "_")

# Environment variable prefix (used for WEBPACK_FORGE_LOG_LEVEL, etc.)
PROGRAM_ENV = _BASE.replace("-", "_").upper()

# Config file basename (.webpack-forge.json, .webpack-forge.py, ...)
PROGRAM_CONFIG = _BASE

# Short tagline or description for help screens and metadata
DESCRIPTION = "Generate webpack configurations from a handful of build knobs."


class Metadata(NamedTuple):
    """Program version and commit."""

    version: str
    commit: str
