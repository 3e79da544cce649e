# src/webpack_forge/constants.py
"""Central constants used across the project."""

from typing import Any


# --- env keys ---
DEFAULT_ENV_LOG_LEVEL: str = "LOG_LEVEL"
DEFAULT_ENV_NODE_ENV: str = "NODE_ENV"

# --- program defaults ---
DEFAULT_LOG_LEVEL: str = "info"
DEFAULT_STRICT_CONFIG: bool = True
DEFAULT_FORMAT: str = "js"
OUTPUT_FORMATS: tuple[str, ...] = ("js", "json")
LOG_LEVELS: tuple[str, ...] = (
    "trace",
    "debug",
    "info",
    "warning",
    "error",
    "critical",
    "silent",
)

# --- build option defaults ---
DEFAULT_ENTRY: str = "./src/index.js"
DEFAULT_OUT_DIR: str = "./dist"
DEFAULT_LIBRARY_TARGET: str = "umd"
DEFAULT_PRESET: str = "standard"
DEFAULT_BABEL_CONFIG_NAME: str = ".babelrc-browser"
DEFAULT_VERSION_LEVEL: str = "patch"

# NODE_ENV value that switches test mode on
TEST_NODE_ENV: str = "test"

# env values that get their own boolean constant
KNOWN_ENVS: tuple[str, ...] = ("local", "stage", "sandbox", "production")

# --- injected constants ---
LITERAL_MARKER: str = "__literal__"

# --- output ---
JS_SUFFIX: str = ".js"
MIN_SUFFIX: str = ".min"
GLOBAL_OBJECT: str = "(typeof self !== 'undefined' ? self : this)"
RESOLVE_EXTENSIONS: list[str] = [".js", ".jsx"]
BABEL_RUNTIME_MODULE: str = "@babel/runtime"

# node polyfills; all disabled
NODE_POLYFILLS: dict[str, Any] = {
    "console": False,
    "global": False,
    "process": False,
    "__filename": False,
    "__dirname": False,
    "Buffer": False,
    "setImmediate": False,
}

# --- cache directories (prefix under the temp root) ---
CACHE_DIR_PREFIXES: dict[str, str] = {
    "hard_source": "cache-hard-source",
    "babel": "cache-babel",
    "terser": "cache-terser",
    "cache_loader": "cache-loader",
}
STATIC_CACHE_ID: str = "static"

# --- minifier ---
TERSER_PASSES: int = 3
