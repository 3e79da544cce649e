# src/webpack_forge/options/options_types.py


from dataclasses import dataclass
from typing import Any, Literal, TypedDict

from typing_extensions import NotRequired


PresetName = Literal["standard", "sourcemapped"]
BuildMode = Literal["development", "production"]
OutputFormat = Literal["js", "json"]


class BuildOptions(TypedDict, total=False):
    # where webpack resolves `entry` from (default: cwd)
    context: str
    entry: str | list[str]

    # output layout
    filename: str  # normalized to end in .js (and .min.js when minifying)
    modulename: str  # exported library name
    library_target: str  # default: "umd"
    path: str  # output directory (default: ./dist)

    # mode switches
    test: bool  # default: NODE_ENV == "test"
    debug: bool  # default: test
    minify: bool  # default: per preset
    web: bool  # default: True
    env: str  # default: "test" if test else "production"
    sourcemaps: bool  # default: per preset
    optimize: bool  # default: env != "local"

    # build features
    cache: bool
    analyze: bool
    dynamic: bool  # namespace cache dirs per process and remove them on exit
    styles: bool  # include the scss rule (default: True)

    # injected global constants (literal, list, mapping, callable)
    vars: dict[str, Any]
    alias: dict[str, str]

    # transpiler config and the directory module resolution starts from
    babel_config: str
    config_root: str

    preset: PresetName

    # raw webpack options merged last (override everything computed)
    options: dict[str, Any]


class RootOptions(TypedDict, total=False):
    builds: list[BuildOptions]

    # runtime behavior
    log_level: str
    strict_config: bool

    # defaults that cascade into each build
    preset: PresetName

    # rendering
    out: str
    format: OutputFormat


class RootOptionsResolved(TypedDict):
    builds: list[BuildOptions]
    log_level: str
    strict_config: bool
    out: NotRequired[str]
    format: OutputFormat


@dataclass(frozen=True)
class ResolvedFlags:
    """Every derived build flag, computed once per descriptor."""

    test: bool
    debug: bool
    minify: bool
    env: str
    web: bool
    sourcemaps: bool
    optimize: bool

    enable_source_map: bool
    enable_inline_source_map: bool
    enable_caching: bool
    enable_tree_shake: bool
    enable_beautify: bool
    enable_check_circular_deps: bool

    mode: BuildMode
    filename: str | None

    @property
    def devtool(self) -> str:
        if self.enable_inline_source_map:
            return "inline-source-map"
        if self.enable_source_map:
            return "source-map"
        return ""
