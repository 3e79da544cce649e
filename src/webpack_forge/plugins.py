# src/webpack_forge/plugins.py

import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

from .constants import TERSER_PASSES
from .options.options_types import ResolvedFlags


# how the plugin class is obtained from its package:
#   default → const Name = require(pkg)
#   named   → const { Name } = require(pkg)
#   member  → const pkg = require(pkg); new pkg.Name(...)
ImportStyle = Literal["default", "named", "member"]


@dataclass(frozen=True)
class PluginSpec:
    """A plugin instance the bundler should construct."""

    name: str
    package: str
    options: Mapping[str, Any] = field(default_factory=dict)
    import_style: ImportStyle = "default"

    @property
    def binding(self) -> str:
        """Identifier bound by the require() of this plugin."""
        if self.import_style == "member":
            return re.sub(r"\W", "_", self.package)
        return self.name

    @property
    def constructor(self) -> str:
        if self.import_style == "member":
            return f"{self.binding}.{self.name}"
        return self.name

    def require_line(self) -> str:
        target = f"{{ {self.name} }}" if self.import_style == "named" else self.binding
        return f"const {target} = require('{self.package}');"


def define_plugin(definitions: Mapping[str, Any]) -> PluginSpec:
    return PluginSpec("DefinePlugin", "webpack", definitions, import_style="member")


def circular_dependency_plugin() -> PluginSpec:
    return PluginSpec(
        "CircularDependencyPlugin",
        "circular-dependency-plugin",
        {"exclude": re.compile("node_modules"), "failOnError": True},
    )


def hard_source_plugin(cache_dir: Path) -> PluginSpec:
    return PluginSpec(
        "HardSourceWebpackPlugin",
        "hard-source-webpack-plugin",
        {"cacheDirectory": str(cache_dir)},
    )


def bundle_analyzer_plugin() -> PluginSpec:
    return PluginSpec(
        "BundleAnalyzerPlugin",
        "webpack-bundle-analyzer",
        {"analyzerMode": "static", "defaultSizes": "gzip", "openAnalyzer": False},
        import_style="named",
    )


def terser_plugin(flags: ResolvedFlags, cache_dir: Path | None) -> PluginSpec:
    """Minimizer settings; `cache_dir` is only passed when caching is on."""
    return PluginSpec(
        "TerserPlugin",
        "terser-webpack-plugin",
        {
            "test": re.compile(r"\.js$"),
            "terserOptions": {
                "warnings": False,
                "compress": {
                    "pure_getters": True,
                    "unsafe_proto": True,
                    "passes": TERSER_PASSES,
                    "join_vars": flags.minify,
                    "sequences": flags.minify,
                    "drop_debugger": not flags.debug,
                },
                "output": {"beautify": flags.enable_beautify},
                "mangle": flags.minify,
            },
            "parallel": True,
            "sourceMap": flags.enable_source_map,
            "cache": str(cache_dir) if cache_dir is not None else False,
        },
    )


def materialize(
    candidates: Iterable[tuple[bool, Callable[[], PluginSpec]]],
) -> list[PluginSpec]:
    """Construct the plugins whose condition holds, keeping their order."""
    return [factory() for enabled, factory in candidates if enabled]
