# src/webpack_forge/build.py


from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .cache_dirs import CacheDirManager, CacheDirs
from .constants import (
    BABEL_RUNTIME_MODULE,
    DEFAULT_BABEL_CONFIG_NAME,
    DEFAULT_ENTRY,
    DEFAULT_LIBRARY_TARGET,
    DEFAULT_OUT_DIR,
    GLOBAL_OBJECT,
    NODE_POLYFILLS,
    RESOLVE_EXTENSIONS,
)
from .define import default_define_vars, serialize_constants
from .logs import getAppLogger
from .options.options_resolve import get_preset, resolve_flags
from .options.options_types import BuildOptions, ResolvedFlags
from .plugins import (
    PluginSpec,
    bundle_analyzer_plugin,
    circular_dependency_plugin,
    define_plugin,
    hard_source_plugin,
    materialize,
    terser_plugin,
)
from .rules import build_rules


# --------------------------------------------------------------------------- #
# helpers
# --------------------------------------------------------------------------- #


def find_node_module(module: str, start: Path) -> str:
    """Locate an installed node package the way node's resolver walks up.

    Returns the bare module name when no node_modules copy is found, which
    leaves resolution to the bundler.
    """
    for parent in (start, *start.parents):
        candidate = parent / "node_modules" / module
        if candidate.is_dir():
            return str(candidate)
    return module


def _build_output(
    flags: ResolvedFlags,
    *,
    path: str,
    modulename: str | None,
    library_target: str | None,
) -> dict[str, Any]:
    output: dict[str, Any] = {
        "path": path,
        "filename": flags.filename,
        "globalObject": GLOBAL_OBJECT,
        "umdNamedDefine": True,
        "library": modulename,
        "pathinfo": False,
    }
    if library_target:
        output["libraryTarget"] = library_target
    return output


def _build_resolve(alias: Mapping[str, str], config_root: Path) -> dict[str, Any]:
    return {
        "alias": {
            **alias,
            BABEL_RUNTIME_MODULE: find_node_module(BABEL_RUNTIME_MODULE, config_root),
        },
        "extensions": list(RESOLVE_EXTENSIONS),
        "modules": [str(config_root), "node_modules"],
    }


def _build_optimization(
    flags: ResolvedFlags,
    cache_dirs: CacheDirs | None,
) -> dict[str, Any]:
    if not flags.optimize:
        return {}
    return {
        "minimize": True,
        "namedModules": flags.debug,
        "concatenateModules": True,
        "minimizer": [
            terser_plugin(flags, cache_dirs.terser if cache_dirs else None),
        ],
    }


def _build_plugins(
    flags: ResolvedFlags,
    definitions: Mapping[str, Any],
    cache_dirs: CacheDirs | None,
    *,
    dynamic: bool,
    analyze: bool,
) -> list[PluginSpec]:
    return materialize(
        [
            (True, lambda: define_plugin(definitions)),
            (flags.enable_check_circular_deps, circular_dependency_plugin),
            (
                cache_dirs is not None and not dynamic,
                lambda: hard_source_plugin(cache_dirs.hard_source),  # type: ignore[union-attr]
            ),
            (analyze, bundle_analyzer_plugin),
        ]
    )


# --------------------------------------------------------------------------- #
# main entry
# --------------------------------------------------------------------------- #


def get_webpack_config(
    options: BuildOptions | None = None,
    *,
    cache_manager: CacheDirManager | None = None,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Build a complete webpack configuration from high-level build options.

    Every option is optional; see BuildOptions for the defaults. Values in
    ``options["options"]`` are merged last and override anything computed.

    Args:
        options: High-level build options. Never mutated.
        cache_manager: Owner of the on-disk cache directories. Defaults to
            the per-process manager for the build's isolation mode.
        environ: Environment used for ambient signals (NODE_ENV).
            Defaults to os.environ.

    Raises:
        ValueError: Unknown preset name.
        UnsupportedValueKindError: An injected constant cannot be serialized.
    """
    logger = getAppLogger()
    opts: BuildOptions = options or {}

    preset = get_preset(opts.get("preset"))
    flags = resolve_flags(opts, preset=preset, environ=environ)
    dynamic = opts.get("dynamic", False)

    context = opts.get("context") or str(Path.cwd())
    config_root = Path(opts.get("config_root") or context)
    babel_config = opts.get("babel_config") or str(
        config_root / DEFAULT_BABEL_CONFIG_NAME
    )

    cache_dirs: CacheDirs | None = None
    if flags.enable_caching:
        manager = cache_manager or CacheDirManager.for_process(dynamic=dynamic)
        cache_dirs = manager.acquire()

    definitions = serialize_constants(default_define_vars(flags, opts.get("vars")))

    descriptor: dict[str, Any] = {
        "context": context,
        "mode": flags.mode,
        "entry": opts.get("entry", DEFAULT_ENTRY),
        "output": _build_output(
            flags,
            path=opts.get("path") or str(Path(DEFAULT_OUT_DIR).resolve()),
            modulename=opts.get("modulename"),
            library_target=opts.get("library_target", DEFAULT_LIBRARY_TARGET),
        ),
        "node": dict(NODE_POLYFILLS),
        "resolve": _build_resolve(opts.get("alias", {}), config_root),
        "module": {
            "rules": build_rules(
                babel_config=babel_config,
                cache_dirs=cache_dirs,
                styles=opts.get("styles", True),
            ),
        },
        "bail": True,
        "stats": {"optimizationBailout": True},
        "optimization": _build_optimization(flags, cache_dirs),
        "plugins": _build_plugins(
            flags,
            definitions,
            cache_dirs,
            dynamic=dynamic,
            analyze=opts.get("analyze", False),
        ),
        "devtool": flags.devtool,
    }

    overrides = opts.get("options", {})
    if overrides:
        logger.trace(f"[get_webpack_config] raw overrides: {sorted(overrides)}")
    descriptor.update(overrides)

    logger.debug(
        "Resolved webpack config: mode=%s preset=%s filename=%s devtool=%r",
        flags.mode,
        preset.name,
        flags.filename,
        descriptor["devtool"],
    )
    return descriptor
