# src/webpack_forge/options/options_resolve.py


import argparse
import json
import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from apathetic_utils import cast_hint, literal_to_set
from webpack_forge.constants import (
    DEFAULT_ENV_NODE_ENV,
    DEFAULT_FORMAT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PRESET,
    DEFAULT_STRICT_CONFIG,
    JS_SUFFIX,
    MIN_SUFFIX,
    TEST_NODE_ENV,
)
from webpack_forge.logs import getAppLogger

from .options_types import (
    BuildOptions,
    PresetName,
    ResolvedFlags,
    RootOptions,
    RootOptionsResolved,
)


# --------------------------------------------------------------------------- #
# presets
# --------------------------------------------------------------------------- #


@dataclass(frozen=True)
class Preset:
    """Default formulas that differ between build recipes.

    Both recipes resolve every other flag identically; only the fallback
    for ``minify`` and ``sourcemaps`` changes.
    """

    name: str
    default_minify: Callable[[bool, bool], bool]  # (test, debug) -> minify
    default_sourcemaps: Callable[[bool], bool]  # (minify) -> sourcemaps


PRESETS: dict[str, Preset] = {
    "standard": Preset(
        name="standard",
        default_minify=lambda test, debug: not test and not debug,
        default_sourcemaps=lambda minify: minify,
    ),
    "sourcemapped": Preset(
        name="sourcemapped",
        default_minify=lambda test, debug: test or not debug,
        default_sourcemaps=lambda _minify: True,
    ),
}


def get_preset(name: str | None = None) -> Preset:
    """Look up a preset by name (default: standard)."""
    key = name or DEFAULT_PRESET
    try:
        return PRESETS[key]
    except KeyError:
        valid = ", ".join(sorted(literal_to_set(PresetName)))
        xmsg = f"Unknown preset {key!r} (expected one of: {valid})"
        raise ValueError(xmsg) from None


# --------------------------------------------------------------------------- #
# flag resolution
# --------------------------------------------------------------------------- #


def is_test_environment(environ: Mapping[str, str] | None = None) -> bool:
    """Ambient test signal: NODE_ENV=test."""
    env = os.environ if environ is None else environ
    return env.get(DEFAULT_ENV_NODE_ENV) == TEST_NODE_ENV


def normalize_filename(filename: str | None, *, minify: bool) -> str | None:
    """Ensure an output filename ends in .js, inserting .min when minifying.

    Names that already end in .js are returned untouched, which makes the
    function idempotent.
    """
    if not filename or filename.endswith(JS_SUFFIX):
        return filename
    if minify and not filename.endswith(MIN_SUFFIX):
        filename = f"{filename}{MIN_SUFFIX}"
    return f"{filename}{JS_SUFFIX}"


def resolve_flags(
    options: BuildOptions | None = None,
    *,
    preset: Preset | None = None,
    environ: Mapping[str, str] | None = None,
) -> ResolvedFlags:
    """Resolve every derived build flag from partially-populated options.

    Each default may only depend on flags resolved before it:
    test -> debug -> minify -> env -> sourcemaps -> everything else.
    """
    logger = getAppLogger()
    opts: BuildOptions = options or {}
    if preset is None:
        preset = get_preset(opts.get("preset"))

    test = opts.get("test")
    if test is None:
        test = is_test_environment(environ)

    debug = opts.get("debug")
    if debug is None:
        debug = test

    minify = opts.get("minify")
    if minify is None:
        minify = preset.default_minify(test, debug)

    env = opts.get("env")
    if env is None:
        env = "test" if test else "production"

    sourcemaps = opts.get("sourcemaps")
    if sourcemaps is None:
        sourcemaps = preset.default_sourcemaps(minify)

    web = opts.get("web", True)

    optimize = opts.get("optimize")
    if optimize is None:
        optimize = env != "local"

    cache = opts.get("cache", False)

    enable_source_map = sourcemaps and web and not test
    flags = ResolvedFlags(
        test=test,
        debug=debug,
        minify=minify,
        env=env,
        web=web,
        sourcemaps=sourcemaps,
        optimize=optimize,
        enable_source_map=enable_source_map,
        enable_inline_source_map=enable_source_map and (test or debug),
        enable_caching=cache and not test,
        enable_tree_shake=web and not test and not debug,
        enable_beautify=debug or test or not minify,
        enable_check_circular_deps=test,
        mode="development" if (debug or test) else "production",
        filename=normalize_filename(opts.get("filename"), minify=minify),
    )
    logger.trace(f"[resolve_flags] preset={preset.name} {flags}")
    return flags


# --------------------------------------------------------------------------- #
# CLI merge
# --------------------------------------------------------------------------- #

# argparse dest -> BuildOptions key, for plain value overrides
_CLI_BUILD_KEYS: dict[str, str] = {
    "context": "context",
    "filename": "filename",
    "modulename": "modulename",
    "library_target": "library_target",
    "env": "env",
    "path": "path",
    "test": "test",
    "debug": "debug",
    "minify": "minify",
    "web": "web",
    "sourcemaps": "sourcemaps",
    "cache": "cache",
    "analyze": "analyze",
    "dynamic": "dynamic",
    "preset": "preset",
}


# BuildOptions keys holding filesystem paths
PATH_KEYS = ("context", "path", "config_root", "babel_config")


def anchor_paths(build: BuildOptions, base: Path) -> BuildOptions:
    """Return a copy with relative path options made absolute against `base`."""
    result = cast_hint(BuildOptions, dict(build))
    for key in PATH_KEYS:
        value = result.get(key)
        if isinstance(value, str) and value:
            result[key] = str((base / value).resolve())  # type: ignore[literal-required]
    return result


def _parse_pairs(
    raw: list[str] | None,
    *,
    flag: str,
    decode: Callable[[str], Any],
) -> dict[str, Any]:
    """Parse NAME=VALUE strings from the CLI."""
    result: dict[str, Any] = {}
    for item in raw or []:
        name, sep, value = item.partition("=")
        if not sep or not name:
            xmsg = f"{flag} expects NAME=VALUE, got {item!r}"
            raise ValueError(xmsg)
        result[name] = decode(value)
    return result


def _decode_define(value: str) -> Any:
    """CLI --define values are JSON; anything else is taken as a string."""
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return value


def apply_cli_overrides(
    build: BuildOptions,
    args: argparse.Namespace,
) -> BuildOptions:
    """Return a copy of build options with CLI flags layered on top."""
    logger = getAppLogger()
    result = cast_hint(BuildOptions, dict(build))

    for dest, key in _CLI_BUILD_KEYS.items():
        value = getattr(args, dest, None)
        if value is not None:
            logger.trace(f"[apply_cli_overrides] {key}={value!r} (cli)")
            result[key] = value  # type: ignore[literal-required]

    entries: list[str] | None = getattr(args, "entry", None)
    if entries:
        result["entry"] = entries[0] if len(entries) == 1 else list(entries)

    defines = _parse_pairs(
        getattr(args, "define", None), flag="--define", decode=_decode_define
    )
    if defines:
        result["vars"] = {**build.get("vars", {}), **defines}

    aliases = _parse_pairs(getattr(args, "alias", None), flag="--alias", decode=str)
    if aliases:
        result["alias"] = {**build.get("alias", {}), **aliases}

    return result


def resolve_root_options(
    root: RootOptions | None,
    args: argparse.Namespace,
    *,
    config_dir: Path | None = None,
    cwd: Path | None = None,
) -> RootOptionsResolved:
    """Merge loaded root options with CLI arguments and defaults.

    Precedence: CLI > build > root > defaults. The root ``preset`` becomes
    the default for builds that do not name one. Relative paths from the
    options file are anchored at `config_dir`, which also becomes the default
    `config_root`; relative paths from the CLI are anchored at `cwd`.
    """
    cwd = cwd or Path.cwd()
    logger = getAppLogger()
    root_cfg: RootOptions = root or {}

    builds = [dict(b) for b in root_cfg.get("builds", [])] or [{}]
    root_preset = root_cfg.get("preset")

    resolved_builds: list[BuildOptions] = []
    for i, raw_build in enumerate(builds):
        build = cast_hint(BuildOptions, raw_build)
        if root_preset is not None and "preset" not in build:
            build["preset"] = root_preset
        if config_dir is not None:
            build = anchor_paths(build, config_dir)
            build.setdefault("config_root", str(config_dir))
        build = anchor_paths(apply_cli_overrides(build, args), cwd)
        # fail early on a bad preset name
        get_preset(build.get("preset"))
        logger.trace(f"[resolve_root_options] build #{i + 1}: {sorted(build)}")
        resolved_builds.append(build)

    log_level = getattr(args, "log_level", None) or root_cfg.get(
        "log_level", DEFAULT_LOG_LEVEL
    )
    strict = getattr(args, "strict", None)
    if strict is None:
        strict = root_cfg.get("strict_config", DEFAULT_STRICT_CONFIG)

    resolved: RootOptionsResolved = {
        "builds": resolved_builds,
        "log_level": log_level,
        "strict_config": strict,
        "format": getattr(args, "format", None)
        or root_cfg.get("format", DEFAULT_FORMAT),
    }
    out = getattr(args, "out", None) or root_cfg.get("out")
    if out:
        resolved["out"] = out
    return resolved
