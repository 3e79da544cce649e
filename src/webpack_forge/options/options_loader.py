# src/webpack_forge/options/options_loader.py


import argparse
import sys
import traceback
from pathlib import Path
from typing import Any, cast

from apathetic_schema import ApatheticSchema_ValidationSummary
from apathetic_utils import (
    cast_hint,
    load_jsonc,
    plural,
    remove_path_in_error_message,
    schema_from_typeddict,
)
from webpack_forge.logs import getAppLogger
from webpack_forge.meta import PROGRAM_CONFIG

from .options_types import BuildOptions, RootOptions
from .options_validate import validate_options


# keys a Python options file may export, in lookup order
PY_CONFIG_KEYS = ("config", "builds", "options")


def find_config(
    args: argparse.Namespace,
    cwd: Path,
    *,
    missing_level: str = "debug",
) -> Path | None:
    """Locate an options file.

    Search order:
      1. Explicit path from CLI (--config)
      2. Default candidates in the current working directory and its parents:
         .{PROGRAM_CONFIG}.py, .{PROGRAM_CONFIG}.jsonc, .{PROGRAM_CONFIG}.json

    Returns the first matching path, or None if nothing was found. Running
    without an options file is normal: every build option has a default.
    """
    logger = getAppLogger()

    # --- 1. Explicit config path ---
    if getattr(args, "config", None):
        config = Path(args.config).expanduser().resolve()
        logger.trace(f"[find_config] Checking explicit path: {config}")
        if not config.exists():
            xmsg = f"Specified config file not found: {config}"
            raise FileNotFoundError(xmsg)
        if config.is_dir():
            xmsg = f"Specified config path is a directory, not a file: {config}"
            raise ValueError(xmsg)
        return config

    # --- 2. Default candidate files (search current dir and parents) ---
    current = cwd
    candidate_names = [
        f".{PROGRAM_CONFIG}.py",
        f".{PROGRAM_CONFIG}.jsonc",
        f".{PROGRAM_CONFIG}.json",
    ]
    found: list[Path] = []
    while True:
        found = [
            current / name for name in candidate_names if (current / name).exists()
        ]
        if found:
            break
        parent = current.parent
        if parent == current:  # Reached filesystem root
            break
        current = parent

    if not found:
        logger.logDynamic(missing_level, f"No config file found in {cwd} or parents")
        return None

    # --- 3. Handle multiple matches at same level (prefer .py > .jsonc > .json) ---
    if len(found) > 1:
        names = ", ".join(p.name for p in found)
        logger.warning(
            "Multiple config files detected (%s); using %s.",
            names,
            found[0].name,
        )
    return found[0]


def load_config(config_path: Path) -> dict[str, Any] | list[Any] | None:
    """Load raw options from a file.

    Supports:
      - Python files exporting `config`, `builds`, or `options`
      - JSON/JSONC files

    Python files are the only way to inject deferred (callable) constants.

    Returns:
        The raw object (dict, list, or None for intentionally empty files).

    Raises:
        ValueError if a .py file defines none of the expected variables.
    """
    logger = getAppLogger()
    logger.trace(f"[load_config] Loading from {config_path} ({config_path.suffix})")

    # --- Python config ---
    if config_path.suffix == ".py":
        config_globals: dict[str, Any] = {}

        # Allow local imports in Python configs (e.g. from ./helpers import foo)
        parent_dir = str(config_path.parent)
        added_to_sys_path = parent_dir not in sys.path
        if added_to_sys_path:
            sys.path.insert(0, parent_dir)

        try:
            source = config_path.read_text(encoding="utf-8")
            exec(compile(source, str(config_path), "exec"), config_globals)  # noqa: S102
            logger.trace(f"[EXEC] globals after exec: {list(config_globals.keys())}")
        except Exception as e:
            tb = traceback.format_exc()
            xmsg = (
                f"Error while executing Python config: {config_path.name}\n"
                f"{type(e).__name__}: {e}\n{tb}"
            )
            raise RuntimeError(xmsg) from e
        finally:
            if added_to_sys_path and sys.path[0] == parent_dir:
                sys.path.pop(0)

        for key in PY_CONFIG_KEYS:
            if key in config_globals:
                result = config_globals[key]
                if not isinstance(result, (dict, list, type(None))):
                    xmsg = (
                        f"{key} in {config_path.name} must be a dict, list, or None"
                        f", not {type(result).__name__}"
                    )
                    raise TypeError(xmsg)
                return cast("dict[str, Any] | list[Any] | None", result)

        keys = " or ".join(f"`{k}`" for k in PY_CONFIG_KEYS)
        xmsg = f"{config_path.name} did not define {keys}"
        raise ValueError(xmsg)

    # --- JSONC / JSON ---
    try:
        return load_jsonc(config_path)
    except ValueError as e:
        clean_msg = remove_path_in_error_message(str(e), config_path)
        xmsg = (
            f"Error while loading configuration file '{config_path.name}': {clean_msg}"
        )
        raise ValueError(xmsg) from e


def parse_config(
    raw_config: dict[str, Any] | list[Any] | None,
) -> dict[str, Any] | None:
    """Normalize raw options into the canonical RootOptions shape.

    Accepted forms:
      - #1 None / [] / {}            → no options (every build default applies)
      - #2 [{...}, {...}]            → several builds (a multi-compiler array)
      - #3 {"builds": [...]}         → root with builds (returned shape)
      - #4 {...}                     → a single build; root-only keys hoisted

    Unknown keys are preserved for the validation phase.
    """
    logger = getAppLogger()
    logger.trace(f"[parse_config] Parsing {type(raw_config).__name__}")

    # --- Case 1: empty ---
    if not raw_config:
        return None

    # --- Case 2: naked list of builds ---
    if isinstance(raw_config, list):
        if not all(isinstance(x, dict) for x in raw_config):
            xmsg = "Invalid list: every element must be an object of build options."
            raise TypeError(xmsg)
        return {"builds": [dict(b) for b in raw_config]}

    if not isinstance(raw_config, dict):  # pyright: ignore[reportUnnecessaryIsInstance]
        xmsg = (
            f"Invalid top-level value: {type(raw_config).__name__} "
            "(expected object or list of objects)"
        )
        raise TypeError(xmsg)

    # --- Case 3: root with builds ---
    if "builds" in raw_config:
        return dict(raw_config)

    # --- Case 4: flat single build; move root-only keys up ---
    # `preset` is shared, so it stays with the build that declared it.
    root_keys = set(schema_from_typeddict(RootOptions))
    build_keys = set(schema_from_typeddict(BuildOptions))
    hoist_keys = root_keys - build_keys - {"builds"}

    build = dict(raw_config)
    root: dict[str, Any] = {k: build.pop(k) for k in hoist_keys if k in build}
    root["builds"] = [build]
    return root


def _validation_summary(
    summary: ApatheticSchema_ValidationSummary,
    config_path: Path,
) -> None:
    """Pretty-print a validation summary."""
    logger = getAppLogger()
    mode = "strict mode" if summary.strict else "lenient mode"

    counts: list[str] = []
    if summary.errors:
        counts.append(f"{len(summary.errors)} error{plural(summary.errors)}")
    if summary.strict_warnings:
        counts.append(
            f"{len(summary.strict_warnings)} strict warning"
            f"{plural(summary.strict_warnings)}",
        )
    if summary.warnings:
        counts.append(
            f"{len(summary.warnings)} normal warning{plural(summary.warnings)}",
        )
    counts_msg = f"\nFound {', '.join(counts)}." if counts else ""

    if not summary.valid:
        logger.error(
            "Failed to validate configuration file %s (%s).%s",
            config_path.name,
            mode,
            counts_msg,
        )
    elif counts:
        logger.warning(
            "Validated configuration file %s (%s) with warnings.%s",
            config_path.name,
            mode,
            counts_msg,
        )
    else:
        logger.debug("Validated %s (%s) successfully.", config_path.name, mode)

    if summary.errors:
        logger.error("\nErrors:\n  • %s", "\n  • ".join(summary.errors))
    if summary.strict_warnings:
        logger.error(
            "\nStrict warnings (treated as errors):\n  • %s",
            "\n  • ".join(summary.strict_warnings),
        )
    if summary.warnings:
        logger.warning(
            "\nWarnings (non-fatal):\n  • %s", "\n  • ".join(summary.warnings)
        )


def load_and_validate_config(
    args: argparse.Namespace,
) -> tuple[Path, RootOptions, ApatheticSchema_ValidationSummary] | None:
    """Find, load, parse, and validate the user's options file.

    Returns:
        (config_path, root_options, validation_summary), or None when no
        file was found or the file was intentionally empty.
    """
    logger = getAppLogger()

    cwd = Path.cwd().resolve()
    config_path = find_config(args, cwd)
    if config_path is None:
        return None

    raw_config = load_config(config_path)
    if raw_config is None:
        return None

    # --- Early peek for log_level before parsing ---
    if isinstance(raw_config, dict):
        raw_log_level = raw_config.get("log_level")
        if isinstance(raw_log_level, str) and raw_log_level:
            logger.setLevel(
                logger.determineLogLevel(args=args, root_log_level=raw_log_level)
            )

    try:
        parsed_cfg = parse_config(raw_config)
    except TypeError as e:
        xmsg = f"Could not parse config {config_path.name}: {e}"
        raise TypeError(xmsg) from e
    if parsed_cfg is None:
        return None

    validation_result = validate_options(
        parsed_cfg, strict=getattr(args, "strict", None)
    )
    _validation_summary(validation_result, config_path)
    if not validation_result.valid:
        xmsg = f"Configuration file {config_path.name} contains validation errors."
        exception = ValueError(xmsg)
        exception.silent = True  # type: ignore[attr-defined]
        exception.data = validation_result  # type: ignore[attr-defined]
        raise exception

    root_cfg: RootOptions = cast_hint(RootOptions, parsed_cfg)
    return config_path, root_cfg, validation_result
