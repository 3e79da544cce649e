# src/webpack_forge/cli.py

import argparse
import platform
import sys
from dataclasses import dataclass
from difflib import get_close_matches
from pathlib import Path
from typing import Any

from apathetic_logging import safeLog

from .actions import (
    build_configs,
    get_metadata,
    render_configs,
    version_tag,
    write_output,
)
from .constants import LOG_LEVELS, OUTPUT_FORMATS
from .logs import getAppLogger
from .meta import DESCRIPTION, PROGRAM_DISPLAY, PROGRAM_SCRIPT
from .options import (
    PRESETS,
    RootOptions,
    RootOptionsResolved,
    load_and_validate_config,
    resolve_root_options,
)
from .versioning import VERSION_LEVELS


# --------------------------------------------------------------------------- #
# CLI setup and helpers
# --------------------------------------------------------------------------- #


class HintingArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        # Build known option strings: ["-v", "--verbose", "--log-level", ...]
        known_opts: list[str] = []
        for action in self._actions:
            known_opts.extend([s for s in action.option_strings if s])

        hint_lines: list[str] = []
        # Argparse message for bad flags is typically
        # "unrecognized arguments: --minfy ..."
        if "unrecognized arguments:" in message:
            bad = message.split("unrecognized arguments:", 1)[1].strip()
            bad_args = [tok for tok in bad.split() if tok.startswith("-")]
            for arg in bad_args:
                close = get_close_matches(arg, known_opts, n=1, cutoff=0.6)
                if close:
                    hint_lines.append(f"Hint: did you mean {close[0]}?")

        # Print usage + the original error
        self.print_usage(sys.stderr)
        full = f"{self.prog}: error: {message}"
        if hint_lines:
            full += "\n" + "\n".join(hint_lines)
        self.exit(2, full + "\n")


def _add_toggle(
    container: Any,
    dest: str,
    on: str,
    off: str,
    help_on: str,
    help_off: str,
) -> None:
    """Add a mutually exclusive --X / --no-X pair defaulting to None."""
    group = container.add_mutually_exclusive_group()
    group.add_argument(on, dest=dest, action="store_true", help=help_on)
    group.add_argument(off, dest=dest, action="store_false", help=help_off)
    group.set_defaults(**{dest: None})


def _setup_parser() -> argparse.ArgumentParser:  # noqa: PLR0915
    """Define and return the CLI argument parser."""
    parser = HintingArgumentParser(prog=PROGRAM_SCRIPT, description=DESCRIPTION)

    # --- Standard flags ---
    parser.add_argument("-c", "--config", help="Path to build options file.")
    parser.add_argument(
        "-o",
        "--out",
        help="Write the generated config to this file instead of stdout.",
    )
    parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Output format: a CommonJS module (js, default) or plain JSON.",
    )
    parser.add_argument(
        "--preset",
        choices=sorted(PRESETS),
        default=None,
        help="Build recipe used for minify/sourcemaps defaults.",
    )

    # --- Build overrides ---
    build = parser.add_argument_group("build overrides")
    build.add_argument(
        "--entry",
        action="append",
        metavar="PATH",
        help="Entry module (repeat for several entries).",
    )
    build.add_argument("--filename", help="Output bundle filename.")
    build.add_argument("--modulename", help="Library name exposed by the bundle.")
    build.add_argument(
        "--library-target",
        dest="library_target",
        help="Module format of the bundle (default: umd).",
    )
    build.add_argument("--env", help="Deployment environment name (e.g. production).")
    build.add_argument("--path", help="Output directory.")
    build.add_argument("--context", help="Base directory for resolving entries.")

    _add_toggle(
        build,
        "test",
        "--test",
        "--no-test",
        "Build for the test runner.",
        "Do not build for tests (overrides NODE_ENV=test).",
    )
    _add_toggle(
        build,
        "debug",
        "--debug",
        "--no-debug",
        "Debug build (no minification by default).",
        "Non-debug build.",
    )
    _add_toggle(
        build,
        "minify",
        "--minify",
        "--no-minify",
        "Force minification.",
        "Disable minification.",
    )
    _add_toggle(
        build,
        "web",
        "--web",
        "--node",
        "Target browsers (default).",
        "Target node.",
    )
    _add_toggle(
        build,
        "sourcemaps",
        "--sourcemaps",
        "--no-sourcemaps",
        "Emit source maps.",
        "Do not emit source maps.",
    )
    build.add_argument(
        "--cache",
        action="store_const",
        const=True,
        default=None,
        help="Enable on-disk caching for loaders and plugins.",
    )
    build.add_argument(
        "--analyze",
        action="store_const",
        const=True,
        default=None,
        help="Add the bundle analyzer plugin.",
    )
    build.add_argument(
        "--dynamic",
        action="store_const",
        const=True,
        default=None,
        help="Use per-process cache directories removed at exit.",
    )
    build.add_argument(
        "--define",
        action="append",
        metavar="NAME=JSON",
        help="Inject a compile-time constant (value parsed as JSON).",
    )
    build.add_argument(
        "--alias",
        action="append",
        metavar="NAME=PATH",
        help="Add a module resolution alias.",
    )

    # --- Version tags ---
    tags = parser.add_argument_group("version tags")
    tag_mode = tags.add_mutually_exclusive_group()
    tag_mode.add_argument(
        "--version-tag",
        action="store_true",
        help="Print the package version as an identifier and exit.",
    )
    tag_mode.add_argument(
        "--next-version-tag",
        nargs="?",
        const="patch",
        default=None,
        choices=VERSION_LEVELS,
        metavar="LEVEL",
        help="Print the next version (default bump: patch) as an identifier.",
    )
    tags.add_argument(
        "--package-json",
        default="package.json",
        metavar="PATH",
        help="Package manifest to read versions from (default: ./package.json).",
    )

    # --- Version and verbosity ---
    parser.add_argument("--version", action="store_true", help="Show version info.")

    log_level = parser.add_mutually_exclusive_group()
    log_level.add_argument(
        "-q",
        "--quiet",
        action="store_const",
        const="warning",
        dest="log_level",
        help="Suppress non-critical output (same as --log-level warning).",
    )
    log_level.add_argument(
        "-v",
        "--verbose",
        action="store_const",
        const="debug",
        dest="log_level",
        help="Verbose output (same as --log-level debug).",
    )
    log_level.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=None,
        dest="log_level",
        help="Set log verbosity level.",
    )

    _add_toggle(
        parser,
        "strict",
        "--strict",
        "--no-strict",
        "Treat unknown option keys as errors (default).",
        "Only warn about unknown option keys.",
    )
    return parser


# --------------------------------------------------------------------------- #
# Main entry helpers
# --------------------------------------------------------------------------- #


@dataclass
class _LoadedOptions:
    """Container for loaded and resolved options."""

    config_path: Path | None
    root_cfg: RootOptions | None
    resolved: RootOptionsResolved


def _initialize_logger(args: argparse.Namespace) -> None:
    """Initialize logger with CLI args, env vars, and defaults."""
    logger = getAppLogger()
    log_level = logger.determineLogLevel(args=args)
    logger.setLevel(log_level)
    logger.trace("[BOOT] log-level initialized: %s", logger.levelName)

    logger.debug(
        "Runtime: Python %s (%s)\n    %s",
        platform.python_version(),
        platform.python_implementation(),
        sys.version.replace("\n", " "),
    )


def _handle_early_exits(args: argparse.Namespace) -> int | None:
    """Handle --version and the version-tag flags.

    Returns exit code if we should exit early, None otherwise.
    """
    logger = getAppLogger()

    # --- Version flag ---
    if getattr(args, "version", None):
        meta = get_metadata()
        logger.info("%s %s (%s)", PROGRAM_DISPLAY, meta.version, meta.commit)
        return 0

    # --- Version tags ---
    level = getattr(args, "next_version_tag", None)
    if getattr(args, "version_tag", None) or level is not None:
        tag = version_tag(args.package_json, level)
        sys.stdout.write(tag + "\n")
        return 0

    return None


def _load_and_resolve_options(args: argparse.Namespace) -> _LoadedOptions:
    """Load the options file (if any) and merge it with CLI arguments."""
    logger = getAppLogger()

    config_path: Path | None = None
    root_cfg: RootOptions | None = None
    config_result = load_and_validate_config(args)
    if config_result is not None:
        config_path, root_cfg, _validation_summary = config_result

    cwd = Path.cwd().resolve()
    resolved = resolve_root_options(
        root_cfg,
        args,
        config_dir=config_path.parent if config_path else None,
        cwd=cwd,
    )

    # --- Re-resolve log level now that the options file is known ---
    logger.setLevel(
        logger.determineLogLevel(args=args, root_log_level=resolved["log_level"])
    )
    logger.trace("[CONFIG] log-level re-resolved from options: %s", logger.levelName)

    return _LoadedOptions(config_path=config_path, root_cfg=root_cfg, resolved=resolved)


# --------------------------------------------------------------------------- #
# Main entry
# --------------------------------------------------------------------------- #


def main(argv: list[str] | None = None) -> int:
    logger = getAppLogger()  # init (use env + defaults)

    try:
        parser = _setup_parser()
        args = parser.parse_args(argv)

        # --- Early runtime init (use CLI + env + defaults) ---
        _initialize_logger(args)

        # --- Handle early exits (version, version tags) ---
        early_exit_code = _handle_early_exits(args)
        if early_exit_code is not None:
            return early_exit_code

        # --- Load and resolve options ---
        loaded = _load_and_resolve_options(args)
        resolved = loaded.resolved
        out = resolved.get("out")

        # stdout carries the config itself, so keep progress off it
        progress = logger.info if out else logger.debug
        if loaded.config_path:
            progress("🔧 Using options: %s", loaded.config_path.name)
        else:
            progress("🔧 No options file found; using CLI flags and defaults.")

        # --- Build and render ---
        descriptors = build_configs(resolved)
        text = render_configs(descriptors, resolved["format"])

        if out:
            path = write_output(text, out)
            logger.info(
                "✅ Wrote %d webpack config(s) to %s", len(descriptors), path
            )
        else:
            sys.stdout.write(text)

    except (FileNotFoundError, ValueError, TypeError, RuntimeError) as e:
        # controlled termination
        silent = getattr(e, "silent", False)
        if not silent:
            try:
                logger.errorIfNotDebug(str(e))
            except Exception:  # noqa: BLE001
                safeLog(f"[FATAL] Logging failed while reporting: {e}")
        return getattr(e, "code", 1)

    except Exception as e:  # noqa: BLE001
        # unexpected internal error
        try:
            logger.criticalIfNotDebug("Unexpected internal error: %s", e)
        except Exception:  # noqa: BLE001
            safeLog(f"[FATAL] Logging failed while reporting: {e}")

        return getattr(e, "code", 1)

    else:
        return 0
