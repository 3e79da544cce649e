# src/webpack_forge/options/options_validate.py


from typing import Any

from apathetic_schema import (
    ApatheticSchema_SchemaErrorAggregator,
    ApatheticSchema_ValidationSummary,
    check_schema_conformance,
    collect_msg,
    flush_schema_aggregators,
)
from apathetic_utils import schema_from_typeddict
from webpack_forge.constants import DEFAULT_STRICT_CONFIG
from webpack_forge.logs import getAppLogger

from .options_types import BuildOptions, RootOptions


# Field-specific type examples for better error messages
FIELD_EXAMPLES: dict[str, str] = {
    "root.builds.*.entry": '"./src/index.js"',
    "root.builds.*.filename": '"my-lib"',
    "root.builds.*.modulename": '"myLib"',
    "root.builds.*.vars": '{"__SDK_HOST__": "https://example.com"}',
    "root.builds.*.alias": '{"src": "./src"}',
    "root.builds.*.preset": '"standard"',
    "root.log_level": '"debug"',
    "root.strict_config": "true",
    "root.format": '"js"',
}


def _set_valid_and_return(
    *,
    summary: ApatheticSchema_ValidationSummary,  # modified
    agg: ApatheticSchema_SchemaErrorAggregator,
) -> ApatheticSchema_ValidationSummary:
    flush_schema_aggregators(summary=summary, agg=agg)
    summary.valid = not summary.errors and not summary.strict_warnings
    return summary


def _validate_root(
    parsed_cfg: dict[str, Any],
    *,
    strict_arg: bool | None,
    summary: ApatheticSchema_ValidationSummary,  # modified
) -> bool:
    logger = getAppLogger()
    logger.trace(f"[validate_root] Validating root with {len(parsed_cfg)} keys")

    # --- Determine strictness from arg or root config or default ---
    strict_from_root: Any = parsed_cfg.get("strict_config")
    if strict_arg is not None:
        summary.strict = strict_arg
    elif isinstance(strict_from_root, bool):
        summary.strict = strict_from_root

    ok = check_schema_conformance(
        parsed_cfg,
        schema_from_typeddict(RootOptions),
        "in top-level configuration",
        strict_config=summary.strict,
        summary=summary,
        ignore_keys={"builds"},
        base_path="root",
        field_examples=FIELD_EXAMPLES,
    )
    if not ok and not (summary.errors or summary.strict_warnings):
        collect_msg(
            "Top-level configuration invalid.",
            strict=True,
            summary=summary,
            is_error=True,
        )
    return ok


def _validate_builds(
    parsed_cfg: dict[str, Any],
    *,
    summary: ApatheticSchema_ValidationSummary,  # modified
) -> None:
    builds = parsed_cfg.get("builds", [])
    if not isinstance(builds, list):
        collect_msg(
            f"`builds` must be a list of objects, got {type(builds).__name__}",
            strict=True,
            summary=summary,
            is_error=True,
        )
        return

    build_schema = schema_from_typeddict(BuildOptions)
    for i, build in enumerate(builds):  # pyright: ignore[reportUnknownVariableType]
        if not isinstance(build, dict):
            collect_msg(
                f"Build #{i + 1} must be an object, got {type(build).__name__}",  # pyright: ignore[reportUnknownArgumentType]
                strict=True,
                summary=summary,
                is_error=True,
            )
            continue

        ok = check_schema_conformance(
            build,  # pyright: ignore[reportUnknownArgumentType]
            build_schema,
            f"in build #{i + 1}",
            strict_config=summary.strict,
            summary=summary,
            base_path="root.builds.*",
            field_examples=FIELD_EXAMPLES,
        )
        if not ok and not (summary.errors or summary.strict_warnings):
            collect_msg(
                f"Build #{i + 1} schema invalid",
                strict=True,
                summary=summary,
                is_error=True,
            )


def validate_options(
    parsed_cfg: dict[str, Any],
    *,
    strict: bool | None = None,
) -> ApatheticSchema_ValidationSummary:
    """Validate parsed (canonical RootOptions shaped) options.

    strict=True  →  unknown keys become fatal, but are still listed separately
    strict=False →  unknown keys remain non-fatal warnings
    strict=None  →  use the root `strict_config` key, or the default

    Returns an ApatheticSchema_ValidationSummary.
    """
    logger = getAppLogger()
    logger.trace(f"[validate_options] Starting validation (strict={strict})")

    summary = ApatheticSchema_ValidationSummary(
        valid=True,
        errors=[],
        strict_warnings=[],
        warnings=[],
        strict=DEFAULT_STRICT_CONFIG,
    )
    agg: ApatheticSchema_SchemaErrorAggregator = {}

    _validate_root(parsed_cfg, strict_arg=strict, summary=summary)
    _validate_builds(parsed_cfg, summary=summary)

    return _set_valid_and_return(summary=summary, agg=agg)
