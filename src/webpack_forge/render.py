# src/webpack_forge/render.py

"""Render a webpack configuration for the JavaScript side.

Descriptors hold a few values JSON cannot express: compiled regular
expressions (webpack `test`/`exclude` matchers) and plugin instances. The
module renderer writes them as JS literals and `new` expressions; the JSON
renderer degrades them to plain data for inspection.
"""

import json
import re
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from .define import UnsupportedValueKindError
from .meta import PROGRAM_SCRIPT
from .plugins import PluginSpec


INDENT = "    "

_REGEX_FLAGS = (
    (re.IGNORECASE, "i"),
    (re.MULTILINE, "m"),
    (re.DOTALL, "s"),
)

_JS_IDENTIFIER = re.compile(r"^[A-Za-z_$][\w$]*$")
_UNESCAPED_SLASH = re.compile(r"(?<!\\)/")

Descriptors = Mapping[str, Any] | Sequence[Mapping[str, Any]]


def regex_literal(pattern: re.Pattern[str]) -> str:
    """`re.compile(r"\\.js$", re.I)` -> `/\\.js$/i`."""
    flags = "".join(ch for flag, ch in _REGEX_FLAGS if pattern.flags & flag)
    source = _UNESCAPED_SLASH.sub(r"\/", pattern.pattern)
    return f"/{source}/{flags}"


def _js_key(key: str) -> str:
    return key if _JS_IDENTIFIER.match(key) else json.dumps(key)


def _collect_plugins(value: Any, found: dict[str, PluginSpec]) -> None:
    if isinstance(value, PluginSpec):
        found.setdefault(value.binding, value)
        _collect_plugins(value.options, found)
    elif isinstance(value, Mapping):
        for item in value.values():
            _collect_plugins(item, found)
    elif isinstance(value, (list, tuple)):
        for item in value:
            _collect_plugins(item, found)


def _js_entry(value: Any, depth: int, context: str) -> str:
    # only reachable with None for kept plugin option keys
    if value is None:
        return "undefined"
    return _js_value(value, depth, context)


def _js_value(  # noqa: PLR0911
    value: Any, depth: int, context: str, *, keep_none: bool = False
) -> str:
    """Render a value as JS source.

    Mappings drop `None` entries unless *keep_none* is set; plugin options
    keep them (as `undefined`) so every DefinePlugin key survives.
    """
    pad = INDENT * (depth + 1)
    end = INDENT * depth

    if isinstance(value, PluginSpec):
        args = (
            _js_value(value.options, depth, context, keep_none=True)
            if value.options
            else ""
        )
        return f"new {value.constructor}({args})"
    if isinstance(value, re.Pattern):
        return regex_literal(value)  # pyright: ignore[reportUnknownArgumentType]
    if isinstance(value, Mapping):
        items = [
            f"{pad}{_js_key(str(k))}: {_js_entry(v, depth + 1, f'{context}.{k}')}"
            for k, v in value.items()
            if keep_none or v is not None
        ]
        return "{\n" + ",\n".join(items) + f"\n{end}}}" if items else "{}"
    if isinstance(value, (list, tuple)):
        items = [
            f"{pad}{_js_value(v, depth + 1, f'{context}[{i}]')}"
            for i, v in enumerate(value)
        ]
        return "[\n" + ",\n".join(items) + f"\n{end}]" if items else "[]"
    if isinstance(value, Path):
        return json.dumps(str(value))
    if value is None or isinstance(value, (str, int, float, bool)):
        return json.dumps(value)
    raise UnsupportedValueKindError(value, context)


def render_config_module(descriptors: Descriptors) -> str:
    """Render one descriptor (or a list for a multi-compiler build) as a
    CommonJS module that webpack can load directly.
    """
    plugins: dict[str, PluginSpec] = {}
    _collect_plugins(descriptors, plugins)
    requires = [spec.require_line() for spec in plugins.values()]

    lines = [f"/* Generated by {PROGRAM_SCRIPT}; do not edit by hand. */", ""]
    if requires:
        lines.extend([*requires, ""])
    lines.append(f"module.exports = {_js_value(descriptors, 0, 'config')};")
    return "\n".join(lines) + "\n"


def _plain(value: Any, context: str, *, keep_none: bool = False) -> Any:
    if isinstance(value, PluginSpec):
        return {
            "plugin": value.name,
            "package": value.package,
            "options": _plain(value.options, context, keep_none=True),
        }
    if isinstance(value, re.Pattern):
        return regex_literal(value)  # pyright: ignore[reportUnknownArgumentType]
    if isinstance(value, Mapping):
        return {
            str(k): _plain(v, f"{context}.{k}")
            for k, v in value.items()
            if keep_none or v is not None
        }
    if isinstance(value, (list, tuple)):
        return [_plain(v, f"{context}[{i}]") for i, v in enumerate(value)]
    if isinstance(value, Path):
        return str(value)
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    raise UnsupportedValueKindError(value, context)


def render_config_json(descriptors: Descriptors) -> str:
    """Render descriptors as indented JSON (regexes and plugins as data)."""
    return json.dumps(_plain(descriptors, "config"), indent=2) + "\n"
