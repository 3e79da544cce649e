# src/webpack_forge/define.py

"""Injected global constants.

Webpack's DefinePlugin substitutes each constant with *source code*, so every
value has to be turned into a literal fragment first. `serialize_constants()`
does that; `literal()` marks a value that already is code.
"""

import json
from collections.abc import Callable, Mapping
from typing import Any

from .constants import KNOWN_ENVS, LITERAL_MARKER
from .logs import getAppLogger
from .options.options_types import ResolvedFlags


class UnsupportedValueKindError(TypeError):
    """A value cannot be turned into a literal source fragment."""

    def __init__(self, value: Any, context: str = "") -> None:
        self.kind = type(value).__name__
        where = f" at {context}" if context else ""
        super().__init__(f"Unrecognized type{where}: {self.kind}")


def literal(code: str) -> dict[str, str]:
    """Wrap source code so it is injected verbatim."""
    return {LITERAL_MARKER: code}


def _dumps_sequence(item: list[Any] | tuple[Any, ...], context: str) -> str:
    try:
        return json.dumps(list(item))
    except TypeError as e:
        raise UnsupportedValueKindError(item, context) from e


def _serialize(item: Any, context: str) -> Any:
    # sequences are stringified whole; their elements are not resolved
    if isinstance(item, (list, tuple)):
        return _dumps_sequence(item, context)

    if isinstance(item, Mapping):
        if LITERAL_MARKER in item:
            return item[LITERAL_MARKER]
        return {
            key: _serialize(value, f"{context}.{key}" if context else str(key))
            for key, value in item.items()
        }

    if item is None or isinstance(item, (str, int, float, bool)):
        return json.dumps(item)

    # deferred: invoked now, result used as-is
    if callable(item):
        return item()

    raise UnsupportedValueKindError(item, context)


def serialize_constants(item: Any) -> Any:
    """Recursively turn injected constants into literal source fragments.

    - list / tuple         -> JSON text of the whole sequence
    - mapping with marker  -> the marked value, verbatim
    - other mapping        -> same keys, values serialized
    - str/number/bool/None -> JSON literal text
    - zero-arg callable    -> called once; return value used unserialized
    - anything else        -> UnsupportedValueKindError
    """
    result = _serialize(item, "")
    if isinstance(result, dict):
        getAppLogger().trace(
            f"[serialize_constants] serialized {len(result)} constant(s)"  # pyright: ignore[reportUnknownArgumentType]
        )
    return result


def _constant(code: str) -> Callable[[], str]:
    return lambda: code


def default_define_vars(
    flags: ResolvedFlags,
    extra: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Caller constants plus the built-in build constants.

    Built-ins win over caller constants with the same name.
    """
    env_flags = {f"__{env.upper()}__": flags.env == env for env in KNOWN_ENVS}
    return {
        **(extra or {}),
        "__MIN__": flags.minify,
        "__TEST__": flags.test,
        "__WEB__": flags.web,
        "__FILE_NAME__": flags.filename,
        "__DEBUG__": flags.debug,
        "__ENV__": flags.env,
        "__TREE_SHAKE__": flags.enable_tree_shake,
        **env_flags,
        "__WINDOW__": _constant("global"),
        "__GLOBAL__": _constant("global"),
        "global": _constant("window" if flags.web else "global"),
    }
