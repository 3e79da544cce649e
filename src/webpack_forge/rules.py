# src/webpack_forge/rules.py

import re
from pathlib import Path
from typing import Any

from .cache_dirs import CacheDirs


def styling_rule() -> dict[str, Any]:
    return {
        "test": re.compile(r"\.scss$", re.IGNORECASE),
        "use": [
            "isomorphic-style-loader",
            {"loader": "css-loader", "options": {"importLoaders": 1}},
            "scoped-css-loader",
            "sass-loader",
        ],
    }


def cache_rule(cache_dir: Path) -> dict[str, Any]:
    return {
        "test": re.compile(r"\.jsx?$"),
        "loader": "cache-loader",
        "options": {"cacheDirectory": str(cache_dir)},
    }


def babel_rule(babel_config: str, cache_dir: Path | None) -> dict[str, Any]:
    return {
        "test": re.compile(r"\.jsx?$"),
        "exclude": re.compile(r"(dist)"),
        "loader": "babel-loader",
        "options": {
            "cacheDirectory": str(cache_dir) if cache_dir is not None else False,
            "extends": babel_config,
        },
    }


def raw_rule() -> dict[str, Any]:
    return {
        "test": re.compile(r"\.(html?|css|json|svg)$"),
        "loader": "raw-loader",
    }


def build_rules(
    *,
    babel_config: str,
    cache_dirs: CacheDirs | None,
    styles: bool = True,
) -> list[dict[str, Any]]:
    """Module rules in precedence order.

    Passing `cache_dirs` turns caching on: the cache-loader rule is inserted
    ahead of the babel rule, and babel gets its own cache directory.
    """
    rules: list[dict[str, Any]] = []
    if styles:
        rules.append(styling_rule())
    if cache_dirs is not None:
        rules.append(cache_rule(cache_dirs.cache_loader))
    rules.append(
        babel_rule(babel_config, cache_dirs.babel if cache_dirs is not None else None)
    )
    rules.append(raw_rule())
    return rules
