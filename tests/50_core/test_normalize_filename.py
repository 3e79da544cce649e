# tests/50_core/test_normalize_filename.py

import pytest

import webpack_forge.options.options_resolve as mod_resolve


@pytest.mark.parametrize(
    ("filename", "minify", "expected"),
    [
        ("bundle", False, "bundle.js"),
        ("bundle", True, "bundle.min.js"),
        ("bundle.min", True, "bundle.min.js"),
        ("bundle.min", False, "bundle.min.js"),
        ("bundle.js", True, "bundle.js"),
        ("bundle.min.js", False, "bundle.min.js"),
    ],
)
def test_normalize_filename(filename: str, *, minify: bool, expected: str) -> None:
    """Adds .js (and .min when minifying) unless already present."""
    assert mod_resolve.normalize_filename(filename, minify=minify) == expected


@pytest.mark.parametrize("filename", [None, ""])
def test_normalize_filename_passes_through_missing_names(
    filename: str | None,
) -> None:
    """No filename means webpack's own default."""
    assert mod_resolve.normalize_filename(filename, minify=True) == filename


def test_normalize_filename_is_idempotent() -> None:
    """Normalizing twice gives the same result."""
    # --- execute ---
    once = mod_resolve.normalize_filename("lib", minify=True)
    twice = mod_resolve.normalize_filename(once, minify=True)

    # --- verify ---
    assert once == twice == "lib.min.js"
