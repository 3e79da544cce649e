# tests/50_core/test_resolve_flags.py
"""Tests for resolve_flags() and the build presets."""

import pytest

import webpack_forge.options.options_resolve as mod_resolve


def test_defaults_without_options_are_a_production_build() -> None:
    """Empty options outside a test environment → minified production build."""
    # --- execute ---
    flags = mod_resolve.resolve_flags({}, environ={})

    # --- verify ---
    assert flags.test is False
    assert flags.debug is False
    assert flags.minify is True
    assert flags.sourcemaps is True
    assert flags.env == "production"
    assert flags.web is True
    assert flags.optimize is True
    assert flags.mode == "production"
    assert flags.devtool == "source-map"
    assert flags.enable_tree_shake is True
    assert flags.enable_beautify is False


def test_node_env_test_switches_on_test_mode() -> None:
    """NODE_ENV=test is the ambient test signal."""
    # --- execute ---
    flags = mod_resolve.resolve_flags({}, environ={"NODE_ENV": "test"})

    # --- verify ---
    assert flags.test is True
    assert flags.debug is True  # debug follows test
    assert flags.minify is False
    assert flags.env == "test"
    assert flags.mode == "development"
    assert flags.enable_check_circular_deps is True
    # source maps are never emitted for test builds
    assert flags.enable_source_map is False
    assert flags.devtool == ""


def test_explicit_test_false_beats_node_env() -> None:
    """An explicit option always wins over the ambient signal."""
    # --- execute ---
    flags = mod_resolve.resolve_flags({"test": False}, environ={"NODE_ENV": "test"})

    # --- verify ---
    assert flags.test is False
    assert flags.mode == "production"


def test_debug_build_gets_inline_source_maps() -> None:
    """debug + sourcemaps on the web → inline source maps."""
    # --- execute ---
    flags = mod_resolve.resolve_flags(
        {"debug": True, "sourcemaps": True}, environ={}
    )

    # --- verify ---
    assert flags.minify is False
    assert flags.enable_inline_source_map is True
    assert flags.devtool == "inline-source-map"
    assert flags.enable_tree_shake is False
    assert flags.enable_beautify is True


def test_node_target_disables_source_maps_and_tree_shaking() -> None:
    """Source maps and tree-shaking only apply to web builds."""
    # --- execute ---
    flags = mod_resolve.resolve_flags({"web": False}, environ={})

    # --- verify ---
    assert flags.sourcemaps is True
    assert flags.enable_source_map is False
    assert flags.enable_tree_shake is False


def test_local_env_skips_optimization() -> None:
    """env=local turns optimization off unless asked for."""
    # --- execute ---
    local = mod_resolve.resolve_flags({"env": "local"}, environ={})
    forced = mod_resolve.resolve_flags({"env": "local", "optimize": True}, environ={})

    # --- verify ---
    assert local.optimize is False
    assert forced.optimize is True


def test_caching_requires_cache_and_not_test() -> None:
    """Caching is opt-in and never used for test builds."""
    # --- execute ---
    off = mod_resolve.resolve_flags({}, environ={})
    on = mod_resolve.resolve_flags({"cache": True}, environ={})
    in_test = mod_resolve.resolve_flags({"cache": True, "test": True}, environ={})

    # --- verify ---
    assert off.enable_caching is False
    assert on.enable_caching is True
    assert in_test.enable_caching is False


def test_filename_is_normalized_with_resolved_minify() -> None:
    """The filename reflects the resolved minify flag."""
    # --- execute ---
    minified = mod_resolve.resolve_flags({"filename": "app"}, environ={})
    plain = mod_resolve.resolve_flags(
        {"filename": "app", "minify": False}, environ={}
    )

    # --- verify ---
    assert minified.filename == "app.min.js"
    assert plain.filename == "app.js"


@pytest.mark.parametrize(
    ("options", "minify", "sourcemaps"),
    [
        ({}, True, True),
        ({"debug": True}, False, True),
        ({"test": True}, True, True),
        ({"minify": False}, False, True),
    ],
)
def test_sourcemapped_preset_defaults(
    options: dict[str, bool],
    *,
    minify: bool,
    sourcemaps: bool,
) -> None:
    """The sourcemapped recipe minifies test builds and always maps."""
    # --- setup ---
    preset = mod_resolve.get_preset("sourcemapped")

    # --- execute ---
    flags = mod_resolve.resolve_flags(options, preset=preset, environ={})

    # --- verify ---
    assert flags.minify is minify
    assert flags.sourcemaps is sourcemaps


@pytest.mark.parametrize(
    ("options", "minify", "sourcemaps"),
    [
        ({}, True, True),
        ({"debug": True}, False, False),
        ({"test": True}, False, False),
        ({"minify": True, "debug": True}, True, True),
    ],
)
def test_standard_preset_defaults(
    options: dict[str, bool],
    *,
    minify: bool,
    sourcemaps: bool,
) -> None:
    """The standard recipe only maps what it minifies."""
    # --- execute ---
    flags = mod_resolve.resolve_flags(options, environ={})

    # --- verify ---
    assert flags.minify is minify
    assert flags.sourcemaps is sourcemaps


def test_preset_named_in_options_is_used() -> None:
    """options['preset'] selects the recipe when none is passed."""
    # --- execute ---
    flags = mod_resolve.resolve_flags(
        {"preset": "sourcemapped", "test": True}, environ={}
    )

    # --- verify ---
    assert flags.minify is True


def test_unknown_preset_raises() -> None:
    """An unknown preset name is a ValueError listing the valid ones."""
    # --- execute and verify ---
    with pytest.raises(ValueError, match="sourcemapped"):
        mod_resolve.get_preset("fancy")


def test_resolve_flags_does_not_mutate_options() -> None:
    """Options are read, never written."""
    # --- setup ---
    options = {"filename": "app", "debug": True}
    before = dict(options)

    # --- execute ---
    mod_resolve.resolve_flags(options, environ={})  # type: ignore[arg-type]

    # --- verify ---
    assert options == before


@pytest.mark.parametrize("debug", [True, False])
@pytest.mark.parametrize("sourcemaps", [True, False])
@pytest.mark.parametrize("preset", ["standard", "sourcemapped"])
def test_node_builds_never_map_or_tree_shake(
    *,
    debug: bool,
    sourcemaps: bool,
    preset: str,
) -> None:
    """web=False disables source maps and tree-shaking for every combination."""
    # --- execute ---
    flags = mod_resolve.resolve_flags(
        {"web": False, "debug": debug, "sourcemaps": sourcemaps, "preset": preset},  # type: ignore[typeddict-item]
        environ={},
    )

    # --- verify ---
    assert flags.enable_source_map is False
    assert flags.enable_tree_shake is False
