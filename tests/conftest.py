# tests/conftest.py
"""Shared test setup for project."""

from collections.abc import Generator

import pytest

import webpack_forge.cache_dirs as mod_cache_dirs
import webpack_forge.constants as mod_constants
import webpack_forge.logs as mod_logs
from tests.utils import DEFAULT_TEST_LOG_LEVEL
from tests.utils.log_fixtures import (
    direct_logger,
    module_logger,
)


# These fixtures are intentionally re-exported so pytest can discover them.
__all__ = [
    "direct_logger",
    "module_logger",
]


# ----------------------------------------------------------------------
# Fixtures
# ----------------------------------------------------------------------


@pytest.fixture(autouse=True)
def reset_logger_level() -> Generator[None, None, None]:
    """Reset logger level to DEFAULT_TEST_LOG_LEVEL (test)
        before each test for isolation.

    The app logger is a module-level singleton that persists between tests
    (the CLI sets its level from flags), so reset it before and after each
    test to prevent interference.
    """
    logger = mod_logs.getAppLogger()
    logger.setLevel(DEFAULT_TEST_LOG_LEVEL)  # test
    yield
    logger.setLevel(DEFAULT_TEST_LOG_LEVEL)  # test


@pytest.fixture(autouse=True)
def isolate_build_env(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path_factory: pytest.TempPathFactory,
) -> None:
    """Keep ambient NODE_ENV and shared cache directories out of tests.

    Shared cache managers are rooted in a per-session temp directory so no
    test writes into the real system temp dir.
    """
    monkeypatch.delenv(mod_constants.DEFAULT_ENV_NODE_ENV, raising=False)
    cache_root = tmp_path_factory.getbasetemp() / "cache-root"
    shared = {
        dynamic: mod_cache_dirs.CacheDirManager(dynamic=dynamic, tmp_root=cache_root)
        for dynamic in (False, True)
    }
    monkeypatch.setattr(mod_cache_dirs.CacheDirManager, "_shared", shared)

