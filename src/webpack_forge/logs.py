# src/webpack_forge/logs.py

"""Logger wiring for Webpack Forge.

Importing this module installs `AppLogger` as the logging class and
registers the level sources, highest priority first:
WEBPACK_FORGE_LOG_LEVEL, then LOG_LEVEL, then the "info" default.
The CLI's --log-level / -q / -v flags and an options file's
`log_level` are layered on top by `determineLogLevel()`.
"""

import logging
from typing import cast

from apathetic_logging import (
    Logger,
    registerDefaultLogLevel,
    registerLogger,
    registerLogLevelEnvVars,
)

from .constants import DEFAULT_ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL
from .meta import PROGRAM_ENV, PROGRAM_PACKAGE


class AppLogger(Logger):
    """Logger used by every webpack_forge module (adds TRACE and SILENT)."""


# --- Logger initialization ---------------------------------------------------

# Must run before the first getLogger() call for our package name.
logging.setLoggerClass(AppLogger)
AppLogger.extendLoggingModule()

registerLogLevelEnvVars(
    [f"{PROGRAM_ENV}_{DEFAULT_ENV_LOG_LEVEL}", DEFAULT_ENV_LOG_LEVEL]
)
registerDefaultLogLevel(DEFAULT_LOG_LEVEL)
registerLogger(PROGRAM_PACKAGE)

_APP_LOGGER = cast("AppLogger", logging.getLogger(PROGRAM_PACKAGE))


# --- Convenience utils ---------------------------------------------------------


def getAppLogger() -> AppLogger:  # noqa: N802
    """Return the `webpack_forge` logger, typed as AppLogger."""
    return _APP_LOGGER
