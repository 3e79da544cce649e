# tests/utils/__init__.py

from .constants import DEFAULT_TEST_LOG_LEVEL, PROJ_ROOT
from .options_files import make_options_content, make_summary, write_options_file
from .trace import TEST_TRACE, make_test_trace


__all__ = [  # noqa: RUF022
    # constants
    "PROJ_ROOT",
    "DEFAULT_TEST_LOG_LEVEL",
    # options_files
    "make_options_content",
    "make_summary",
    "write_options_file",
    # trace
    "TEST_TRACE",
    "make_test_trace",
]
