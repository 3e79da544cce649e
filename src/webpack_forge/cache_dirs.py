# src/webpack_forge/cache_dirs.py

import atexit
import os
import shutil
import tempfile
from contextlib import suppress
from dataclasses import astuple, dataclass
from pathlib import Path
from typing import ClassVar

from .constants import CACHE_DIR_PREFIXES, STATIC_CACHE_ID
from .logs import getAppLogger


@dataclass(frozen=True)
class CacheDirs:
    """On-disk cache locations handed to the loaders and plugins."""

    hard_source: Path
    babel: Path
    terser: Path
    cache_loader: Path

    def all(self) -> tuple[Path, ...]:
        return astuple(self)


class CacheDirManager:
    """Create the cache directories once and, optionally, remove them at exit.

    A *dynamic* manager namespaces its directories with the process id and
    deletes them when the interpreter shuts down; a static one shares
    directories across runs and never deletes them.
    """

    _shared: ClassVar[dict[bool, "CacheDirManager"]] = {}

    def __init__(
        self,
        *,
        dynamic: bool = False,
        tmp_root: Path | None = None,
        pid: int | None = None,
    ) -> None:
        self.dynamic = dynamic
        self.tmp_root = Path(tmp_root or tempfile.gettempdir())
        cache_id = str(pid or os.getpid()) if dynamic else STATIC_CACHE_ID
        self.dirs = CacheDirs(
            **{
                field: self.tmp_root / f"{prefix}-{cache_id}"
                for field, prefix in CACHE_DIR_PREFIXES.items()
            }
        )
        self._created = False
        self._exit_hook = False

    @classmethod
    def for_process(cls, *, dynamic: bool = False) -> "CacheDirManager":
        """Return the manager shared by every build in this process."""
        if dynamic not in cls._shared:
            cls._shared[dynamic] = cls(dynamic=dynamic)
        return cls._shared[dynamic]

    @property
    def created(self) -> bool:
        return self._created

    def acquire(self) -> CacheDirs:
        """Create any missing cache directory (first call only)."""
        if self._created:
            return self.dirs

        logger = getAppLogger()
        for path in self.dirs.all():
            if not path.exists():
                logger.trace(f"[cache_dirs] mkdir {path}")
                path.mkdir(parents=True, exist_ok=True)

        if self.dynamic and not self._exit_hook:
            atexit.register(self.release)
            self._exit_hook = True

        self._created = True
        return self.dirs

    def release(self) -> None:
        """Best-effort removal of the cache directories."""
        logger = getAppLogger()
        for path in self.dirs.all():
            if not path.exists():
                continue
            with suppress(OSError):
                shutil.rmtree(path)
                logger.trace(f"[cache_dirs] removed {path}")
            if path.exists():
                logger.debug("Could not remove cache directory %s", path)
        self._created = False
