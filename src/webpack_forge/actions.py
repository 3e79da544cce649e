# src/webpack_forge/actions.py
import re
import subprocess
from contextlib import suppress
from pathlib import Path
from typing import Any

from .build import get_webpack_config
from .logs import getAppLogger
from .meta import Metadata
from .options.options_types import RootOptionsResolved
from .render import render_config_json, render_config_module
from .versioning import get_current_version, get_next_version, read_package_json


def get_metadata() -> Metadata:
    """Return (version, commit) tuple for this tool.

    Reads the version from pyproject.toml next to the source tree and the
    commit from git; either falls back to "unknown".
    """
    logger = getAppLogger()
    logger.trace(f"get_metadata ran from: {Path(__file__).resolve()}")

    version = "unknown"
    commit = "unknown"

    # Try pyproject.toml for version
    root = Path(__file__).resolve().parents[2]
    pyproject = root / "pyproject.toml"
    if pyproject.exists():
        logger.trace(f"trying to read metadata from {pyproject}")
        text = pyproject.read_text()
        match = re.search(r'(?m)^\s*version\s*=\s*["\']([^"\']+)["\']', text)
        if match:
            version = match.group(1)

    # Try git for commit
    with suppress(Exception):
        logger.trace("trying to get commit from git")
        result = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],  # noqa: S607
            cwd=root,
            capture_output=True,
            text=True,
            check=True,
        )
        commit = result.stdout.strip()

    logger.trace(f"got package version {version} with commit {commit}")
    return Metadata(version, commit)


def version_tag(package_json: Path | str, level: str | None = None) -> str:
    """Current version tag, or the next one when `level` is given."""
    pkg = read_package_json(package_json)
    if level is None:
        return get_current_version(pkg)
    return get_next_version(pkg, level)


def build_configs(resolved: RootOptionsResolved) -> list[dict[str, Any]]:
    """One webpack descriptor per resolved build, in order."""
    return [get_webpack_config(build) for build in resolved["builds"]]


def render_configs(descriptors: list[dict[str, Any]], fmt: str) -> str:
    """Render a single descriptor as-is, several as a multi-compiler array."""
    payload: Any = descriptors[0] if len(descriptors) == 1 else descriptors
    if fmt == "json":
        return render_config_json(payload)
    return render_config_module(payload)


def write_output(text: str, out: Path | str) -> Path:
    """Write rendered output, creating parent directories as needed."""
    logger = getAppLogger()
    path = Path(out).expanduser().resolve()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    logger.trace(f"[write_output] wrote {len(text)} chars to {path}")
    return path
