# src/webpack_forge/versioning.py

import json
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import semver


RELEASE_LEVELS = ("major", "minor", "patch")
PRE_LEVELS = ("premajor", "preminor", "prepatch", "prerelease")
VERSION_LEVELS = RELEASE_LEVELS + PRE_LEVELS

# numeric identifier used when a version first enters prerelease
_PRERELEASE_START = "0"


def get_current_version(pkg: Mapping[str, Any]) -> str:
    """Version string usable as an identifier: `1.2.3-rc.1` -> `1_2_3_1`."""
    return re.sub(r"[^\d]+", "_", str(pkg["version"]))


def _bump(version: semver.Version, level: str) -> semver.Version:
    if level in RELEASE_LEVELS:
        return version.next_version(part=level)
    if level == "prerelease":
        if version.prerelease:
            return version.bump_prerelease()
        return version.bump_patch().replace(prerelease=_PRERELEASE_START)
    # premajor / preminor / prepatch
    bumped = getattr(version, f"bump_{level[3:]}")()
    return bumped.replace(prerelease=_PRERELEASE_START)


def get_next_version(pkg: Mapping[str, Any], level: str = "patch") -> str:
    """Identifier form of the version after a `level` bump.

    Raises:
        ValueError: `pkg["version"]` is not semver or `level` is unknown.
    """
    if level not in VERSION_LEVELS:
        xmsg = (
            f"Unknown version level {level!r}"
            f" (expected one of: {', '.join(VERSION_LEVELS)})"
        )
        raise ValueError(xmsg)

    version = semver.Version.parse(str(pkg["version"]))
    return get_current_version({"version": str(_bump(version, level))})


def read_package_json(path: Path | str) -> dict[str, Any]:
    """Load a package manifest, requiring a `version` field."""
    path = Path(path)
    if not path.is_file():
        xmsg = f"Package manifest not found: {path}"
        raise FileNotFoundError(xmsg)

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        xmsg = f"Invalid JSON in {path.name}: {e.msg} (line {e.lineno})"
        raise ValueError(xmsg) from e

    if not isinstance(data, dict) or "version" not in data:
        xmsg = f"{path.name} has no 'version' field"
        raise ValueError(xmsg)
    return data
