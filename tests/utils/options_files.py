# tests/utils/options_files.py

import json
from pathlib import Path
from typing import Any

from apathetic_schema import ApatheticSchema_ValidationSummary


def make_options_content(
    data: dict[str, Any] | list[Any],
    *,
    fmt: str = "json",
) -> str:
    """Serialize options as a JSON, JSONC, or Python options file body."""
    body = json.dumps(data, indent=2)
    if fmt == "jsonc":
        return f"// generated for tests\n{body}\n"
    if fmt == "py":
        # JSON literals true/false/null are not Python
        return f"import json\n\nconfig = json.loads({body!r})\n"
    return body + "\n"


def write_options_file(
    path: Path,
    data: dict[str, Any] | list[Any],
) -> Path:
    """Write an options file whose format follows the file extension.

    Examples:
        >>> write_options_file(tmp_path / ".webpack-forge.json", {"debug": True})
    """
    ext = path.suffix.lower()
    fmt = {".py": "py", ".jsonc": "jsonc"}.get(ext, "json")
    path.write_text(make_options_content(data, fmt=fmt), encoding="utf-8")
    return path


def make_summary(
    *,
    valid: bool = True,
    errors: list[str] | None = None,
    strict_warnings: list[str] | None = None,
    warnings: list[str] | None = None,
    strict: bool = True,
) -> ApatheticSchema_ValidationSummary:
    """Helper to create a clean ValidationSummary."""
    return ApatheticSchema_ValidationSummary(
        valid=valid,
        errors=errors or [],
        strict_warnings=strict_warnings or [],
        warnings=warnings or [],
        strict=strict,
    )
