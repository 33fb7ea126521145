"""Version lookup shared by ``/health`` and the configuration metadata."""

from __future__ import annotations

import re
from functools import lru_cache
from importlib import metadata
from pathlib import Path
from typing import Final

PACKAGE_NAME: Final = "reviewpay"
PYPROJECT_PATH: Final = Path(__file__).resolve().parents[3] / "pyproject.toml"

# ``version = "x.y.z"`` inside the ``[project]`` table, before the next table.
_PROJECT_VERSION = re.compile(
    r'^\[project\]\s*$(?:(?!^\[).)*?^version\s*=\s*"([^"]+)"',
    re.MULTILINE | re.DOTALL,
)


@lru_cache(maxsize=1)
def get_project_version() -> str:
    """Return the installed distribution version.

    Source checkouts that were never installed have no distribution metadata;
    the version is then read from ``pyproject.toml``.
    """

    try:
        return metadata.version(PACKAGE_NAME)
    except metadata.PackageNotFoundError:
        return version_from_pyproject(PYPROJECT_PATH)


def version_from_pyproject(path: Path) -> str:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as error:
        raise RuntimeError(f"Unable to read project metadata at {path}") from error

    match = _PROJECT_VERSION.search(text)
    if match is None:
        raise RuntimeError(f"No [project].version entry in {path}")
    return match.group(1)


__all__ = ["PACKAGE_NAME", "PYPROJECT_PATH", "get_project_version", "version_from_pyproject"]
