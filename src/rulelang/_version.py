"""Version lookup for the rulelang package and CLI."""

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

DISTRIBUTION = "rulelang"

# src/rulelang/_version.py -> project root
_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def get_version() -> str:
    """
    Return the rulelang version.

    A source checkout reports ``[project].version`` from its pyproject.toml;
    an installed distribution reports its metadata version. The pyproject is
    only trusted when it declares this distribution, since an installed
    package may sit below an unrelated project.
    """
    if _PYPROJECT.is_file():
        with _PYPROJECT.open("rb") as f:
            project = tomllib.load(f).get("project", {})
        if project.get("name") == DISTRIBUTION and "version" in project:
            return str(project["version"])

    try:
        return version(DISTRIBUTION)
    except PackageNotFoundError:
        return "0.0.0"
