"""Application version module.

Installed: read from the distribution metadata.
From a source checkout: read the VERSION file at the project root.
"""

from importlib import metadata
from pathlib import Path

DISTRIBUTION_NAME = "raster-layer-editor"


def get_version() -> str:
    """Get the application version string (e.g. '1.0.0')."""
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return _source_version()


def _source_version() -> str:
    # VERSION file is at project root (editor/src/version.py -> ../../VERSION)
    version_file = Path(__file__).resolve().parent.parent.parent / "VERSION"
    try:
        return version_file.read_text().strip()
    except FileNotFoundError:
        return "0.0.0"
