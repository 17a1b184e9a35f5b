"""
Exposes the version of geobearing
"""
from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version
from pathlib import Path


def _read_version_file() -> str | None:
    """
    Fallback when running from a source tree without installed metadata. Reads
    the VERSION file at the repo root.
    """
    path = Path(__file__).resolve().parents[1] / "VERSION"
    try:
        return path.read_text(encoding="utf-8").strip()
    except OSError:
        return None


try:
    __version__ = version("geobearing")
except PackageNotFoundError:
    __version__ = _read_version_file()

__all__ = ["__version__"]
