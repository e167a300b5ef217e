from __future__ import annotations

"""Helpers for retrieving the current DispatchDesk version string."""

from functools import lru_cache
from importlib import metadata
from pathlib import Path

from utils.path_utils import get_base_dir

DISTRIBUTION = "dispatchdesk"


@lru_cache(maxsize=1)
def get_version() -> str:
    """Return the application version, falling back to ``'dev'`` if unknown.

    A ``VERSION`` file next to the sources wins (frozen builds ship one);
    otherwise the installed distribution metadata is consulted.
    """

    version_file = Path(get_base_dir()) / "VERSION"
    try:
        raw = version_file.read_text(encoding="utf-8").strip()
    except FileNotFoundError:
        raw = ""
    if raw:
        return raw
    try:
        return metadata.version(DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return "dev"


__all__ = ["get_version"]
