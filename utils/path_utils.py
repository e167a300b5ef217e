from __future__ import annotations

import os
from pathlib import Path
import sys


def get_base_dir() -> Path:
    """Return project root or PyInstaller's temporary directory."""
    return Path(getattr(sys, "_MEIPASS", Path(__file__).resolve().parent.parent))


def get_data_dir() -> Path:
    """Return the writable data directory (``DD_DATA_DIR`` or ``<base>/data``)."""

    override = os.getenv("DD_DATA_DIR")
    if override:
        candidate = Path(override).expanduser()
        if not candidate.is_absolute():
            candidate = get_base_dir() / candidate
        return candidate
    return get_base_dir() / "data"


__all__ = ["get_base_dir", "get_data_dir"]
