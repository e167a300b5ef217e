from __future__ import annotations

"""Root logger configuration for the desktop entry points."""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level: str | int = logging.INFO, log_file: Optional[Path] = None) -> None:
    """Configure the root logger once per process.

    ``level`` accepts a logging constant or a name such as ``"DEBUG"``.
    When ``log_file`` is given a debug-level file handler is added next to
    the console handler.
    """

    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        level = resolved if isinstance(resolved, int) else logging.INFO

    root = logging.getLogger()
    root.setLevel(min(level, logging.DEBUG) if log_file else level)
    root.handlers.clear()

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(console)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(file_handler)

    # requests/urllib3 are chatty at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)


__all__ = ["configure_logging", "LOG_FORMAT"]
