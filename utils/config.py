from __future__ import annotations

"""Environment-driven application settings."""

from dataclasses import dataclass, field
import os
from pathlib import Path
from typing import Mapping, Optional

from utils.exceptions import ConfigError
from utils.path_utils import get_data_dir

ENV_PREFIX = "DD_"

DEFAULT_TIMEOUT = 15.0
DEFAULT_DEBOUNCE_MS = 300
DEFAULT_PAGE_SIZE = 10
DEFAULT_ALERT_HIDE_MS = 10_000


@dataclass(frozen=True)
class AppConfig:
    """Resolved settings shared by the courier page and the admin dashboard."""

    backend_url: str
    backend_key: str
    request_timeout: float = DEFAULT_TIMEOUT
    debounce_ms: int = DEFAULT_DEBOUNCE_MS
    page_size: int = DEFAULT_PAGE_SIZE
    alert_hide_ms: int = DEFAULT_ALERT_HIDE_MS
    log_level: str = "INFO"
    data_dir: Path = field(default_factory=get_data_dir)

    @property
    def rest_url(self) -> str:
        return f"{self.backend_url}/rest/v1"


def _read(env: Mapping[str, str], name: str) -> Optional[str]:
    value = env.get(ENV_PREFIX + name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _read_int(env: Mapping[str, str], name: str, default: int, *, minimum: int) -> int:
    raw = _read(env, name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from exc
    if value < minimum:
        raise ConfigError(f"{ENV_PREFIX}{name} must be >= {minimum}, got {value}")
    return value


def _read_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = _read(env, name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"{ENV_PREFIX}{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ConfigError(f"{ENV_PREFIX}{name} must be positive, got {value}")
    return value


def load_config(env: Mapping[str, str] | None = None) -> AppConfig:
    """Build an :class:`AppConfig` from ``DD_*`` environment variables.

    ``DD_BACKEND_URL`` and ``DD_BACKEND_KEY`` are mandatory; every other
    setting has a default. Raises :class:`ConfigError` on missing or
    malformed values.
    """

    env = os.environ if env is None else env
    url = _read(env, "BACKEND_URL")
    key = _read(env, "BACKEND_KEY")
    if not url or not key:
        raise ConfigError(
            f"Missing backend settings: set {ENV_PREFIX}BACKEND_URL and {ENV_PREFIX}BACKEND_KEY"
        )
    data_dir_raw = _read(env, "DATA_DIR")
    return AppConfig(
        backend_url=url.rstrip("/"),
        backend_key=key,
        request_timeout=_read_float(env, "REQUEST_TIMEOUT", DEFAULT_TIMEOUT),
        debounce_ms=_read_int(env, "DEBOUNCE_MS", DEFAULT_DEBOUNCE_MS, minimum=0),
        page_size=_read_int(env, "PAGE_SIZE", DEFAULT_PAGE_SIZE, minimum=1),
        alert_hide_ms=_read_int(env, "ALERT_HIDE_MS", DEFAULT_ALERT_HIDE_MS, minimum=0),
        log_level=(_read(env, "LOG_LEVEL") or "INFO").upper(),
        data_dir=Path(data_dir_raw).expanduser() if data_dir_raw else get_data_dir(),
    )


__all__ = ["AppConfig", "load_config", "ENV_PREFIX"]
