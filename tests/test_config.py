from pathlib import Path

import pytest

from utils.config import DEFAULT_PAGE_SIZE, DEFAULT_TIMEOUT, load_config
from utils.exceptions import ConfigError

BASE_ENV = {"DD_BACKEND_URL": "https://example.test/", "DD_BACKEND_KEY": "anon"}


def test_defaults_apply_when_only_backend_is_set():
    config = load_config(dict(BASE_ENV))

    assert config.backend_url == "https://example.test"
    assert config.rest_url == "https://example.test/rest/v1"
    assert config.request_timeout == DEFAULT_TIMEOUT
    assert config.page_size == DEFAULT_PAGE_SIZE
    assert config.debounce_ms == 300
    assert config.log_level == "INFO"


def test_overrides_are_parsed(tmp_path):
    env = dict(
        BASE_ENV,
        DD_PAGE_SIZE="25",
        DD_DEBOUNCE_MS="0",
        DD_REQUEST_TIMEOUT="2.5",
        DD_ALERT_HIDE_MS="5000",
        DD_LOG_LEVEL="debug",
        DD_DATA_DIR=str(tmp_path),
    )

    config = load_config(env)

    assert config.page_size == 25
    assert config.debounce_ms == 0
    assert config.request_timeout == 2.5
    assert config.alert_hide_ms == 5000
    assert config.log_level == "DEBUG"
    assert config.data_dir == Path(tmp_path)


def test_missing_backend_settings_raise():
    with pytest.raises(ConfigError):
        load_config({"DD_BACKEND_URL": "https://example.test"})
    with pytest.raises(ConfigError):
        load_config({"DD_BACKEND_URL": "  ", "DD_BACKEND_KEY": "anon"})


@pytest.mark.parametrize(
    "name, value",
    [("DD_PAGE_SIZE", "0"), ("DD_PAGE_SIZE", "ten"), ("DD_DEBOUNCE_MS", "-1"), ("DD_REQUEST_TIMEOUT", "0")],
)
def test_malformed_values_raise(name, value):
    with pytest.raises(ConfigError):
        load_config(dict(BASE_ENV, **{name: value}))
