"""Tests for ReportConfig."""

import pytest

from lottery_core import ReportConfig
from lottery_core.exceptions import ConfigError


def test_defaults_and_url_normalization() -> None:
    cfg = ReportConfig(base_url=' "http://localhost:5000/api/" ')
    assert cfg.base_url == "http://localhost:5000/api"
    assert cfg.timeout == 10.0
    assert cfg.retries == 3
    assert cfg.limit == 10
    assert cfg.recent_count == 5
    assert cfg.window_days == 7


@pytest.mark.parametrize(
    "kwargs",
    [
        {"base_url": ""},
        {"base_url": "localhost:5000/api"},
        {"base_url": "http://x", "timeout": 0},
        {"base_url": "http://x", "retries": -1},
        {"base_url": "http://x", "limit": 0},
        {"base_url": "http://x", "recent_count": -1},
        {"base_url": "http://x", "window_days": 0},
    ],
)
def test_invalid_values_raise(kwargs) -> None:
    with pytest.raises(ConfigError):
        ReportConfig(**kwargs)


def test_from_env() -> None:
    env = {
        "LOTTERY_API_BASE": "https://pos.example.com/api",
        "LOTTERY_API_TIMEOUT": "2.5",
        "LOTTERY_API_RETRIES": "0",
        "LOTTERY_REPORT_LIMIT": "25",
    }
    cfg = ReportConfig.from_env(env)
    assert cfg.base_url == "https://pos.example.com/api"
    assert cfg.timeout == 2.5
    assert cfg.retries == 0
    assert cfg.limit == 25


def test_from_env_requires_base_url() -> None:
    with pytest.raises(ConfigError, match="LOTTERY_API_BASE"):
        ReportConfig.from_env({})


def test_from_env_rejects_non_numeric_values() -> None:
    with pytest.raises(ConfigError):
        ReportConfig.from_env({"LOTTERY_API_BASE": "http://x", "LOTTERY_REPORT_LIMIT": "ten"})


def test_from_env_reads_os_environ(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOTTERY_API_BASE", "http://10.0.0.2:5000/api")
    monkeypatch.delenv("LOTTERY_REPORT_LIMIT", raising=False)
    assert ReportConfig.from_env().limit == 10
