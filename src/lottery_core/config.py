"""Unified configuration for lottery-core.

This module provides a single, simple configuration class shared by the
reporting client, the dashboard builder and the CLI.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from lottery_core.exceptions import ConfigError

DEFAULT_TIMEOUT = 10.0
DEFAULT_RETRIES = 3
DEFAULT_LIMIT = 10
DEFAULT_RECENT_COUNT = 5
DEFAULT_WINDOW_DAYS = 7


@dataclass
class ReportConfig:
    """Settings for fetching and summarizing the sales report.

    Attributes:
        base_url: API root, e.g. ``http://192.168.1.10:5000/api``.
        timeout: Default request timeout in seconds.
        retries: Retry attempts for transient HTTP failures.
        limit: Number of line items requested for the dashboard.
        recent_count: Number of recent transactions shown.
        window_days: Maximum number of trend points.

    Environment:
        LOTTERY_API_BASE: base_url (required by from_env)
        LOTTERY_API_TIMEOUT: timeout (default 10)
        LOTTERY_API_RETRIES: retries (default 3)
        LOTTERY_REPORT_LIMIT: limit (default 10)
    """

    base_url: str
    timeout: float = DEFAULT_TIMEOUT
    retries: int = DEFAULT_RETRIES
    limit: int = DEFAULT_LIMIT
    recent_count: int = DEFAULT_RECENT_COUNT
    window_days: int = DEFAULT_WINDOW_DAYS

    def __post_init__(self) -> None:
        self.base_url = (self.base_url or "").strip().strip('"').strip("'").rstrip("/")
        if not self.base_url:
            raise ConfigError("base_url is required")
        if not self.base_url.startswith(("http://", "https://")):
            raise ConfigError(f"base_url must be an http(s) URL, got {self.base_url!r}")
        if self.timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {self.timeout}")
        if self.retries < 0:
            raise ConfigError(f"retries must be >= 0, got {self.retries}")
        if self.limit < 1:
            raise ConfigError(f"limit must be >= 1, got {self.limit}")
        if self.recent_count < 0:
            raise ConfigError(f"recent_count must be >= 0, got {self.recent_count}")
        if self.window_days < 1:
            raise ConfigError(f"window_days must be >= 1, got {self.window_days}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> ReportConfig:
        """Create a ReportConfig from LOTTERY_* environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``.

        Raises:
            ConfigError: If LOTTERY_API_BASE is missing or a value is invalid.

        Examples:
            >>> cfg = ReportConfig.from_env({"LOTTERY_API_BASE": "http://localhost:5000/api"})
            >>> cfg.limit
            10
        """
        env = os.environ if environ is None else environ

        base_url = env.get("LOTTERY_API_BASE")
        if not base_url:
            raise ConfigError("LOTTERY_API_BASE environment variable is not set")

        try:
            timeout = float(env.get("LOTTERY_API_TIMEOUT", DEFAULT_TIMEOUT))
            retries = int(env.get("LOTTERY_API_RETRIES", DEFAULT_RETRIES))
            limit = int(env.get("LOTTERY_REPORT_LIMIT", DEFAULT_LIMIT))
        except ValueError as e:
            raise ConfigError(f"Invalid LOTTERY_* setting: {e}") from e

        return cls(base_url=base_url, timeout=timeout, retries=retries, limit=limit)
