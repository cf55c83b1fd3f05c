"""HTTP client for the sales reporting endpoints.

Fetches the sales report (``GET /sales/report``) and its breakdowns from the
lottery backend. Responses are JSON documents of the form::

    {"success": true, "data": {"summary": {...}, "report": [...]}}

Authentication failures (HTTP 401, or an error message about the token) are
raised as UnauthenticatedError so the caller can clear the stored session.
All other failures are raised as FetchError. The dashboard aggregation
itself never sees HTTP status codes.

Environment (via ReportConfig.from_env):
  LOTTERY_API_BASE=http://192.168.1.10:5000/api
  LOTTERY_API_TIMEOUT=10   # seconds
  LOTTERY_API_RETRIES=3
  LOTTERY_REPORT_LIMIT=10
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Any, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from lottery_core.config import DEFAULT_RETRIES, DEFAULT_TIMEOUT, ReportConfig
from lottery_core.exceptions import FetchError, UnauthenticatedError
from lottery_core.sales.api import DashboardView, build_dashboard_from_payload

logger = logging.getLogger(__name__)

# Error messages the backend uses for expired or missing tokens
_TOKEN_ERROR_RE = re.compile(r"\btoken\b|jwt|unauthori[sz]ed|not authenticated", re.IGNORECASE)


def make_session(
    timeout: float = DEFAULT_TIMEOUT, retries: int = DEFAULT_RETRIES
) -> requests.Session:
    """Create a requests Session with retry logic and default timeout.

    Configures the session with:
    - JSON Content-Type / Accept headers
    - Retry adapter for HTTP/HTTPS with exponential backoff
    - Retries on 429, 500, 502, 503, 504 status codes
    - Default timeout for all requests

    Args:
        timeout: Default timeout in seconds for all requests.
        retries: Number of retry attempts.

    Returns:
        Configured requests.Session object.
    """
    s = requests.Session()
    s.headers.update({"Content-Type": "application/json", "Accept": "application/json"})
    retry = Retry(
        total=retries,
        connect=retries,
        read=retries,
        status=retries,
        backoff_factor=0.5,  # 0.5, 1.0, 2.0, ...
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=frozenset({"GET", "HEAD", "OPTIONS"}),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    s.mount("http://", adapter)
    s.mount("https://", adapter)
    orig_request = s.request

    def timed_request(method: str, url: str, **kwargs: Any) -> requests.Response:
        kwargs.setdefault("timeout", timeout)
        return orig_request(method, url, **kwargs)

    s.request = timed_request  # type: ignore[method-assign,assignment]
    return s


def _error_message(resp: requests.Response) -> str:
    """Server-provided error message, falling back to a generic one."""
    try:
        body = resp.json()
    except ValueError:
        return resp.text[:200] or "Something went wrong"
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return "Something went wrong"


def is_token_error(message: str) -> bool:
    """Tell whether an error message refers to the session token."""
    return bool(_TOKEN_ERROR_RE.search(message or ""))


class ReportClient:
    """Client for the ``/sales/report`` family of endpoints.

    Args:
        config: ReportConfig with base_url, timeout and retries.
        token: Bearer token of the logged-in user, if any.
        session: Optional pre-built session (defaults to make_session()).

    Example:
        >>> client = ReportClient(ReportConfig.from_env(), token="...")
        >>> payload = client.get_sales_report(limit=10)
        >>> payload["summary"]["total_amount"]
    """

    def __init__(
        self,
        config: ReportConfig,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config
        self.token = token
        self.session = session or make_session(config.timeout, config.retries)

    def _url(self, path: str) -> str:
        return f"{self.config.base_url}/{path.lstrip('/')}"

    def _get(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        headers = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        url = self._url(path)
        logger.debug("GET %s params=%s", url, params)
        try:
            resp = self.session.get(url, params=params or None, headers=headers)
        except requests.RequestException as e:
            raise FetchError(f"Request to {url} failed: {e}") from e

        if resp.status_code == 401:
            raise UnauthenticatedError(_error_message(resp), status_code=401)
        if not resp.ok:
            message = _error_message(resp)
            if resp.status_code == 403 and is_token_error(message):
                raise UnauthenticatedError(message, status_code=resp.status_code)
            raise FetchError(
                f"GET {path} failed. HTTP {resp.status_code}: {message}",
                status_code=resp.status_code,
            )

        try:
            body = resp.json()
        except ValueError as e:
            raise FetchError(
                f"GET {path} returned non-JSON body: {resp.text[:200]}",
                status_code=resp.status_code,
            ) from e

        if isinstance(body, dict) and body.get("success") is False:
            message = str(body.get("message") or "Request was not successful")
            if is_token_error(message):
                raise UnauthenticatedError(message, status_code=resp.status_code)
            raise FetchError(message, status_code=resp.status_code)

        if isinstance(body, dict) and "data" in body:
            return body["data"]
        return body

    def get_sales_report(self, **params: Any) -> Any:
        """Fetch the general sales report: ``{"summary": ..., "report": [...]}``.

        Keyword arguments are passed as query parameters, e.g. ``limit``,
        ``from_date``, ``to_date``.
        """
        return self._get("/sales/report", params)

    def get_sales_by_category(self, **params: Any) -> Any:
        return self._get("/sales/report/by-category", params)

    def get_sales_by_product(self, **params: Any) -> Any:
        return self._get("/sales/report/by-product", params)

    def get_sales_by_user(self, **params: Any) -> Any:
        """Sales per user; the backend restricts this to admins."""
        return self._get("/sales/report/by-user", params)

    def fetch_dashboard(self, reference_now: Optional[datetime] = None) -> DashboardView:
        """Fetch the latest ``limit`` line items and build the dashboard view."""
        payload = self.get_sales_report(limit=self.config.limit)
        return build_dashboard_from_payload(
            payload,
            reference_now=reference_now,
            recent_count=self.config.recent_count,
            window_days=self.config.window_days,
        )
