"""Reporting endpoint access.

Example:
    >>> from lottery_core import ReportConfig
    >>> from lottery_core.reporting import ReportClient
    >>>
    >>> client = ReportClient(ReportConfig.from_env(), token="...")
    >>> view = client.fetch_dashboard()
"""

from lottery_core.reporting.client import ReportClient, make_session

__all__ = ["ReportClient", "make_session"]
