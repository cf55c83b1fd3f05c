"""Output formatters for dashboard views."""

from lottery_core.formatters.console import format_dashboard_for_console

__all__ = ["format_dashboard_for_console"]
