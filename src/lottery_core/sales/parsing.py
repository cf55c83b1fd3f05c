"""Value normalization for decoded sale records.

Upstream records arrive as JSON-decoded dictionaries and are frequently
partially populated: amounts as strings with currency symbols, missing
totals, timestamps in several formats. This module turns those raw values
into plain Python numbers and naive local datetimes without ever raising.

Key utilities:
- Text normalization: strip invisible characters
- Number parsing: robust handling of currency and separator formats
- Timestamp parsing: ISO strings, day-first/month-first dates, epoch millis

Examples:
    >>> from lottery_core.sales.parsing import to_amount, to_timestamp
    >>> to_amount("₹1,234.50")
    1234.5
    >>> to_amount("n/a")
    0.0
    >>> to_timestamp("2025-01-15T10:30:00")
    datetime.datetime(2025, 1, 15, 10, 30)
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime, tzinfo
from typing import Any, Optional

import numpy as np
import pandas as pd

NBSP = "\u00a0"  # Non-breaking space
NNBSP = "\u202f"  # Narrow non-breaking space
ZW = "".join(chr(c) for c in (0x200B, 0x200C, 0x200D, 0xFEFF))  # Zero-width characters

# Strips currency symbols (₹, $, Rs) while preserving number separators
_CURRENCY_RE = re.compile(r"[^\d,.\-\(\)\s]")
_CURRENCY_WORD_RE = re.compile(r"(?i)\b(?:rs|inr)\.?")
_SCIENTIFIC_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)[eE][+-]?\d+")

# Slashed dates are read day-first: "01/02/2025" is 1 February
_DATE_FORMATS = ("%Y-%m-%d", "%d/%m/%Y", "%m/%d/%Y", "%d-%m-%Y")


def strip_invisibles(x: Any) -> Optional[str]:
    """Remove invisible and problematic whitespace characters from text.

    Args:
        x: Value to clean (string, number, or None).

    Returns:
        Cleaned string, or None if input is None/NaN.

    Examples:
        >>> strip_invisibles("  INV 001  ")
        'INV 001'
        >>> strip_invisibles(None)
        None
    """
    if x is None or (isinstance(x, float) and pd.isna(x)):
        return None
    s = str(x)
    s = s.replace("\r", "").replace("\t", " ").replace(NBSP, " ").replace(NNBSP, " ")
    s = re.sub(r"[%s]" % re.escape(ZW), "", s)
    s = re.sub(r"\s+", " ", s).strip()
    return s


def to_float(x: Any) -> Optional[float]:
    """Robustly parse numbers in various formats.

    Handles:
    - Plain numbers and numeric strings: 10, '10', '10.50'
    - Thousands separators: '1,234.56', '1.234,56'
    - Negative in parentheses: '(1,234.56)'
    - Currency symbols: '₹ 1,234.56'
    - Scientific notation: '1e3', '1.5E+3'

    Booleans are not numbers here, and non-finite values are rejected.

    Args:
        x: Value to parse.

    Returns:
        Parsed float value or None if parsing fails.

    Examples:
        >>> to_float("1,234.56")
        1234.56
        >>> to_float("(12.5)")
        -12.5
        >>> to_float("abc")
        None
    """
    if x is None or isinstance(x, bool):
        return None
    if isinstance(x, (int, float, np.integer, np.floating)):
        v = float(x)
        return v if math.isfinite(v) else None
    s = str(x).strip()
    if not s:
        return None

    neg = False
    if s.startswith("(") and s.endswith(")"):
        neg, s = True, s[1:-1].strip()

    def _finalize(num_str: str, negative: bool) -> Optional[float]:
        try:
            v = float(num_str)
        except ValueError:
            return None
        if not math.isfinite(v):
            return None
        return -v if negative else v

    # 1e3, 1.5E+3 (str() of floats and Decimals)
    if _SCIENTIFIC_RE.fullmatch(s):
        return _finalize(s, neg)

    s = _CURRENCY_WORD_RE.sub("", s)
    s = _CURRENCY_RE.sub("", s)
    s = re.sub(r"\s+", "", s)
    if not re.search(r"\d", s):
        return None

    has_dot = "." in s
    has_com = "," in s

    # 1.234,56
    if re.fullmatch(r"-?\d{1,3}(?:\.\d{3})+,\d{1,2}", s):
        return _finalize(s.replace(".", "").replace(",", "."), neg)

    # 1,234.56 and the Indian grouping 1,23,456.78
    if re.fullmatch(r"-?\d{1,3}(?:,\d{2,3})+\.\d{1,2}", s):
        return _finalize(s.replace(",", ""), neg)

    if has_com and not has_dot:
        if re.fullmatch(r"-?\d{1,3}(?:,\d{2,3})*,\d{3}", s):
            return _finalize(s.replace(",", ""), neg)
        return _finalize(s.replace(",", "."), neg)

    if has_dot and not has_com:
        if s.count(".") == 1:
            return _finalize(s, neg)
        if re.fullmatch(r"-?\d{1,3}(?:\.\d{3})+", s):
            return _finalize(s.replace(".", ""), neg)
        return None

    if re.fullmatch(r"-?\d+", s):
        return _finalize(s, neg)

    return _finalize(s.replace(",", ""), neg)


def to_amount(x: Any) -> float:
    """Parse a monetary amount, degrading anything unparseable to 0.0."""
    v = to_float(x)
    return 0.0 if v is None else v


def to_int(val: Any) -> int:
    """Convert value to integer via float parsing and rounding.

    Returns 0 when the value cannot be parsed.

    Examples:
        >>> to_int("12")
        12
        >>> to_int(None)
        0
    """
    f = to_float(val)
    if f is None:
        return 0
    return int(round(f))


def to_local_naive(ts: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Express a datetime as naive wall-clock time in the local zone.

    Offset-aware values are converted to ``tz`` (the process' local zone
    when None) and stripped of their tzinfo. Naive values are assumed to
    already be local and are returned unchanged.
    """
    if ts.tzinfo is None:
        return ts
    return ts.astimezone(tz).replace(tzinfo=None)


def to_timestamp(val: Any, tz: Optional[tzinfo] = None) -> Optional[datetime]:
    """Parse a record timestamp into a naive local datetime.

    Attempts, in order:
    1. datetime / Timestamp / datetime64 objects as-is
    2. Numbers as epoch milliseconds (UTC)
    3. Date-only strings: YYYY-MM-DD, DD/MM/YYYY, MM/DD/YYYY, DD-MM-YYYY
    4. Pandas auto-detection (ISO-8601 with time and offset)

    Args:
        val: Raw ``created_at`` value.
        tz: Zone used to localize offset-aware values (default: local zone).

    Returns:
        Naive datetime in local wall-clock time, or None if unparseable.

    Examples:
        >>> to_timestamp("15/01/2025")
        datetime.datetime(2025, 1, 15, 0, 0)
        >>> to_timestamp("not a date")
        None
    """
    if val is None or isinstance(val, bool):
        return None
    if isinstance(val, float) and pd.isna(val):
        return None

    ts: Any
    if isinstance(val, (pd.Timestamp, np.datetime64, datetime)):
        ts = pd.to_datetime(val, errors="coerce")
    elif isinstance(val, date):
        ts = pd.Timestamp(val.year, val.month, val.day)
    elif isinstance(val, (int, float, np.integer, np.floating)):
        if not math.isfinite(val):
            return None
        try:
            ts = pd.to_datetime(val, unit="ms", utc=True, errors="coerce")
        except (OverflowError, ValueError, pd.errors.OutOfBoundsDatetime):
            return None
    else:
        s = strip_invisibles(val)
        if not s:
            return None
        ts = pd.NaT
        for fmt in _DATE_FORMATS:
            try:
                ts = pd.to_datetime(s, format=fmt, errors="raise")
                break
            except (ValueError, TypeError):
                continue
        else:
            ts = pd.to_datetime(s, errors="coerce")

    if ts is None or pd.isna(ts):
        return None
    return to_local_naive(ts.to_pydatetime(), tz)
