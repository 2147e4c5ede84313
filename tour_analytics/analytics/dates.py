"""日期工具 - 解析原始记录中的日期并按本地时间比较"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

_FALLBACK_PATTERNS = [
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d %H:%M",
    "%d/%m/%Y",
]


def _to_local_naive(value: datetime) -> datetime:
    """Aware timestamps are converted to the host's local wall-clock time."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def parse_date(value: Any) -> Optional[datetime]:
    """解析多种日期格式，返回本地时间的 naive datetime

    Accepts datetimes, dates, ISO-8601 strings (``Z`` suffix included) and
    epoch milliseconds. Date-only strings are read as local midnight.
    Unparseable values return ``None``.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return _to_local_naive(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000)
        except (OverflowError, OSError, ValueError):
            return None
    if not isinstance(value, str):
        return None

    cleaned = value.strip()
    if not cleaned:
        return None
    iso_candidate = cleaned[:-1] + "+00:00" if cleaned.endswith(("Z", "z")) else cleaned
    try:
        return _to_local_naive(datetime.fromisoformat(iso_candidate))
    except ValueError:
        pass
    for pattern in _FALLBACK_PATTERNS:
        try:
            return datetime.strptime(cleaned, pattern)
        except ValueError:
            continue
    return None


def record_date(record: dict, *keys: str) -> Optional[datetime]:
    """Return the parsed value of the first non-empty key of ``record``."""
    for key in keys:
        raw = record.get(key)
        if raw:
            return parse_date(raw)
    return None


def format_date(value: Any) -> str:
    """Format as DD/MM/YYYY, empty string when the value is not a date."""
    parsed = parse_date(value)
    if parsed is None:
        return ""
    return f"{parsed.day:02d}/{parsed.month:02d}/{parsed.year}"


def format_date_range(start: Any, end: Any) -> str:
    return f"{format_date(start)} - {format_date(end)}"


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move ``delta`` calendar months from (year, month); month is 1-based."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def month_label(month: int) -> str:
    return MONTH_ABBREVIATIONS[month - 1]


__all__ = [
    "MONTH_ABBREVIATIONS",
    "format_date",
    "format_date_range",
    "month_label",
    "parse_date",
    "record_date",
    "shift_month",
]
