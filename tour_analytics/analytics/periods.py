"""周期过滤与环比增长计算

Period boundaries follow the host's local wall-clock time. The current
period is a closed range ``[start, end]``; the previous period used for
growth comparison is half-open ``[start, end)``.
"""

from __future__ import annotations

import calendar
from datetime import datetime, timedelta
from typing import Any, List, Optional

from ..models import (
    AnalyticsData,
    Period,
    PeriodData,
    PeriodDetails,
    PeriodInfo,
    PeriodWindow,
    PreviousPeriodData,
)
from .dates import format_date_range, record_date, shift_month
from .processors import (
    invoice_amount,
    process_invoices_data,
    process_vouchers_data,
    round_half_up,
    to_number,
)


def _day_start(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def _day_end(moment: datetime) -> datetime:
    return moment.replace(hour=23, minute=59, second=59, microsecond=999000)


def _week_start(now: datetime) -> datetime:
    # weekday(): 周一为 0，周日为 6
    return _day_start(now - timedelta(days=now.weekday()))


def _quarter_first_month(month: int) -> int:
    return (month - 1) // 3 * 3 + 1


def get_period_window(period: Any, now: Optional[datetime] = None) -> PeriodWindow:
    """Closed date window of the current period; unknown periods use "month"."""
    now = now or datetime.now()
    resolved = Period.parse(period)

    if resolved is Period.WEEK:
        start = _week_start(now)
        end = _day_end(start + timedelta(days=6))
    elif resolved is Period.QUARTER:
        first = _quarter_first_month(now.month)
        start = datetime(now.year, first, 1)
        last_day = calendar.monthrange(now.year, first + 2)[1]
        end = _day_end(datetime(now.year, first + 2, last_day))
    elif resolved is Period.YEAR:
        start = datetime(now.year, 1, 1)
        end = _day_end(datetime(now.year, 12, 31))
    else:
        start = datetime(now.year, now.month, 1)
        last_day = calendar.monthrange(now.year, now.month)[1]
        end = _day_end(datetime(now.year, now.month, last_day))

    return PeriodWindow(period=resolved, start=start, end=end, end_inclusive=True)


def get_previous_period_window(period: Any, now: Optional[datetime] = None) -> PeriodWindow:
    """Half-open window of the period immediately preceding the current one."""
    now = now or datetime.now()
    resolved = Period.parse(period)

    if resolved is Period.WEEK:
        end = _week_start(now)
        start = end - timedelta(days=7)
    elif resolved is Period.QUARTER:
        first = _quarter_first_month(now.month)
        end = datetime(now.year, first, 1)
        year, month = shift_month(now.year, first, -3)
        start = datetime(year, month, 1)
    elif resolved is Period.YEAR:
        end = datetime(now.year, 1, 1)
        start = datetime(now.year - 1, 1, 1)
    else:
        end = datetime(now.year, now.month, 1)
        year, month = shift_month(now.year, now.month, -1)
        start = datetime(year, month, 1)

    return PeriodWindow(period=resolved, start=start, end=end, end_inclusive=False)


def _select(records: Any, window: PeriodWindow) -> List[dict]:
    if not isinstance(records, list):
        return []
    return [
        item for item in records
        if isinstance(item, dict) and window.contains(record_date(item, "createdAt", "date"))
    ]


def filter_data_by_period(
    data: AnalyticsData,
    period: Any,
    now: Optional[datetime] = None,
) -> PeriodData:
    """按周期过滤发票与付款凭证并重新计算统计

    酒店、套餐、目的地和用户统计是当前快照，原样透传。
    """
    now = now or datetime.now()
    window = get_period_window(period, now)

    raw_invoices = data.invoices.raw_invoices if data.invoices else []
    raw_vouchers = data.vouchers.raw_vouchers if data.vouchers else []
    filtered_invoices = _select(raw_invoices, window)
    filtered_vouchers = _select(raw_vouchers, window)

    return PeriodData(
        users=data.users,
        hotels=data.hotels,
        packages=data.packages,
        places=data.places,
        invoices=process_invoices_data(filtered_invoices, now=now),
        vouchers=process_vouchers_data(filtered_vouchers, now=now),
        period_info=PeriodInfo(
            period=window.period,
            start_date=window.start,
            end_date=window.end,
            filtered_invoices_count=len(filtered_invoices),
            filtered_vouchers_count=len(filtered_vouchers),
        ),
    )


def get_previous_period_data(
    data: AnalyticsData,
    period: Any,
    now: Optional[datetime] = None,
) -> PreviousPeriodData:
    """上一周期的收入、支出、利润与订单数

    Unknown period names resolve to "month" here as well, so the comparison
    always matches the window used by :func:`filter_data_by_period`.
    """
    window = get_previous_period_window(period, now)

    invoices = _select(data.invoices.raw_invoices if data.invoices else [], window)
    vouchers = _select(data.vouchers.raw_vouchers if data.vouchers else [], window)

    revenue = sum(invoice_amount(invoice) for invoice in invoices)
    expenses = sum(to_number(voucher.get("total")) for voucher in vouchers)
    return PreviousPeriodData(
        revenue=revenue,
        expenses=expenses,
        profit=revenue - expenses,
        bookings=len(invoices),
    )


def calculate_growth_percentage(current: float, previous: float) -> int:
    """Period-over-period growth in whole percent.

    >>> calculate_growth_percentage(150, 100)
    50
    >>> calculate_growth_percentage(100, 0)
    100
    """
    if previous == 0:
        return 100 if current > 0 else 0
    return round_half_up((current - previous) / previous * 100)


def get_period_info(period: Any, now: Optional[datetime] = None) -> PeriodDetails:
    """人类可读的周期描述，用于仪表盘标题和调试"""
    now = now or datetime.now()
    window = get_period_window(period, now)
    date_range = format_date_range(window.start, window.end)

    if window.period is Period.WEEK:
        description = f"Current Week ({date_range})"
    elif window.period is Period.QUARTER:
        quarter = (now.month - 1) // 3 + 1
        description = f"Current Quarter Q{quarter} ({date_range})"
    elif window.period is Period.YEAR:
        description = f"Current Year {now.year} ({date_range})"
    else:
        description = f"Current Month ({date_range})"

    return PeriodDetails(
        period=window.period,
        description=description,
        start_date=window.start,
        end_date=window.end,
    )


__all__ = [
    "calculate_growth_percentage",
    "filter_data_by_period",
    "get_period_info",
    "get_period_window",
    "get_previous_period_data",
    "get_previous_period_window",
]
