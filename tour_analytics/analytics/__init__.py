"""Analytics模块 - 仪表盘统计聚合

Quickstart::

    import asyncio
    from tour_analytics.analytics import AnalyticsService
    from tour_analytics.client import TravelApiClient

    async def main():
        service = AnalyticsService(TravelApiClient())
        summary = await service.get_analytics_summary("quarter")
        print(summary.key_metrics["revenue"])
        await service.aclose()

    asyncio.run(main())
"""

from .cache import CACHE_TIMEOUT, AnalyticsCache, CacheEntry
from .dates import format_date, format_date_range, parse_date
from .notifier import PeriodicRefresher, UpdateNotifier
from .performers import calculate_top_hotels, calculate_top_packages, extract_price_from_range
from .periods import (
    calculate_growth_percentage,
    filter_data_by_period,
    get_period_info,
    get_period_window,
    get_previous_period_data,
    get_previous_period_window,
)
from .processors import (
    calculate_monthly_trend,
    process_hotels_data,
    process_invoices_data,
    process_packages_data,
    process_places_data,
    process_vouchers_data,
)
from .service import AnalyticsService
from .transactions import build_recent_transactions

__all__ = [
    "CACHE_TIMEOUT",
    "AnalyticsCache",
    "AnalyticsService",
    "CacheEntry",
    "PeriodicRefresher",
    "UpdateNotifier",
    "build_recent_transactions",
    "calculate_growth_percentage",
    "calculate_monthly_trend",
    "calculate_top_hotels",
    "calculate_top_packages",
    "extract_price_from_range",
    "filter_data_by_period",
    "format_date",
    "format_date_range",
    "get_period_info",
    "get_period_window",
    "get_previous_period_data",
    "get_previous_period_window",
    "parse_date",
    "process_hotels_data",
    "process_invoices_data",
    "process_packages_data",
    "process_places_data",
    "process_vouchers_data",
]
