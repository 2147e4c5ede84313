"""Analytics Service - 统一的仪表盘数据接口"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, List, Optional

from ..client import TravelApiClient
from ..config import DEFAULT_REFRESH_INTERVAL
from ..models import (
    AnalyticsData,
    AnalyticsSummary,
    HotelStats,
    InvoiceStats,
    KeyMetric,
    PackageStats,
    PeriodDetails,
    PlaceStats,
    TopPerformers,
    Transaction,
    Trend,
    VoucherStats,
)
from .cache import AnalyticsCache
from .notifier import Listener, PeriodicRefresher
from .performers import calculate_top_hotels, calculate_top_packages
from .periods import (
    calculate_growth_percentage,
    filter_data_by_period,
    get_period_info,
    get_previous_period_data,
)
from .processors import (
    process_hotels_data,
    process_invoices_data,
    process_packages_data,
    process_places_data,
    process_vouchers_data,
)
from .transactions import build_recent_transactions

USERS_KEY = "users_analytics"
HOTELS_KEY = "hotels_analytics"
PACKAGES_KEY = "packages_analytics"
PLACES_KEY = "places_analytics"
INVOICES_KEY = "invoices_analytics"
VOUCHERS_KEY = "vouchers_analytics"


def _member(payload: Any, key: str) -> Any:
    return payload.get(key) if isinstance(payload, dict) else None


def _invoice_items(payload: Any) -> Any:
    # 发票接口有分页（{items, total}）和直接返回列表两种形态
    if isinstance(payload, dict):
        return payload.get("items") or payload
    return payload or []


def _metric(total: float, change: int) -> KeyMetric:
    return KeyMetric(total=total, change=change, trend=Trend.UP if change > 0 else Trend.DOWN)


class AnalyticsService:
    """仪表盘分析服务

    由应用的组合根创建一次并以引用方式传递；持有缓存、监听器和
    定时刷新任务。所有入口方法都不会抛出异常：单个集合获取失败时
    对应字段为 None。
    """

    def __init__(
        self,
        client: TravelApiClient,
        cache: Optional[AnalyticsCache] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """初始化服务

        Args:
            client: REST API 客户端
            cache: 缓存实例（默认 5 分钟超时）
            clock: 返回当前本地时间的函数
        """
        self.client = client
        self.cache = cache or AnalyticsCache()
        self._clock = clock
        self._refresher = PeriodicRefresher(self.cache.clear)
        self.logger = logging.getLogger(__name__)

    # ==================== 原始数据获取 ====================

    async def _fetch(
        self,
        cache_key: str,
        label: str,
        request: Callable[[], Awaitable[Any]],
        transform: Callable[[Any], Any],
    ) -> Optional[Any]:
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        try:
            payload = await request()
            data = transform(payload)
        except Exception as e:
            self.logger.error(f"Error fetching {label} data: {e}", exc_info=True)
            return None

        if data is not None:
            self.cache.set(cache_key, data)
        return data

    async def fetch_users_data(self) -> Optional[Dict[str, Any]]:
        return await self._fetch(
            USERS_KEY, "users", self.client.get_admin_stats,
            lambda payload: _member(payload, "stats"),
        )

    async def fetch_hotels_data(self) -> Optional[HotelStats]:
        return await self._fetch(
            HOTELS_KEY, "hotels", self.client.get_hotels,
            lambda payload: process_hotels_data(_member(payload, "hotels") or [], now=self._clock()),
        )

    async def fetch_packages_data(self) -> Optional[PackageStats]:
        return await self._fetch(
            PACKAGES_KEY, "packages", self.client.list_packages,
            lambda payload: process_packages_data(_member(payload, "packages") or []),
        )

    async def fetch_places_data(self) -> Optional[PlaceStats]:
        return await self._fetch(
            PLACES_KEY, "places", self.client.get_places,
            lambda payload: process_places_data(_member(payload, "places") or []),
        )

    async def fetch_invoices_data(self) -> Optional[InvoiceStats]:
        return await self._fetch(
            INVOICES_KEY, "invoices", self.client.list_invoices,
            lambda payload: process_invoices_data(_invoice_items(payload), now=self._clock()),
        )

    async def fetch_vouchers_data(self) -> Optional[VoucherStats]:
        return await self._fetch(
            VOUCHERS_KEY, "vouchers", self.client.list_payment_vouchers,
            lambda payload: process_vouchers_data(_member(payload, "items") or [], now=self._clock()),
        )

    async def fetch_all_analytics_data(self) -> AnalyticsData:
        """并发获取六类数据，等待全部完成（成功或失败）"""
        results = await asyncio.gather(
            self.fetch_users_data(),
            self.fetch_hotels_data(),
            self.fetch_packages_data(),
            self.fetch_places_data(),
            self.fetch_invoices_data(),
            self.fetch_vouchers_data(),
            return_exceptions=True,
        )

        settled: List[Any] = []
        for result in results:
            if isinstance(result, BaseException):
                self.logger.error(f"Analytics fetch failed: {result!r}")
                settled.append(None)
            else:
                settled.append(result)

        users, hotels, packages, places, invoices, vouchers = settled
        return AnalyticsData(
            users=users,
            hotels=hotels,
            packages=packages,
            places=places,
            invoices=invoices,
            vouchers=vouchers,
        )

    # ==================== 汇总视图 ====================

    async def get_analytics_summary(self, period: Any = "month") -> AnalyticsSummary:
        """关键指标（收入、支出、利润、订单）及其环比变化

        Args:
            period: week | month | quarter | year，未知值按 month 处理

        Returns:
            AnalyticsSummary
        """
        now = self._clock()
        data = await self.fetch_all_analytics_data()
        filtered = filter_data_by_period(data, period, now=now)

        total_revenue = filtered.invoices.total_revenue if filtered.invoices else 0
        total_expenses = filtered.vouchers.total_expenses if filtered.vouchers else 0
        net_profit = total_revenue - total_expenses
        total_bookings = filtered.invoices.total_invoices if filtered.invoices else 0

        previous = get_previous_period_data(data, period, now=now)
        key_metrics = {
            "revenue": _metric(total_revenue, calculate_growth_percentage(total_revenue, previous.revenue)),
            "expenses": _metric(total_expenses, calculate_growth_percentage(total_expenses, previous.expenses)),
            "profit": _metric(net_profit, calculate_growth_percentage(net_profit, previous.profit)),
            "bookings": _metric(total_bookings, calculate_growth_percentage(total_bookings, previous.bookings)),
        }
        return AnalyticsSummary(key_metrics=key_metrics, detailed_data=filtered, last_updated=now)

    async def get_top_performers(self, period: Any = "month") -> TopPerformers:
        """估算的热门套餐与酒店"""
        data = await self.fetch_all_analytics_data()
        filtered = filter_data_by_period(data, period, now=self._clock())

        packages = filtered.packages.packages if filtered.packages else []
        hotels = filtered.hotels.hotels if filtered.hotels else []
        return TopPerformers(
            top_packages=calculate_top_packages(packages, filtered.invoices),
            top_hotels=calculate_top_hotels(hotels, filtered.invoices),
        )

    async def get_recent_transactions(self, period: Any = "month") -> List[Transaction]:
        data = await self.fetch_all_analytics_data()
        filtered = filter_data_by_period(data, period, now=self._clock())
        return build_recent_transactions(filtered)

    def get_period_info(self, period: Any = "month") -> PeriodDetails:
        return get_period_info(period, now=self._clock())

    # ==================== 实时更新 ====================

    def add_update_listener(self, callback: Listener) -> Callable[[], None]:
        """注册数据更新监听器，返回取消订阅函数"""
        return self.cache.notifier.add_listener(callback)

    def start_real_time_updates(self, interval: float = DEFAULT_REFRESH_INTERVAL) -> None:
        """按固定间隔清空缓存；需在运行中的事件循环内调用"""
        self._refresher.start(interval)
        self.logger.info(f"Analytics real-time updates every {interval}s")

    def stop_real_time_updates(self) -> None:
        self._refresher.stop()

    @property
    def real_time_updates_running(self) -> bool:
        return self._refresher.running

    def trigger_update(self) -> None:
        """后台数据变更后手动触发刷新"""
        self.cache.clear()

    async def aclose(self) -> None:
        await self._refresher.aclose()
        await self.client.aclose()


__all__ = ["AnalyticsService"]
