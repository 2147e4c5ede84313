"""统计模型 - 由原始集合派生出的各类统计结果

这些对象每次请求时重新计算，不做持久化。标记为 ``internal`` 的字段
保留原始记录引用，供后续查询（最近交易、热门排行）使用，不会序列化输出。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from .base import Period, TransactionType, Trend


def internal_field() -> Any:
    """A list field kept for in-process use and skipped by serialization."""
    return field(default_factory=list, repr=False, compare=False, metadata={"internal": True})


@dataclass
class MonthlyBucket:
    """单个自然月的汇总点"""
    month: str  # 三字母月份缩写，例如 "Jan"
    amount: float = 0


@dataclass
class HotelStats:
    total_hotels: int = 0
    total_places: int = 0
    average_rating: float = 0
    hotels_this_month: int = 0
    top_places: List[Dict[str, Any]] = field(default_factory=list)  # [{"place", "count"}]
    hotels_by_place: Dict[str, int] = field(default_factory=dict)
    hotels: List[Dict[str, Any]] = internal_field()


@dataclass
class PackageStats:
    total_packages: int = 0
    average_rating: float = 0
    top_categories: List[Dict[str, Any]] = field(default_factory=list)  # [{"category", "count"}]
    packages_by_category: Dict[str, int] = field(default_factory=dict)
    average_price: int = 0
    min_price: float = 0
    max_price: float = 0
    packages: List[Dict[str, Any]] = internal_field()


@dataclass
class PlaceStats:
    total_places: int = 0
    average_rating: float = 0
    places_with_images: int = 0
    top_rated_places: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class InvoiceStats:
    """发票统计（收入侧）"""
    total_invoices: int = 0
    total_revenue: float = 0
    total_advance: float = 0
    total_due: float = 0
    status_counts: Dict[str, int] = field(default_factory=dict)
    type_counts: Dict[str, int] = field(default_factory=dict)
    monthly_revenue: List[MonthlyBucket] = field(default_factory=list)
    paid_revenue: float = 0
    raw_invoices: List[Dict[str, Any]] = internal_field()


@dataclass
class VoucherStats:
    """付款凭证统计（支出侧）"""
    total_vouchers: int = 0
    total_expenses: float = 0
    total_advance: float = 0
    total_due: float = 0
    category_counts: Dict[str, int] = field(default_factory=dict)
    monthly_expenses: List[MonthlyBucket] = field(default_factory=list)
    payment_method_counts: Dict[str, int] = field(default_factory=dict)
    raw_vouchers: List[Dict[str, Any]] = internal_field()


@dataclass
class PeriodWindow:
    """A concrete date range for a period.

    ``end_inclusive`` distinguishes the current-period window (closed range)
    from the previous-period window (half-open range).
    """
    period: Period
    start: datetime
    end: datetime
    end_inclusive: bool = True

    def contains(self, moment: Optional[datetime]) -> bool:
        if moment is None:
            return False
        if moment < self.start:
            return False
        return moment <= self.end if self.end_inclusive else moment < self.end


@dataclass
class PeriodInfo:
    """过滤结果的周期信息"""
    period: Period
    start_date: datetime
    end_date: datetime
    filtered_invoices_count: int = 0
    filtered_vouchers_count: int = 0


@dataclass
class PeriodDetails:
    period: Period
    description: str
    start_date: datetime
    end_date: datetime


@dataclass
class AnalyticsData:
    """六类集合的统计结果；获取失败的集合为 None"""
    users: Optional[Dict[str, Any]] = None
    hotels: Optional[HotelStats] = None
    packages: Optional[PackageStats] = None
    places: Optional[PlaceStats] = None
    invoices: Optional[InvoiceStats] = None
    vouchers: Optional[VoucherStats] = None


@dataclass
class PeriodData(AnalyticsData):
    """按周期过滤后的统计结果，发票与凭证已重新计算"""
    period_info: Optional[PeriodInfo] = None


@dataclass
class PreviousPeriodData:
    revenue: float = 0
    expenses: float = 0
    profit: float = 0
    bookings: int = 0


@dataclass
class KeyMetric:
    total: float = 0
    change: int = 0
    trend: Trend = Trend.DOWN


@dataclass
class AnalyticsSummary:
    key_metrics: Dict[str, KeyMetric]
    detailed_data: PeriodData
    last_updated: datetime = field(default_factory=datetime.now)


@dataclass
class TopPerformer:
    """Estimated performance of a package or hotel (not booking ground truth)."""
    name: str
    bookings: int = 0
    revenue: int = 0


@dataclass
class TopPerformers:
    top_packages: List[TopPerformer] = field(default_factory=list)
    top_hotels: List[TopPerformer] = field(default_factory=list)


@dataclass
class Transaction:
    type: TransactionType
    description: str
    amount: float
    date: Optional[Union[str, datetime]] = None


__all__ = [
    "MonthlyBucket",
    "HotelStats",
    "PackageStats",
    "PlaceStats",
    "InvoiceStats",
    "VoucherStats",
    "PeriodWindow",
    "PeriodInfo",
    "PeriodDetails",
    "AnalyticsData",
    "PeriodData",
    "PreviousPeriodData",
    "KeyMetric",
    "AnalyticsSummary",
    "TopPerformer",
    "TopPerformers",
    "Transaction",
]
