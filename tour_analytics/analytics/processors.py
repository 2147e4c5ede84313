"""统计处理器 - 原始集合 -> 统计对象

所有处理函数都是纯函数：不修改输入列表，非列表输入按空列表处理。
"""

from __future__ import annotations

import math
from collections import Counter
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from ..models import (
    HotelStats,
    InvoiceStats,
    MonthlyBucket,
    PackageStats,
    PlaceStats,
    VoucherStats,
)
from .dates import month_label, parse_date, record_date, shift_month

TREND_MONTHS = 6
TOP_N = 5


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves toward positive infinity (dashboard rounding convention)."""
    factor = 10 ** digits
    rounded = math.floor(value * factor + 0.5) / factor
    return int(rounded) if digits == 0 else rounded


def to_number(value: Any) -> float:
    """数值字段规范化：非数值视为 0"""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if isinstance(value, float) and math.isnan(value):
        return 0
    return value


def as_records(value: Any) -> List[Dict[str, Any]]:
    """Keep only the mapping items of a list; any other input becomes empty."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def invoice_amount(invoice: Dict[str, Any]) -> float:
    return to_number(invoice.get("total")) or to_number(invoice.get("amount")) or 0


def invoice_due(invoice: Dict[str, Any]) -> float:
    return max(invoice_amount(invoice) - to_number(invoice.get("advancePaid")), 0)


def _average_rating(items: List[Dict[str, Any]]) -> float:
    if not items:
        return 0
    total = sum(to_number(item.get("rating")) for item in items)
    return round_half_up(total / len(items), 1)


def _count_by(items: Iterable[Dict[str, Any]], key: str, default: str) -> Dict[str, int]:
    counts: Counter = Counter()
    for item in items:
        counts[item.get(key) or default] += 1
    return dict(counts)


def _top_counts(counts: Dict[str, int], label: str, limit: int = TOP_N) -> List[Dict[str, Any]]:
    # sorted() 是稳定排序，计数相同时保持首次出现的顺序
    ranked = sorted(counts.items(), key=lambda pair: pair[1], reverse=True)
    return [{label: name, "count": count} for name, count in ranked[:limit]]


def _place_key(value: Any) -> Any:
    if isinstance(value, dict):
        return value.get("_id") or value.get("id") or repr(sorted(value.items()))
    if isinstance(value, list):
        return tuple(value)
    return value


def calculate_monthly_trend(
    data: Any,
    amount_field: str,
    now: Optional[datetime] = None,
) -> List[MonthlyBucket]:
    """计算最近6个自然月（含本月）的金额趋势，按时间升序

    Args:
        data: 原始记录列表
        amount_field: 需要求和的金额字段
        now: 当前时间（默认本地时间）

    Returns:
        恰好6个 MonthlyBucket，没有数据的月份金额为 0
    """
    now = now or datetime.now()
    records = as_records(data)
    dated = [(record_date(item, "date", "createdAt"), item) for item in records]

    buckets: List[MonthlyBucket] = []
    for offset in range(TREND_MONTHS - 1, -1, -1):
        year, month = shift_month(now.year, now.month, -offset)
        amount = sum(
            to_number(item.get(amount_field))
            for moment, item in dated
            if moment is not None and moment.year == year and moment.month == month
        )
        buckets.append(MonthlyBucket(month=month_label(month), amount=amount))
    return buckets


def process_hotels_data(hotels: Any, now: Optional[datetime] = None) -> HotelStats:
    """酒店统计"""
    now = now or datetime.now()
    records = as_records(hotels)

    hotels_by_place = _count_by(records, "placeName", "Unknown")
    hotels_this_month = 0
    for hotel in records:
        created = parse_date(hotel.get("createdAt"))
        if created is not None and created.month == now.month and created.year == now.year:
            hotels_this_month += 1

    return HotelStats(
        total_hotels=len(records),
        total_places=len({_place_key(hotel.get("placeId")) for hotel in records}),
        average_rating=_average_rating(records),
        hotels_this_month=hotels_this_month,
        top_places=_top_counts(hotels_by_place, "place"),
        hotels_by_place=hotels_by_place,
        hotels=records,
    )


def process_packages_data(packages: Any) -> PackageStats:
    """套餐统计，价格只统计大于 0 的部分"""
    records = as_records(packages)
    packages_by_category = _count_by(records, "category", "uncategorized")

    prices = [to_number(pkg.get("price")) for pkg in records]
    prices = [price for price in prices if price > 0]

    return PackageStats(
        total_packages=len(records),
        average_rating=_average_rating(records),
        top_categories=_top_counts(packages_by_category, "category"),
        packages_by_category=packages_by_category,
        average_price=round_half_up(sum(prices) / len(prices)) if prices else 0,
        min_price=min(prices) if prices else 0,
        max_price=max(prices) if prices else 0,
        packages=records,
    )


def _has_image(place: Dict[str, Any]) -> bool:
    if place.get("image"):
        return True
    images = place.get("images")
    return isinstance(images, list) and len(images) > 0


def process_places_data(places: Any) -> PlaceStats:
    records = as_records(places)
    ranked = sorted(records, key=lambda place: to_number(place.get("rating")), reverse=True)
    return PlaceStats(
        total_places=len(records),
        average_rating=_average_rating(records),
        places_with_images=sum(1 for place in records if _has_image(place)),
        top_rated_places=[
            {
                "name": place.get("name"),
                "rating": to_number(place.get("rating")),
                "description": place.get("description"),
            }
            for place in ranked[:TOP_N]
        ],
    )


def process_invoices_data(invoices: Any, now: Optional[datetime] = None) -> InvoiceStats:
    """发票统计

    未设置状态的发票：应收余额 <= 0 视为 paid，否则为 pending。
    ``raw_invoices`` 保留传入的原始对象引用。
    """
    records = as_records(invoices)

    status_counts: Counter = Counter()
    for invoice in records:
        status = invoice.get("status")
        if not status:
            status = "paid" if invoice_due(invoice) <= 0 else "pending"
        status_counts[status] += 1

    paid_revenue = 0
    if status_counts.get("paid"):
        paid_revenue = sum(invoice_amount(inv) for inv in records if invoice_due(inv) <= 0)

    return InvoiceStats(
        total_invoices=len(records),
        total_revenue=sum(invoice_amount(invoice) for invoice in records),
        total_advance=sum(to_number(invoice.get("advancePaid")) for invoice in records),
        total_due=sum(invoice_due(invoice) for invoice in records),
        status_counts=dict(status_counts),
        type_counts=_count_by(records, "type", "unknown"),
        monthly_revenue=calculate_monthly_trend(records, "total", now=now),
        paid_revenue=paid_revenue,
        raw_invoices=invoices if isinstance(invoices, list) else [],
    )


def process_vouchers_data(vouchers: Any, now: Optional[datetime] = None) -> VoucherStats:
    """付款凭证统计"""
    records = as_records(vouchers)
    return VoucherStats(
        total_vouchers=len(records),
        total_expenses=sum(to_number(voucher.get("total")) for voucher in records),
        total_advance=sum(to_number(voucher.get("advance")) for voucher in records),
        total_due=sum(to_number(voucher.get("due")) for voucher in records),
        category_counts=_count_by(records, "category", "other"),
        monthly_expenses=calculate_monthly_trend(records, "total", now=now),
        payment_method_counts=_count_by(records, "paymentMethod", "unknown"),
        raw_vouchers=vouchers if isinstance(vouchers, list) else [],
    )


__all__ = [
    "as_records",
    "calculate_monthly_trend",
    "invoice_amount",
    "invoice_due",
    "process_hotels_data",
    "process_invoices_data",
    "process_packages_data",
    "process_places_data",
    "process_vouchers_data",
    "round_half_up",
    "to_number",
]
