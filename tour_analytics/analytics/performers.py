"""热门套餐 / 酒店估算

The upstream API has no per-package or per-hotel booking attribution, so
performance is estimated by distributing the period revenue across items
weighted by rating and price. The numbers are approximations for ranking
on the dashboard, not booking ground truth.
"""

from __future__ import annotations

import re
from typing import Any, Callable, List, Optional

from ..models import InvoiceStats, TopPerformer
from .processors import as_records, round_half_up, to_number

DEFAULT_RATING = 4.0
DEFAULT_PACKAGE_PRICE = 25000
DEFAULT_HOTEL_PRICE_RANGE = "₹5,000 - ₹10,000"
DEFAULT_HOTEL_PRICE = 7500

MIN_PACKAGE_REVENUE = 10000
MIN_HOTEL_REVENUE = 5000
WEIGHT_SCALE = 100000

# 没有发票统计时的估算订单数
FALLBACK_PACKAGE_BOOKINGS = 20
FALLBACK_HOTEL_BOOKINGS = 15

_PRICE_PATTERN = re.compile(r"₹?([\d,]+)")

PACKAGE_PLACEHOLDERS = (
    "No packages available",
    "Add packages to see analytics",
    "Package management needed",
)
HOTEL_PLACEHOLDERS = (
    "No hotels available",
    "Add hotels to see analytics",
    "Hotel management needed",
)


def extract_price_from_range(price_range: Any) -> int:
    """Pull the first number out of strings like "₹5,000 - ₹12,000"."""
    if not price_range:
        return DEFAULT_HOTEL_PRICE
    match = _PRICE_PATTERN.search(str(price_range))
    if not match:
        return DEFAULT_HOTEL_PRICE
    digits = match.group(1).replace(",", "")
    return int(digits) if digits and int(digits) else DEFAULT_HOTEL_PRICE


def _rank(
    items: List[dict],
    invoices: Optional[InvoiceStats],
    unit_price: Callable[[dict], float],
    min_revenue: int,
    fallback_bookings: int,
) -> List[TopPerformer]:
    performers: List[TopPerformer] = []
    if invoices is not None:
        average_share = (invoices.total_revenue or 0) / len(items)
        for item in items:
            price = unit_price(item)
            rating = to_number(item.get("rating")) or DEFAULT_RATING
            weight = rating * price / WEIGHT_SCALE
            revenue = round_half_up(average_share * weight)
            bookings = round_half_up(revenue / price)
            performers.append(TopPerformer(
                name=item.get("name") or "",
                bookings=max(bookings, 1),
                revenue=max(revenue, min_revenue),
            ))
    else:
        for item in items:
            multiplier = (to_number(item.get("rating")) or DEFAULT_RATING) / 5.0
            performers.append(TopPerformer(
                name=item.get("name") or "",
                bookings=round_half_up(fallback_bookings * multiplier) or 1,
                revenue=round_half_up(unit_price(item) * fallback_bookings * multiplier) or min_revenue,
            ))

    performers.sort(key=lambda performer: performer.revenue, reverse=True)
    return performers[:5]


def calculate_top_packages(packages: Any, invoices: Optional[InvoiceStats]) -> List[TopPerformer]:
    """按评分 × 价格分摊收入，返回估算收入最高的 5 个套餐"""
    items = as_records(packages)
    if not items:
        return [TopPerformer(name=name) for name in PACKAGE_PLACEHOLDERS]
    return _rank(
        items,
        invoices,
        unit_price=lambda pkg: to_number(pkg.get("price")) or DEFAULT_PACKAGE_PRICE,
        min_revenue=MIN_PACKAGE_REVENUE,
        fallback_bookings=FALLBACK_PACKAGE_BOOKINGS,
    )


def calculate_top_hotels(hotels: Any, invoices: Optional[InvoiceStats]) -> List[TopPerformer]:
    """按评分 × 价格区间下限分摊收入，返回估算收入最高的 5 家酒店"""
    items = as_records(hotels)
    if not items:
        return [TopPerformer(name=name) for name in HOTEL_PLACEHOLDERS]
    return _rank(
        items,
        invoices,
        unit_price=lambda hotel: extract_price_from_range(
            hotel.get("priceRange") or DEFAULT_HOTEL_PRICE_RANGE
        ),
        min_revenue=MIN_HOTEL_REVENUE,
        fallback_bookings=FALLBACK_HOTEL_BOOKINGS,
    )


__all__ = [
    "calculate_top_hotels",
    "calculate_top_packages",
    "extract_price_from_range",
]
