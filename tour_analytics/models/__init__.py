"""数据模型模块 - 分析服务的核心数据结构

目录结构：
- base.py: 枚举类型（Period、TransactionType、Trend）
- analytics.py: 统计结果模型
- serialization.py: 序列化工具
"""

# 基础模型
from .base import Period, TransactionType, Trend

# 统计模型
from .analytics import (
    AnalyticsData,
    AnalyticsSummary,
    HotelStats,
    InvoiceStats,
    KeyMetric,
    MonthlyBucket,
    PackageStats,
    PeriodData,
    PeriodDetails,
    PeriodInfo,
    PeriodWindow,
    PlaceStats,
    PreviousPeriodData,
    TopPerformer,
    TopPerformers,
    Transaction,
    VoucherStats,
)

# 序列化
from .serialization import AnalyticsJSONEncoder, to_camel, to_dict, to_json

__all__ = [
    # 基础模型
    "Period",
    "TransactionType",
    "Trend",
    # 统计模型
    "AnalyticsData",
    "AnalyticsSummary",
    "HotelStats",
    "InvoiceStats",
    "KeyMetric",
    "MonthlyBucket",
    "PackageStats",
    "PeriodData",
    "PeriodDetails",
    "PeriodInfo",
    "PeriodWindow",
    "PlaceStats",
    "PreviousPeriodData",
    "TopPerformer",
    "TopPerformers",
    "Transaction",
    "VoucherStats",
    # 序列化
    "AnalyticsJSONEncoder",
    "to_camel",
    "to_dict",
    "to_json",
]
