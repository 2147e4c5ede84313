"""仪表盘分析接口 - 汇总指标、热门排行、最近交易和周期信息"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel, ConfigDict

from ..analytics import AnalyticsService
from ..models import Period, TransactionType, Trend, to_camel, to_dict

router = APIRouter()

PERIOD_QUERY = Query("month", description="week | month | quarter | year")


class CamelModel(BaseModel):
    """响应模型基类：字段以 camelCase 别名输出"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MonthlyBucketModel(CamelModel):
    month: str
    amount: float


class HotelStatsModel(CamelModel):
    total_hotels: int
    total_places: int
    average_rating: float
    hotels_this_month: int
    top_places: List[Dict[str, Any]] = []
    hotels_by_place: Dict[str, int] = {}


class PackageStatsModel(CamelModel):
    total_packages: int
    average_rating: float
    top_categories: List[Dict[str, Any]] = []
    packages_by_category: Dict[str, int] = {}
    average_price: float
    min_price: float
    max_price: float


class PlaceStatsModel(CamelModel):
    total_places: int
    average_rating: float
    places_with_images: int
    top_rated_places: List[Dict[str, Any]] = []


class InvoiceStatsModel(CamelModel):
    """发票统计（收入侧）"""
    total_invoices: int
    total_revenue: float
    total_advance: float
    total_due: float
    status_counts: Dict[str, int] = {}
    type_counts: Dict[str, int] = {}
    monthly_revenue: List[MonthlyBucketModel] = []
    paid_revenue: float


class VoucherStatsModel(CamelModel):
    """付款凭证统计（支出侧）"""
    total_vouchers: int
    total_expenses: float
    total_advance: float
    total_due: float
    category_counts: Dict[str, int] = {}
    monthly_expenses: List[MonthlyBucketModel] = []
    payment_method_counts: Dict[str, int] = {}


class PeriodInfoModel(CamelModel):
    period: Period
    start_date: datetime
    end_date: datetime
    filtered_invoices_count: int
    filtered_vouchers_count: int


class PeriodDataModel(CamelModel):
    """按周期过滤后的统计；获取失败的集合为 null"""
    users: Optional[Dict[str, Any]] = None
    hotels: Optional[HotelStatsModel] = None
    packages: Optional[PackageStatsModel] = None
    places: Optional[PlaceStatsModel] = None
    invoices: Optional[InvoiceStatsModel] = None
    vouchers: Optional[VoucherStatsModel] = None
    period_info: Optional[PeriodInfoModel] = None


class KeyMetricModel(CamelModel):
    total: float
    change: int
    trend: Trend


class AnalyticsSummaryResponse(CamelModel):
    """关键指标响应"""
    key_metrics: Dict[str, KeyMetricModel]
    detailed_data: PeriodDataModel
    last_updated: datetime


class TopPerformerModel(CamelModel):
    name: str
    bookings: int
    revenue: int


class TopPerformersResponse(CamelModel):
    """热门套餐与酒店响应（估算值）"""
    top_packages: List[TopPerformerModel]
    top_hotels: List[TopPerformerModel]


class TransactionModel(CamelModel):
    type: TransactionType
    description: str
    amount: float
    # 原始记录中的日期原样返回；月度汇总时为月份缩写
    date: Optional[Union[str, datetime, float]] = None


class PeriodInfoResponse(CamelModel):
    """周期描述响应"""
    period: Period
    description: str
    start_date: datetime
    end_date: datetime


class RefreshResponse(BaseModel):
    message: str


def get_analytics_service(request: Request) -> AnalyticsService:
    """从应用状态中取出共享的分析服务实例"""
    return request.app.state.analytics_service


@router.get("/analytics/summary", response_model=AnalyticsSummaryResponse)
async def analytics_summary(
    period: str = PERIOD_QUERY,
    service: AnalyticsService = Depends(get_analytics_service),
):
    """关键指标及其相对上一周期的变化"""
    summary = await service.get_analytics_summary(period)
    return to_dict(summary)


@router.get("/analytics/top-performers", response_model=TopPerformersResponse)
async def analytics_top_performers(
    period: str = PERIOD_QUERY,
    service: AnalyticsService = Depends(get_analytics_service),
):
    performers = await service.get_top_performers(period)
    return to_dict(performers)


@router.get("/analytics/transactions", response_model=List[TransactionModel])
async def analytics_transactions(
    period: str = PERIOD_QUERY,
    service: AnalyticsService = Depends(get_analytics_service),
):
    transactions = await service.get_recent_transactions(period)
    return [to_dict(tx) for tx in transactions]


@router.get("/analytics/period-info", response_model=PeriodInfoResponse)
async def analytics_period_info(
    period: str = PERIOD_QUERY,
    service: AnalyticsService = Depends(get_analytics_service),
):
    return to_dict(service.get_period_info(period))


@router.post("/analytics/refresh", response_model=RefreshResponse)
async def analytics_refresh(service: AnalyticsService = Depends(get_analytics_service)):
    """清空缓存并通知监听器，下一次请求会重新拉取数据

    在事件循环上执行，监听器与缓存读写处于同一线程。
    """
    service.trigger_update()
    return RefreshResponse(message="Analytics cache cleared")
