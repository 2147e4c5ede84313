"""
旅行社后台仪表盘分析服务
聚合酒店、套餐、景点、发票和付款凭证数据

Quickstart::

    import asyncio
    from tour_analytics import AnalyticsService, TravelApiClient

    async def main():
        service = AnalyticsService(TravelApiClient())
        summary = await service.get_analytics_summary("month")
        print(summary.key_metrics["profit"].total)
        await service.aclose()

    asyncio.run(main())
"""

from .analytics import AnalyticsService
from .client import ApiError, TravelApiClient, create_client
from .config import CompanyInfo, Settings, get_settings, load_env
from .models import Period, to_dict, to_json
from .reports import render_payment_voucher_pdf

load_env()

__version__ = "0.1.0"

__all__ = [
    "AnalyticsService",
    "ApiError",
    "CompanyInfo",
    "Period",
    "Settings",
    "TravelApiClient",
    "create_client",
    "get_settings",
    "load_env",
    "render_payment_voucher_pdf",
    "to_dict",
    "to_json",
    "__version__",
]
