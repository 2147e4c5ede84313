"""旅行社后台 REST API 的异步客户端封装。"""

from __future__ import annotations

from ..config import Settings, get_settings
from .client import ApiError, TravelApiClient, create_client

__all__ = [
    "Settings",
    "ApiError",
    "TravelApiClient",
    "create_client",
    "get_settings",
]
