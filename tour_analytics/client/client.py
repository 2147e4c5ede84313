"""httpx 客户端封装，访问旅行社后台的 REST API。"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from ..config import Settings, get_settings

logger = logging.getLogger(__name__)


@dataclass
class ApiError(Exception):
    """统一封装 REST API 调用失败（网络错误或 success=false）。"""

    status: Optional[int]
    message: str
    details: Optional[Any] = None

    def __str__(self) -> str:
        code = self.status if self.status is not None else "-"
        return f"[{code}] {self.message}"


def _normalise_base_url(base_url: str) -> str:
    """确保 base_url 以 `/` 结尾，避免路径连接异常。"""
    return base_url if base_url.endswith("/") else f"{base_url}/"


def _wrap_http_error(exc: httpx.HTTPError) -> ApiError:
    """将 httpx 异常转换为自定义异常，便于统一处理。"""
    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        try:
            body = response.json()
        except ValueError:
            body = None
        message = None
        if isinstance(body, dict):
            message = body.get("message")
        if response.status_code == 401:
            message = "Session expired. Please login again."
        elif response.status_code == 429:
            message = "Too many requests. Please wait a moment and try again."
        return ApiError(
            status=response.status_code,
            message=message or f"HTTP error! status: {response.status_code}",
            details=body,
        )
    if isinstance(exc, httpx.TransportError):
        return ApiError(
            status=None,
            message="Unable to connect to server. Please check your connection.",
            details=str(exc),
        )
    return ApiError(status=None, message=str(exc))


def create_client(
    settings: Optional[Settings] = None,
    *,
    base_url: Optional[str] = None,
    timeout: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """根据配置初始化异步 httpx 客户端。"""
    settings = settings or get_settings()
    resolved_base_url = _normalise_base_url(base_url or settings.api_base_url)
    resolved_timeout = timeout if timeout is not None else settings.http_timeout

    headers = {"Content-Type": "application/json"}
    if settings.has_credentials:
        headers["Authorization"] = f"Bearer {settings.api_token}"

    client_kwargs: dict[str, Any] = {
        "base_url": resolved_base_url,
        "timeout": resolved_timeout,
        "headers": headers,
    }
    if transport is not None:
        client_kwargs["transport"] = transport
    return httpx.AsyncClient(**client_kwargs)


class TravelApiClient:
    """Read-only access to the travel agency REST API.

    Every list call returns the ``data`` member of the ``{success, data}``
    envelope and raises :class:`ApiError` for transport failures, non-2xx
    responses and ``success: false`` payloads.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = settings or get_settings()
        self._client = http_client or create_client(self.settings)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        # 相对路径，交给 base_url 拼接
        path = endpoint.lstrip("/")
        try:
            response = await self._client.get(path, params=params)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            raise _wrap_http_error(exc) from exc
        except ValueError as exc:
            raise ApiError(status=None, message="Invalid JSON response", details=str(exc)) from exc

        if not isinstance(payload, dict) or not payload.get("success"):
            message = "API request failed"
            if isinstance(payload, dict) and payload.get("message"):
                message = payload["message"]
            raise ApiError(status=response.status_code, message=message, details=payload)
        return payload.get("data")

    async def get_admin_stats(self) -> Any:
        return await self._get("/admin/stats")

    async def get_hotels(self, page: int = 1, limit: Optional[int] = None) -> Any:
        return await self._get(
            "/hotels", params={"page": page, "limit": limit or self.settings.page_limit}
        )

    async def list_packages(self) -> Any:
        return await self._get("/packages")

    async def get_places(self) -> Any:
        return await self._get("/places")

    async def list_invoices(self, page: int = 1, limit: Optional[int] = None) -> Any:
        return await self._get(
            "/invoices", params={"page": page, "limit": limit or self.settings.page_limit}
        )

    async def list_payment_vouchers(self) -> Any:
        return await self._get("/payment-vouchers")

    async def get_payment_voucher(self, voucher_id: str) -> Any:
        return await self._get(f"/payment-vouchers/{voucher_id}")


__all__ = ["ApiError", "TravelApiClient", "create_client"]
