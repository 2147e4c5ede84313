"""付款凭证接口 - 生成可下载的 PDF"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..analytics import AnalyticsService
from ..client import ApiError, TravelApiClient
from ..reports import render_payment_voucher_pdf, voucher_pdf_filename
from .analytics import get_analytics_service

router = APIRouter()
logger = logging.getLogger(__name__)


def get_api_client(service: AnalyticsService = Depends(get_analytics_service)) -> TravelApiClient:
    return service.client


@router.get("/vouchers/{voucher_id}/pdf")
async def download_voucher_pdf(
    voucher_id: str,
    client: TravelApiClient = Depends(get_api_client),
) -> Response:
    """下载付款凭证 PDF

    Args:
        voucher_id: 凭证ID

    Returns:
        application/pdf 响应
    """
    try:
        voucher = await client.get_payment_voucher(voucher_id)
    except ApiError as e:
        logger.error(f"Failed to load payment voucher {voucher_id}: {e}")
        if e.status == status.HTTP_404_NOT_FOUND:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Payment voucher not found")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)

    if not isinstance(voucher, dict):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Payment voucher not found")

    pdf_bytes = render_payment_voucher_pdf(voucher, client.settings.company)
    filename = voucher_pdf_filename(voucher)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
