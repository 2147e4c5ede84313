"""文档生成 - 付款凭证 PDF"""

from .voucher_pdf import (
    category_label,
    format_inr,
    payment_method_label,
    render_payment_voucher_pdf,
    voucher_amounts,
    voucher_pdf_filename,
)

__all__ = [
    "category_label",
    "format_inr",
    "payment_method_label",
    "render_payment_voucher_pdf",
    "voucher_amounts",
    "voucher_pdf_filename",
]
