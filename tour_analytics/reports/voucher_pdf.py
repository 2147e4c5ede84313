"""
PDF generation for payment vouchers.
Uses reportlab for PDF generation.
"""
from __future__ import annotations

import logging
import re
from io import BytesIO
from typing import Any, Dict, List, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ..analytics.dates import format_date
from ..analytics.processors import to_number
from ..config import CompanyInfo

logger = logging.getLogger(__name__)

BRAND_GREEN = colors.HexColor('#16a34a')
HEADER_FILL = colors.HexColor('#dcfce7')
GRID_GREEN = colors.HexColor('#86efac')
HEADER_TEXT = colors.HexColor('#166534')
MUTED_TEXT = colors.HexColor('#666666')

CATEGORY_LABELS = {
    'hotel': 'Hotel',
    'tour': 'Tour',
    'transport': 'Transport',
    'food': 'Food',
    'other': 'Other',
}

PAYMENT_METHOD_LABELS = {
    'cash': 'Cash',
    'card': 'Card',
    'upi': 'UPI',
    'netbanking': 'Net Banking',
    'cheque': 'Cheque',
}

PAYMENT_TERMS = [
    '1. Payment voucher is valid only for the specified amount and purpose.',
    '2. This voucher must be presented at the time of service delivery.',
    '3. No refund will be provided for unused voucher amount.',
    '4. Voucher is non-transferable and non-refundable.',
    '5. Company reserves the right to modify terms and conditions.',
    '6. Any disputes will be subject to Kolkata jurisdiction.',
    '7. Voucher expiry date must be checked before use.',
    '8. Original voucher must be presented for verification.',
    '9. Duplicate vouchers will not be entertained.',
    '10. The company is not responsible for any loss of personal belongings.',
]


def category_label(category: Optional[str]) -> str:
    return CATEGORY_LABELS.get(category, category or '')


def payment_method_label(method: Optional[str]) -> str:
    return PAYMENT_METHOD_LABELS.get(method, method or '')


def format_inr(amount: Any) -> str:
    """Format a number with Indian digit grouping, e.g. 1234567 -> 12,34,567."""
    value = to_number(amount)
    negative = value < 0
    value = round(abs(value), 2)
    whole = int(value)
    cents = int(round((value - whole) * 100))
    digits = str(whole)
    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        digits = ','.join(groups + [tail])
    text = digits
    if cents:
        text += f".{cents:02d}"
    return f"-{text}" if negative else text


def voucher_amounts(voucher: Dict[str, Any]) -> Dict[str, float]:
    """Total, advance and due; due falls back to total - advance when unset."""
    total = to_number(voucher.get('total'))
    advance = to_number(voucher.get('advance'))
    due = to_number(voucher.get('due')) or (total - advance)
    return {'total': total, 'advance': advance, 'due': due}


def voucher_pdf_filename(voucher: Dict[str, Any]) -> str:
    safe = re.sub(r'[^a-zA-Z0-9]', '_', str(voucher.get('voucherNumber') or 'payment-voucher'))
    return f"{safe}.pdf"


def _wrapped(value: Any, style: ParagraphStyle) -> Paragraph:
    """Free text cell that wraps inside its column."""
    return Paragraph(escape(str(value or 'N/A')), style)


def _grid_table(rows: List[List[Any]], col_widths: List[float], right_align_last: bool = False) -> Table:
    table = Table(rows, colWidths=col_widths)
    style = [
        ('BACKGROUND', (0, 0), (-1, 0), HEADER_FILL),
        ('TEXTCOLOR', (0, 0), (-1, 0), HEADER_TEXT),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('FONT', (0, 1), (-1, -1), 'Helvetica', 10),
        ('GRID', (0, 0), (-1, -1), 0.75, GRID_GREEN),
        ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 6),
    ]
    if right_align_last:
        style.append(('ALIGN', (-1, 0), (-1, -1), 'RIGHT'))
    table.setStyle(TableStyle(style))
    return table


def render_payment_voucher_pdf(voucher: Dict[str, Any], company: Optional[CompanyInfo] = None) -> bytes:
    """
    Generate PDF for a payment voucher using reportlab.

    Args:
        voucher: voucher record as returned by the API with keys such as
            voucherNumber, date, payeeName, contact, address, tourCode,
            category, description, expenseOther, total, advance, due,
            paymentMethod

    Returns:
        bytes: PDF document content
    """
    company = company or CompanyInfo()
    try:
        buffer = BytesIO()
        doc = SimpleDocTemplate(buffer, pagesize=A4, topMargin=0.5*inch, bottomMargin=0.5*inch)
        elements = []
        styles = getSampleStyleSheet()

        title_style = ParagraphStyle(
            'CompanyTitle',
            parent=styles['Heading1'],
            fontSize=24,
            textColor=BRAND_GREEN,
            spaceAfter=4,
        )
        muted_style = ParagraphStyle('Muted', parent=styles['Normal'], fontSize=9, textColor=MUTED_TEXT)
        section_style = ParagraphStyle('Section', parent=styles['Heading3'], textColor=colors.HexColor('#374151'))
        cell_style = ParagraphStyle('Cell', parent=styles['Normal'], fontSize=10)

        # Header
        elements.append(Paragraph(escape(company.name), title_style))
        elements.append(Paragraph(f"<i>{escape(company.tagline)}</i>", muted_style))
        elements.append(Paragraph(escape(company.address).replace('\n', '<br/>'), muted_style))
        elements.append(Paragraph(
            escape(f"Email: {company.email} | Website: {company.website} | Phone: {company.phone}"),
            muted_style,
        ))
        elements.append(Spacer(1, 0.3*inch))

        # Voucher info
        voucher_date = format_date(voucher.get('date')) or format_date(voucher.get('createdAt'))
        info_table = Table(
            [[
                Paragraph(f"<b>Payment Voucher</b><br/>Voucher #{escape(str(voucher.get('voucherNumber') or 'N/A'))}", styles['Normal']),
                Paragraph(f"Date: {voucher_date or 'N/A'}", styles['Normal']),
            ]],
            colWidths=[4*inch, 3*inch],
        )
        info_table.setStyle(TableStyle([('ALIGN', (1, 0), (1, 0), 'RIGHT')]))
        elements.append(info_table)
        elements.append(Spacer(1, 0.2*inch))

        # Payee information
        elements.append(Paragraph("Payee Information", section_style))
        payee_table = Table([
            ['Payee Name:', voucher.get('payeeName') or 'N/A', 'Contact:', voucher.get('contact') or 'N/A'],
            ['Tour Code:', voucher.get('tourCode') or 'N/A', 'Payment Method:', payment_method_label(voucher.get('paymentMethod')) or 'N/A'],
            ['Address:', _wrapped(voucher.get('address'), cell_style), '', ''],
        ], colWidths=[1.2*inch, 2.3*inch, 1.3*inch, 2.2*inch])
        payee_table.setStyle(TableStyle([
            ('FONT', (0, 0), (-1, -1), 'Helvetica', 10),
            ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
            ('FONTNAME', (2, 0), (2, -1), 'Helvetica-Bold'),
            ('SPAN', (1, 2), (3, 2)),
        ]))
        elements.append(payee_table)
        elements.append(Spacer(1, 0.2*inch))

        amounts = voucher_amounts(voucher)

        # Expense details
        elements.append(Paragraph("Expense Details", section_style))
        expense_rows = [
            ['Category', 'Description', 'Amount'],
            [category_label(voucher.get('category')), _wrapped(voucher.get('description'), cell_style), f"Rs. {format_inr(amounts['total'])}"],
        ]
        if voucher.get('category') == 'other' and voucher.get('expenseOther'):
            expense_rows.append(['Other', _wrapped(voucher.get('expenseOther'), cell_style), '-'])
        elements.append(_grid_table(expense_rows, [1.5*inch, 3.5*inch, 2*inch]))
        elements.append(Spacer(1, 0.2*inch))

        # Payment summary
        elements.append(Paragraph("Payment Summary", section_style))
        summary_table = _grid_table([
            ['Description', 'Amount'],
            ['Total Amount', f"Rs. {format_inr(amounts['total'])}"],
            ['Advance Payment', f"Rs. {format_inr(amounts['advance'])}"],
            ['Amount Due', f"Rs. {format_inr(amounts['due'])}"],
            ['Payment Method', payment_method_label(voucher.get('paymentMethod'))],
        ], [5*inch, 2*inch], right_align_last=True)
        due_fill = colors.HexColor('#fef3c7') if amounts['due'] < 0 else colors.HexColor('#f0fdf4')
        summary_table.setStyle(TableStyle([
            ('BACKGROUND', (0, 3), (-1, 3), due_fill),
            ('FONTNAME', (0, 3), (-1, 3), 'Helvetica-Bold'),
        ]))
        elements.append(summary_table)
        elements.append(Spacer(1, 0.3*inch))

        # Terms and conditions
        elements.append(Paragraph("Terms and Conditions:", section_style))
        for term in PAYMENT_TERMS:
            elements.append(Paragraph(term, muted_style))
        elements.append(Spacer(1, 0.4*inch))

        # Footer
        footer_table = Table(
            [[f"© {company.name}. All rights reserved.", "Authorized Signature & Stamp"]],
            colWidths=[4*inch, 3*inch],
        )
        footer_table.setStyle(TableStyle([
            ('FONT', (0, 0), (-1, -1), 'Helvetica', 9),
            ('TEXTCOLOR', (0, 0), (-1, -1), MUTED_TEXT),
            ('ALIGN', (1, 0), (1, 0), 'RIGHT'),
            ('LINEABOVE', (0, 0), (-1, 0), 1.5, GRID_GREEN),
            ('TOPPADDING', (0, 0), (-1, -1), 12),
        ]))
        elements.append(footer_table)

        doc.build(elements)
        pdf_bytes = buffer.getvalue()
        buffer.close()

        logger.info(f"Generated payment voucher PDF for voucher {voucher.get('voucherNumber')}")
        return pdf_bytes

    except Exception as e:
        logger.error(f"Error generating payment voucher PDF: {str(e)}", exc_info=True)
        raise
