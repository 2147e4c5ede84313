"""最近交易 - 合并周期内最新的发票（收入）与付款凭证（支出）"""

from __future__ import annotations

from datetime import datetime
from typing import Any, List

from ..models import PeriodData, Transaction, TransactionType
from .dates import parse_date, record_date
from .processors import as_records, invoice_amount, to_number

PER_SOURCE = 3
MAX_TRANSACTIONS = 5


def _newest_first(records: List[dict]) -> List[dict]:
    return sorted(
        records,
        key=lambda item: record_date(item, "createdAt", "date") or datetime.min,
        reverse=True,
    )


def _raw_date(record: dict) -> Any:
    return record.get("createdAt") or record.get("date")


def _invoice_transaction(invoice: dict) -> Transaction:
    label = "Hotel" if invoice.get("type") == "hotel" else "Tour"
    reference = invoice.get("invoiceNumber") or invoice.get("id") or invoice.get("_id")
    return Transaction(
        type=TransactionType.REVENUE,
        description=f"{label} Invoice - {reference}",
        amount=invoice_amount(invoice),
        date=_raw_date(invoice),
    )


def _voucher_transaction(voucher: dict) -> Transaction:
    reference = voucher.get("voucherNumber") or voucher.get("id") or voucher.get("_id")
    return Transaction(
        type=TransactionType.EXPENSE,
        description=f"{voucher.get('category') or 'Expense'} - {reference}",
        amount=-to_number(voucher.get("total")),
        date=_raw_date(voucher),
    )


def build_recent_transactions(data: PeriodData) -> List[Transaction]:
    """Up to five most recent transactions of the period, newest first.

    Without any individual invoice or voucher in the period, the last three
    monthly trend buckets are emitted as coarse transactions instead.
    """
    transactions: List[Transaction] = []

    if data.invoices is not None:
        invoices = _newest_first(as_records(data.invoices.raw_invoices))
        transactions.extend(_invoice_transaction(inv) for inv in invoices[:PER_SOURCE])
    if data.vouchers is not None:
        vouchers = _newest_first(as_records(data.vouchers.raw_vouchers))
        transactions.extend(_voucher_transaction(v) for v in vouchers[:PER_SOURCE])

    if not transactions:
        if data.invoices is not None:
            for bucket in data.invoices.monthly_revenue[-PER_SOURCE:]:
                transactions.append(Transaction(
                    type=TransactionType.REVENUE,
                    description=f"Monthly Revenue - {bucket.month}",
                    amount=bucket.amount,
                    date=bucket.month,
                ))
        if data.vouchers is not None:
            for bucket in data.vouchers.monthly_expenses[-PER_SOURCE:]:
                transactions.append(Transaction(
                    type=TransactionType.EXPENSE,
                    description=f"Monthly Expenses - {bucket.month}",
                    amount=-bucket.amount,
                    date=bucket.month,
                ))

    # 无法解析的日期（如月份标签）排在最后，保持原有顺序
    transactions.sort(key=lambda tx: parse_date(tx.date) or datetime.min, reverse=True)
    return transactions[:MAX_TRANSACTIONS]


__all__ = ["build_recent_transactions"]
