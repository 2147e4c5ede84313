"""基础模型 - 报表周期、交易类型等枚举"""

from __future__ import annotations

from enum import Enum
from typing import Any


class Period(str, Enum):
    """Named reporting window relative to "now"."""
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"

    @classmethod
    def parse(cls, value: Any) -> "Period":
        """Resolve a period name, falling back to ``MONTH`` for unknown values."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.MONTH


class TransactionType(str, Enum):
    """交易方向"""
    REVENUE = "revenue"
    EXPENSE = "expense"


class Trend(str, Enum):
    UP = "up"
    DOWN = "down"


__all__ = [
    "Period",
    "TransactionType",
    "Trend",
]
