"""序列化工具 - 统计对象转换为前端使用的 camelCase JSON"""

from __future__ import annotations

import json
from dataclasses import fields, is_dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict


# ==================== JSON编码器 ====================

class AnalyticsJSONEncoder(json.JSONEncoder):
    """自定义JSON编码器，处理dataclass、datetime、Enum等类型"""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, datetime):
            return obj.isoformat()
        elif isinstance(obj, Enum):
            return obj.value
        elif is_dataclass(obj) and not isinstance(obj, type):
            return to_dict(obj)
        elif isinstance(obj, set):
            return list(obj)
        return super().default(obj)


# ==================== 序列化函数 ====================

def to_camel(name: str) -> str:
    """snake_case -> camelCase"""
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _convert(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return to_dict(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        # 原始数据与分组统计的键保持原样
        return {key: _convert(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_convert(item) for item in value]
    return value


def to_dict(obj: Any) -> Dict[str, Any]:
    """将dataclass对象转换为 camelCase 字典

    Args:
        obj: dataclass对象

    Returns:
        字典表示（跳过 internal 字段）
    """
    if not is_dataclass(obj) or isinstance(obj, type):
        raise TypeError(f"Expected dataclass instance, got {type(obj)}")

    result: Dict[str, Any] = {}
    for item in fields(obj):
        if item.metadata.get("internal"):
            continue
        result[to_camel(item.name)] = _convert(getattr(obj, item.name))
    return result


def to_json(obj: Any, indent: int = 2) -> str:
    """将对象序列化为JSON字符串"""
    return json.dumps(obj, cls=AnalyticsJSONEncoder, ensure_ascii=False, indent=indent)


__all__ = [
    "AnalyticsJSONEncoder",
    "to_camel",
    "to_dict",
    "to_json",
]
