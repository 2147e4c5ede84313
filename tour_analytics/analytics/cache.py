"""分析数据缓存 - 固定超时的内存缓存，清空时通知监听器"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from .notifier import UpdateNotifier

CACHE_TIMEOUT = 5 * 60  # 5 分钟


@dataclass
class CacheEntry:
    data: Any
    timestamp: float


class AnalyticsCache:
    """Per-key cache with lazy expiry.

    Entries are replaced whole; there is no per-key eviction besides
    :meth:`clear`, which also notifies the attached :class:`UpdateNotifier`.
    """

    def __init__(
        self,
        notifier: Optional[UpdateNotifier] = None,
        timeout: float = CACHE_TIMEOUT,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.notifier = notifier or UpdateNotifier()
        self.timeout = timeout
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is not None and self._clock() - entry.timestamp < self.timeout:
            return entry.data
        return None

    def set(self, key: str, data: Any) -> None:
        self._entries[key] = CacheEntry(data=data, timestamp=self._clock())

    def clear(self) -> None:
        self._entries.clear()
        self.notifier.notify_all()


__all__ = ["CACHE_TIMEOUT", "AnalyticsCache", "CacheEntry"]
