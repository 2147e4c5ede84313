"""更新通知 - 监听器集合与定时刷新任务"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Callable, Optional, Set

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class UpdateNotifier:
    """Set of zero-argument callbacks notified when analytics data goes stale."""

    def __init__(self):
        self._listeners: Set[Listener] = set()

    def __len__(self) -> int:
        return len(self._listeners)

    def add_listener(self, callback: Listener) -> Callable[[], None]:
        """注册监听器

        Args:
            callback: 无参数回调

        Returns:
            取消订阅函数，只移除该回调
        """
        self._listeners.add(callback)

        def unsubscribe() -> None:
            self._listeners.discard(callback)

        return unsubscribe

    def notify_all(self) -> None:
        """同步调用所有监听器，单个监听器的异常只记录日志"""
        for callback in list(self._listeners):
            try:
                callback()
            except Exception:
                logger.exception("Error in analytics update listener")


class PeriodicRefresher:
    """Runs ``action`` every ``interval`` seconds on the running event loop.

    Starting again replaces the previous task instead of stacking timers.
    """

    def __init__(self, action: Callable[[], None]):
        self._action = action
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, interval: float) -> None:
        if interval <= 0:
            raise ValueError("refresh interval must be positive")
        self.stop()
        self._task = asyncio.get_running_loop().create_task(self._run(interval))

    def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def aclose(self) -> None:
        """Cancel the task and wait until it has finished."""
        task = self._task
        self.stop()
        if task is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await task

    async def _run(self, interval: float) -> None:
        while True:
            await asyncio.sleep(interval)
            try:
                self._action()
            except Exception:
                logger.exception("Periodic analytics refresh failed")


__all__ = ["Listener", "PeriodicRefresher", "UpdateNotifier"]
