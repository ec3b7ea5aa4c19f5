"""固定窗口限流"""
from cachetools import TTLCache
from typing import Hashable, Optional, Callable
import math
import time

from ..config import settings


class RateLimiter:
    """按客户端地址计数的固定窗口限流器

    每个地址的计数器在首次请求时创建，窗口到期后由 TTLCache 自动淘汰；
    窗口内原地累加计数，不会刷新过期时间。

    Usage:
        limiter = RateLimiter(max_requests=5, window_seconds=60)
        retry_after = limiter.hit(client_ip)
        if retry_after is not None:
            ...  # 拒绝请求
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: int,
        max_clients: int = 10000,
        timer: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._timer = timer
        self._windows = TTLCache(maxsize=max_clients, ttl=window_seconds, timer=timer)

    def hit(self, key: Hashable) -> Optional[int]:
        """记录一次请求

        Returns:
            未超限返回 None；超限返回距窗口结束的秒数（至少 1）
        """
        now = self._timer()
        window = self._windows.get(key)
        if window is None:
            # [计数, 窗口起点]
            self._windows[key] = [1, now]
            return None

        window[0] += 1
        if window[0] > self.max_requests:
            return max(1, math.ceil(window[1] + self.window_seconds - now))
        return None

    def reset(self, key: Optional[Hashable] = None):
        """清除计数

        Args:
            key: 指定客户端，None 则清除所有
        """
        if key is None:
            self._windows.clear()
        else:
            self._windows.pop(key, None)


# 注册/登录共用的限流实例
auth_limiter = RateLimiter(
    max_requests=settings.RATE_LIMIT_MAX_REQUESTS,
    window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
    max_clients=settings.RATE_LIMIT_MAX_CLIENTS,
)
