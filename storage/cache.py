"""
Cache
凭证缓存模块
"""
from typing import Awaitable, Callable, Optional
import logging
import time

from config import TOKEN_TTL_SECONDS
from models import CachedToken


logger = logging.getLogger(__name__)

TokenFetcher = Callable[[str, str], Awaitable[Optional[str]]]


class TokenCache:
    """
    单个 bearer token 的内存缓存

    - 有效期内直接返回缓存值，不发请求
    - 过期 (now >= expires_at) 后重新换取一次
    - 换取失败返回 None，且不修改缓存

    没有加锁: 并发刷新是幂等的，最多多一次外部调用，后写入者生效。
    """

    def __init__(
        self,
        fetcher: TokenFetcher,
        ttl_seconds: float = TOKEN_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        初始化缓存

        Args:
            fetcher: 换取 token 的异步函数 (client_id, client_secret) -> token | None
            ttl_seconds: 缓存时长 (秒)，应短于服务端 token 实际寿命
            clock: 时间源，测试中可替换
        """
        self._fetcher = fetcher
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._token = CachedToken()

    def peek(self) -> CachedToken:
        """返回当前缓存状态 (副本)"""
        return self._token.model_copy()

    def invalidate(self) -> None:
        """清空缓存"""
        self._token = CachedToken()

    async def get_token(self, client_id: str, client_secret: str) -> Optional[str]:
        """获取 token，必要时刷新"""
        if self._token.is_valid(self._clock()):
            return self._token.value

        token = await self._fetcher(client_id, client_secret)
        if not token:
            logger.warning("Token acquisition failed; community sources unavailable for this request")
            return None

        self._token = CachedToken(value=token, expires_at=self._clock() + self.ttl_seconds)
        logger.debug(f"Token cached for {self.ttl_seconds}s")
        return token
