"""
Base Scraper
所有抓取器的抽象基类
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional
import logging

import httpx

from config import Settings, get_settings
from models import TitleRecord


logger = logging.getLogger(__name__)


class BaseScraper(ABC):
    """
    抓取器抽象基类
    所有具体抓取器都需要继承此类

    HTTP 客户端可以由调用方注入 (多个抓取器共享连接池)，
    否则在首次请求时创建，并在 close() 时释放。
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = settings or get_settings()
        self._client = client
        self._owns_client = client is None

    @property
    @abstractmethod
    def name(self) -> str:
        """返回抓取器名称"""
        pass

    def is_configured(self) -> bool:
        """
        检查是否已正确配置
        子类可以覆盖此方法来检查必要的API密钥等
        """
        return True

    async def __aenter__(self):
        """异步上下文管理器入口"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """异步上下文管理器出口"""
        await self.close()

    async def close(self):
        """清理资源 (只关闭自己创建的客户端)"""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        """获取或创建 HTTP 客户端"""
        if self._client is None:
            timeout = httpx.Timeout(self.settings.collection.request_timeout_sec)
            self._client = httpx.AsyncClient(timeout=timeout, follow_redirects=True)
            self._owns_client = True
        return self._client

    async def _get_json(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        response = await self._get_client().get(url, params=params, headers=headers)
        response.raise_for_status()
        return response.json()

    async def _post_form_json(
        self,
        url: str,
        *,
        data: Dict[str, str],
        auth: Optional[httpx.Auth] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        response = await self._get_client().post(url, data=data, auth=auth, headers=headers)
        response.raise_for_status()
        return response.json()

    @staticmethod
    def _to_records(titles: Iterable[Any]) -> List[TitleRecord]:
        """只保留干净的字符串标题，其余丢弃"""
        records: List[TitleRecord] = []
        for title in titles:
            if isinstance(title, str) and title.strip():
                records.append(TitleRecord(title=title))
        return records

    def _log_search(self, query: str, count: int):
        """记录搜索日志"""
        logger.info(f"[{self.name}] '{query}' returned {count} results")

    def _log_error(self, message: str, error: Exception):
        """记录错误日志"""
        logger.error(f"[{self.name}] {message}: {error}")
