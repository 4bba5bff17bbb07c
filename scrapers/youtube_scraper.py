"""
YouTube Scraper
YouTube Data API v3: 关键词搜索 + 频道最新视频
"""
from typing import Any, List, Optional
import logging

import httpx

from config import Settings
from models import FetchOutcome, SourceType
from utils.exceptions import ScraperError
from .base import BaseScraper


logger = logging.getLogger(__name__)


class YouTubeScraper(BaseScraper):
    """
    YouTube 抓取器

    只提取标题，其余字段 (描述、缩略图、统计) 全部丢弃。
    每个方法自带错误边界: 任何异常都转换为 FetchOutcome.failed。
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None,
        api_key: Optional[str] = None,
    ):
        super().__init__(settings=settings, client=client)
        self._youtube_settings = self.settings.youtube
        self.api_key = api_key or self._youtube_settings.api_key
        self.base_url = self._youtube_settings.base_url.rstrip("/")

    @property
    def name(self) -> str:
        return "YouTube"

    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def _search(self, **params: Any) -> dict:
        payload = await self._get_json(
            f"{self.base_url}/search",
            params={"part": "snippet", "key": self.api_key, **params},
        )
        if not isinstance(payload, dict):
            raise ScraperError(f"unexpected search payload: {type(payload).__name__}", source=self.name)
        return payload

    @staticmethod
    def _snippet_titles(payload: dict) -> List[Any]:
        titles = []
        for item in payload.get("items") or []:
            snippet = (item or {}).get("snippet") or {}
            titles.append(snippet.get("title"))
        return titles

    async def search_videos(self, query: str, max_results: int) -> FetchOutcome:
        """
        按相关度搜索视频

        Args:
            query: 搜索关键词
            max_results: 最大返回结果数

        Returns:
            FetchOutcome (只含标题)
        """
        source = SourceType.YOUTUBE_SEARCH
        logger.info(f"[{self.name}] Searching videos: {query}")

        try:
            payload = await self._search(
                q=query,
                type="video",
                order="relevance",
                maxResults=max_results,
            )
            records = self._to_records(self._snippet_titles(payload))
        except Exception as exc:
            self._log_error(f"Search failed for '{query}'", exc)
            return FetchOutcome.failed(source, str(exc))

        self._log_search(query, len(records))
        return FetchOutcome.ok(source, records)

    async def resolve_channel_id(self, channel_name: str) -> Optional[str]:
        """频道名 -> channelId (只取第一个匹配)，找不到返回 None"""
        payload = await self._search(q=channel_name, type="channel", maxResults=1)
        items = payload.get("items") or []
        if not items:
            return None
        channel_id = ((items[0] or {}).get("id") or {}).get("channelId")
        return channel_id or None

    async def get_channel_videos(self, channel_name: str, max_results: int) -> FetchOutcome:
        """
        获取频道最新视频 (按发布时间排序)

        两次顺序调用: 先解析频道ID，再列出该频道视频。
        频道不存在时直接返回 empty，不发第二次请求。
        """
        source = SourceType.YOUTUBE_CHANNEL

        try:
            channel_id = await self.resolve_channel_id(channel_name)
            if channel_id is None:
                logger.warning(f"[{self.name}] Channel not found: {channel_name}")
                return FetchOutcome.empty(source)

            payload = await self._search(
                channelId=channel_id,
                type="video",
                order="date",
                maxResults=max_results,
            )
            records = self._to_records(self._snippet_titles(payload))
        except Exception as exc:
            self._log_error(f"Failed to fetch videos for channel '{channel_name}'", exc)
            return FetchOutcome.failed(source, str(exc))

        self._log_search(channel_name, len(records))
        return FetchOutcome.ok(source, records)

