"""
Reddit Scraper
从 Reddit 抓取社区热门讨论 (OAuth client-credentials)
"""
from typing import Any, List, Optional
import logging

import httpx

from config import Settings
from models import FetchOutcome, SourceType
from utils.exceptions import ScraperError
from .base import BaseScraper


logger = logging.getLogger(__name__)


class RedditScraper(BaseScraper):
    """
    Reddit 抓取器

    直接调用 OAuth API:
    - POST /api/v1/access_token 换取 bearer token
    - GET /r/{community}/hot 读取热门帖子标题
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(settings=settings, client=client)
        self._reddit_settings = self.settings.reddit

    @property
    def name(self) -> str:
        return "Reddit"

    def is_configured(self) -> bool:
        return bool(
            self._reddit_settings.client_id and
            self._reddit_settings.client_secret
        )

    def _headers(self, token: Optional[str] = None) -> dict:
        headers = {"User-Agent": self._reddit_settings.user_agent}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def fetch_access_token(self, client_id: str, client_secret: str) -> Optional[str]:
        """
        获取 access token

        Returns:
            token 字符串；网络错误、响应格式错误、缺少 access_token 时返回 None
        """
        try:
            payload = await self._post_form_json(
                self._reddit_settings.token_url,
                data={"grant_type": "client_credentials"},
                auth=httpx.BasicAuth(client_id, client_secret),
                headers=self._headers(),
            )
            token = payload.get("access_token") if isinstance(payload, dict) else None
            if not isinstance(token, str) or not token:
                raise ScraperError("Reddit token not received", source=self.name)
        except Exception as exc:
            self._log_error("Token exchange failed", exc)
            return None

        logger.info(f"[{self.name}] Access token acquired")
        return token

    def _post_titles(self, payload: Any) -> List[Any]:
        if not isinstance(payload, dict):
            raise ScraperError(f"unexpected listing payload: {type(payload).__name__}", source=self.name)
        children = (payload.get("data") or {}).get("children") or []
        return [((child or {}).get("data") or {}).get("title") for child in children]

    async def get_hot_posts(self, community: str, token: str, max_results: int) -> FetchOutcome:
        """
        获取社区热门帖子 (使用 API 自身的 hot 排序)

        Args:
            community: subreddit 名称 (不带 r/)
            token: bearer token
            max_results: 最大返回结果数
        """
        source = SourceType.REDDIT
        name = community.strip().removeprefix("r/")
        url = f"{self._reddit_settings.api_base_url.rstrip('/')}/r/{name}/hot"

        try:
            payload = await self._get_json(
                url,
                params={"limit": max_results},
                headers=self._headers(token),
            )
            records = self._to_records(self._post_titles(payload))
        except Exception as exc:
            self._log_error(f"Failed to fetch posts from r/{name}", exc)
            return FetchOutcome.failed(source, str(exc))

        self._log_search(f"r/{name}", len(records))
        return FetchOutcome.ok(source, records)
