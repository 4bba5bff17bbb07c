"""
Data Aggregator
并发采集 YouTube / Reddit 数据，汇总为 CollectedData
"""
import asyncio
from typing import Awaitable, Callable, List, Optional
import logging

from rich.console import Console
from rich.table import Table

from config import Settings, get_settings
from models import (
    ChannelResult,
    CollectedData,
    CommunityResult,
    FetchOutcome,
    SourceType,
    StrategyRequest,
)
from scrapers import RedditScraper, YouTubeScraper
from storage import TokenCache


logger = logging.getLogger(__name__)
console = Console()


class DataAggregator:
    """
    数据聚合器

    三个分支并发执行:
    1. 趋势搜索 (audience + goal)
    2. 每个竞品频道一个任务
    3. 先取 token，成功后每个社区一个任务

    collect() 从不抛出异常: 所有失败都已在适配器内部降级为空结果。
    """

    def __init__(
        self,
        youtube: YouTubeScraper,
        reddit: RedditScraper,
        token_cache: TokenCache,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self.youtube = youtube
        self.reddit = reddit
        self.token_cache = token_cache

        collection = self.settings.collection
        self.result_limit = collection.result_limit
        self.source_timeout_sec = float(collection.source_timeout_sec)
        self.max_concurrency = max(1, int(collection.max_concurrency))

    async def _run_source_task(
        self,
        source: SourceType,
        label: str,
        call: Callable[[], Awaitable[FetchOutcome]],
    ) -> FetchOutcome:
        try:
            return await asyncio.wait_for(call(), timeout=self.source_timeout_sec)
        except asyncio.TimeoutError:
            logger.warning(f"{label} timed out after {self.source_timeout_sec:g}s")
            return FetchOutcome.failed(source, f"timed out after {self.source_timeout_sec:g}s")
        except Exception as exc:
            logger.error(f"{label} raised past its adapter: {exc}")
            return FetchOutcome.failed(source, str(exc))

    async def _bounded(
        self,
        semaphore: asyncio.Semaphore,
        source: SourceType,
        label: str,
        call: Callable[[], Awaitable[FetchOutcome]],
    ) -> FetchOutcome:
        async with semaphore:
            return await self._run_source_task(source, label, call)

    async def _collect_trends(self, request: StrategyRequest) -> FetchOutcome:
        query = f"{request.audience} {request.goal}"
        return await self._run_source_task(
            SourceType.YOUTUBE_SEARCH,
            f"Trend search '{query}'",
            lambda: self.youtube.search_videos(query, self.result_limit),
        )

    async def _collect_channels(
        self,
        channels: List[str],
        semaphore: asyncio.Semaphore,
    ) -> List[ChannelResult]:
        if not channels:
            return []

        async def _one(channel: str) -> ChannelResult:
            outcome = await self._bounded(
                semaphore,
                SourceType.YOUTUBE_CHANNEL,
                f"Channel '{channel}'",
                lambda: self.youtube.get_channel_videos(channel, self.result_limit),
            )
            return ChannelResult(channel=channel, videos=outcome.records)

        return list(await asyncio.gather(*(_one(channel) for channel in channels)))

    async def _acquire_token(self) -> Optional[str]:
        reddit = self.settings.reddit
        try:
            return await asyncio.wait_for(
                self.token_cache.get_token(reddit.client_id or "", reddit.client_secret or ""),
                timeout=self.source_timeout_sec,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Token acquisition timed out after {self.source_timeout_sec:g}s")
        except Exception as exc:
            logger.error(f"Token acquisition raised: {exc}")
        return None

    async def _collect_communities(
        self,
        communities: List[str],
        semaphore: asyncio.Semaphore,
    ) -> List[CommunityResult]:
        if not communities:
            return []

        token = await self._acquire_token()
        if not token:
            logger.warning(f"Skipping {len(communities)} communities: no access token")
            return []

        async def _one(community: str) -> CommunityResult:
            outcome = await self._bounded(
                semaphore,
                SourceType.REDDIT,
                f"Community 'r/{community}'",
                lambda: self.reddit.get_hot_posts(community, token, self.result_limit),
            )
            return CommunityResult(community=community, posts=outcome.records)

        return list(await asyncio.gather(*(_one(community) for community in communities)))

    async def collect(self, request: StrategyRequest) -> CollectedData:
        """
        采集所有来源

        Args:
            request: 已校验的策略请求

        Returns:
            CollectedData，频道/社区顺序与输入一致
        """
        semaphore = asyncio.Semaphore(self.max_concurrency)

        trends, channels, communities = await asyncio.gather(
            self._collect_trends(request),
            self._collect_channels(list(request.competitor_channels), semaphore),
            self._collect_communities(list(request.communities), semaphore),
        )

        collected = CollectedData(
            top_titles=trends.records,
            competitor_results=channels,
            community_results=communities,
        )
        logger.info(
            "Collected %d trend titles, %d channels, %d communities",
            len(collected.top_titles),
            len(collected.competitor_results),
            len(collected.community_results),
        )
        return collected


def print_summary(collected: CollectedData) -> None:
    """打印采集结果摘要"""
    console.print()

    table = Table(title="📊 Collection Summary", show_header=True)
    table.add_column("Source", style="cyan")
    table.add_column("Name", style="magenta")
    table.add_column("Count", justify="right", style="green")
    table.add_column("Titles")

    table.add_row(
        "YouTube",
        "search",
        str(len(collected.top_titles)),
        "\n".join(r.title for r in collected.top_titles),
    )
    for channel in collected.competitor_results:
        table.add_row(
            "YouTube",
            channel.channel,
            str(len(channel.videos)),
            "\n".join(r.title for r in channel.videos),
        )
    for community in collected.community_results:
        table.add_row(
            "Reddit",
            f"r/{community.community}",
            str(len(community.posts)),
            "\n".join(r.title for r in community.posts),
        )

    console.print(table)
