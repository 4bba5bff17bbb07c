"""Shared runtime singletons for web/CLI entrypoints."""

from __future__ import annotations

from typing import Optional

from config import Settings, get_settings
from orchestrator.service import StrategyOrchestrator, build_orchestrator
from scrapers import RedditScraper
from storage import TokenCache


async def _fetch_reddit_token(client_id: str, client_secret: str) -> Optional[str]:
    # Own short-lived client: the cache outlives every per-run client.
    async with RedditScraper(settings=get_settings()) as scraper:
        return await scraper.fetch_access_token(client_id, client_secret)


_TOKEN_CACHE = TokenCache(
    _fetch_reddit_token,
    ttl_seconds=get_settings().collection.token_ttl_seconds,
)


def create_orchestrator(settings: Optional[Settings] = None) -> StrategyOrchestrator:
    """Per-request orchestrator sharing the process-wide token cache."""
    return build_orchestrator(settings or get_settings(), token_cache=_TOKEN_CACHE)
