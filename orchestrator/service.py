"""Strategy pipeline service: collect -> assemble -> generate."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from aggregator import DataAggregator
from config import Settings, get_settings
from intelligence import StrategyGenerator, assemble_prompt, build_strategy_generator
from models import CollectedData, StrategyRequest
from scrapers import RedditScraper, YouTubeScraper
from storage import TokenCache
from utils.exceptions import ConfigurationError


logger = logging.getLogger(__name__)


class StrategyOrchestrator:
    """
    One synchronous strategy run.

    Everything before generation is fault tolerant; only GenerationError
    escapes run().
    """

    def __init__(
        self,
        *,
        aggregator: DataAggregator,
        generator: StrategyGenerator,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.aggregator = aggregator
        self.generator = generator
        self._client = client

    async def __aenter__(self) -> "StrategyOrchestrator":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
        await self.generator.aclose()

    async def collect(self, request: StrategyRequest) -> CollectedData:
        logger.info("Phase 1: data collection")
        return await self.aggregator.collect(request)

    async def build_prompt(self, request: StrategyRequest) -> str:
        collected = await self.collect(request)
        logger.info("Phase 2: prompt construction")
        return assemble_prompt(request, collected)

    async def run(self, request: StrategyRequest) -> str:
        """Return the generator's raw JSON text."""
        prompt = await self.build_prompt(request)
        logger.info("Phase 3: strategy generation")
        return await self.generator.generate(prompt)


def ensure_configured(settings: Settings) -> None:
    missing = settings.missing_credentials()
    if missing:
        logger.critical(f"Missing environment variables: {', '.join(missing)}")
        raise ConfigurationError("Server configuration error.", missing=missing)


def build_orchestrator(
    settings: Optional[Settings] = None,
    *,
    token_cache: Optional[TokenCache] = None,
    generator: Optional[StrategyGenerator] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> StrategyOrchestrator:
    """
    Wire scrapers, aggregator and generator around one shared HTTP client.
    The orchestrator closes the client when the run ends.

    Pass the process-wide token_cache to reuse Reddit tokens across runs.
    """
    settings = settings or get_settings()
    ensure_configured(settings)

    if client is None:
        client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.collection.request_timeout_sec),
            follow_redirects=True,
        )
    youtube = YouTubeScraper(settings=settings, client=client)
    reddit = RedditScraper(settings=settings, client=client)
    if token_cache is None:
        token_cache = TokenCache(
            reddit.fetch_access_token,
            ttl_seconds=settings.collection.token_ttl_seconds,
        )

    aggregator = DataAggregator(
        youtube=youtube,
        reddit=reddit,
        token_cache=token_cache,
        settings=settings,
    )
    return StrategyOrchestrator(
        aggregator=aggregator,
        generator=generator or build_strategy_generator(settings),
        client=client,
    )
