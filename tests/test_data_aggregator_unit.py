"""Unit tests for DataAggregator fan-out, ordering and failure isolation."""

from __future__ import annotations

import asyncio
from typing import Dict, List, Optional

import pytest

from aggregator import DataAggregator
from models import FetchOutcome, SourceType, StrategyRequest, TitleRecord
from storage import TokenCache


def _records(*titles: str) -> List[TitleRecord]:
    return [TitleRecord(title=title) for title in titles]


class FakeYouTube:
    def __init__(
        self,
        *,
        delays: Optional[Dict[str, float]] = None,
        broken: Optional[Dict[str, Exception]] = None,
        failed: tuple = (),
        hang: tuple = (),
    ) -> None:
        self.delays = delays or {}
        self.broken = broken or {}
        self.failed = set(failed)
        self.hang = set(hang)
        self.search_calls: List[tuple] = []
        self.channel_calls: List[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def search_videos(self, query: str, max_results: int) -> FetchOutcome:
        self.search_calls.append((query, max_results))
        return FetchOutcome.ok(SourceType.YOUTUBE_SEARCH, _records("Trend A", "Trend B"))

    async def get_channel_videos(self, channel: str, max_results: int) -> FetchOutcome:
        self.channel_calls.append(channel)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if channel in self.hang:
                await asyncio.sleep(10)
            await asyncio.sleep(self.delays.get(channel, 0.0))
            if channel in self.broken:
                raise self.broken[channel]
            if channel in self.failed:
                return FetchOutcome.failed(SourceType.YOUTUBE_CHANNEL, "HTTP 500")
            return FetchOutcome.ok(SourceType.YOUTUBE_CHANNEL, _records(f"{channel} video"))
        finally:
            self.in_flight -= 1


class FakeReddit:
    def __init__(self, *, delays: Optional[Dict[str, float]] = None, failed: tuple = ()) -> None:
        self.delays = delays or {}
        self.failed = set(failed)
        self.calls: List[tuple] = []

    async def get_hot_posts(self, community: str, token: str, max_results: int) -> FetchOutcome:
        self.calls.append((community, token, max_results))
        await asyncio.sleep(self.delays.get(community, 0.0))
        if community in self.failed:
            return FetchOutcome.failed(SourceType.REDDIT, "HTTP 503")
        return FetchOutcome.ok(SourceType.REDDIT, _records(f"{community} post"))


class FakeTokenFetcher:
    def __init__(self, token: Optional[str] = "tok") -> None:
        self.token = token
        self.calls = 0

    async def __call__(self, client_id: str, client_secret: str) -> Optional[str]:
        self.calls += 1
        return self.token


def _request(channels=("ChannelA",), communities=("parenting",)) -> StrategyRequest:
    return StrategyRequest(
        audience="new parents",
        goal="grow subscribers",
        competitor_channels=list(channels),
        communities=list(communities),
    )


def _aggregator(settings, youtube, reddit, fetcher) -> DataAggregator:
    return DataAggregator(
        youtube=youtube,
        reddit=reddit,
        token_cache=TokenCache(fetcher),
        settings=settings,
    )


@pytest.mark.asyncio
async def test_collect_combines_all_three_branches(settings):
    youtube, reddit, fetcher = FakeYouTube(), FakeReddit(), FakeTokenFetcher()
    collected = await _aggregator(settings, youtube, reddit, fetcher).collect(_request())

    assert youtube.search_calls == [("new parents grow subscribers", 3)]
    assert [r.title for r in collected.top_titles] == ["Trend A", "Trend B"]
    assert collected.competitor_results[0].channel == "ChannelA"
    assert [r.title for r in collected.competitor_results[0].videos] == ["ChannelA video"]
    assert collected.community_results[0].community == "parenting"
    assert reddit.calls == [("parenting", "tok", 3)]


@pytest.mark.asyncio
async def test_result_order_matches_input_despite_latency(settings):
    channels = ["slow", "medium", "fast", "instant"]
    communities = ["c_slow", "c_fast", "c_mid"]
    youtube = FakeYouTube(delays={"slow": 0.06, "medium": 0.03, "fast": 0.01})
    reddit = FakeReddit(delays={"c_slow": 0.05, "c_mid": 0.02})

    collected = await _aggregator(settings, youtube, reddit, FakeTokenFetcher()).collect(
        _request(channels=channels, communities=communities)
    )

    assert [r.channel for r in collected.competitor_results] == channels
    assert [r.videos[0].title for r in collected.competitor_results] == [f"{c} video" for c in channels]
    assert [r.community for r in collected.community_results] == communities
    assert [r.posts[0].title for r in collected.community_results] == [f"{c} post" for c in communities]


@pytest.mark.asyncio
async def test_one_failing_adapter_does_not_affect_others(settings):
    youtube = FakeYouTube(
        broken={"Exploding": RuntimeError("adapter bug")},
        failed=("Down",),
    )
    reddit = FakeReddit(failed=("flaky",))

    collected = await _aggregator(settings, youtube, reddit, FakeTokenFetcher()).collect(
        _request(channels=["Good", "Exploding", "Down", "AlsoGood"], communities=["flaky", "parenting"])
    )

    by_channel = {r.channel: [v.title for v in r.videos] for r in collected.competitor_results}
    assert by_channel == {
        "Good": ["Good video"],
        "Exploding": [],
        "Down": [],
        "AlsoGood": ["AlsoGood video"],
    }
    assert [r.community for r in collected.community_results] == ["flaky", "parenting"]
    assert collected.community_results[0].posts == []
    assert [p.title for p in collected.community_results[1].posts] == ["parenting post"]
    assert [r.title for r in collected.top_titles] == ["Trend A", "Trend B"]


@pytest.mark.asyncio
async def test_token_failure_skips_every_community_call(settings):
    reddit = FakeReddit()
    fetcher = FakeTokenFetcher(token=None)

    collected = await _aggregator(settings, FakeYouTube(), reddit, fetcher).collect(
        _request(communities=["parenting", "daddit"])
    )

    assert fetcher.calls == 1
    assert reddit.calls == []
    assert collected.community_results == []
    assert collected.competitor_results[0].videos


@pytest.mark.asyncio
async def test_empty_lists_make_no_branch_calls(settings):
    youtube, reddit, fetcher = FakeYouTube(), FakeReddit(), FakeTokenFetcher()

    collected = await _aggregator(settings, youtube, reddit, fetcher).collect(
        _request(channels=[], communities=[])
    )

    assert collected.competitor_results == []
    assert collected.community_results == []
    assert youtube.channel_calls == []
    assert fetcher.calls == 0
    assert reddit.calls == []
    assert len(youtube.search_calls) == 1


@pytest.mark.asyncio
async def test_hung_adapter_is_cut_off_by_source_timeout(settings_factory):
    settings = settings_factory(source_timeout_sec=0.05)
    youtube = FakeYouTube(hang=("Hung",))

    collected = await _aggregator(settings, youtube, FakeReddit(), FakeTokenFetcher()).collect(
        _request(channels=["Hung", "Fine"])
    )

    assert [r.channel for r in collected.competitor_results] == ["Hung", "Fine"]
    assert collected.competitor_results[0].videos == []
    assert [v.title for v in collected.competitor_results[1].videos] == ["Fine video"]


@pytest.mark.asyncio
async def test_per_item_fan_out_respects_concurrency_cap(settings_factory):
    settings = settings_factory(max_concurrency=2)
    channels = [f"ch{i}" for i in range(6)]
    youtube = FakeYouTube(delays={name: 0.02 for name in channels})

    collected = await _aggregator(settings, youtube, FakeReddit(), FakeTokenFetcher()).collect(
        _request(channels=channels, communities=[])
    )

    assert youtube.max_in_flight == 2
    assert [r.channel for r in collected.competitor_results] == channels


@pytest.mark.asyncio
async def test_branches_run_concurrently(settings):
    channel_started = asyncio.Event()

    class WaitingYouTube(FakeYouTube):
        async def search_videos(self, query: str, max_results: int) -> FetchOutcome:
            # only completes if the channel branch is already running
            await asyncio.wait_for(channel_started.wait(), timeout=1.0)
            return await super().search_videos(query, max_results)

        async def get_channel_videos(self, channel: str, max_results: int) -> FetchOutcome:
            channel_started.set()
            return await super().get_channel_videos(channel, max_results)

    collected = await _aggregator(settings, WaitingYouTube(), FakeReddit(), FakeTokenFetcher()).collect(_request())

    assert [r.title for r in collected.top_titles] == ["Trend A", "Trend B"]


@pytest.mark.asyncio
async def test_result_limit_setting_flows_to_adapters(settings_factory):
    youtube, reddit = FakeYouTube(), FakeReddit()
    settings = settings_factory(result_limit=5)

    await _aggregator(settings, youtube, reddit, FakeTokenFetcher()).collect(_request())

    assert youtube.search_calls[0][1] == 5
    assert reddit.calls[0][2] == 5
