from __future__ import annotations

from typing import Optional

import pytest

from config import CollectionSettings, GeminiSettings, RedditSettings, Settings, YouTubeSettings


def make_settings(
    *,
    youtube_key: Optional[str] = "yt-key",
    reddit_id: Optional[str] = "reddit-id",
    reddit_secret: Optional[str] = "reddit-secret",
    gemini_key: Optional[str] = "gemini-key",
    **collection,
) -> Settings:
    """Explicit settings; init kwargs win over anything in the environment."""
    return Settings(
        youtube=YouTubeSettings(api_key=youtube_key),
        reddit=RedditSettings(client_id=reddit_id, client_secret=reddit_secret),
        gemini=GeminiSettings(api_key=gemini_key),
        collection=CollectionSettings(**collection),
    )


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def settings_factory():
    return make_settings
