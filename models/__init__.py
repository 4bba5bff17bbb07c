"""
Data Models
"""
from .schemas import (
    SourceType,
    FetchStatus,
    TitleRecord,
    FetchOutcome,
    ChannelResult,
    CommunityResult,
    CachedToken,
    CollectedData,
    StrategyRequest,
)

__all__ = [
    "SourceType",
    "FetchStatus",
    "TitleRecord",
    "FetchOutcome",
    "ChannelResult",
    "CommunityResult",
    "CachedToken",
    "CollectedData",
    "StrategyRequest",
]
