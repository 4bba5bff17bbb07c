"""
Data Models / Schemas
定义统一的数据结构
"""
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SourceType(str, Enum):
    """数据来源类型"""
    YOUTUBE_SEARCH = "youtube_search"
    YOUTUBE_CHANNEL = "youtube_channel"
    REDDIT = "reddit"


class FetchStatus(str, Enum):
    """单次抓取的结果标记"""
    OK = "ok"
    EMPTY = "empty"  # 来源正常返回，但没有匹配
    FAILED = "failed"  # 网络/状态码/解析/超时失败


class TitleRecord(BaseModel):
    """归一化后的最小数据单元"""
    model_config = ConfigDict(frozen=True)

    title: str = Field(..., min_length=1, description="标题")

    @field_validator("title")
    @classmethod
    def _require_text(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be blank")
        return value


class FetchOutcome(BaseModel):
    """
    适配器返回值

    适配器从不抛出异常，失败时返回 status=failed 且 records 为空。
    """
    model_config = ConfigDict(frozen=True)

    source: SourceType
    status: FetchStatus
    records: List[TitleRecord] = Field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def ok(cls, source: SourceType, records: List[TitleRecord]) -> "FetchOutcome":
        if not records:
            return cls.empty(source)
        return cls(source=source, status=FetchStatus.OK, records=list(records))

    @classmethod
    def empty(cls, source: SourceType) -> "FetchOutcome":
        return cls(source=source, status=FetchStatus.EMPTY)

    @classmethod
    def failed(cls, source: SourceType, error: str) -> "FetchOutcome":
        return cls(source=source, status=FetchStatus.FAILED, error=str(error or "unknown error"))

    @property
    def succeeded(self) -> bool:
        return self.status != FetchStatus.FAILED


class ChannelResult(BaseModel):
    """竞品频道的最新视频"""
    model_config = ConfigDict(frozen=True)

    channel: str
    videos: List[TitleRecord] = Field(default_factory=list)


class CommunityResult(BaseModel):
    """社区热门帖子"""
    model_config = ConfigDict(frozen=True)

    community: str
    posts: List[TitleRecord] = Field(default_factory=list)


class CachedToken(BaseModel):
    """缓存的 bearer token"""
    value: Optional[str] = None
    expires_at: float = 0.0

    def is_valid(self, now: float) -> bool:
        return bool(self.value) and now < self.expires_at


class CollectedData(BaseModel):
    """采集阶段的完整输出 (只读)"""
    model_config = ConfigDict(frozen=True)

    top_titles: List[TitleRecord] = Field(default_factory=list)
    competitor_results: List[ChannelResult] = Field(default_factory=list)
    community_results: List[CommunityResult] = Field(default_factory=list)


class StrategyRequest(BaseModel):
    """
    调用方输入

    线上字段名沿用前端约定: competitorYouTubeChannels / relevantSubreddits
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    audience: str
    goal: str
    competitor_channels: List[str] = Field(..., alias="competitorYouTubeChannels")
    communities: List[str] = Field(..., alias="relevantSubreddits")

    @field_validator("audience", "goal")
    @classmethod
    def _strip_required(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("value is required")
        return text

    @field_validator("communities")
    @classmethod
    def _normalize_communities(cls, value: List[str]) -> List[str]:
        # 统一去掉 r/ 前缀，抓取与提示词使用同一个名称
        return [name.strip().removeprefix("r/") for name in value]

    @classmethod
    def from_wire(cls, body: Any) -> "StrategyRequest":
        """只接受线上字段名 (别名)，拒绝 Python 字段名"""
        return cls.model_validate(body, by_alias=True, by_name=False)
