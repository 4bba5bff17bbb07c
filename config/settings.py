"""
Settings Configuration
使用 Pydantic 进行配置验证和管理
"""
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


# Collection policy
DEFAULT_RESULT_LIMIT = 3
TOKEN_TTL_SECONDS = 50 * 60  # provider tokens live 60 minutes
DEFAULT_SOURCE_TIMEOUT_SEC = 15.0
DEFAULT_REQUEST_TIMEOUT_SEC = 12.0
DEFAULT_MAX_CONCURRENCY = 8


class YouTubeSettings(BaseSettings):
    """YouTube Data API 配置"""
    api_key: Optional[str] = Field(default=None, description="YouTube Data API Key")
    base_url: str = Field(
        default="https://www.googleapis.com/youtube/v3",
        description="YouTube Data API base URL",
    )

    class Config:
        env_prefix = "YOUTUBE_"


class RedditSettings(BaseSettings):
    """Reddit API 配置"""
    client_id: Optional[str] = Field(default=None, description="Reddit Client ID")
    client_secret: Optional[str] = Field(default=None, description="Reddit Client Secret")
    user_agent: str = Field(default="ContentStrategyEngine/1.0", description="User Agent")
    token_url: str = Field(
        default="https://www.reddit.com/api/v1/access_token",
        description="OAuth client-credentials endpoint",
    )
    api_base_url: str = Field(default="https://oauth.reddit.com", description="OAuth API base URL")

    class Config:
        env_prefix = "REDDIT_"


class GeminiSettings(BaseSettings):
    """Gemini 配置"""
    api_key: Optional[str] = Field(default=None, description="Google Gemini API Key")
    model_name: str = Field(default="gemini-2.0-flash", description="模型名称")
    temperature: float = Field(default=0.7, description="生成温度")
    max_tokens: int = Field(default=8192, description="最大生成token数")
    timeout: float = Field(default=90.0, description="生成超时时间(秒)")

    class Config:
        env_prefix = "GEMINI_"


class CollectionSettings(BaseSettings):
    """数据采集策略"""
    result_limit: int = Field(default=DEFAULT_RESULT_LIMIT, ge=1, le=50, description="每个来源的结果数")
    token_ttl_seconds: int = Field(default=TOKEN_TTL_SECONDS, ge=1, description="Reddit token 缓存时长(秒)")
    source_timeout_sec: float = Field(
        default=DEFAULT_SOURCE_TIMEOUT_SEC, gt=0, description="单个来源调用的超时上限(秒)"
    )
    request_timeout_sec: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT_SEC, gt=0, description="HTTP 请求超时时间(秒)"
    )
    max_concurrency: int = Field(default=DEFAULT_MAX_CONCURRENCY, ge=1, description="逐项抓取的并发上限")

    class Config:
        env_prefix = "COLLECTION_"


class Settings(BaseSettings):
    """主配置类 - 聚合所有子配置"""

    youtube: YouTubeSettings = Field(default_factory=YouTubeSettings)
    reddit: RedditSettings = Field(default_factory=RedditSettings)
    gemini: GeminiSettings = Field(default_factory=GeminiSettings)
    collection: CollectionSettings = Field(default_factory=CollectionSettings)
    log_level: str = Field(default="INFO", description="日志级别")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    def missing_credentials(self) -> List[str]:
        """Names of the required environment variables that are not set."""
        required = {
            "YOUTUBE_API_KEY": self.youtube.api_key,
            "REDDIT_CLIENT_ID": self.reddit.client_id,
            "REDDIT_CLIENT_SECRET": self.reddit.client_secret,
            "GEMINI_API_KEY": self.gemini.api_key,
        }
        return [name for name, value in required.items() if not str(value or "").strip()]

    def is_configured(self) -> bool:
        return not self.missing_credentials()

    @classmethod
    def load_from_env_file(cls, env_path: Optional[Path] = None) -> "Settings":
        """从指定的 .env 文件加载配置"""
        if env_path is None:
            # 默认查找 config/.env
            env_path = Path(__file__).parent / ".env"

        if env_path.exists():
            from dotenv import load_dotenv
            load_dotenv(env_path)

        return cls(
            youtube=YouTubeSettings(),
            reddit=RedditSettings(),
            gemini=GeminiSettings(),
            collection=CollectionSettings(),
        )


@lru_cache()
def get_settings() -> Settings:
    """获取全局配置单例"""
    return Settings.load_from_env_file()

