"""
Configuration Management Module
统一配置管理，实现API配置解耦
"""
from .settings import (
    DEFAULT_MAX_CONCURRENCY,
    DEFAULT_REQUEST_TIMEOUT_SEC,
    DEFAULT_RESULT_LIMIT,
    DEFAULT_SOURCE_TIMEOUT_SEC,
    TOKEN_TTL_SECONDS,
    CollectionSettings,
    GeminiSettings,
    RedditSettings,
    Settings,
    YouTubeSettings,
    get_settings,
)

__all__ = [
    "DEFAULT_MAX_CONCURRENCY",
    "DEFAULT_REQUEST_TIMEOUT_SEC",
    "DEFAULT_RESULT_LIMIT",
    "DEFAULT_SOURCE_TIMEOUT_SEC",
    "TOKEN_TTL_SECONDS",
    "CollectionSettings",
    "GeminiSettings",
    "RedditSettings",
    "Settings",
    "YouTubeSettings",
    "get_settings",
]
