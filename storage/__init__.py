"""
Storage Module
存储模块 - 凭证缓存
"""
from .cache import TokenCache, TokenFetcher

__all__ = [
    "TokenCache",
    "TokenFetcher",
]
